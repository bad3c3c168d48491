"""OAuth2 token endpoint requests.

WHY: Downloads and ``/me/`` need an OAuth2 access token. A user first
authorises the application in the browser, which yields a short-lived
authorisation code; the code is exchanged for an access/refresh token pair
here, and the refresh token is later exchanged for a new pair.

HOW: Both requests are AccessTokenQuery subclasses: POSTed to
``/oauth2/access_token/`` without an Authorization header, with the
application credentials sent as form fields. The response is parsed into
AccessTokenDetails.

RULES:
- grant_type is ``authorization_code`` or ``refresh_token``
- client_id and client_secret are always sent
"""

from __future__ import annotations

from typing import Any, Dict

from freesound_client.api.models import AccessTokenDetails
from freesound_client.query.base import AccessTokenQuery

ACCESS_TOKEN_PATH = "/oauth2/access_token/"


class _AccessTokenRequest(AccessTokenQuery):
    """Common form fields for both token grants."""

    GRANT_TYPE = ""

    def __init__(self, client_id: str, client_secret: str) -> None:
        super().__init__(ACCESS_TOKEN_PATH)
        self._client_id = client_id
        self._client_secret = client_secret

    @property
    def query_parameters(self) -> Dict[str, Any]:
        return {
            "client_id": self._client_id,
            "client_secret": self._client_secret,
            "grant_type": self.GRANT_TYPE,
        }

    def process_response(self, body: dict) -> AccessTokenDetails:
        return AccessTokenDetails.from_dict(body)


class OAuth2AccessTokenRequest(_AccessTokenRequest):
    """Exchange an authorisation code for an access token."""

    GRANT_TYPE = "authorization_code"

    def __init__(self, client_id: str, client_secret: str, authorisation_code: str) -> None:
        super().__init__(client_id, client_secret)
        self._authorisation_code = authorisation_code

    @property
    def query_parameters(self) -> Dict[str, Any]:
        params = super().query_parameters
        params["code"] = self._authorisation_code
        return params


class RefreshOAuth2AccessTokenRequest(_AccessTokenRequest):
    """Exchange a refresh token for a new access token."""

    GRANT_TYPE = "refresh_token"

    def __init__(self, client_id: str, client_secret: str, refresh_token: str) -> None:
        super().__init__(client_id, client_secret)
        self._refresh_token = refresh_token

    @property
    def query_parameters(self) -> Dict[str, Any]:
        params = super().query_parameters
        params["refresh_token"] = self._refresh_token
        return params
