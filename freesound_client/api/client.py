"""Synchronous HTTP client for the freesound.org APIv2.

WHY: Every Freesound call follows the same steps: fill the path template,
attach the right Authorization header, send the request fields, and read
either JSON or a raw file back. This module does those steps once, for any
Query, so callers (CLI, applications, tests) never deal with HTTP details.

HOW: Wraps an httpx.Client. execute_query() builds the request from the
query's path, route parameters, query parameters, HTTP method and
capability tags, sends it, and writes the status code plus parsed body
back onto the query. Paging helpers and the two OAuth2 token flows are thin
wrappers over execute_query().

RULES:
- Users must register an application at https://freesound.org/apiv2/apply;
  the client ID and client secret (API key) construct the client
- Authorization is chosen by query.auth_scheme only: Token / Bearer / none
- Query parameters are attached only when non-empty (query string for GET,
  form fields for POST)
- Non-2xx responses are recorded on the query, not raised
- Transport errors, undecodable bodies and unknown capability tags raise
  FreesoundClientException
- Call shutdown() (or use ``with FreesoundClient(...) as client:``) to
  release the HTTP connection pool
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from freesound_client.config import (
    FREESOUND_API_ENDPOINT,
    FREESOUND_TIMEOUT_S,
    FREESOUND_USER_AGENT,
    load_credentials,
)
from freesound_client.query.base import (
    AuthScheme,
    HTTPMethod,
    PagingQuery,
    Query,
    Response,
    ResponseKind,
)
from freesound_client.query.oauth import (
    OAuth2AccessTokenRequest,
    RefreshOAuth2AccessTokenRequest,
)

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")


class FreesoundClientException(Exception):
    """Raised when a query cannot be dispatched or its response cannot be read.

    WHY: Callers need one exception type to catch for every client-side
    failure, whether it came from the network, a malformed body, or a
    query the client does not know how to send.

    RULES:
    - The underlying cause is always chained (``raise ... from exc``)
    - HTTP error statuses are NOT raised; see Response.error_details
    """


class FreesoundClient:
    """Client used to make calls to the freesound.org API (v2).

    WHY: Provides a single dispatcher for every Query type, holding the
    application credentials and the HTTP connection pool.

    HOW: Credentials default to load_credentials() from .env. An existing
    httpx.Client can be injected (tests use one backed by
    httpx.MockTransport); an injected client is not closed by shutdown().

    RULES:
    - client_secret is the API key used for ``Token`` authorisation
    - client_id is only used by the OAuth2 token flows
    - user_agent, when set, is sent on every request
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        user_agent: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        if client_id is None or client_secret is None:
            env_id, env_secret = load_credentials()
            client_id = client_id if client_id is not None else env_id
            client_secret = client_secret if client_secret is not None else env_secret

        self._client_id = client_id
        self._client_secret = client_secret
        self._user_agent = user_agent or FREESOUND_USER_AGENT
        self._base_url = (base_url or FREESOUND_API_ENDPOINT).rstrip("/")

        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.Client(
            timeout=httpx.Timeout(timeout if timeout is not None else FREESOUND_TIMEOUT_S),
            follow_redirects=True,
        )

    def __enter__(self) -> FreesoundClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.shutdown()

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def execute_query(self, query: Query) -> Response:
        """Execute a query (synchronously) against the Freesound API.

        WHY: Single entry point for every endpoint; the query decides
        what is sent and how the answer is read.

        HOW: Builds URL, headers and request fields, sends the request,
        reads the body according to query.response_kind, and hands the
        status and body to query.set_response().

        RULES:
        - The query is mutated in place; the returned Response is the
          same object as query.response
        - Raises FreesoundClientException on transport failure, an
          undecodable body, or an unknown capability tag

        Args:
            query: The query to execute.

        Returns:
            The Response written onto the query.
        """
        url = self.build_url(query)
        headers = self.build_headers(query)
        request_fields = query.query_parameters
        method = query.http_method

        request_kwargs: Dict[str, Any] = {"headers": headers}
        if request_fields:
            if method == HTTPMethod.GET:
                request_kwargs["params"] = request_fields
            elif method == HTTPMethod.POST:
                request_kwargs["data"] = request_fields
            else:
                raise FreesoundClientException(
                    "Unsupported HTTP method {!r} for {}".format(method, type(query).__name__)
                )

        logger.debug("Dispatching %s %s (%s)", method.value, url, type(query).__name__)

        try:
            http_response = self._http_client.request(method.value, url, **request_kwargs)
        except httpx.HTTPError as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise FreesoundClientException(
                "Error sending {} request to {}".format(method.value, url)
            ) from exc

        status_code = http_response.status_code
        if not http_response.is_success:
            logger.warning(
                "Freesound returned %d for %s %s", status_code, method.value, url
            )
            body = _error_body(http_response)
        else:
            body = self._read_body(query, http_response)

        try:
            return query.set_response(status_code, body)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise FreesoundClientException(
                "Unexpected response content from {}".format(url)
            ) from exc

    def build_url(self, query: Query) -> str:
        """Return the absolute URL for a query with route parameters filled in.

        Raises:
            FreesoundClientException: If a placeholder in the path has no
                matching route parameter.
        """
        route_parameters = query.route_parameters

        def _substitute(match: re.Match) -> str:
            name = match.group(1)
            if name not in route_parameters:
                raise FreesoundClientException(
                    "No value for route parameter '{}' in {}".format(name, query.path)
                )
            return quote(route_parameters[name], safe="")

        return self._base_url + _PLACEHOLDER_RE.sub(_substitute, query.path)

    def build_headers(self, query: Query) -> Dict[str, str]:
        """Return the request headers for a query.

        Exactly one authorisation strategy applies, selected by the
        query's auth_scheme tag.
        """
        headers: Dict[str, str] = {}
        if self._user_agent:
            headers["User-Agent"] = self._user_agent

        scheme = query.auth_scheme
        if scheme == AuthScheme.TOKEN:
            headers["Authorization"] = "Token {}".format(self._client_secret)
        elif scheme == AuthScheme.OAUTH:
            token = query.oauth_token
            if not token:
                raise FreesoundClientException(
                    "{} is tagged for OAuth but carries no token".format(type(query).__name__)
                )
            headers["Authorization"] = "Bearer {}".format(token)
        elif scheme == AuthScheme.NONE:
            pass
        else:
            raise FreesoundClientException(
                "Unknown authorisation scheme {!r} on {}".format(scheme, type(query).__name__)
            )
        return headers

    def _read_body(self, query: Query, http_response: httpx.Response) -> Any:
        kind = query.response_kind
        if kind == ResponseKind.BINARY:
            return http_response.content
        if kind == ResponseKind.JSON:
            try:
                return http_response.json()
            except ValueError as exc:
                raise FreesoundClientException(
                    "Response from {} is not valid JSON".format(http_response.url)
                ) from exc
        raise FreesoundClientException(
            "Unknown response kind {!r} on {}".format(kind, type(query).__name__)
        )

    # ------------------------------------------------------------------
    # Paging
    # ------------------------------------------------------------------

    def next_page(self, query: PagingQuery) -> Response:
        """Advance a paged query by one page and re-dispatch it.

        Raises:
            FreesoundClientException: If the last response had no next page.
        """
        if not query.has_next_page():
            raise FreesoundClientException(
                "No next page available for {} (page {})".format(type(query).__name__, query.page)
            )
        query.page = query.page + 1
        return self.execute_query(query)

    def previous_page(self, query: PagingQuery) -> Response:
        """Step a paged query back by one page and re-dispatch it.

        Raises:
            FreesoundClientException: If the query is already on page 1.
        """
        if not query.has_previous_page():
            raise FreesoundClientException(
                "No previous page available for {} (page {})".format(type(query).__name__, query.page)
            )
        query.page = query.page - 1
        return self.execute_query(query)

    # ------------------------------------------------------------------
    # OAuth2 token flows
    # ------------------------------------------------------------------

    def redeem_authorisation_code(self, authorisation_code: str) -> Response:
        """Exchange an authorisation code for an access token.

        WHY: After the user approves the application at
        ``/oauth2/authorize/``, Freesound redirects back with a one-off
        code. The code must be exchanged within minutes.

        Returns:
            Response whose results are AccessTokenDetails on success.
        """
        query = OAuth2AccessTokenRequest(self._client_id, self._client_secret, authorisation_code)
        return self.execute_query(query)

    def refresh_access_token(self, refresh_token: str) -> Response:
        """Obtain a fresh access token using a refresh token.

        Returns:
            Response whose results are AccessTokenDetails on success.
        """
        query = RefreshOAuth2AccessTokenRequest(self._client_id, self._client_secret, refresh_token)
        return self.execute_query(query)

    def authorisation_url(self, state: Optional[str] = None) -> str:
        """URL the user visits to grant this application an authorisation code."""
        params = {"client_id": self._client_id, "response_type": "code"}
        if state:
            params["state"] = state
        return str(httpx.URL(self._base_url + "/oauth2/authorize/", params=params))

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def shutdown(self) -> None:
        """Shutdown the client, closing its HTTP connection pool.

        Raises:
            FreesoundClientException: Any error encountered while closing.
        """
        if not self._owns_http_client:
            return
        try:
            self._http_client.close()
        except httpx.HTTPError as exc:
            raise FreesoundClientException("Error shutting down HTTP client") from exc


def _error_body(http_response: httpx.Response) -> Any:
    """Decode an error body as JSON when possible, else as text."""
    try:
        return http_response.json()
    except ValueError:
        return http_response.text or None
