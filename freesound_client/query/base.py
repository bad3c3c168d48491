"""Query hierarchy shared by every Freesound API call.

WHY: Each API endpoint differs only in its path, its parameters, how it is
authorised and how its response body is read. Modelling every call as a
Query object keeps the client a single generic dispatcher: it never needs
to know which endpoint it is talking to.

HOW: Query is an ABC holding the path template, route parameters, query
parameters, HTTP method and the last Response. Capabilities are declared
as class-level tags rather than discovered by isinstance checks:

  auth_scheme   — AuthScheme.TOKEN | OAUTH | NONE
  response_kind — ResponseKind.JSON | BINARY

The capability bases (JSONResponseQuery, BinaryResponseQuery, OAuthQuery,
AccessTokenQuery, PagingQuery) set those tags. Concrete queries combine
them, e.g. ``class DownloadSound(OAuthQuery, BinaryResponseQuery)``.

RULES:
- Exactly one AuthScheme and one ResponseKind per query class
- Route parameter values are stored as strings
- Query parameters whose value is None are never sent
- set_response() only calls process_response() for 2xx responses
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from freesound_client.api.models import PagedResults
from freesound_client.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class HTTPMethod(str, enum.Enum):
    """HTTP methods used by the Freesound API."""

    GET = "GET"
    POST = "POST"


class AuthScheme(str, enum.Enum):
    """How a query is authorised.

    RULES:
    - TOKEN: ``Authorization: Token <client secret>``
    - OAUTH: ``Authorization: Bearer <oauth token>``
    - NONE: no Authorization header (the token endpoint itself)
    """

    TOKEN = "token"
    OAUTH = "oauth"
    NONE = "none"


class ResponseKind(str, enum.Enum):
    """How a successful response body is read."""

    JSON = "json"
    BINARY = "binary"


@dataclass
class Response:
    """Outcome of dispatching a query.

    Attributes:
        status_code: HTTP status code returned by the API.
        results: Typed results produced by the query (2xx only).
        error_details: Error message from the API (non-2xx only). Taken
                       from the JSON ``detail`` field when present.
    """

    status_code: int
    results: Any = None
    error_details: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class Query(ABC):
    """Abstract representation of one API call.

    WHY: The client dispatches any Query the same way, so everything that
    varies per endpoint lives here.

    HOW: Subclasses pass a path template such as ``/sounds/{sound_id}/``
    and the route parameters to fill it. They override
    ``query_parameters`` when the endpoint takes request fields and
    implement ``process_response`` to turn the body into typed results.

    RULES:
    - Constructed by the caller, passed to the client, mutated in place
      with the response after dispatch
    - auth_scheme defaults to TOKEN, response_kind to JSON
    """

    auth_scheme: ClassVar[AuthScheme] = AuthScheme.TOKEN
    response_kind: ClassVar[ResponseKind] = ResponseKind.JSON

    def __init__(
        self,
        path: str,
        route_parameters: Optional[Dict[str, Any]] = None,
        http_method: HTTPMethod = HTTPMethod.GET,
    ) -> None:
        self._path = path
        self._route_parameters: Dict[str, str] = {
            name: str(value) for name, value in (route_parameters or {}).items()
        }
        self._http_method = http_method
        self._response: Optional[Response] = None

    @property
    def path(self) -> str:
        """URL path template relative to the API endpoint."""
        return self._path

    @property
    def http_method(self) -> HTTPMethod:
        return self._http_method

    @property
    def route_parameters(self) -> Dict[str, str]:
        return dict(self._route_parameters)

    @property
    def oauth_token(self) -> Optional[str]:
        """Bearer token for OAuth-tagged queries; None for every other query."""
        return None

    @property
    def query_parameters(self) -> Dict[str, Any]:
        """Request fields for this query. Empty unless overridden."""
        return {}

    @property
    def response(self) -> Optional[Response]:
        """The last response written by the client, or None before dispatch."""
        return self._response

    @abstractmethod
    def process_response(self, body: Any) -> Any:
        """Convert a successful response body into typed results.

        Args:
            body: Parsed JSON for JSON queries, raw bytes for binary ones.
        """

    def set_response(self, status_code: int, body: Any) -> Response:
        """Record the outcome of dispatching this query.

        Args:
            status_code: HTTP status code.
            body: Parsed JSON (JSON queries) or raw bytes (binary queries)
                  for 2xx responses; the decoded error body otherwise.

        Returns:
            The Response now held by this query.
        """
        response = Response(status_code=status_code)
        if response.is_success:
            response.results = self.process_response(body)
        else:
            response.error_details = _error_details(body)
        self._response = response
        return response

    def __repr__(self) -> str:
        return "{}(path={!r}, route_parameters={!r})".format(
            type(self).__name__, self._path, self._route_parameters
        )


def _error_details(body: Any) -> Optional[str]:
    """Extract a human-readable message from an error body."""
    if body is None:
        return None
    if isinstance(body, dict):
        detail = body.get("detail", body.get("error", body))
        return str(detail)
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return str(body)


# ---------------------------------------------------------------------------
# Capability bases
# ---------------------------------------------------------------------------


class JSONResponseQuery(Query):
    """Query whose response body is parsed as JSON."""

    response_kind: ClassVar[ResponseKind] = ResponseKind.JSON


class BinaryResponseQuery(Query):
    """Query whose response body is captured as raw bytes (file downloads)."""

    response_kind: ClassVar[ResponseKind] = ResponseKind.BINARY

    def process_response(self, body: bytes) -> bytes:
        return body


class OAuthQuery(Query):
    """Query for an OAuth2-protected endpoint, sent with a bearer token."""

    auth_scheme: ClassVar[AuthScheme] = AuthScheme.OAUTH

    def __init__(self, path: str, oauth_token: str, **kwargs: Any) -> None:
        super().__init__(path, **kwargs)
        self._oauth_token = oauth_token

    @property
    def oauth_token(self) -> str:
        return self._oauth_token


class AccessTokenQuery(JSONResponseQuery):
    """Query against the OAuth2 token endpoint; carries no Authorization header."""

    auth_scheme: ClassVar[AuthScheme] = AuthScheme.NONE

    def __init__(self, path: str, **kwargs: Any) -> None:
        kwargs.setdefault("http_method", HTTPMethod.POST)
        super().__init__(path, **kwargs)


class PagingQuery(JSONResponseQuery):
    """JSON query over a paged list endpoint.

    WHY: List endpoints return one page at a time. The client steps through
    them by adjusting ``page`` and re-dispatching the same query object.

    HOW: ``page`` and ``page_size`` are always sent as query parameters.
    Subclasses implement ``parse_item`` for a single list entry; the paged
    envelope is parsed here into PagedResults.

    RULES:
    - page starts at 1 and is never below 1
    - page_size is between 1 and MAX_PAGE_SIZE (API default 15)
    - has_next_page() is True only if the last successful response
      advertised a next page
    - has_previous_page() is True whenever page > 1
    """

    def __init__(
        self,
        path: str,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        **kwargs: Any,
    ) -> None:
        super().__init__(path, **kwargs)
        self.page = page
        self.page_size = page_size

    @property
    def page(self) -> int:
        return self._page

    @page.setter
    def page(self, value: int) -> None:
        if value < 1:
            raise ValueError("Page number must be 1 or greater, got {}".format(value))
        self._page = value

    @property
    def page_size(self) -> int:
        return self._page_size

    @page_size.setter
    def page_size(self, value: int) -> None:
        if not 1 <= value <= MAX_PAGE_SIZE:
            raise ValueError(
                "Page size must be between 1 and {}, got {}".format(MAX_PAGE_SIZE, value)
            )
        self._page_size = value

    @property
    def query_parameters(self) -> Dict[str, Any]:
        return {"page": self._page, "page_size": self._page_size}

    def has_next_page(self) -> bool:
        response = self.response
        if response is None or not response.is_success or response.results is None:
            return False
        return response.results.next_url is not None

    def has_previous_page(self) -> bool:
        return self._page > 1

    @abstractmethod
    def parse_item(self, data: dict) -> Any:
        """Parse one entry of the ``results`` list."""

    def process_response(self, body: dict) -> PagedResults:
        return PagedResults.from_dict(body, self.parse_item)
