"""Query objects — one class per Freesound API endpoint.

WHY: The client is a generic dispatcher; everything endpoint-specific
(path, parameters, authorisation, response parsing) lives in a Query.

HOW: Capability bases in base.py declare how a query is authorised and
how its body is read. Concrete queries are grouped by resource.

RULES:
- Every query listed here must be importable without side effects
- New endpoints = one new Query subclass, no client changes
"""

from freesound_client.query.base import (
    AccessTokenQuery,
    AuthScheme,
    BinaryResponseQuery,
    HTTPMethod,
    JSONResponseQuery,
    OAuthQuery,
    PagingQuery,
    Query,
    Response,
    ResponseKind,
)
from freesound_client.query.oauth import (
    OAuth2AccessTokenRequest,
    RefreshOAuth2AccessTokenRequest,
)
from freesound_client.query.pack import DownloadPack, PackInstanceQuery, PackSoundsQuery
from freesound_client.query.search import SortOrder, TextSearch
from freesound_client.query.sound import (
    DownloadSound,
    SimilarSoundsQuery,
    SoundCommentsQuery,
    SoundInstanceQuery,
)
from freesound_client.query.user import (
    MeQuery,
    UserInstanceQuery,
    UserPacksQuery,
    UserSoundsQuery,
)

__all__ = [
    "AccessTokenQuery",
    "AuthScheme",
    "BinaryResponseQuery",
    "DownloadPack",
    "DownloadSound",
    "HTTPMethod",
    "JSONResponseQuery",
    "MeQuery",
    "OAuth2AccessTokenRequest",
    "OAuthQuery",
    "PackInstanceQuery",
    "PackSoundsQuery",
    "PagingQuery",
    "Query",
    "RefreshOAuth2AccessTokenRequest",
    "Response",
    "ResponseKind",
    "SimilarSoundsQuery",
    "SortOrder",
    "SoundCommentsQuery",
    "SoundInstanceQuery",
    "TextSearch",
    "UserInstanceQuery",
    "UserPacksQuery",
    "UserSoundsQuery",
]
