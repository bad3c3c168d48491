"""Freesound API client package — synchronous HTTP interface to freesound.org.

WHY: Applications need to search, inspect and download Freesound sounds,
packs and users. This package encapsulates all Freesound API communication
behind a single client class.

HOW: Uses httpx.Client for synchronous HTTP. FreesoundClient dispatches
Query objects (see freesound_client.query). Response data is parsed into
typed dataclasses defined in models.py.

RULES:
- All HTTP calls go through FreesoundClient (no direct httpx usage elsewhere)
- Authorisation is selected per query: Token, OAuth2 Bearer, or none
"""

from freesound_client.api.client import FreesoundClient, FreesoundClientException
from freesound_client.api.models import (
    AccessTokenDetails,
    Comment,
    Pack,
    PagedResults,
    Sound,
    User,
)

__all__ = [
    "AccessTokenDetails",
    "Comment",
    "FreesoundClient",
    "FreesoundClientException",
    "Pack",
    "PagedResults",
    "Sound",
    "User",
]
