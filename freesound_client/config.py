"""Configuration constants and .env loading.

WHY: The client needs an API endpoint, application credentials and a few
HTTP defaults. Keeping them in one module makes them easy to find and to
override per environment without touching the dispatcher.

HOW: python-dotenv loads the .env file on import. Constants are read from
environment variables with sensible defaults. load_credentials() provides
a clear error when the application credentials are missing.

RULES:
- Credentials are loaded from the environment, never hardcoded
- Constructor arguments on FreesoundClient take precedence over these values
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os
from typing import Optional, Tuple

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# API configuration defaults
# ---------------------------------------------------------------------------

FREESOUND_API_ENDPOINT = os.getenv("FREESOUND_API_ENDPOINT", "https://freesound.org/apiv2")
"""Base address for all calls to the freesound.org APIv2."""

FREESOUND_USER_AGENT: Optional[str] = os.getenv("FREESOUND_USER_AGENT") or None
FREESOUND_TIMEOUT_S = float(os.getenv("FREESOUND_TIMEOUT_S", "30"))

DEFAULT_PAGE_SIZE = 15
MAX_PAGE_SIZE = 150
"""Largest page size the API accepts for paged endpoints."""


def load_credentials() -> Tuple[str, str]:
    """Load the Freesound application credentials from the environment.

    WHY: Every call needs either the client secret (token auth) or the
    client ID and secret together (OAuth2 token exchange). Loading them
    from the environment (via .env) keeps them out of source code.

    HOW: Reads FREESOUND_CLIENT_ID and FREESOUND_CLIENT_SECRET from
    os.environ (populated by python-dotenv).

    RULES:
    - Raises ValueError if either value is missing or empty
    - Never returns a default/placeholder value

    Returns:
        Tuple of (client_id, client_secret).
    """
    client_id = os.getenv("FREESOUND_CLIENT_ID", "").strip()
    client_secret = os.getenv("FREESOUND_CLIENT_SECRET", "").strip()
    if not client_id or not client_secret:
        raise ValueError(
            "Freesound credentials not configured. "
            "Add FREESOUND_CLIENT_ID and FREESOUND_CLIENT_SECRET to the .env file "
            "(register an application at https://freesound.org/apiv2/apply)."
        )
    return client_id, client_secret
