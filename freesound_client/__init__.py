"""Freesound Client — Python bindings for the freesound.org APIv2.

WHY: Freesound exposes hundreds of thousands of Creative Commons sounds
through a REST API that mixes token and OAuth2 authorisation, JSON and
binary responses, and paged result lists. This package hides those
details behind one client and a small set of query classes.

HOW: Two layers — queries (what to ask for, how it is authorised, how the
answer is read) and the client (how it is sent). Each layer is
independently testable.

RULES:
- Every API endpoint is a Query subclass
- The client never special-cases an endpoint; it reads capability tags
"""

from freesound_client.api.client import FreesoundClient, FreesoundClientException

__version__ = "0.1.0"

__all__ = ["FreesoundClient", "FreesoundClientException", "__version__"]
