"""Shared test fixtures for the freesound_client test suite.

WHY: Most test modules need a FreesoundClient whose HTTP traffic never
leaves the process, plus the same sample API payloads.

HOW: ``make_client`` builds a client around an httpx.Client backed by
httpx.MockTransport. Every request the client sends is appended to the
``sent_requests`` list so tests can assert on method, URL, headers and
body. Sample payloads follow the shapes documented for APIv2.

RULES:
- No test touches the network.
- Credentials are fixed test values, never read from the environment.
"""

from typing import Any, Callable, Dict, List

import httpx
import pytest

from freesound_client.api.client import FreesoundClient

CLIENT_ID = "test-client-id"
CLIENT_SECRET = "test-client-secret"
BASE_URL = "https://freesound.test/apiv2"


SOUND_JSON: Dict[str, Any] = {
    "id": 1234,
    "name": "car_pass_by.wav",
    "tags": ["car", "traffic", "field-recording"],
    "description": "A car passing by on a wet road.",
    "username": "fieldrecorder",
    "license": "http://creativecommons.org/licenses/by/3.0/",
    "url": "https://freesound.org/people/fieldrecorder/sounds/1234/",
    "duration": 6.42,
    "type": "wav",
    "channels": 2,
    "samplerate": 44100.0,
    "previews": {"preview-hq-mp3": "https://cdn.freesound.org/previews/1/1234-hq.mp3"},
}


def paged_json(results: List[Dict[str, Any]], next_url=None, previous_url=None, count=None):
    """Build a paged list envelope as returned by list endpoints."""
    return {
        "count": len(results) if count is None else count,
        "next": next_url,
        "previous": previous_url,
        "results": results,
    }


@pytest.fixture
def sent_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_client(sent_requests) -> Callable[..., FreesoundClient]:
    """Factory building a FreesoundClient around a mocked transport.

    ``handler`` receives each httpx.Request and returns an httpx.Response.
    """

    def _make(handler, **kwargs) -> FreesoundClient:
        def _recording_handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return handler(request)

        http_client = httpx.Client(transport=httpx.MockTransport(_recording_handler))
        kwargs.setdefault("client_id", CLIENT_ID)
        kwargs.setdefault("client_secret", CLIENT_SECRET)
        kwargs.setdefault("base_url", BASE_URL)
        return FreesoundClient(http_client=http_client, **kwargs)

    return _make


@pytest.fixture
def json_client(make_client):
    """Client whose every request is answered with the given JSON payload."""

    def _make(payload, status_code: int = 200, **kwargs) -> FreesoundClient:
        return make_client(lambda request: httpx.Response(status_code, json=payload), **kwargs)

    return _make
