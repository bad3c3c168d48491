"""Queries on a single sound: details, similar sounds, comments and download."""

from __future__ import annotations

from typing import Any

from freesound_client.api.models import Comment, Sound
from freesound_client.query.base import (
    BinaryResponseQuery,
    JSONResponseQuery,
    OAuthQuery,
    PagingQuery,
)

SOUND_ID_ROUTE_PARAMETER = "sound_id"


class SoundInstanceQuery(JSONResponseQuery):
    """Retrieve the full details of one sound."""

    PATH = "/sounds/{sound_id}/"

    def __init__(self, sound_id: int) -> None:
        super().__init__(self.PATH, route_parameters={SOUND_ID_ROUTE_PARAMETER: sound_id})

    def process_response(self, body: dict) -> Sound:
        return Sound.from_dict(body)


class SimilarSoundsQuery(PagingQuery):
    """Sounds acoustically similar to a given sound."""

    PATH = "/sounds/{sound_id}/similar/"

    def __init__(self, sound_id: int, **kwargs: Any) -> None:
        super().__init__(
            self.PATH, route_parameters={SOUND_ID_ROUTE_PARAMETER: sound_id}, **kwargs
        )

    def parse_item(self, data: dict) -> Sound:
        return Sound.from_dict(data)


class SoundCommentsQuery(PagingQuery):
    """Comments posted on a sound, newest first."""

    PATH = "/sounds/{sound_id}/comments/"

    def __init__(self, sound_id: int, **kwargs: Any) -> None:
        super().__init__(
            self.PATH, route_parameters={SOUND_ID_ROUTE_PARAMETER: sound_id}, **kwargs
        )

    def parse_item(self, data: dict) -> Comment:
        return Comment.from_dict(data)


class DownloadSound(OAuthQuery, BinaryResponseQuery):
    """Download the original file of a sound.

    Downloads require an OAuth2 access token obtained on behalf of a
    Freesound user; the response body is the raw audio file.
    """

    PATH = "/sounds/{sound_id}/download/"

    def __init__(self, sound_id: int, oauth_token: str) -> None:
        super().__init__(
            self.PATH,
            oauth_token=oauth_token,
            route_parameters={SOUND_ID_ROUTE_PARAMETER: sound_id},
        )
