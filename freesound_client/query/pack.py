"""Queries on sound packs."""

from __future__ import annotations

from typing import Any

from freesound_client.api.models import Pack, Sound
from freesound_client.query.base import (
    BinaryResponseQuery,
    JSONResponseQuery,
    OAuthQuery,
    PagingQuery,
)


class PackInstanceQuery(JSONResponseQuery):
    """Retrieve the details of one pack."""

    PATH = "/packs/{pack_id}/"
    PACK_IDENTIFIER_PARAMETER = "pack_id"

    def __init__(self, pack_id: int) -> None:
        super().__init__(self.PATH, route_parameters={self.PACK_IDENTIFIER_PARAMETER: pack_id})

    def process_response(self, body: dict) -> Pack:
        return Pack.from_dict(body)


class PackSoundsQuery(PagingQuery):
    """The sounds contained in a pack."""

    PATH = "/packs/{pack_id}/sounds/"
    PACK_IDENTIFIER_PARAMETER = "pack_id"

    def __init__(self, pack_id: int, **kwargs: Any) -> None:
        super().__init__(
            self.PATH, route_parameters={self.PACK_IDENTIFIER_PARAMETER: pack_id}, **kwargs
        )

    def parse_item(self, data: dict) -> Sound:
        return Sound.from_dict(data)


class DownloadPack(OAuthQuery, BinaryResponseQuery):
    """Download every sound of a pack as a single zip archive (OAuth2 only)."""

    PATH = "/packs/{pack_id}/download/"
    PACK_ID_ROUTE_PARAMETER = "pack_id"

    def __init__(self, pack_id: int, oauth_token: str) -> None:
        super().__init__(
            self.PATH,
            oauth_token=oauth_token,
            route_parameters={self.PACK_ID_ROUTE_PARAMETER: pack_id},
        )
