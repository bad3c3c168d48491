"""Queries on Freesound users, including the OAuth2-authenticated ``/me/``."""

from __future__ import annotations

from typing import Any

from freesound_client.api.models import Pack, Sound, User
from freesound_client.query.base import JSONResponseQuery, OAuthQuery, PagingQuery

USERNAME_ROUTE_PARAMETER = "username"


class UserInstanceQuery(JSONResponseQuery):
    """Retrieve the public profile of a user."""

    PATH = "/users/{username}/"

    def __init__(self, username: str) -> None:
        super().__init__(self.PATH, route_parameters={USERNAME_ROUTE_PARAMETER: username})

    def process_response(self, body: dict) -> User:
        return User.from_dict(body)


class UserSoundsQuery(PagingQuery):
    """Sounds uploaded by a user."""

    PATH = "/users/{username}/sounds/"

    def __init__(self, username: str, **kwargs: Any) -> None:
        super().__init__(
            self.PATH, route_parameters={USERNAME_ROUTE_PARAMETER: username}, **kwargs
        )

    def parse_item(self, data: dict) -> Sound:
        return Sound.from_dict(data)


class UserPacksQuery(PagingQuery):
    """Packs created by a user."""

    PATH = "/users/{username}/packs/"

    def __init__(self, username: str, **kwargs: Any) -> None:
        super().__init__(
            self.PATH, route_parameters={USERNAME_ROUTE_PARAMETER: username}, **kwargs
        )

    def parse_item(self, data: dict) -> Pack:
        return Pack.from_dict(data)


class MeQuery(OAuthQuery, JSONResponseQuery):
    """Profile of the user who granted the OAuth2 token."""

    PATH = "/me/"

    def __init__(self, oauth_token: str) -> None:
        super().__init__(self.PATH, oauth_token=oauth_token)

    def process_response(self, body: dict) -> User:
        return User.from_dict(body)
