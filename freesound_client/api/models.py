"""Freesound API response dataclasses.

WHY: The Freesound APIv2 returns JSON objects for sounds, packs, users,
comments, paged result lists and OAuth2 token grants. Typed dataclasses
make these structures explicit, enable IDE autocompletion, and catch
field mismatches early.

HOW: Each dataclass maps to a Freesound JSON object. Factory methods
(from_dict) handle parsing from raw API responses. The API lets callers
choose which fields are returned (search results only carry a handful by
default), so everything except the identifying field is Optional.

RULES:
- from_dict never raises on a missing optional field
- Identifying fields (id for sounds/packs, username for users) are required
- PagedResults.results holds already-parsed items, not raw dicts
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass
class Sound:
    """A single sound resource (``/sounds/{sound_id}/``).

    RULES:
    - id is always present
    - tags defaults to an empty list
    - previews/images are the raw URL mappings returned by the API
    - pack is the URL of the pack the sound belongs to, if any
    """

    id: int
    name: str | None = None
    tags: list[str] = field(default_factory=list)
    description: str | None = None
    username: str | None = None
    license: str | None = None
    url: str | None = None
    duration: float | None = None
    created: str | None = None
    type: str | None = None
    channels: int | None = None
    samplerate: float | None = None
    filesize: int | None = None
    num_downloads: int | None = None
    avg_rating: float | None = None
    num_ratings: int | None = None
    pack: str | None = None
    previews: dict[str, str] = field(default_factory=dict)
    images: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Sound:
        """Parse a Sound from a raw API response dict."""
        return cls(
            id=data["id"],
            name=data.get("name"),
            tags=list(data.get("tags") or []),
            description=data.get("description"),
            username=data.get("username"),
            license=data.get("license"),
            url=data.get("url"),
            duration=data.get("duration"),
            created=data.get("created"),
            type=data.get("type"),
            channels=data.get("channels"),
            samplerate=data.get("samplerate"),
            filesize=data.get("filesize"),
            num_downloads=data.get("num_downloads"),
            avg_rating=data.get("avg_rating"),
            num_ratings=data.get("num_ratings"),
            pack=data.get("pack"),
            previews=dict(data.get("previews") or {}),
            images=dict(data.get("images") or {}),
        )


@dataclass
class Pack:
    """A pack of sounds uploaded together by one user."""

    id: int
    name: str | None = None
    description: str | None = None
    url: str | None = None
    username: str | None = None
    num_sounds: int | None = None
    num_downloads: int | None = None
    created: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Pack:
        return cls(
            id=data["id"],
            name=data.get("name"),
            description=data.get("description"),
            url=data.get("url"),
            username=data.get("username"),
            num_sounds=data.get("num_sounds"),
            num_downloads=data.get("num_downloads"),
            created=data.get("created"),
        )


@dataclass
class User:
    """A Freesound user profile (``/users/{username}/`` or ``/me/``)."""

    username: str
    url: str | None = None
    about: str | None = None
    home_page: str | None = None
    date_joined: str | None = None
    num_sounds: int | None = None
    num_packs: int | None = None
    num_posts: int | None = None
    num_comments: int | None = None
    avatar: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> User:
        return cls(
            username=data["username"],
            url=data.get("url"),
            about=data.get("about"),
            home_page=data.get("home_page"),
            date_joined=data.get("date_joined"),
            num_sounds=data.get("num_sounds"),
            num_packs=data.get("num_packs"),
            num_posts=data.get("num_posts"),
            num_comments=data.get("num_comments"),
            avatar=dict(data.get("avatar") or {}),
        )


@dataclass
class Comment:
    """A comment left on a sound."""

    username: str
    comment: str
    created: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Comment:
        return cls(
            username=data["username"],
            comment=data["comment"],
            created=data.get("created"),
        )


@dataclass
class PagedResults:
    """One page of a paged list endpoint.

    WHY: Every list endpoint (search, similar sounds, pack sounds, user
    sounds/packs, comments) wraps its items in the same envelope. The
    paging helpers on the client need the ``next``/``previous`` links to
    decide whether another page exists.

    HOW: from_dict takes an item parser so the same envelope works for
    sounds, packs and comments.

    RULES:
    - count is the total number of items across all pages
    - next_url/previous_url are None at the ends of the list
    - results are parsed with the supplied item parser
    """

    count: int
    next_url: str | None
    previous_url: str | None
    results: list[Any]

    @classmethod
    def from_dict(cls, data: dict, parse_item: Callable[[dict], Any]) -> PagedResults:
        if not isinstance(data, dict):
            raise TypeError("Paged response must be a JSON object, got {}".format(type(data).__name__))
        return cls(
            count=data.get("count", 0),
            next_url=data.get("next"),
            previous_url=data.get("previous"),
            results=[parse_item(item) for item in data.get("results") or []],
        )


@dataclass
class AccessTokenDetails:
    """OAuth2 token grant returned by ``/oauth2/access_token/``.

    WHY: Both the authorisation-code exchange and the refresh flow return
    the same payload. Callers keep the refresh token to obtain a new access
    token once expires_in seconds have elapsed.

    RULES:
    - access_token and refresh_token are always present on success
    - expires_in is in seconds
    - scope is a space separated list as sent by the API
    """

    access_token: str
    refresh_token: str
    expires_in: int
    scope: str | None = None
    token_type: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> AccessTokenDetails:
        return cls(
            access_token=data["access_token"],
            refresh_token=data["refresh_token"],
            expires_in=int(data["expires_in"]),
            scope=data.get("scope"),
            token_type=data.get("token_type"),
        )
