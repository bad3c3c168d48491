"""Command-line interface for the Freesound client.

WHY: Quick lookups (search, sound/pack/user details) and downloads are
handy from the terminal, and the OAuth2 code exchange needs a way to be
run by hand once per user.

HOW: Uses argparse sub-commands. Each command builds one Query, runs it
through FreesoundClient, and prints the typed results as JSON on stdout.
Downloads are written to disk instead. Status and errors go to stderr.

RULES:
- Credentials: --client-id/--client-secret, else FREESOUND_CLIENT_ID /
  FREESOUND_CLIENT_SECRET from .env
- Download commands and ``me`` require --token (OAuth2 access token)
- Exit code 0 on success, 1 on any client error or non-2xx response
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from freesound_client.api.client import FreesoundClient, FreesoundClientException
from freesound_client.query import (
    DownloadPack,
    DownloadSound,
    MeQuery,
    PackInstanceQuery,
    PackSoundsQuery,
    Query,
    SimilarSoundsQuery,
    SortOrder,
    SoundCommentsQuery,
    SoundInstanceQuery,
    TextSearch,
    UserInstanceQuery,
    UserPacksQuery,
    UserSoundsQuery,
)

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _to_jsonable(results: Any) -> Any:
    if dataclasses.is_dataclass(results):
        return dataclasses.asdict(results)
    return results


def _build_query(args: argparse.Namespace) -> Query:
    """Translate parsed arguments into the Query to dispatch."""
    command = args.command
    paging = {"page": args.page, "page_size": args.page_size} if hasattr(args, "page") else {}

    if command == "search":
        search = TextSearch(args.query, **paging)
        if args.group_by_pack is not None:
            search.group_by_pack(args.group_by_pack)
        if args.sort:
            search.sort_order(SortOrder(args.sort))
        if args.filter:
            search.filter(args.filter)
        return search
    if command == "sound":
        if args.similar:
            return SimilarSoundsQuery(args.sound_id, **paging)
        if args.comments:
            return SoundCommentsQuery(args.sound_id, **paging)
        return SoundInstanceQuery(args.sound_id)
    if command == "pack":
        if args.sounds:
            return PackSoundsQuery(args.pack_id, **paging)
        return PackInstanceQuery(args.pack_id)
    if command == "user":
        if args.sounds:
            return UserSoundsQuery(args.username, **paging)
        if args.packs:
            return UserPacksQuery(args.username, **paging)
        return UserInstanceQuery(args.username)
    if command == "me":
        return MeQuery(args.token)
    if command == "download-sound":
        return DownloadSound(args.sound_id, args.token)
    if command == "download-pack":
        return DownloadPack(args.pack_id, args.token)
    raise ValueError("Unknown command: {}".format(command))


def _default_download_path(args: argparse.Namespace) -> Path:
    if args.command == "download-pack":
        return Path("pack-{}.zip".format(args.pack_id))
    return Path("sound-{}".format(args.sound_id))


def _run(args: argparse.Namespace, client: FreesoundClient) -> int:
    """Run one command against an open client and report the outcome."""
    if args.command == "authorise":
        print(client.authorisation_url(state=args.state))
        return 0

    if args.command == "redeem":
        response = client.redeem_authorisation_code(args.code)
    elif args.command == "refresh":
        response = client.refresh_access_token(args.refresh_token)
    else:
        query = _build_query(args)
        response = client.execute_query(query)

    if not response.is_success:
        _status("Error: Freesound returned {}: {}".format(
            response.status_code, response.error_details or "no details"))
        return 1

    if args.command in ("download-sound", "download-pack"):
        output = Path(args.output) if args.output else _default_download_path(args)
        output.write_bytes(response.results)
        _status("Saved {} bytes to {}".format(len(response.results), output))
        return 0

    print(json.dumps(_to_jsonable(response.results), indent=2, ensure_ascii=False))
    return 0


def _add_paging_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--page", type=int, default=1, help="Page number (default: %(default)s).")
    parser.add_argument(
        "--page-size", type=int, default=15, help="Results per page (default: %(default)s)."
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    RULES:
    - Global options come before the sub-command
    - List commands accept --page and --page-size
    """
    parser = argparse.ArgumentParser(
        prog="freesound_client",
        description="Query and download sounds from freesound.org (APIv2).",
    )
    parser.add_argument("--client-id", default=None, help="Freesound application client ID.")
    parser.add_argument(
        "--client-secret", default=None, help="Freesound application client secret (API key)."
    )
    parser.add_argument("--user-agent", default=None, help="User-Agent header to send.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Text search for sounds.")
    search.add_argument("query", help="Search terms.")
    search.add_argument(
        "--sort",
        choices=[order.value for order in SortOrder],
        default=None,
        help="Sort order of the results.",
    )
    search.add_argument(
        "--group-by-pack",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Group results from the same pack (not sent unless given).",
    )
    search.add_argument("--filter", default=None, help="Filter string, e.g. 'duration:[1 TO 5]'.")
    _add_paging_arguments(search)

    sound = sub.add_parser("sound", help="Show a sound, its similar sounds or its comments.")
    sound.add_argument("sound_id", type=int)
    group = sound.add_mutually_exclusive_group()
    group.add_argument("--similar", action="store_true", help="List similar sounds.")
    group.add_argument("--comments", action="store_true", help="List comments.")
    _add_paging_arguments(sound)

    pack = sub.add_parser("pack", help="Show a pack or list its sounds.")
    pack.add_argument("pack_id", type=int)
    pack.add_argument("--sounds", action="store_true", help="List the sounds in the pack.")
    _add_paging_arguments(pack)

    user = sub.add_parser("user", help="Show a user or list their sounds/packs.")
    user.add_argument("username")
    group = user.add_mutually_exclusive_group()
    group.add_argument("--sounds", action="store_true", help="List the user's sounds.")
    group.add_argument("--packs", action="store_true", help="List the user's packs.")
    _add_paging_arguments(user)

    me = sub.add_parser("me", help="Show the user who granted the OAuth2 token.")
    me.add_argument("--token", required=True, help="OAuth2 access token.")

    for name, id_name, help_text in (
        ("download-sound", "sound_id", "Download the original file of a sound."),
        ("download-pack", "pack_id", "Download a pack as a zip archive."),
    ):
        download = sub.add_parser(name, help=help_text)
        download.add_argument(id_name, type=int)
        download.add_argument("--token", required=True, help="OAuth2 access token.")
        download.add_argument("-o", "--output", default=None, help="Destination file path.")

    authorise = sub.add_parser("authorise", help="Print the OAuth2 authorisation URL.")
    authorise.add_argument("--state", default=None, help="Opaque state echoed back by Freesound.")

    redeem = sub.add_parser("redeem", help="Exchange an authorisation code for an access token.")
    redeem.add_argument("code")

    refresh = sub.add_parser("refresh", help="Exchange a refresh token for a new access token.")
    refresh.add_argument("refresh_token")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        with FreesoundClient(
            client_id=args.client_id,
            client_secret=args.client_secret,
            user_agent=args.user_agent,
        ) as client:
            logger.debug("Using Freesound endpoint %s", client.base_url)
            return _run(args, client)
    except ValueError as exc:
        _status("Error: {}".format(exc))
        return 1
    except FreesoundClientException as exc:
        logger.debug("Client failure", exc_info=True)
        _status("Error: {}".format(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
