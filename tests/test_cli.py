"""Tests for the command-line interface.

WHY: The CLI maps sub-commands onto queries and decides exit codes.
Mistakes there are invisible to the library tests.

HOW: Arguments are parsed with the real parser and run against a client
backed by httpx.MockTransport via _run(). main() is exercised with the
FreesoundClient constructor patched to the mocked client.
"""

import json
from unittest.mock import patch
from urllib.parse import parse_qs

import httpx
import pytest

from freesound_client import cli

from conftest import SOUND_JSON, paged_json

TOKEN_JSON = {
    "access_token": "access-1",
    "refresh_token": "refresh-2",
    "expires_in": 86399,
    "scope": "read write",
}


def _parse(*argv):
    return cli.build_parser().parse_args(list(argv))


class TestBuildQuery:
    """Sub-commands produce the right query objects."""

    def test_search_options(self):
        query = cli._build_query(
            _parse("search", "rain", "--sort", "rating_desc", "--group-by-pack", "--page", "2")
        )
        params = query.query_parameters
        assert params["query"] == "rain"
        assert params["sort"] == "rating_desc"
        assert params["group_by_pack"] == "1"
        assert params["page"] == 2

    def test_group_by_pack_not_sent_unless_given(self):
        assert "group_by_pack" not in cli._build_query(_parse("search", "rain")).query_parameters
        query = cli._build_query(_parse("search", "rain", "--no-group-by-pack"))
        assert query.query_parameters["group_by_pack"] == "0"

    def test_sound_variants(self):
        assert type(cli._build_query(_parse("sound", "7"))).__name__ == "SoundInstanceQuery"
        assert type(cli._build_query(_parse("sound", "7", "--similar"))).__name__ == "SimilarSoundsQuery"
        assert type(cli._build_query(_parse("sound", "7", "--comments"))).__name__ == "SoundCommentsQuery"

    def test_user_variants(self):
        assert type(cli._build_query(_parse("user", "bob", "--packs"))).__name__ == "UserPacksQuery"
        assert type(cli._build_query(_parse("user", "bob"))).__name__ == "UserInstanceQuery"

    def test_download_requires_token(self):
        with pytest.raises(SystemExit):
            _parse("download-sound", "7")


class TestRun:
    """_run prints results and reports failures through the exit code."""

    def test_search_prints_json(self, json_client, capsys):
        client = json_client(paged_json([SOUND_JSON]))
        exit_code = cli._run(_parse("search", "cars"), client)

        assert exit_code == 0
        printed = json.loads(capsys.readouterr().out)
        assert printed["results"][0]["name"] == "car_pass_by.wav"

    def test_error_status_returns_one(self, json_client, capsys):
        client = json_client({"detail": "Not found."}, status_code=404)
        exit_code = cli._run(_parse("sound", "1"), client)

        assert exit_code == 1
        assert "Not found." in capsys.readouterr().err

    def test_download_writes_file(self, make_client, tmp_path):
        client = make_client(lambda request: httpx.Response(200, content=b"PK\x03\x04"))
        target = tmp_path / "rain.zip"
        exit_code = cli._run(_parse("download-pack", "9", "--token", "t", "-o", str(target)), client)

        assert exit_code == 0
        assert target.read_bytes() == b"PK\x03\x04"

    def test_authorise_prints_url(self, json_client, capsys):
        exit_code = cli._run(_parse("authorise"), json_client({}))

        assert exit_code == 0
        assert "/oauth2/authorize/" in capsys.readouterr().out

    def test_redeem_prints_token_details(self, json_client, sent_requests, capsys):
        client = json_client(TOKEN_JSON)
        exit_code = cli._run(_parse("redeem", "code-1"), client)

        assert exit_code == 0
        assert parse_qs(sent_requests[0].content.decode("utf-8"))["code"] == ["code-1"]
        printed = json.loads(capsys.readouterr().out)
        assert printed["access_token"] == TOKEN_JSON["access_token"]
        assert printed["expires_in"] == TOKEN_JSON["expires_in"]

    def test_refresh_prints_token_details(self, json_client, sent_requests, capsys):
        client = json_client(TOKEN_JSON)
        exit_code = cli._run(_parse("refresh", "refresh-1"), client)

        assert exit_code == 0
        fields = parse_qs(sent_requests[0].content.decode("utf-8"))
        assert fields["grant_type"] == ["refresh_token"]
        assert fields["refresh_token"] == ["refresh-1"]
        assert json.loads(capsys.readouterr().out)["refresh_token"] == TOKEN_JSON["refresh_token"]

    def test_me_uses_bearer_token(self, json_client, sent_requests, capsys):
        client = json_client({"username": "bob", "num_packs": 2})
        exit_code = cli._run(_parse("me", "--token", "oauth-abc"), client)

        assert exit_code == 0
        assert sent_requests[0].headers["Authorization"] == "Bearer oauth-abc"
        assert json.loads(capsys.readouterr().out)["username"] == "bob"


class TestMain:
    """main() wires credentials and maps client failures to exit code 1."""

    def test_transport_failure_exit_code(self, make_client, capsys):
        def _fail(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        client = make_client(_fail)
        with patch.object(cli, "FreesoundClient", return_value=client):
            exit_code = cli.main(["sound", "1"])

        assert exit_code == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_credentials_exit_code(self, monkeypatch, capsys):
        monkeypatch.delenv("FREESOUND_CLIENT_ID", raising=False)
        monkeypatch.delenv("FREESOUND_CLIENT_SECRET", raising=False)

        assert cli.main(["sound", "1"]) == 1
        assert "credentials" in capsys.readouterr().err
