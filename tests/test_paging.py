"""Tests for paged queries and the client's next/previous page helpers.

WHY: Paging re-dispatches the same query object. An off-by-one or a
request for a page that does not exist would silently return wrong data.

HOW: A mocked transport answers with a page envelope whose ``next`` and
``previous`` links depend on the requested page, emulating a three-page
result list.
"""

import httpx
import pytest

from freesound_client.api.client import FreesoundClientException
from freesound_client.config import MAX_PAGE_SIZE
from freesound_client.query import PackSoundsQuery, TextSearch

from conftest import SOUND_JSON, paged_json

LAST_PAGE = 3


def _three_pages(request: httpx.Request) -> httpx.Response:
    page = int(request.url.params["page"])
    next_url = "https://next/?page={}".format(page + 1) if page < LAST_PAGE else None
    previous_url = "https://prev/?page={}".format(page - 1) if page > 1 else None
    payload = paged_json(
        [dict(SOUND_JSON, id=page)], next_url=next_url, previous_url=previous_url, count=LAST_PAGE
    )
    return httpx.Response(200, json=payload)


@pytest.fixture
def paged_client(make_client):
    return make_client(_three_pages)


class TestPagingQuery:
    """Page bounds and availability predicates."""

    def test_defaults(self):
        query = TextSearch("rain")
        assert query.page == 1
        assert query.page_size == 15

    def test_page_below_one_rejected(self):
        with pytest.raises(ValueError):
            TextSearch("rain", page=0)

    @pytest.mark.parametrize("page_size", [0, MAX_PAGE_SIZE + 1])
    def test_page_size_out_of_range_rejected(self, page_size):
        with pytest.raises(ValueError):
            TextSearch("rain", page_size=page_size)

    def test_no_next_page_before_dispatch(self):
        assert not TextSearch("rain").has_next_page()

    def test_no_next_page_after_error(self):
        query = TextSearch("rain")
        query.set_response(500, {"detail": "boom"})
        assert not query.has_next_page()

    def test_previous_page_depends_on_page_number(self):
        assert not TextSearch("rain").has_previous_page()
        assert TextSearch("rain", page=2).has_previous_page()


class TestClientPaging:
    """next_page/previous_page move by exactly one page and re-dispatch."""

    def test_next_page_increments_and_redispatches(self, paged_client, sent_requests):
        query = TextSearch("rain")
        paged_client.execute_query(query)
        response = paged_client.next_page(query)

        assert query.page == 2
        assert len(sent_requests) == 2
        assert sent_requests[1].url.params["page"] == "2"
        assert response.results.results[0].id == 2

    def test_previous_page_decrements_and_redispatches(self, paged_client, sent_requests):
        query = PackSoundsQuery(5, page=3)
        paged_client.execute_query(query)
        paged_client.previous_page(query)

        assert query.page == 2
        assert sent_requests[1].url.params["page"] == "2"

    def test_next_page_fails_on_last_page(self, paged_client, sent_requests):
        query = TextSearch("rain", page=LAST_PAGE)
        paged_client.execute_query(query)

        with pytest.raises(FreesoundClientException, match="No next page"):
            paged_client.next_page(query)
        assert query.page == LAST_PAGE
        assert len(sent_requests) == 1

    def test_next_page_fails_before_dispatch(self, paged_client, sent_requests):
        with pytest.raises(FreesoundClientException):
            paged_client.next_page(TextSearch("rain"))
        assert sent_requests == []

    def test_previous_page_fails_on_first_page(self, paged_client):
        query = TextSearch("rain")
        paged_client.execute_query(query)

        with pytest.raises(FreesoundClientException, match="No previous page"):
            paged_client.previous_page(query)
        assert query.page == 1

    def test_walk_all_pages(self, paged_client):
        query = TextSearch("rain")
        paged_client.execute_query(query)
        seen = [query.response.results.results[0].id]
        while query.has_next_page():
            paged_client.next_page(query)
            seen.append(query.response.results.results[0].id)

        assert seen == [1, 2, 3]
