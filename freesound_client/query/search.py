"""Text search over the Freesound sound collection (``/search/text/``).

WHY: Text search is the main entry point into Freesound. Callers usually
build a search incrementally (query string, then sort order, then filters),
so TextSearch offers a fluent API where each setter returns the query.

HOW: TextSearch is a PagingQuery whose results are Sound objects. Only the
options that have been set are sent as query parameters.

RULES:
- search_string is sent as ``query``
- sort_order is sent as ``sort`` using SortOrder's API value
- group_by_pack is sent as ``"1"`` or ``"0"``
- filter is sent verbatim (Solr-style ``field:value`` syntax)
"""

from __future__ import annotations

import enum
from typing import Any, Dict, Optional

from freesound_client.api.models import Sound
from freesound_client.query.base import PagingQuery


class SortOrder(str, enum.Enum):
    """Sort orders accepted by the text search endpoint."""

    SCORE = "score"
    DURATION_DESCENDING = "duration_desc"
    DURATION_ASCENDING = "duration_asc"
    CREATED_DESCENDING = "created_desc"
    CREATED_ASCENDING = "created_asc"
    DOWNLOADS_DESCENDING = "downloads_desc"
    DOWNLOADS_ASCENDING = "downloads_asc"
    RATING_DESCENDING = "rating_desc"
    RATING_ASCENDING = "rating_asc"

    @property
    def parameter_value(self) -> str:
        return self.value


class TextSearch(PagingQuery):
    """Search for sounds matching a text query.

    Example:
        >>> search = TextSearch("cars").sort_order(SortOrder.RATING_DESCENDING)
        >>> client.execute_query(search)
    """

    PATH = "/search/text/"

    def __init__(self, search_string: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(self.PATH, **kwargs)
        self._search_string = search_string
        self._sort_order: Optional[SortOrder] = None
        self._group_by_pack: Optional[bool] = None
        self._filter: Optional[str] = None

    def search_string(self, search_string: str) -> TextSearch:
        self._search_string = search_string
        return self

    def sort_order(self, sort_order: SortOrder) -> TextSearch:
        self._sort_order = SortOrder(sort_order)
        return self

    def group_by_pack(self, group_by_pack: bool) -> TextSearch:
        self._group_by_pack = group_by_pack
        return self

    def filter(self, filter_string: str) -> TextSearch:
        self._filter = filter_string
        return self

    @property
    def query_parameters(self) -> Dict[str, Any]:
        params = super().query_parameters
        if self._search_string is not None:
            params["query"] = self._search_string
        if self._sort_order is not None:
            params["sort"] = self._sort_order.parameter_value
        if self._group_by_pack is not None:
            params["group_by_pack"] = "1" if self._group_by_pack else "0"
        if self._filter:
            params["filter"] = self._filter
        return params

    def parse_item(self, data: dict) -> Sound:
        return Sound.from_dict(data)
