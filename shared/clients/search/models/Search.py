"""Generic search request / response models — backend-independent."""

from typing import Literal

from pydantic import BaseModel

from shared.clients.search.models.FilterClause import FilterClause


class SortSpec(BaseModel):
    field: str
    order: Literal["asc", "desc"] = "asc"


class SuggestSpec(BaseModel):
    """
    Completion suggester request.

    Attributes:
        name:  Name the backend files the candidates under in its response.
        text:  The free-text prefix typed by the user.
        field: The completion field to look the prefix up in.
        size:  Maximum number of candidates to return.
    """
    name: str
    text: str
    field: str
    size: int


class SearchRequest(BaseModel):
    """
    Represents one search call against a single index.

    Attributes:
        index:         The target index (collection) name.
        size:          Number of hits per page.
        offset:        Number of hits to skip. Ignored by the backend when scrolling.
        sort:          Optional ordering; scroll pages arrive in this order.
        filter:        Optional filter tree. None matches the whole index.
        source_fields: Optional projection of the returned document fields.
        scroll:        Cursor lifetime (e.g. "90s"). When set, the response carries a scroll id.
        suggest:       Optional completion suggester.
    """
    index: str
    size: int = 10
    offset: int = 0
    sort: list[SortSpec] | None = None
    filter: FilterClause | None = None
    source_fields: list[str] | None = None
    scroll: str | None = None
    suggest: SuggestSpec | None = None


class SearchResultPage(BaseModel):
    """
    One page of a search or scroll response.

    Attributes:
        hits:      Raw hit documents in backend order.
        total:     Number of documents matching the whole query, not just this page.
        scroll_id: Cursor for the next page; only valid until its lifetime elapses.
        took:      Time in milliseconds the backend spent on the request.
    """
    hits: list[dict] = []
    total: int = 0
    scroll_id: str | None = None
    took: int = 0


class AccumulatedResult(BaseModel):
    """
    All hits collected by a scroll drain, in page-arrival order.

    ``len(hits)`` never exceeds ``total``; a finished drain holds exactly ``total`` hits.
    """
    hits: list[dict] = []
    total: int = 0


class SuggestionResult(BaseModel):
    term: str
    candidates: list[dict] = []
