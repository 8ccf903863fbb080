import asyncio
import math

import pytest

from shared.clients.search.ScrollDrainer import ScrollDrainer
from shared.clients.search.errors import ScrollCursorExpiredError, ScrollExhaustedError
from shared.clients.search.models.Search import SearchResultPage


def _hits(start, count):
    return [{"_id": str(i)} for i in range(start, start + count)]


class FakeCursor:
    """Serves pre-built pages keyed by the scroll id that leads to them."""

    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    async def next_page(self, scroll_id):
        self.calls.append(scroll_id)
        page = self.pages[scroll_id]
        if isinstance(page, Exception):
            raise page
        return page


def _paged_cursor(total, page_size):
    """Builds page 1 plus a cursor serving the remaining pages of ``total`` hits."""
    pages = {}
    page_count = max(math.ceil(total / page_size), 1)
    first = SearchResultPage(hits=_hits(0, min(page_size, total)), total=total, scroll_id="c1")
    for n in range(2, page_count + 1):
        start = (n - 1) * page_size
        pages[f"c{n - 1}"] = SearchResultPage(
            hits=_hits(start, min(page_size, total - start)), total=total, scroll_id=f"c{n}",
        )
    return first, FakeCursor(pages)


def test_drain_twenty_five_hits_in_pages_of_ten(helper_config):
    first = SearchResultPage(hits=_hits(0, 10), total=25, scroll_id="c1")
    cursor = FakeCursor({
        "c1": SearchResultPage(hits=_hits(10, 10), total=25, scroll_id="c2"),
        "c2": SearchResultPage(hits=_hits(20, 5), total=25, scroll_id="c3"),
    })

    result = asyncio.run(ScrollDrainer(helper_config).drain(first, cursor.next_page))

    assert cursor.calls == ["c1", "c2"]
    assert result.total == 25
    assert [hit["_id"] for hit in result.hits] == [str(i) for i in range(25)]


def test_zero_total_fetches_nothing(helper_config):
    first = SearchResultPage(hits=[], total=0, scroll_id="c1")
    cursor = FakeCursor({})

    result = asyncio.run(ScrollDrainer(helper_config).drain(first, cursor.next_page))

    assert cursor.calls == []
    assert result.hits == []
    assert result.total == 0


@pytest.mark.parametrize("total,page_size", [(1, 1), (10, 10), (11, 10), (99, 7), (3, 50)])
def test_fetch_count_matches_page_count(helper_config, total, page_size):
    first, cursor = _paged_cursor(total, page_size)

    result = asyncio.run(ScrollDrainer(helper_config).drain(first, cursor.next_page))

    # the initial search counts as the first fetch
    assert len(cursor.calls) + 1 == math.ceil(total / page_size)
    assert len(result.hits) == total
    assert len({hit["_id"] for hit in result.hits}) == total


def test_failure_on_second_continuation_propagates(helper_config):
    first = SearchResultPage(hits=_hits(0, 10), total=30, scroll_id="c1")
    cursor = FakeCursor({
        "c1": SearchResultPage(hits=_hits(10, 10), total=30, scroll_id="c2"),
        "c2": ScrollCursorExpiredError("gone", status_code=404),
    })

    with pytest.raises(ScrollCursorExpiredError):
        asyncio.run(ScrollDrainer(helper_config).drain(first, cursor.next_page))
    assert cursor.calls == ["c1", "c2"]


def test_empty_page_before_total_raises(helper_config):
    first = SearchResultPage(hits=_hits(0, 10), total=25, scroll_id="c1")
    cursor = FakeCursor({
        "c1": SearchResultPage(hits=[], total=25, scroll_id="c2"),
    })

    with pytest.raises(ScrollExhaustedError):
        asyncio.run(ScrollDrainer(helper_config).drain(first, cursor.next_page))
    assert cursor.calls == ["c1"]


def test_missing_scroll_id_before_total_raises(helper_config):
    first = SearchResultPage(hits=_hits(0, 10), total=25, scroll_id=None)

    with pytest.raises(ScrollExhaustedError):
        asyncio.run(ScrollDrainer(helper_config).drain(first, FakeCursor({}).next_page))


def test_first_page_total_stays_authoritative(helper_config):
    first = SearchResultPage(hits=_hits(0, 10), total=20, scroll_id="c1")
    cursor = FakeCursor({
        # a concurrent write bumped the total; the drain still stops at 20
        "c1": SearchResultPage(hits=_hits(10, 10), total=21, scroll_id="c2"),
    })

    result = asyncio.run(ScrollDrainer(helper_config).drain(first, cursor.next_page))

    assert result.total == 20
    assert len(result.hits) == 20
    assert cursor.calls == ["c1"]


def test_hits_beyond_total_are_dropped(helper_config):
    first = SearchResultPage(hits=_hits(0, 10), total=15, scroll_id="c1")
    cursor = FakeCursor({
        "c1": SearchResultPage(hits=_hits(10, 10), total=15, scroll_id="c2"),
    })

    result = asyncio.run(ScrollDrainer(helper_config).drain(first, cursor.next_page))

    assert len(result.hits) == 15
    assert result.hits[-1]["_id"] == "14"


def test_negative_total_keeps_no_hits(helper_config):
    first = SearchResultPage(hits=_hits(0, 10), total=-5, scroll_id="c1")
    cursor = FakeCursor({})

    result = asyncio.run(ScrollDrainer(helper_config).drain(first, cursor.next_page))

    assert result.total == 0
    assert result.hits == []
    assert cursor.calls == []
