import asyncio

import pytest

from server.core.MemberSearchService import MemberSearchService
from shared.clients.search.MemberQueryBuilder import MemberQueryBuilder
from shared.clients.search.models.MemberQuery import BooleanOperator, MemberQueryParams, MemberTraitsQueryParams
from shared.clients.search.models.Search import AccumulatedResult, SearchResultPage, SuggestionResult


class FakeSearchClient:
    def __init__(self, hits=None, total=0):
        self.hits = hits or []
        self.total = total
        self.requests = []

    async def do_search(self, request):
        self.requests.append(("search", request))
        return SearchResultPage(hits=self.hits, total=self.total)

    async def do_scroll_all(self, request):
        self.requests.append(("scroll_all", request))
        return AccumulatedResult(hits=self.hits, total=self.total)

    async def do_suggest(self, request):
        self.requests.append(("suggest", request))
        return SuggestionResult(term=request.suggest.text, candidates=[{"text": "tonyj"}])


@pytest.fixture
def make_service(helper_config, index_config):
    def make(search_client):
        return MemberSearchService(
            helper_config=helper_config,
            search_client=search_client,
            query_builder=MemberQueryBuilder(index_config),
        )
    return make


def test_get_members_returns_page_and_total(make_service):
    client = FakeSearchClient(hits=[{"_id": "1"}], total=42)

    resp = asyncio.run(make_service(client).get_members(MemberQueryParams(page=3, per_page=1)))

    assert resp.total == 42
    assert resp.page == 3
    assert resp.hits == [{"_id": "1"}]
    kind, request = client.requests[0]
    assert kind == "search"
    assert request.offset == 2


def test_traits_are_drained(make_service):
    client = FakeSearchClient(hits=[{"_id": "t"}], total=1)

    result = asyncio.run(make_service(client).get_member_traits(MemberTraitsQueryParams(member_ids=["7"])))

    assert result.total == 1
    assert client.requests[0][0] == "scroll_all"


def test_blank_suggestion_term_skips_backend(make_service):
    client = FakeSearchClient()

    result = asyncio.run(make_service(client).get_suggestion("   "))

    assert result.candidates == []
    assert client.requests == []


def test_suggestion_term_is_trimmed(make_service):
    client = FakeSearchClient()

    result = asyncio.run(make_service(client).get_suggestion(" ton "))

    assert result.term == "ton"
    assert client.requests[0][1].suggest.text == "ton"


def test_skill_search_slices_drained_hits(make_service):
    hits = [{"_id": str(i)} for i in range(7)]
    client = FakeSearchClient(hits=hits, total=7)

    resp = asyncio.run(make_service(client).search_members_by_skills(["A"], BooleanOperator.OR, page=2, per_page=3))

    assert resp.total == 7
    assert [hit["_id"] for hit in resp.hits] == ["3", "4", "5"]
    assert client.requests[0][1].scroll == "90s"


def test_skill_search_page_past_end_is_empty(make_service):
    client = FakeSearchClient(hits=[{"_id": "0"}], total=1)

    resp = asyncio.run(make_service(client).search_members_by_skills(["A"], BooleanOperator.AND, page=5, per_page=10))

    assert resp.hits == []
    assert resp.total == 1
