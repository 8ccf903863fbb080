from shared.clients.search.MemberQueryBuilder import MemberQueryBuilder
from shared.clients.search.SearchClientInterface import SearchClientInterface
from shared.clients.search.models.MemberQuery import BooleanOperator, MemberHandlesQueryParams, MemberQueryParams, MemberTraitsQueryParams
from shared.clients.search.models.Search import AccumulatedResult, SuggestionResult
from shared.helper.HelperConfig import HelperConfig
from server.models.responses import MembersResponse


class MemberSearchService:
    """Runs the talent-search member lookups: build query -> search (or drain) -> shape response."""

    def __init__(
        self,
        helper_config: HelperConfig,
        search_client: SearchClientInterface,
        query_builder: MemberQueryBuilder,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._search = search_client
        self._builder = query_builder

    ##########################################
    ############### CORE #####################
    ##########################################

    async def get_members(self, params: MemberQueryParams) -> MembersResponse:
        """Return one page of active member profiles matching the filters."""
        request = self._builder.build_members_query(params)
        page = await self._search.do_search(request)
        self.logging.info(
            "MemberSearchService.get_members: page=%d per_page=%d total=%d",
            params.page, params.per_page, page.total,
        )
        return MembersResponse(page=params.page, per_page=params.per_page, total=page.total, hits=page.hits)

    async def get_members_skills(self, params: MemberHandlesQueryParams) -> MembersResponse:
        """Return the skills documents of the given member handles."""
        request = self._builder.build_members_skills_query(params)
        page = await self._search.do_search(request)
        return MembersResponse(page=1, per_page=params.per_page, total=page.total, hits=page.hits)

    async def get_members_stats(self, params: MemberHandlesQueryParams) -> AccumulatedResult:
        """Return every stats document of the given member handles."""
        request = self._builder.build_members_stats_query(params)
        return await self._search.do_scroll_all(request)

    async def get_member_traits(self, params: MemberTraitsQueryParams) -> AccumulatedResult:
        """Return every trait document of the given members."""
        request = self._builder.build_member_traits_query(params)
        return await self._search.do_scroll_all(request)

    async def get_suggestion(self, term: str, page: int = 1, per_page: int = 50) -> SuggestionResult:
        """Return handle completion candidates for ``term``. A blank term yields no candidates."""
        if not term or not term.strip():
            return SuggestionResult(term=term or "", candidates=[])
        request = self._builder.build_suggestion_query(term.strip(), page=page, per_page=per_page)
        return await self._search.do_suggest(request)

    async def search_members_by_skills(
        self,
        skill_ids: list[str],
        operator: BooleanOperator,
        page: int = 1,
        per_page: int = 50,
    ) -> MembersResponse:
        """Find members available for gigs by skill and return one page of them.

        The whole result set is drained first; ``total`` is the drained total,
        ``hits`` the slice of the requested page.
        """
        request = self._builder.build_search_members_skills_query(skill_ids, operator)
        result = await self._search.do_scroll_all(request)
        start = (page - 1) * per_page
        self.logging.info(
            "MemberSearchService.search_members_by_skills: skills=%d operator=%s total=%d",
            len(skill_ids), operator.value, result.total,
        )
        return MembersResponse(
            page=page,
            per_page=per_page,
            total=result.total,
            hits=result.hits[start:start + per_page],
        )
