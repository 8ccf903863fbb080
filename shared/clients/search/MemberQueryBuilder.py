from typing import Any

from shared.clients.search.errors import InvalidSearchQueryError, SearchConfigurationError
from shared.clients.search.models.FilterClause import Conjunction, Disjunction, FilterClause, Negation, PhraseMatch, TermsMatch
from shared.clients.search.models.MemberQuery import BooleanOperator, MemberHandlesQueryParams, MemberQueryParams, MemberTraitsQueryParams
from shared.clients.search.models.Search import SearchRequest, SortSpec, SuggestSpec
from shared.models.config import SearchIndexConfig

ACTIVE_STATUS = PhraseMatch(field="status", value="ACTIVE")
STATS_GROUP = PhraseMatch(field="groupId", value=10)
NOT_AVAILABLE_FOR_GIGS = PhraseMatch(field="availableForGigs", value=False)

SUGGESTION_NAME = "handle-suggestion"
SUGGESTION_FIELD = "handleSuggest"

MEMBER_SKILL_SEARCH_FIELDS = [
    "userId",
    "description",
    "skills.id",
    "skills.levels",
    "skills.name",
    "handle",
    "handleLower",
    "photoURL",
    "firstName",
    "lastName",
    "homeCountryCode",
    "addresses",
    "lastLoginDate",
    "skillScoreDeduction",
    "namesAndHandleAppearance",
    "availableForGigs",
]


def build_predicates(filters: dict[str, Any]) -> list[FilterClause]:
    """Turns a field -> value mapping into filter predicates.

    Lists and tuples become terms matches, any other value a phrase match.
    None and empty lists are skipped. Mapping order is kept.
    """
    predicates: list[FilterClause] = []
    for field, value in filters.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            if value:
                predicates.append(TermsMatch(field=field, values=tuple(value)))
        else:
            predicates.append(PhraseMatch(field=field, value=value))
    return predicates


class MemberQueryBuilder:
    """Builds the search requests of the talent-search member lookups.

    Never talks to the backend; every build_* method returns a fresh request.
    """

    def __init__(self, index_config: SearchIndexConfig):
        self._validate(index_config)
        self._config = index_config

    ##########################################
    ############### CHECKER ##################
    ##########################################

    @staticmethod
    def _validate(index_config: SearchIndexConfig) -> None:
        for name in ("member_profile_index", "member_skills_index", "member_stats_index", "member_trait_index"):
            value = getattr(index_config, name)
            if not value or not value.strip():
                raise SearchConfigurationError(f"Search index configuration '{name}' is missing.")
        if not index_config.scroll_lifetime.strip():
            raise SearchConfigurationError("Search index configuration 'scroll_lifetime' is missing.")
        if index_config.scroll_batch_size < 1:
            raise SearchConfigurationError("Search index configuration 'scroll_batch_size' must be at least 1.")
        if index_config.suggestion_size < 1:
            raise SearchConfigurationError("Search index configuration 'suggestion_size' must be at least 1.")

    ##########################################
    ################ GETTER ##################
    ##########################################

    def get_scroll_lifetime(self) -> str:
        return self._config.scroll_lifetime

    ##########################################
    ############### BUILDERS #################
    ##########################################

    def build_members_query(self, params: MemberQueryParams) -> SearchRequest:
        """Paged lookup of active member profiles.

        Returns:
            SearchRequest: Offset ``(page - 1) * per_page``, sorted by handle. Only
            ACTIVE members match, whether or not any filter is set.
        """
        predicates = build_predicates({
            "userId": params.user_id,
            "handleLower": params.handle_lower,
            "handle": params.handle,
            "email": params.email,
        })
        predicates += build_predicates({
            "userId": params.user_ids,
            "handleLower": params.handles_lower,
            "handle": params.handles,
        })
        predicates.append(ACTIVE_STATUS)
        return SearchRequest(
            index=self._config.member_profile_index,
            size=params.per_page,
            offset=(params.page - 1) * params.per_page,
            sort=[SortSpec(field="handle", order=params.sort)],
            filter=Conjunction(clauses=predicates),
        )

    def build_members_skills_query(self, params: MemberHandlesQueryParams) -> SearchRequest:
        """Skills documents of the given members, sorted by user handle.

        Raises:
            InvalidSearchQueryError: If no handle is given.
        """
        if not params.handles_lower:
            raise InvalidSearchQueryError("At least one member handle is required to look up skills.")
        return SearchRequest(
            index=self._config.member_skills_index,
            size=params.per_page,
            sort=[SortSpec(field="userHandle", order=params.sort)],
            filter=Conjunction(clauses=build_predicates({"handleLower": params.handles_lower})),
        )

    def build_members_stats_query(self, params: MemberHandlesQueryParams) -> SearchRequest:
        """Scrolled lookup of the stats of the given members, restricted to the default stats group."""
        predicates = build_predicates({"handleLower": params.handles_lower})
        predicates.append(STATS_GROUP)
        return SearchRequest(
            index=self._config.member_stats_index,
            size=self._config.scroll_batch_size,
            scroll=self._config.scroll_lifetime,
            sort=[SortSpec(field="handleLower", order=params.sort)],
            filter=Conjunction(clauses=predicates),
        )

    def build_member_traits_query(self, params: MemberTraitsQueryParams) -> SearchRequest:
        """Scrolled lookup of the traits of the given members.

        Raises:
            InvalidSearchQueryError: If no member id is given.
        """
        if not params.member_ids:
            raise InvalidSearchQueryError("At least one member id is required to look up traits.")
        return SearchRequest(
            index=self._config.member_trait_index,
            size=self._config.scroll_batch_size,
            scroll=self._config.scroll_lifetime,
            sort=[SortSpec(field="handleLower", order=params.sort)],
            filter=Conjunction(clauses=build_predicates({"userId": params.member_ids})),
        )

    def build_suggestion_query(self, term: str, page: int = 1, per_page: int = 50) -> SearchRequest:
        """Typeahead lookup of member handles starting with ``term``.

        The number of candidates is capped by ``suggestion_size``; page and
        per_page only shape the (unused) regular hits of the response.
        """
        return SearchRequest(
            index=self._config.member_profile_index,
            size=per_page,
            offset=(page - 1) * per_page,
            suggest=SuggestSpec(
                name=SUGGESTION_NAME,
                text=term,
                field=SUGGESTION_FIELD,
                size=self._config.suggestion_size,
            ),
        )

    def build_search_members_skills_query(self, skill_ids: list[str], operator: BooleanOperator) -> SearchRequest:
        """Scrolled search of member profiles by skill, projected to the fields the talent search shows.

        With ``AND`` every skill is required, with ``OR`` any one of them is
        enough. Members flagged as not available for gigs are always excluded.
        """
        skill_matches = [PhraseMatch(field="skills.id", value=str(skill_id)) for skill_id in skill_ids]
        clauses: list[FilterClause] = []
        if operator == BooleanOperator.AND:
            clauses.extend(skill_matches)
        elif skill_matches:
            clauses.append(Disjunction(clauses=skill_matches))
        clauses.append(Negation(clauses=[NOT_AVAILABLE_FOR_GIGS]))
        return SearchRequest(
            index=self._config.member_profile_index,
            size=self._config.scroll_batch_size,
            scroll=self._config.scroll_lifetime,
            source_fields=list(MEMBER_SKILL_SEARCH_FIELDS),
            filter=Conjunction(clauses=clauses),
        )
