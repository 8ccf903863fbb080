from fastapi import APIRouter, Depends, Query, Request

from server.dependencies.auth import verify_api_key
from server.models.requests import PagingParams, get_paging_params
from server.models.responses import MembersResponse
from shared.clients.search.models.MemberQuery import BooleanOperator, MemberHandlesQueryParams, MemberQueryParams, MemberTraitsQueryParams
from shared.clients.search.models.Search import AccumulatedResult, SuggestionResult

router = APIRouter(prefix="/members", tags=["members"], dependencies=[Depends(verify_api_key)])


@router.get("")
async def get_members(
    request: Request,
    paging: PagingParams = Depends(get_paging_params),
    user_id: str | None = Query(None, alias="userId"),
    handle_lower: str | None = Query(None, alias="handleLower"),
    handle: str | None = Query(None),
    email: str | None = Query(None),
    user_ids: list[str] = Query([], alias="userIds"),
    handles_lower: list[str] = Query([], alias="handlesLower"),
    handles: list[str] = Query([]),
) -> MembersResponse:
    """Return one page of active member profiles.

    Single-value filters match exactly, repeated list filters match any of their values.
    """
    params = MemberQueryParams(
        page=paging.page,
        per_page=paging.per_page,
        sort=paging.sort,
        user_id=user_id,
        handle_lower=handle_lower,
        handle=handle,
        email=email,
        user_ids=user_ids,
        handles_lower=handles_lower,
        handles=handles,
    )
    return await request.app.state.member_search_service.get_members(params)


@router.get("/skills")
async def get_members_skills(
    request: Request,
    paging: PagingParams = Depends(get_paging_params),
    handles_lower: list[str] = Query([], alias="handlesLower"),
) -> MembersResponse:
    params = MemberHandlesQueryParams(handles_lower=handles_lower, per_page=paging.per_page, sort=paging.sort)
    return await request.app.state.member_search_service.get_members_skills(params)


@router.get("/stats")
async def get_members_stats(
    request: Request,
    paging: PagingParams = Depends(get_paging_params),
    handles_lower: list[str] = Query([], alias="handlesLower"),
) -> AccumulatedResult:
    params = MemberHandlesQueryParams(handles_lower=handles_lower, sort=paging.sort)
    return await request.app.state.member_search_service.get_members_stats(params)


@router.get("/traits")
async def get_member_traits(
    request: Request,
    paging: PagingParams = Depends(get_paging_params),
    member_ids: list[str] = Query([], alias="memberIds"),
) -> AccumulatedResult:
    params = MemberTraitsQueryParams(member_ids=member_ids, sort=paging.sort)
    return await request.app.state.member_search_service.get_member_traits(params)


@router.get("/suggest")
async def get_suggestion(
    request: Request,
    paging: PagingParams = Depends(get_paging_params),
    term: str = Query(""),
) -> SuggestionResult:
    """Typeahead over member handles."""
    return await request.app.state.member_search_service.get_suggestion(term, page=paging.page, per_page=paging.per_page)


@router.get("/search/skills")
async def search_members_by_skills(
    request: Request,
    paging: PagingParams = Depends(get_paging_params),
    skill_ids: list[str] = Query([], alias="skillIds"),
    skills_boolean_operator: BooleanOperator = Query(BooleanOperator.AND, alias="skillsBooleanOperator"),
) -> MembersResponse:
    """Find members available for gigs who have all (AND) or any (OR) of the given skills."""
    return await request.app.state.member_search_service.search_members_by_skills(
        skill_ids,
        skills_boolean_operator,
        page=paging.page,
        per_page=paging.per_page,
    )
