from typing import Literal

from fastapi import Query
from pydantic import BaseModel, Field


class PagingParams(BaseModel):
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=50, ge=1, le=1000)
    sort: Literal["asc", "desc"] = "asc"


def get_paging_params(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=1000, alias="perPage"),
    sort: Literal["asc", "desc"] = Query("asc"),
) -> PagingParams:
    """Reads the paging query parameters shared by every member route."""
    return PagingParams(page=page, per_page=per_page, sort=sort)
