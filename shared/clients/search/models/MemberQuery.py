"""Caller-supplied parameters for the member queries."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class BooleanOperator(str, Enum):
    AND = "AND"
    OR = "OR"


class MemberQueryParams(BaseModel):
    """
    Filters for a paged member profile lookup. Every set single value becomes an
    exact phrase match, every non-empty list a terms match.
    """
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=50, ge=1)
    sort: Literal["asc", "desc"] = "asc"

    user_id: str | None = None
    handle_lower: str | None = None
    handle: str | None = None
    email: str | None = None
    user_ids: list[str] = []
    handles_lower: list[str] = []
    handles: list[str] = []


class MemberHandlesQueryParams(BaseModel):
    """Lookup of skills or stats for a set of members, identified by lowercase handle."""
    handles_lower: list[str] = []
    per_page: int = Field(default=50, ge=1)
    sort: Literal["asc", "desc"] = "asc"


class MemberTraitsQueryParams(BaseModel):
    member_ids: list[str] = []
    sort: Literal["asc", "desc"] = "asc"
