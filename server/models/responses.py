from pydantic import BaseModel


class MembersResponse(BaseModel):
    page: int
    per_page: int
    total: int
    hits: list[dict]
