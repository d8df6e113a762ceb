from typing import Optional

from pydantic import BaseModel, Field

from studysync.models.assignment import RecordResponse


class GroupResponse(BaseModel):
    group_number: int
    label: str
    capacity: int
    member_count: int
    is_full: bool
    link: Optional[str] = None
    members: list[RecordResponse] = Field(default_factory=list)


class GroupListResponse(BaseModel):
    groups: list[GroupResponse] = Field(default_factory=list)


class RosterSummaryResponse(BaseModel):
    signed_up: int
    spots_left: int
    max_total_students: int
