from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AssignmentRecord(BaseModel):
    """One student's group assignment. Never mutated after creation."""

    identity: str = Field(..., alias="id", description="Student ID if given, else lowercased name")
    full_name: str = Field(..., alias="name", min_length=1)
    student_identifier: Optional[str] = Field(default=None, alias="studentId")
    group_number: int = Field(..., alias="groupId")
    assigned_at: int = Field(..., alias="assignedAt", description="Milliseconds since epoch")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class RecordResponse(BaseModel):
    identity: str
    full_name: str
    student_identifier: Optional[str] = None
    group_number: int
    assigned_at: int
