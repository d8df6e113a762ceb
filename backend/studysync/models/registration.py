from typing import Optional

from pydantic import BaseModel, Field

from studysync.models.assignment import RecordResponse


class RegistrationRequest(BaseModel):
    """Raw form input; trimming happens in the assignment engine"""
    full_name: str = Field(default="")
    student_id: Optional[str] = Field(default=None)


class RegistrationResponse(BaseModel):
    kind: str
    message: str
    record: Optional[RecordResponse] = None
    group_link: Optional[str] = None
