from pydantic import BaseModel, Field


class AdminLoginRequest(BaseModel):
    passcode: str = Field(default="")


class AdminStatusResponse(BaseModel):
    is_admin: bool
    message: str = ""


class ResetRequest(BaseModel):
    confirm: bool = Field(default=False, description="Must be true to clear the roster")


class RosterChangeResponse(BaseModel):
    message: str
    remaining: int
