"""Admin schemas for API request/response models."""

from typing import Optional

from pydantic import BaseModel

from app.models.document import TeacherConfig


class AdminLoginRequest(BaseModel):
    """Schema for admin login."""

    password: str = ""


class AdminLoginResponse(BaseModel):
    """Response schema for admin login.

    Attributes:
        success: Always True.
        token: Session proof for privileged requests.
    """

    success: bool = True
    token: str


class TeachersUpdateRequest(BaseModel):
    """Schema for replacing the teacher roster."""

    token: str = ""
    teachers: list[TeacherConfig]


class AdminDeleteRequest(BaseModel):
    """Schema for deleting a claim without its token."""

    token: str = ""
    teacher: Optional[str] = None
    time: Optional[str] = None


class SuccessResponse(BaseModel):
    """Plain success acknowledgement."""

    success: bool = True
