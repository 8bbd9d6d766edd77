"""Pydantic schemas for API request/response models."""

from app.schemas.admin import (
    AdminDeleteRequest,
    AdminLoginRequest,
    AdminLoginResponse,
    SuccessResponse,
    TeachersUpdateRequest,
)
from app.schemas.config import PublicConfigResponse, TeacherResponse
from app.schemas.reservation import (
    PublicClaim,
    ReservationReceipt,
    ReserveRequest,
    ReserveResponse,
)

__all__ = [
    "AdminDeleteRequest",
    "AdminLoginRequest",
    "AdminLoginResponse",
    "PublicClaim",
    "PublicConfigResponse",
    "ReservationReceipt",
    "ReserveRequest",
    "ReserveResponse",
    "SuccessResponse",
    "TeacherResponse",
    "TeachersUpdateRequest",
]
