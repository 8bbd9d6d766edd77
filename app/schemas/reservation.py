"""Reservation schemas for API request/response models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReserveRequest(BaseModel):
    """Schema for creating, amending or cancelling a claim.

    Missing fields are accepted here and rejected by the ledger with 400.

    Attributes:
        teacher: Teacher name.
        time: Slot time label.
        student_name: Display name; empty string cancels.
        secret_token: Token of the existing claim.
    """

    model_config = ConfigDict(populate_by_name=True)

    teacher: Optional[str] = None
    time: Optional[str] = None
    student_name: Optional[str] = Field(default=None, alias="studentName")
    secret_token: Optional[str] = Field(default=None, alias="secretToken")


class ReservationReceipt(BaseModel):
    """Identifier and secret of a newly created claim."""

    id: str
    token: str


class ReserveResponse(BaseModel):
    """Response schema for reserve.

    ``reservation`` is present only when a claim was created.
    """

    success: bool = True
    reservation: Optional[ReservationReceipt] = None


class PublicClaim(BaseModel):
    """Claim as visible to everyone (no token)."""

    name: str
    id: str
