"""Public reservation API endpoints."""

from fastapi import APIRouter, Depends

from app.schemas.config import PublicConfigResponse
from app.schemas.reservation import (
    PublicClaim,
    ReservationReceipt,
    ReserveRequest,
    ReserveResponse,
)
from app.services.ledger_service import LedgerService
from app.utils.dependencies import dependencies

router = APIRouter(tags=["Reservations"])


@router.get("/config")
async def get_config(
    service: LedgerService = Depends(dependencies.ledger),
) -> PublicConfigResponse:
    """Get the teacher roster and the active storage mode.

    Args:
        service: LedgerService instance.

    Returns:
        Public calendar configuration.
    """
    return PublicConfigResponse.model_validate(await service.public_config())


@router.get("/reservations")
async def get_reservations(
    service: LedgerService = Depends(dependencies.ledger),
) -> dict[str, dict[str, PublicClaim]]:
    """Get all claims grouped by teacher and time, without tokens.

    Args:
        service: LedgerService instance.

    Returns:
        Mapping of teacher name to time label to public claim.
    """
    return await service.list_safe()


@router.post("/reserve", response_model_exclude_none=True)
async def reserve(
    data: ReserveRequest,
    service: LedgerService = Depends(dependencies.ledger),
) -> ReserveResponse:
    """Create, update or cancel a reservation.

    A new claim returns its id and secret token exactly once; the client
    must keep the token to change or cancel the claim later.

    Args:
        data: Reservation request.
        service: LedgerService instance.

    Returns:
        Success flag, plus the receipt when a claim was created.
    """
    claim = await service.reserve(
        data.teacher, data.time, data.student_name, data.secret_token
    )
    if claim is None:
        return ReserveResponse()
    return ReserveResponse(
        reservation=ReservationReceipt(id=claim.id, token=claim.token)
    )
