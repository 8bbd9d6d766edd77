"""Admin API endpoints for roster management and forced deletes."""

from fastapi import APIRouter, Depends

from app.schemas.admin import (
    AdminDeleteRequest,
    AdminLoginRequest,
    AdminLoginResponse,
    SuccessResponse,
    TeachersUpdateRequest,
)
from app.services.admin_service import AdminService
from app.utils.dependencies import dependencies

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/login")
async def admin_login(
    data: AdminLoginRequest,
    service: AdminService = Depends(dependencies.admin),
) -> AdminLoginResponse:
    """Validate the admin password and return a session proof.

    Args:
        data: Login request.
        service: AdminService instance.

    Returns:
        Session proof for privileged requests.
    """
    token = await service.login(data.password)
    return AdminLoginResponse(token=token)


@router.post("/settings")
async def update_settings(
    data: TeachersUpdateRequest,
    service: AdminService = Depends(dependencies.admin),
) -> SuccessResponse:
    """Replace the teacher roster.

    Args:
        data: Session proof and new roster.
        service: AdminService instance.

    Returns:
        Success acknowledgement.
    """
    await service.replace_teachers(data.token, data.teachers)
    return SuccessResponse()


@router.post("/delete-reservation")
async def delete_reservation(
    data: AdminDeleteRequest,
    service: AdminService = Depends(dependencies.admin),
) -> SuccessResponse:
    """Delete a reservation without its owner token.

    Args:
        data: Session proof and slot to free.
        service: AdminService instance.

    Returns:
        Success acknowledgement.
    """
    await service.force_delete(data.token, data.teacher, data.time)
    return SuccessResponse()
