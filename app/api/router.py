"""API router factory with core endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.exceptions import StorageConnectionError
from app.storage.base import PersistenceBackend
from app.storage.manager import get_storage

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def create_health_router() -> APIRouter:
    """Create router with health check endpoints.

    Returns:
        APIRouter with liveness and storage checks.
    """
    router = APIRouter(tags=["Health"])

    @router.get("/health", status_code=status.HTTP_200_OK)
    async def health_check() -> dict:
        """Health check endpoint - basic application health.

        Returns:
            Health status response.
        """
        return {"status": "healthy"}

    @router.get(
        "/health/storage",
        status_code=status.HTTP_200_OK,
        response_model=None,
    )
    async def health_check_storage(
        storage: PersistenceBackend = Depends(get_storage),
    ) -> JSONResponse:
        """Deep health check - includes storage backend connectivity.

        Returns:
            Health status with storage connectivity information.
        """
        try:
            await storage.verify_connection()
            return JSONResponse(
                status_code=status.HTTP_200_OK,
                content={
                    "status": "healthy",
                    "storage": "connected",
                    "mode": storage.display_name,
                },
            )
        except StorageConnectionError as e:
            logger.error(f"Storage health check failed: {e}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "unhealthy",
                    "storage": "disconnected",
                    "mode": storage.display_name,
                },
            )

    return router


def create_api_router() -> APIRouter:
    """Create router with reservation and admin endpoints.

    All routes are mounted under the /api prefix.

    Returns:
        APIRouter with public and admin API endpoints.
    """
    from app.api.admin import router as admin_router
    from app.api.reservations import router as reservations_router

    router = APIRouter(prefix=API_PREFIX)
    router.include_router(reservations_router)
    router.include_router(admin_router)

    return router
