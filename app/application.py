"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, FastAPI

from app.api import create_api_router, create_health_router
from app.config import get_settings
from app.storage.base import PersistenceBackend
from app.storage.manager import close_storage, init_storage
from app.utils.exception_handlers import register_exception_handlers

# Create main router
router = APIRouter()


@router.get("/")
async def root():
    """Root endpoint."""
    settings = get_settings()
    return {"message": settings.api_title, "version": settings.api_version}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup: a backend passed to create_app() is used as is
    owns_storage = app.state.storage is None
    if owns_storage:
        app.state.storage = await init_storage()
    yield
    # Shutdown
    if owns_storage:
        await close_storage(app.state.storage)
        app.state.storage = None


def create_app(storage: Optional[PersistenceBackend] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        storage: Prebuilt persistence backend. When omitted, the backend is
            selected from settings at startup.

    Returns:
        Configured application.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        description="Teacher consultation slots reserved with ownership tokens",
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.storage = storage

    # Setup routes
    app.include_router(router)
    app.include_router(create_health_router())
    app.include_router(create_api_router())

    register_exception_handlers(app)

    return app
