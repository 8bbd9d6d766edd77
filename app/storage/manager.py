"""Startup-time selection of the persistence backend."""

import asyncio
import logging
from typing import Optional

from fastapi import Request

from app.config import Settings, get_settings
from app.exceptions import StorageConnectionError
from app.storage.base import PersistenceBackend
from app.storage.local import LocalFileBackend
from app.storage.sheets import GoogleSheetsBackend

logger = logging.getLogger(__name__)


async def init_storage(settings: Optional[Settings] = None) -> PersistenceBackend:
    """Create the persistence backend from settings.

    The Google Sheets backend is attempted first when a sheet id is
    configured. Any failure during its setup is logged and the local file
    backend is used instead.

    Args:
        settings: Settings to use, defaults to the cached application settings.

    Returns:
        Ready-to-use backend instance.
    """
    settings = settings or get_settings()

    if settings.use_remote_storage:
        logger.info("Initializing Google Sheets storage...")
        try:
            return await asyncio.to_thread(
                GoogleSheetsBackend.connect,
                settings.google_sheet_id,
                credentials_file=settings.google_credentials_file,
                client_email=settings.google_service_account_email,
                private_key=settings.google_private_key,
                timeout=settings.storage_timeout,
                retries=settings.storage_retries,
            )
        except StorageConnectionError as e:
            logger.error(f"Google Sheets connection failed: {e}")
            logger.info("Falling back to local file storage")

    return LocalFileBackend(settings.data_file)


async def close_storage(storage: Optional[PersistenceBackend]) -> None:
    """Release backend resources during shutdown."""
    if storage is None:
        return
    logger.info("Closing storage backend...")
    await storage.close()
    logger.info("Storage backend closed")


def get_storage(request: Request) -> PersistenceBackend:
    """Get the backend attached to the running application.

    Raises:
        StorageConnectionError: If storage is not initialized.
    """
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise StorageConnectionError("Storage backend is not initialized")
    return storage
