"""Base service class with transaction management for document operations."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from app.models.document import Document
from app.storage.base import PersistenceBackend

logger = logging.getLogger(__name__)


class BaseService:
    """Base service class managing whole-document transactions.

    Provides automatic transaction management over a persistence backend:
    - Write operations run inside ``transaction()``, which loads the document,
      hands it to the caller and saves it when the block exits cleanly
    - Read operations (``read()``) load a fresh document and never save
    - Any exception raised inside the block skips the save, so the stored
      document is left exactly as it was

    Writers hold the backend lock from load to save, which makes concurrent
    operations in this process serializable.

    Usage:
        class RosterService(BaseService):
            async def rename(self, old: str, new: str) -> None:
                async with self.transaction() as document:
                    ...

        service = RosterService(storage)

    Attributes:
        storage: Backend holding the document
    """

    def __init__(self, storage: PersistenceBackend) -> None:
        """Initialize service with a persistence backend.

        Args:
            storage: Backend to read and write the document
        """
        self.storage = storage

    async def read(self) -> Document:
        """Load the current document without taking the write lock."""
        return await self.storage.load()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Document]:
        """Load, yield for mutation, then persist the whole document.

        Raises:
            StorageWriteError: If the mutated document cannot be saved
        """
        async with self.storage.lock:
            document = await self.storage.load()
            yield document
            await self.storage.save(document)
            logger.debug(
                f"{type(self).__name__} transaction committed",
                extra={"backend": self.storage.display_name},
            )
