"""Base contract shared by all persistence backends.

Every backend stores exactly one :class:`~app.models.document.Document` and
always reads and writes it whole. Implementations differ only in where the
serialized document lives.
"""

import abc
import asyncio
import logging

from app.models.document import Document

logger = logging.getLogger(__name__)


class PersistenceBackend(abc.ABC):
    """Interchangeable storage for the reservation document.

    Contract:
        - ``load()`` never raises. Missing, empty, corrupt or unreachable
          storage yields ``Document.default()`` so the service stays
          answerable.
        - ``save()`` raises :class:`~app.exceptions.StorageWriteError` on
          failure. A caller that gets no exception may report success.
        - ``lock`` serializes read-modify-write cycles against this backend
          within the process.

    Attributes:
        display_name: Human-readable storage mode shown to clients.
        lock: Document-wide lock held from load to save by writers.
    """

    display_name: str = "Unknown"

    def __init__(self) -> None:
        """Initialize backend with its write lock."""
        self.lock = asyncio.Lock()

    @abc.abstractmethod
    async def load(self) -> Document:
        """Read the stored document, falling back to defaults on any failure."""

    @abc.abstractmethod
    async def save(self, document: Document) -> None:
        """Replace the stored document.

        Raises:
            StorageWriteError: If the document could not be persisted.
        """

    async def verify_connection(self) -> bool:
        """Check that the backend is reachable.

        Returns:
            True if storage can be accessed.

        Raises:
            StorageConnectionError: If the backend cannot be reached.
        """
        return True

    async def close(self) -> None:
        """Release backend resources. No-op by default."""

    def _fallback(self, reason: str, level: int = logging.ERROR) -> Document:
        """Log why the stored document was unusable and return defaults."""
        logger.log(
            level,
            "Using default document",
            extra={"backend": self.display_name, "reason": reason},
        )
        return Document.default()
