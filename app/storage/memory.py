"""In-memory storage backend for tests and throwaway runs."""

import logging
from typing import Optional

from app.models.document import Document
from app.storage.base import PersistenceBackend

logger = logging.getLogger(__name__)


class InMemoryBackend(PersistenceBackend):
    """Keeps the serialized document in process memory.

    The document is stored as JSON text and parsed on every load, so callers
    never share mutable state with the backend, just as with real storage.
    Nothing survives a restart.
    """

    display_name = "In Memory"

    def __init__(self, document: Optional[Document] = None) -> None:
        """Initialize in-memory backend.

        Args:
            document: Optional initial content.
        """
        super().__init__()
        self._raw: Optional[str] = document.to_json() if document else None

    async def load(self) -> Document:
        """Return a fresh copy of the stored document."""
        if self._raw is None:
            return Document.default()
        try:
            return Document.from_json(self._raw)
        except ValueError as e:
            return self._fallback(f"corrupt content: {e}")

    async def save(self, document: Document) -> None:
        """Replace the stored document."""
        self._raw = document.to_json()
