"""Local JSON file storage backend."""

import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from app.exceptions import StorageWriteError
from app.models.document import Document
from app.storage.base import PersistenceBackend

logger = logging.getLogger(__name__)


class LocalFileBackend(PersistenceBackend):
    """Stores the document as pretty-printed JSON in a single file.

    Writes go to a temporary file in the same directory which then replaces
    the target, so readers see either the old or the new document.
    """

    display_name = "Local File"

    def __init__(self, path: Union[str, Path]) -> None:
        """Initialize local file backend.

        Args:
            path: Location of the JSON document.
        """
        super().__init__()
        self.path = Path(path)
        logger.info("Local file storage initialized", extra={"path": str(self.path)})

    def _read_text(self) -> str:
        return self.path.read_text(encoding="utf-8")

    def _write_text(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(text)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def load(self) -> Document:
        """Read the document from disk.

        Returns:
            Stored document, or defaults if the file is absent or unreadable.
        """
        try:
            raw = await asyncio.to_thread(self._read_text)
        except FileNotFoundError:
            return self._fallback("file not found", level=logging.WARNING)
        except UnicodeDecodeError as e:
            return self._fallback(f"file is not valid UTF-8: {e}")
        except OSError as e:
            return self._fallback(f"read failed: {e}")

        if not raw.strip():
            return self._fallback("file is empty", level=logging.WARNING)

        try:
            return Document.from_json(raw)
        except ValueError as e:
            return self._fallback(f"corrupt content: {e}")

    async def save(self, document: Document) -> None:
        """Replace the file content with the serialized document.

        Raises:
            StorageWriteError: If the file cannot be written.
        """
        text = document.to_json(indent=2)
        try:
            await asyncio.to_thread(self._write_text, text)
        except OSError as e:
            logger.error(
                "Failed to write document file",
                extra={"path": str(self.path), "error": str(e)},
            )
            raise StorageWriteError(f"Failed to write {self.path}: {e}") from e
        logger.debug("Document saved", extra={"path": str(self.path)})
