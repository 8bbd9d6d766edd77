"""Persistence backends for the reservation document.

Provides the shared backend contract, local file, Google Sheets and
in-memory implementations, and startup-time backend selection.
"""

from app.storage.base import PersistenceBackend
from app.storage.local import LocalFileBackend
from app.storage.manager import close_storage, get_storage, init_storage
from app.storage.memory import InMemoryBackend
from app.storage.sheets import GoogleSheetsBackend

__all__ = [
    # Contract
    "PersistenceBackend",
    # Implementations
    "GoogleSheetsBackend",
    "InMemoryBackend",
    "LocalFileBackend",
    # Lifecycle
    "close_storage",
    "get_storage",
    "init_storage",
]
