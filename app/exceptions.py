"""Application exceptions."""


class AppError(Exception):
    """Base exception for application errors."""


class InvalidRequestError(AppError):
    """Raised when a request is missing required fields or carries bad values."""


class AuthorizationError(AppError):
    """Base exception for rejected credentials."""


class ClaimOwnershipError(AuthorizationError):
    """Raised when a claim is amended or cancelled without its token."""

    def __init__(self, teacher: str, time: str, reason: str):
        self.teacher = teacher
        self.time = time
        super().__init__(f"Unauthorized: {reason}")


class AdminAuthenticationError(AuthorizationError):
    """Raised when an admin password or session proof is invalid."""


class ReservationNotFoundError(AppError):
    """Raised when no claim exists for a teacher/time slot."""

    def __init__(self, teacher: str, time: str):
        self.teacher = teacher
        self.time = time
        super().__init__(f"Reservation for '{teacher}' at {time} not found")


class StorageError(AppError):
    """Base exception for persistence backend failures."""


class StorageConnectionError(StorageError):
    """Raised when a persistence backend cannot be set up or reached."""


class StorageWriteError(StorageError):
    """Raised when a document cannot be persisted.

    Callers must not report success once this is raised, since the
    in-memory mutation never reached the backend.
    """
