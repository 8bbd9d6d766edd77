"""Admin service providing privileged operations that bypass claim tokens.

The admin "session" is a single static proof string handed out on a
successful password check. There is no per-login state and no expiry;
every privileged operation only compares the presented proof with it.
"""

import hmac
import logging
from typing import List, Optional

from app.exceptions import (
    AdminAuthenticationError,
    InvalidRequestError,
    ReservationNotFoundError,
)
from app.models.document import DEFAULT_ADMIN_PASSWORD, TeacherConfig
from app.services.base import BaseService

logger = logging.getLogger(__name__)

ADMIN_SESSION_PROOF = "admin-session-ok"


def _secure_equals(left: str, right: str) -> bool:
    return hmac.compare_digest(left.encode(), right.encode())


class AdminService(BaseService):
    """Service for admin login, roster management and forced deletes.

    Usage:
        service = AdminService(storage)

        proof = await service.login("admin")
        await service.replace_teachers(proof, [TeacherConfig(id=1, name="Ms. Novak")])
        await service.force_delete(proof, "Ms. Novak", "16:30")
    """

    def verify_proof(self, proof: str) -> None:
        """Check an admin session proof.

        Raises:
            AdminAuthenticationError: If the proof is missing or wrong.
        """
        if not proof or not _secure_equals(proof, ADMIN_SESSION_PROOF):
            logger.warning("Rejected admin request with invalid session proof")
            raise AdminAuthenticationError("Unauthorized")

    async def login(self, password: str) -> str:
        """Exchange the admin password for a session proof.

        Args:
            password: Password presented by the admin.

        Returns:
            Session proof to send with privileged requests.

        Raises:
            AdminAuthenticationError: If the password does not match.
        """
        document = await self.read()
        expected = document.settings.admin_password or DEFAULT_ADMIN_PASSWORD

        if not password or not _secure_equals(password, expected):
            logger.warning("Failed admin login attempt")
            raise AdminAuthenticationError("Invalid password")

        logger.info("Admin logged in")
        return ADMIN_SESSION_PROOF

    async def replace_teachers(self, proof: str, teachers: List[TeacherConfig]) -> None:
        """Overwrite the teacher roster.

        Every teacher in the new roster gets an (empty) slot map. Slot maps
        of teachers dropped from the roster are kept with their claims.

        Args:
            proof: Admin session proof.
            teachers: New roster, in display order.

        Raises:
            AdminAuthenticationError: If the proof is invalid.
            InvalidRequestError: If two teachers share a name.
            StorageWriteError: If the document cannot be saved.
        """
        self.verify_proof(proof)

        names = [teacher.name for teacher in teachers]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise InvalidRequestError(
                f"Duplicate teacher names: {', '.join(duplicates)}"
            )

        async with self.transaction() as document:
            document.settings.teachers = list(teachers)
            for name in names:
                document.slots_for(name)

        logger.info("Teacher roster replaced", extra={"teacher_count": len(teachers)})

    async def force_delete(
        self, proof: str, teacher: Optional[str], time: Optional[str]
    ) -> None:
        """Delete a claim regardless of its token.

        Args:
            proof: Admin session proof.
            teacher: Teacher name.
            time: Slot time label.

        Raises:
            AdminAuthenticationError: If the proof is invalid.
            InvalidRequestError: If teacher or time is missing.
            ReservationNotFoundError: If the slot is free.
            StorageWriteError: If the document cannot be saved.
        """
        self.verify_proof(proof)
        if not teacher or not time:
            raise InvalidRequestError("Missing teacher or time")

        async with self.transaction() as document:
            slots = document.reservations.get(teacher, {})
            claim = slots.pop(time, None)
            if claim is None:
                raise ReservationNotFoundError(teacher, time)

        logger.info(
            "Reservation deleted by admin",
            extra={"teacher": teacher, "time": time, "claim_id": claim.id},
        )
