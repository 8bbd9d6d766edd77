"""Ledger service implementing the slot claim protocol.

A claim is created by the first non-empty write to a free slot and comes
with a freshly minted secret token. Amending (new name) or cancelling (empty
name) an existing claim requires presenting that token.
"""

import hmac
import logging
import secrets
from typing import Any, Dict, Optional

from app.exceptions import ClaimOwnershipError, InvalidRequestError
from app.models.document import MAX_STUDENT_NAME_LENGTH, Claim, Document
from app.services.base import BaseService

logger = logging.getLogger(__name__)

CLAIM_ID_BYTES = 8
CLAIM_TOKEN_BYTES = 24


def tokens_match(expected: str, presented: Optional[str]) -> bool:
    """Compare a stored token with a presented one in constant time."""
    if not presented:
        return False
    return hmac.compare_digest(expected.encode(), presented.encode())


def mint_claim_id(document: Document) -> str:
    """Generate a claim id not used by any existing claim."""
    existing = document.claim_ids()
    while True:
        claim_id = secrets.token_urlsafe(CLAIM_ID_BYTES)
        if claim_id not in existing:
            return claim_id


class LedgerService(BaseService):
    """Service owning the create/amend/cancel protocol for slot claims.

    Usage:
        service = LedgerService(storage)

        # Create: returns the claim including its token
        claim = await service.reserve("Ms. Novak", "16:30", "Jan")

        # Amend and cancel need the token
        await service.reserve("Ms. Novak", "16:30", "Petr", claim.token)
        await service.reserve("Ms. Novak", "16:30", "", claim.token)
    """

    async def reserve(
        self,
        teacher: Optional[str],
        time: Optional[str],
        student_name: Optional[str],
        token: Optional[str] = None,
    ) -> Optional[Claim]:
        """Create, amend or cancel the claim on one slot.

        Args:
            teacher: Teacher name, the ledger key.
            time: Slot time label, e.g. "16:30".
            student_name: New display name; empty string cancels the claim.
            token: Secret of the existing claim, if any.

        Returns:
            The new claim (with its token) when one was created, else None.

        Raises:
            InvalidRequestError: If teacher, time or student name is missing
                or the name is too long.
            ClaimOwnershipError: If the slot is claimed and the token does
                not match.
            StorageWriteError: If the updated ledger cannot be saved.
        """
        if not teacher or not time:
            raise InvalidRequestError("Missing teacher or time")
        if student_name is None:
            raise InvalidRequestError("Missing studentName")
        if len(student_name) > MAX_STUDENT_NAME_LENGTH:
            raise InvalidRequestError(
                f"Student name exceeds {MAX_STUDENT_NAME_LENGTH} characters"
            )

        async with self.transaction() as document:
            slots = document.slots_for(teacher)
            current = slots.get(time)

            if student_name == "":
                if current is None:
                    return None
                if not tokens_match(current.token, token):
                    logger.warning(
                        "Rejected cancellation with invalid token",
                        extra={"teacher": teacher, "time": time},
                    )
                    raise ClaimOwnershipError(teacher, time, "Invalid token")
                del slots[time]
                logger.info(
                    "Reservation cancelled",
                    extra={"teacher": teacher, "time": time, "claim_id": current.id},
                )
                return None

            if current is not None:
                if not tokens_match(current.token, token):
                    logger.warning(
                        "Rejected update of a taken slot",
                        extra={"teacher": teacher, "time": time},
                    )
                    raise ClaimOwnershipError(teacher, time, "Slot is taken")
                current.name = student_name
                logger.info(
                    "Reservation updated",
                    extra={"teacher": teacher, "time": time, "claim_id": current.id},
                )
                return None

            claim = Claim(
                id=mint_claim_id(document),
                name=student_name,
                token=secrets.token_urlsafe(CLAIM_TOKEN_BYTES),
            )
            slots[time] = claim
            logger.info(
                "Reservation created",
                extra={"teacher": teacher, "time": time, "claim_id": claim.id},
            )

        return claim

    async def list_safe(self) -> Dict[str, Dict[str, Dict[str, str]]]:
        """Return all claims by teacher and time with tokens stripped."""
        document = await self.read()
        return {
            teacher: {time: claim.public_view() for time, claim in slots.items()}
            for teacher, slots in document.reservations.items()
        }

    async def public_config(self) -> Dict[str, Any]:
        """Return the roster as shown to students, plus the storage mode."""
        document = await self.read()
        return {
            "teachers": [
                teacher.model_dump(include={"id", "name", "interval"})
                for teacher in document.settings.teachers
            ],
            "storageMode": self.storage.display_name,
        }
