"""Persisted document model: calendar settings plus the reservation ledger.

The whole document is the unit of persistence. Its JSON form uses camelCase
keys (``adminPassword``) so that stored files stay readable by existing
clients:

    {
        "settings": {"teachers": [{"id": 1, "name": "...", "interval": 10}],
                     "adminPassword": "admin"},
        "reservations": {"<teacher>": {"16:30": {"name": "...", "id": "...",
                                                  "token": "..."}}}
    }
"""

import json
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

DEFAULT_ADMIN_PASSWORD = "admin"
DEFAULT_INTERVAL_MINUTES = 10
MAX_STUDENT_NAME_LENGTH = 50


class Claim(BaseModel):
    """A student's claim on one teacher/time slot.

    Attributes:
        id: Opaque identifier, unique within the document.
        name: Student display name.
        token: Ownership secret, revealed only to the creator.
    """

    id: str
    name: str
    token: str

    def public_view(self) -> Dict[str, str]:
        """Return the claim without its token."""
        return {"name": self.name, "id": self.id}


SlotMap = Dict[str, Claim]


class TeacherConfig(BaseModel):
    """Roster entry for one teacher.

    Attributes:
        id: Identifier chosen by the admin UI (number or string).
        name: Unique display name, also the reservation ledger key.
        interval: Slot length in minutes.
    """

    id: Union[int, str]
    name: str = Field(..., min_length=1)
    interval: PositiveInt = DEFAULT_INTERVAL_MINUTES


class CalendarSettings(BaseModel):
    """Roster and admin credential."""

    model_config = ConfigDict(populate_by_name=True)

    teachers: List[TeacherConfig] = Field(default_factory=list)
    admin_password: str = Field(DEFAULT_ADMIN_PASSWORD, alias="adminPassword")


class Document(BaseModel):
    """The single aggregate holding all settings and all claims."""

    settings: CalendarSettings = Field(default_factory=CalendarSettings)
    reservations: Dict[str, SlotMap] = Field(default_factory=dict)

    @field_validator("reservations", mode="before")
    @classmethod
    def drop_empty_slots(cls, value: Any) -> Any:
        """Treat ``null`` slot entries as free slots."""
        if not isinstance(value, dict):
            return value
        return {
            teacher: (
                {time: claim for time, claim in slots.items() if claim}
                if isinstance(slots, dict)
                else slots
            )
            for teacher, slots in value.items()
        }

    @classmethod
    def default(cls) -> "Document":
        """Build the document used when storage is empty or unreadable."""
        return cls()

    @classmethod
    def from_json(cls, raw: str) -> "Document":
        """Parse a stored JSON string.

        Raises:
            ValueError: If the text is not JSON, is nested too deeply to
                decode, or does not match the schema.
        """
        try:
            data = json.loads(raw)
        except RecursionError as e:
            raise ValueError("document is nested too deeply") from e
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted JSON-shaped layout."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to JSON text in the persisted layout."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def get_claim(self, teacher: str, time: str) -> Optional[Claim]:
        """Return the claim at a slot, or None if the slot is free."""
        return self.reservations.get(teacher, {}).get(time)

    def slots_for(self, teacher: str) -> SlotMap:
        """Return the slot map of a teacher, creating an empty one if needed."""
        return self.reservations.setdefault(teacher, {})

    def iter_claims(self) -> Iterator[Claim]:
        """Iterate over every claim in the ledger."""
        for slots in self.reservations.values():
            yield from slots.values()

    def claim_ids(self) -> set[str]:
        """Collect identifiers of all existing claims."""
        return {claim.id for claim in self.iter_claims()}
