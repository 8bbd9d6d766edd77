"""Data models package."""

from app.models.document import (
    CalendarSettings,
    Claim,
    Document,
    SlotMap,
    TeacherConfig,
)

__all__ = [
    "CalendarSettings",
    "Claim",
    "Document",
    "SlotMap",
    "TeacherConfig",
]
