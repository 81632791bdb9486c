from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for route guards."""

    PROFESSOR = "professor"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Status of a single attendance event, stored as submitted by the sheet form."""

    PRESENT = "Present"
    ABSENT = "Absent"


class BatchOutcome(str, Enum):
    """Per-roll-number result of a batch attendance submission."""

    RECORDED = "recorded"
    NOT_FOUND = "not_found"
    INVALID_STATUS = "invalid_status"
