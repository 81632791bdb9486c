from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus, BatchOutcome


@dataclass(frozen=True)
class AttendanceEvent:
    """A single Present/Absent mark appended to a student's history."""

    status: AttendanceStatus
    date: date


@dataclass(frozen=True)
class StudentRecord:
    """Domain entity: one student's attendance sheet inside a partition.

    Invariant: ``attendance_count`` equals the number of PRESENT events.
    """

    roll_number: str
    name: str
    class_name: Optional[str]
    semester: str
    owner: str
    attendance_count: int = 0
    events: tuple[AttendanceEvent, ...] = ()

    @property
    def first_event_date(self) -> Optional[date]:
        return self.events[0].date if self.events else None


@dataclass(frozen=True)
class UpsertResult:
    record: StudentRecord
    created: bool


@dataclass(frozen=True)
class StudentAttendanceTotal:
    roll_number: str
    name: str
    total_attendance: int


@dataclass(frozen=True)
class StudentAttendanceSummary:
    """Read-model for the student's own page: totals plus every matching record."""

    total: StudentAttendanceTotal
    records: list[StudentRecord] = field(default_factory=list)


@dataclass(frozen=True)
class BatchItemResult:
    roll_number: str
    status: str
    outcome: BatchOutcome


@dataclass(frozen=True)
class BatchResult:
    items: list[BatchItemResult]

    def count(self, outcome: BatchOutcome) -> int:
        return sum(1 for item in self.items if item.outcome == outcome)

    @property
    def recorded(self) -> int:
        return self.count(BatchOutcome.RECORDED)

    @property
    def failed(self) -> list[BatchItemResult]:
        return [item for item in self.items if item.outcome != BatchOutcome.RECORDED]

    @property
    def ok(self) -> bool:
        return not self.failed
