from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import today_local
from ..common.validators import optional_text, require_non_empty
from ..core.constants import PARTITION_PREFIX
from ..core.enums import AttendanceStatus, BatchOutcome
from ..core.exceptions import MalformedBatch, RecordNotFound, ValidationError
from .model import (
    AttendanceEvent,
    BatchItemResult,
    BatchResult,
    StudentAttendanceSummary,
    StudentAttendanceTotal,
    StudentRecord,
    UpsertResult,
)
from .ordering import sort_by_roll_number
from .partitions import partition_name
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def parse_status(value: str | AttendanceStatus) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    v = (value or "").strip().lower()
    for status in AttendanceStatus:
        if status.value.lower() == v:
            return status
    raise ValidationError(f"Unknown attendance status: {value!r}")


class AttendanceService:
    """Use cases over the per-(professor, semester) attendance partitions."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def upsert_student(
        self,
        *,
        owner: str,
        semester: str,
        roll_number: str,
        name: str,
        class_name: Optional[str] = None,
        overwrite: bool = False,
    ) -> UpsertResult:
        """Add a student to the partition or refresh their name/class.

        Existing attendance history is kept unless ``overwrite`` is set, in
        which case the record starts again from zero events.
        """

        partition = partition_name(owner, semester)
        roll_number = require_non_empty(roll_number, "Roll number")
        name = require_non_empty(name, "Name")
        class_name = optional_text(class_name) or semester

        existing = self._attendance.get(partition, roll_number)
        if existing is None:
            record = StudentRecord(
                roll_number=roll_number,
                name=name,
                class_name=class_name,
                semester=semester,
                owner=owner,
            )
            self._attendance.insert(partition, record)
            logger.info("Added student %s to %s", roll_number, partition)
            return UpsertResult(record=record, created=True)

        self._attendance.update_profile(
            partition, roll_number, name=name, class_name=class_name, reset_history=overwrite
        )
        if overwrite:
            logger.info("Reset attendance history of %s in %s", roll_number, partition)
        logger.info("Updated student %s in %s", roll_number, partition)
        return UpsertResult(record=self._require(partition, roll_number), created=False)

    def update_student(
        self,
        *,
        owner: str,
        semester: str,
        roll_number: str,
        name: str,
        class_name: Optional[str],
    ) -> StudentRecord:
        partition = partition_name(owner, semester)
        name = require_non_empty(name, "Name")
        if not self._attendance.update_profile(partition, roll_number, name=name, class_name=optional_text(class_name)):
            raise RecordNotFound(f"No student found with roll number {roll_number}")
        logger.info("Edited student %s in %s", roll_number, partition)
        return self._require(partition, roll_number)

    def get_student(self, *, owner: str, semester: str, roll_number: str) -> StudentRecord:
        return self._require(partition_name(owner, semester), roll_number)

    def record_attendance(
        self,
        *,
        owner: str,
        semester: str,
        roll_number: str,
        status: str | AttendanceStatus,
        on: Optional[date] = None,
    ) -> None:
        partition = partition_name(owner, semester)
        event = AttendanceEvent(status=parse_status(status), date=on or today_local())

        if not self._attendance.append_event(partition, roll_number, event):
            logger.warning("Student %s not found in %s; attendance not recorded", roll_number, partition)
            raise RecordNotFound(f"Student with roll number {roll_number} not found")
        logger.info("Recorded %s for %s in %s on %s", event.status.value, roll_number, partition, event.date)

    def record_batch(
        self,
        *,
        owner: str,
        semester: str,
        roll_numbers: Optional[Sequence[str]],
        statuses: Optional[Sequence[str]],
        on: Optional[date] = None,
    ) -> BatchResult:
        """Record one sheet submission, one independent update per roll number.

        A roll number repeated in the batch is updated once, with its last status.
        """

        if roll_numbers is None or statuses is None or len(roll_numbers) != len(statuses):
            raise MalformedBatch("Invalid attendance data")

        partition_name(owner, semester)
        on = on or today_local()

        latest: dict[str, str] = {}
        for roll_number, status in zip(roll_numbers, statuses):
            latest[roll_number] = status

        items: list[BatchItemResult] = []
        for roll_number, status in latest.items():
            try:
                self.record_attendance(owner=owner, semester=semester, roll_number=roll_number, status=status, on=on)
                outcome = BatchOutcome.RECORDED
            except RecordNotFound:
                outcome = BatchOutcome.NOT_FOUND
            except ValidationError:
                outcome = BatchOutcome.INVALID_STATUS
            items.append(BatchItemResult(roll_number=roll_number, status=status, outcome=outcome))

        return BatchResult(items=items)

    def list_ordered(self, *, owner: str, semester: str) -> list[StudentRecord]:
        return sort_by_roll_number(self._attendance.list_partition(partition_name(owner, semester)))

    def remove_student(self, *, owner: str, semester: str, roll_number: str) -> bool:
        partition = partition_name(owner, semester)
        removed = self._attendance.delete(partition, roll_number)
        if removed:
            logger.info("Removed student %s from %s", roll_number, partition)
        else:
            logger.info("No record for %s in %s to remove", roll_number, partition)
        return removed

    def total_attendance_for_student(self, roll_number: str) -> Optional[StudentAttendanceTotal]:
        summary = self.student_summary(roll_number)
        return summary.total if summary else None

    def student_summary(self, roll_number: str) -> Optional[StudentAttendanceSummary]:
        """Aggregate a student's records across every professor and semester."""

        roll_number = require_non_empty(roll_number, "Roll number")

        records: list[StudentRecord] = []
        for partition in self._attendance.list_partitions(PARTITION_PREFIX):
            record = self._attendance.get(partition, roll_number)
            if record is not None:
                records.append(record)

        if not records:
            return None

        name = next((r.name for r in records if r.name), "")
        total = StudentAttendanceTotal(
            roll_number=roll_number,
            name=name,
            total_attendance=sum(r.attendance_count for r in records),
        )
        records.sort(key=lambda r: r.first_event_date or date.min, reverse=True)
        return StudentAttendanceSummary(total=total, records=records)

    def _require(self, partition: str, roll_number: str) -> StudentRecord:
        record = self._attendance.get(partition, roll_number)
        if record is None:
            raise RecordNotFound(f"No student found with roll number {roll_number}")
        return record
