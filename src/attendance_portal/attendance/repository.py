from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceEvent, StudentRecord


class AttendanceRepository(Protocol):
    """Persistence for student records grouped into named partitions.

    A partition exists as soon as one record is written under its name.
    """

    def get(self, partition: str, roll_number: str) -> Optional[StudentRecord]:
        raise NotImplementedError

    def insert(self, partition: str, record: StudentRecord) -> None:
        raise NotImplementedError

    def update_profile(
        self,
        partition: str,
        roll_number: str,
        *,
        name: str,
        class_name: Optional[str],
        reset_history: bool = False,
    ) -> bool:
        """Set name and class; with ``reset_history`` also drop all events and zero the counter.

        Both changes commit together.
        """

        raise NotImplementedError

    def append_event(self, partition: str, roll_number: str, event: AttendanceEvent) -> bool:
        """Append ``event`` and bump the counter when it is PRESENT.

        Returns False (and changes nothing) when the roll number is unknown.
        """

        raise NotImplementedError

    def list_partition(self, partition: str) -> Sequence[StudentRecord]:
        raise NotImplementedError

    def delete(self, partition: str, roll_number: str) -> bool:
        raise NotImplementedError

    def list_partitions(self, prefix: str) -> Sequence[str]:
        raise NotImplementedError
