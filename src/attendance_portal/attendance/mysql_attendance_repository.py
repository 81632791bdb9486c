from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_prefix
from .model import AttendanceEvent, StudentRecord
from .repository import AttendanceRepository

_RECORD_COLUMNS = "record_id, roll_number, full_name, class_name, semester, owner_email, attendance_count"


def _to_record(row: dict[str, Any], events: Sequence[AttendanceEvent]) -> StudentRecord:
    return StudentRecord(
        roll_number=row["roll_number"],
        name=row.get("full_name") or "",
        class_name=row.get("class_name"),
        semester=row["semester"],
        owner=row["owner_email"],
        attendance_count=int(row.get("attendance_count") or 0),
        events=tuple(events),
    )


def _to_event(row: dict[str, Any]) -> AttendanceEvent:
    return AttendanceEvent(status=AttendanceStatus(row["status"]), date=row["event_date"])


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, partition: str, roll_number: str) -> Optional[StudentRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE partition_key=%s AND roll_number=%s
                """,
                (partition, roll_number),
            )
            row = fetchone(cur)
            if not row:
                return None

            cur.execute(
                "SELECT status, event_date FROM attendance_events WHERE record_id=%s ORDER BY event_id",
                (int(row["record_id"]),),
            )
            return _to_record(row, [_to_event(e) for e in fetchall(cur)])

    def insert(self, partition: str, record: StudentRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(partition_key, roll_number, full_name, class_name, semester, owner_email, attendance_count)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    partition,
                    record.roll_number,
                    record.name,
                    record.class_name,
                    record.semester,
                    record.owner,
                    record.attendance_count,
                ),
            )
            record_id = int(cur.lastrowid)
            for event in record.events:
                cur.execute(
                    "INSERT INTO attendance_events(record_id, status, event_date) VALUES(%s,%s,%s)",
                    (record_id, event.status.value, event.date),
                )

    def update_profile(
        self,
        partition: str,
        roll_number: str,
        *,
        name: str,
        class_name: Optional[str],
        reset_history: bool = False,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT record_id FROM attendance_records
                WHERE partition_key=%s AND roll_number=%s
                FOR UPDATE
                """,
                (partition, roll_number),
            )
            row = fetchone(cur)
            if not row:
                return False
            record_id = int(row["record_id"])
            cur.execute(
                "UPDATE attendance_records SET full_name=%s, class_name=%s WHERE record_id=%s",
                (name, class_name, record_id),
            )
            if reset_history:
                cur.execute("DELETE FROM attendance_events WHERE record_id=%s", (record_id,))
                cur.execute("UPDATE attendance_records SET attendance_count=0 WHERE record_id=%s", (record_id,))
            return True

    def append_event(self, partition: str, roll_number: str, event: AttendanceEvent) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT record_id FROM attendance_records
                WHERE partition_key=%s AND roll_number=%s
                FOR UPDATE
                """,
                (partition, roll_number),
            )
            row = fetchone(cur)
            if not row:
                return False

            record_id = int(row["record_id"])
            cur.execute(
                "INSERT INTO attendance_events(record_id, status, event_date) VALUES(%s,%s,%s)",
                (record_id, event.status.value, event.date),
            )
            if event.status == AttendanceStatus.PRESENT:
                cur.execute(
                    "UPDATE attendance_records SET attendance_count = attendance_count + 1 WHERE record_id=%s",
                    (record_id,),
                )
            return True

    def list_partition(self, partition: str) -> Sequence[StudentRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM attendance_records WHERE partition_key=%s",
                (partition,),
            )
            rows = fetchall(cur)

            cur.execute(
                """
                SELECT e.record_id, e.status, e.event_date
                FROM attendance_events e
                JOIN attendance_records r ON r.record_id = e.record_id
                WHERE r.partition_key=%s
                ORDER BY e.event_id
                """,
                (partition,),
            )
            events: dict[int, list[AttendanceEvent]] = {}
            for e in fetchall(cur):
                events.setdefault(int(e["record_id"]), []).append(_to_event(e))

            return [_to_record(r, events.get(int(r["record_id"]), [])) for r in rows]

    def delete(self, partition: str, roll_number: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_records WHERE partition_key=%s AND roll_number=%s",
                (partition, roll_number),
            )
            return cur.rowcount > 0

    def list_partitions(self, prefix: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT partition_key
                FROM attendance_records
                WHERE partition_key LIKE %s
                ORDER BY partition_key
                """,
                (like_prefix(prefix),),
            )
            return [r["partition_key"] for r in fetchall(cur)]
