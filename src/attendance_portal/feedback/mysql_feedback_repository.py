from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Feedback
from .repository import FeedbackRepository


class MySQLFeedbackRepository(FeedbackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, name: str, email: str, phone: Optional[str], address: Optional[str], message: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO feedback(full_name, email, phone, address, message)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, email, phone, address, message),
            )
            return int(cur.lastrowid)

    def list_all(self) -> Sequence[Feedback]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT feedback_id, full_name, email, phone, address, message, created_at
                FROM feedback
                ORDER BY created_at DESC, feedback_id DESC
                """
            )
            return [
                Feedback(
                    feedback_id=int(r["feedback_id"]),
                    name=r["full_name"],
                    email=r["email"],
                    message=r["message"],
                    phone=r.get("phone"),
                    address=r.get("address"),
                    created_at=r.get("created_at"),
                )
                for r in fetchall(cur)
            ]
