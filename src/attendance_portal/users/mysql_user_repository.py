from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewUser, User
from .repository import UserRepository

_USER_COLUMNS = "user_id, full_name, email, password_hash, role, roll_number, phone, dob, qualification"


def _to_user(row: dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        roll_number=row.get("roll_number"),
        phone=row.get("phone"),
        dob=row.get("dob"),
        qualification=row.get("qualification"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_roll_number(self, roll_number: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE roll_number=%s", (roll_number,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, user: NewUser) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(full_name, email, password_hash, role, roll_number, phone, dob, qualification)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user.full_name,
                    user.email,
                    user.password_hash,
                    user.role.value,
                    user.roll_number,
                    user.phone,
                    user.dob,
                    user.qualification,
                ),
            )
            return int(cur.lastrowid)

    def list_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE role=%s ORDER BY full_name",
                (role.value,),
            )
            return [_to_user(r) for r in fetchall(cur)]
