from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .feedback.mysql_feedback_repository import MySQLFeedbackRepository
from .feedback.repository import FeedbackRepository
from .feedback.service import FeedbackService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    feedback_repo: FeedbackRepository

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    feedback_service: FeedbackService

    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    feedback_repo: FeedbackRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        feedback_repo=feedback_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(attendance_repo),
        feedback_service=FeedbackService(feedback_repo),
        conn=conn,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        feedback_repo=MySQLFeedbackRepository(conn),
        conn=conn,
    )
