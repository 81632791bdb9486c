from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

import pytest

from attendance_portal.attendance.model import AttendanceEvent, StudentRecord
from attendance_portal.attendance.service import AttendanceService
from attendance_portal.container import wire_container
from attendance_portal.core.enums import AttendanceStatus, Role
from attendance_portal.feedback.model import Feedback
from attendance_portal.users.model import NewUser, User
from attendance_portal.users.service import AuthService


class InMemoryAttendance:
    def __init__(self):
        self.partitions: dict[str, dict[str, StudentRecord]] = {}

    def get(self, partition: str, roll_number: str) -> Optional[StudentRecord]:
        return self.partitions.get(partition, {}).get(roll_number)

    def insert(self, partition: str, record: StudentRecord) -> None:
        self.partitions.setdefault(partition, {})[record.roll_number] = record

    def update_profile(self, partition: str, roll_number: str, *, name: str, class_name, reset_history=False) -> bool:
        rec = self.get(partition, roll_number)
        if rec is None:
            return False
        rec = replace(rec, name=name, class_name=class_name)
        if reset_history:
            rec = replace(rec, attendance_count=0, events=())
        self.partitions[partition][roll_number] = rec
        return True

    def append_event(self, partition: str, roll_number: str, event: AttendanceEvent) -> bool:
        rec = self.get(partition, roll_number)
        if rec is None:
            return False
        bump = 1 if event.status == AttendanceStatus.PRESENT else 0
        self.partitions[partition][roll_number] = replace(
            rec,
            attendance_count=rec.attendance_count + bump,
            events=rec.events + (event,),
        )
        return True

    def list_partition(self, partition: str):
        return list(self.partitions.get(partition, {}).values())

    def delete(self, partition: str, roll_number: str) -> bool:
        return self.partitions.get(partition, {}).pop(roll_number, None) is not None

    def list_partitions(self, prefix: str):
        return sorted(name for name, records in self.partitions.items() if records and name.startswith(prefix))


class InMemoryUsers:
    def __init__(self):
        self.users: dict[str, User] = {}

    def get_by_email(self, email: str) -> Optional[User]:
        return self.users.get(email)

    def get_by_roll_number(self, roll_number: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.roll_number == roll_number), None)

    def create_user(self, user: NewUser) -> int:
        user_id = len(self.users) + 1
        self.users[user.email] = User(
            user_id=user_id,
            full_name=user.full_name,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role,
            roll_number=user.roll_number,
            phone=user.phone,
            dob=user.dob,
            qualification=user.qualification,
        )
        return user_id

    def list_by_role(self, role: Role):
        return sorted((u for u in self.users.values() if u.role == role), key=lambda u: u.full_name)


class InMemoryFeedback:
    def __init__(self):
        self.items: list[Feedback] = []

    def create(self, *, name, email, phone, address, message) -> int:
        fid = len(self.items) + 1
        self.items.append(Feedback(feedback_id=fid, name=name, email=email, message=message, phone=phone, address=address))
        return fid

    def list_all(self):
        return list(reversed(self.items))


@pytest.fixture
def fixed_today() -> date:
    return date(2024, 9, 2)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def attendance_service(attendance_repo) -> AttendanceService:
    return AttendanceService(attendance_repo)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def auth_service(users_repo) -> AuthService:
    return AuthService(users_repo)


@pytest.fixture
def feedback_repo() -> InMemoryFeedback:
    return InMemoryFeedback()


@pytest.fixture
def container(users_repo, attendance_repo, feedback_repo):
    return wire_container(users_repo=users_repo, attendance_repo=attendance_repo, feedback_repo=feedback_repo)


@pytest.fixture
def app(monkeypatch, container):
    from attendance_portal.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
