from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_text, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DuplicateCredential
from .model import NewUser, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    email: str
    name: str
    role: Role
    roll_number: Optional[str] = None
    semester: Optional[str] = None


class AuthService:
    """Use cases: register accounts and log in."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register_student(
        self,
        *,
        name: str,
        email: str,
        password: str,
        roll_number: str,
        phone: str = "",
        dob: str = "",
    ) -> int:
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email").lower()
        roll_number = require_non_empty(roll_number, "Roll number")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise DuplicateCredential("Email is already registered.")
        if self._users.get_by_roll_number(roll_number):
            raise DuplicateCredential("Roll number is already registered.")

        user_id = self._users.create_user(
            NewUser(
                full_name=name,
                email=email,
                password_hash=generate_password_hash(password),
                role=Role.STUDENT,
                roll_number=roll_number,
                phone=optional_text(phone),
                dob=optional_text(dob),
            )
        )
        logger.info("Registered student %s (%s)", email, roll_number)
        return user_id

    def register_professor(
        self,
        *,
        name: str,
        email: str,
        password: str,
        phone: str = "",
        dob: str = "",
        qualification: str = "",
    ) -> int:
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email").lower()
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise DuplicateCredential("Email is already registered.")

        user_id = self._users.create_user(
            NewUser(
                full_name=name,
                email=email,
                password_hash=generate_password_hash(password),
                role=Role.PROFESSOR,
                phone=optional_text(phone),
                dob=optional_text(dob),
                qualification=optional_text(qualification),
            )
        )
        logger.info("Registered professor %s", email)
        return user_id

    def authenticate(self, email: str, password: str) -> User:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            raise AuthenticationError("User not found.")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # unknown hash method, e.g. a placeholder value
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials.")
        return user

    def login_student(self, email: str, password: str) -> SessionUser:
        user = self.authenticate(email, password)
        if user.role != Role.STUDENT:
            raise AuthorizationError("Professors sign in from the professor login page.")
        return SessionUser(email=user.email, name=user.full_name, role=user.role, roll_number=user.roll_number)

    def login_professor(self, email: str, password: str, semester: str) -> SessionUser:
        """Log a professor in for one semester; the semester selects their partition."""

        semester = require_non_empty(semester, "Semester")
        user = self.authenticate(email, password)
        if user.role != Role.PROFESSOR:
            raise AuthorizationError("Unauthorized access.")
        return SessionUser(email=user.email, name=user.full_name, role=user.role, semester=semester)


class UserService:
    def __init__(self, users: UserRepository):
        self._users = users

    def list_professors(self) -> Sequence[User]:
        return self._users.list_by_role(Role.PROFESSOR)
