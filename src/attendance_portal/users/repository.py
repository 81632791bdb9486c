from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import NewUser, User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this protocol rather than on a concrete database.
    """

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_roll_number(self, roll_number: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, user: NewUser) -> int:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[User]:
        raise NotImplementedError
