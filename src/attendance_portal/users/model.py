from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account in the credential store.

    Plain data only, no database access.
    """

    user_id: int
    full_name: str
    email: str
    password_hash: str
    role: Role
    roll_number: Optional[str] = None
    phone: Optional[str] = None
    dob: Optional[str] = None
    qualification: Optional[str] = None


@dataclass(frozen=True)
class NewUser:
    full_name: str
    email: str
    password_hash: str
    role: Role
    roll_number: Optional[str] = None
    phone: Optional[str] = None
    dob: Optional[str] = None
    qualification: Optional[str] = None
