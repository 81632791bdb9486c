from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Feedback:
    feedback_id: int
    name: str
    email: str
    message: str
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None
