from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Feedback


class FeedbackRepository(Protocol):
    def create(self, *, name: str, email: str, phone: Optional[str], address: Optional[str], message: str) -> int:
        raise NotImplementedError

    def list_all(self) -> Sequence[Feedback]:
        """Newest first."""

        raise NotImplementedError
