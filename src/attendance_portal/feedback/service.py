from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import optional_text, require_non_empty
from .model import Feedback
from .repository import FeedbackRepository

logger = logging.getLogger(__name__)


class FeedbackService:
    def __init__(self, feedback: FeedbackRepository):
        self._feedback = feedback

    def submit(self, *, name: str, email: str, message: str, phone: str = "", address: str = "") -> int:
        feedback_id = self._feedback.create(
            name=require_non_empty(name, "Name"),
            email=require_non_empty(email, "Email"),
            phone=optional_text(phone),
            address=optional_text(address),
            message=require_non_empty(message, "Message"),
        )
        logger.info("Feedback #%s received from %s", feedback_id, email)
        return feedback_id

    def list_all(self) -> Sequence[Feedback]:
        return self._feedback.list_all()
