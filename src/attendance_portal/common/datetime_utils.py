from __future__ import annotations

from datetime import date


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it.
    """
    return date.today()


def format_event_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")
