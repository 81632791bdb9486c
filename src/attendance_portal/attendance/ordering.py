"""Display order for roll numbers such as ``CS-9`` < ``CS-10`` < ``EE-1``."""

from __future__ import annotations

import locale
from functools import cmp_to_key
from typing import Iterable, Optional

from ..core.constants import ROLL_NUMBER_DELIMITER
from .model import StudentRecord


def _as_int(segment: str) -> Optional[int]:
    if "_" in segment:
        return None
    try:
        return int(segment)
    except ValueError:
        return None


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _collate(a: str, b: str) -> int:
    # Case-insensitive first; ties go to swapped case, then to code points.
    primary = locale.strcoll(a.casefold(), b.casefold())
    if primary:
        return _sign(primary)
    tertiary = locale.strcoll(a.swapcase(), b.swapcase())
    if tertiary:
        return _sign(tertiary)
    return (a > b) - (a < b)


def compare_segments(a: str, b: str) -> int:
    if a == b:
        return 0
    if not a or not b:
        return -1 if not a else 1

    num_a, num_b = _as_int(a), _as_int(b)
    if num_a is not None and num_b is not None:
        return _sign(num_a - num_b)
    if num_a is None and num_b is None:
        return _collate(a, b)
    return -1 if num_a is not None else 1


def compare_roll_numbers(a: Optional[str], b: Optional[str]) -> int:
    """Return -1, 0 or 1 ordering two roll numbers segment by segment.

    Numeric segments compare as integers and the first differing segment
    decides, so ``CS-02`` and ``CS-2`` compare equal.
    """

    parts_a = (a or "").split(ROLL_NUMBER_DELIMITER)
    parts_b = (b or "").split(ROLL_NUMBER_DELIMITER)

    for i in range(max(len(parts_a), len(parts_b))):
        seg_a = parts_a[i] if i < len(parts_a) else ""
        seg_b = parts_b[i] if i < len(parts_b) else ""
        if seg_a != seg_b:
            return compare_segments(seg_a, seg_b)
    return 0


roll_number_key = cmp_to_key(compare_roll_numbers)


def sort_by_roll_number(records: Iterable[StudentRecord]) -> list[StudentRecord]:
    return sorted(records, key=lambda r: roll_number_key(r.roll_number))
