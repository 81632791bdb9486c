from __future__ import annotations

import re
from typing import Optional

from ..core.constants import PARTITION_PREFIX
from ..core.exceptions import InvalidPartitionKey

_OWNER_UNSAFE = re.compile(r"[^a-zA-Z0-9_]")
_SEMESTER_UNSAFE = re.compile(r"[^a-zA-Z0-9_() ]")


def partition_name(owner: Optional[str], semester: Optional[str]) -> str:
    """Name of the (professor, semester) partition, e.g. ``attendance_prof_example_com_Fall 2024``.

    Each field is sanitized on its own; the semester keeps spaces and parentheses.
    """

    if not owner or not semester:
        raise InvalidPartitionKey("Professor and semester must be defined")

    safe_owner = _OWNER_UNSAFE.sub("_", owner)
    safe_semester = _SEMESTER_UNSAFE.sub("_", semester)
    return f"{PARTITION_PREFIX}{safe_owner}_{safe_semester}"
