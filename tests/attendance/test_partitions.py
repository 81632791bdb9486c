import pytest

from attendance_portal.attendance.partitions import partition_name
from attendance_portal.core.exceptions import InvalidPartitionKey


def test_partition_name_sanitizes_each_field_separately():
    name = partition_name("prof.a@uni.edu", "Fall 2024 (A)/B")
    assert name == "attendance_prof_a_uni_edu_Fall 2024 (A)_B"


def test_owner_spaces_are_replaced_but_semester_spaces_kept():
    assert partition_name("a b", "c d") == "attendance_a_b_c d"


@pytest.mark.parametrize("owner,semester", [("", "Fall"), ("p@x.io", ""), (None, "Fall"), ("p@x.io", None)])
def test_missing_owner_or_semester_is_rejected(owner, semester):
    with pytest.raises(InvalidPartitionKey):
        partition_name(owner, semester)
