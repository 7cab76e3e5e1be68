from datetime import date

from academic_records.attendance.aggregator import aggregate, overall_percentage, percentage, summarize
from academic_records.attendance.model import AttendanceRecord
from academic_records.core.enums import AttendanceStatus, GroupBy

P, A, L = AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.LATE


def _rec(i, student, course, status):
    return AttendanceRecord(f"att-{i}", student, course, date(2024, 1, i), status)


RECORDS = [
    _rec(1, "stu-1", "crs-a", P),
    _rec(2, "stu-1", "crs-a", A),
    _rec(3, "stu-1", "crs-b", L),
    _rec(4, "stu-2", "crs-a", P),
    _rec(5, "stu-2", "crs-b", P),
]


def test_group_by_course_counts_each_status():
    result = aggregate(RECORDS, GroupBy.COURSE)

    assert list(result) == ["crs-a", "crs-b"]
    a = result["crs-a"]
    assert (a.total, a.present, a.absent, a.late) == (3, 2, 1, 0)
    assert a.percentage == 67
    assert result["crs-b"].to_dict() == {"total": 2, "present": 1, "absent": 0, "late": 1, "percentage": 50}


def test_group_by_student_accepts_string_key():
    result = aggregate(RECORDS, "student")

    assert result["stu-1"].percentage == 33
    assert result["stu-2"].percentage == 100


def test_aggregate_is_order_independent():
    forward = aggregate(RECORDS, GroupBy.STUDENT)
    backward = aggregate(list(reversed(RECORDS)), GroupBy.STUDENT)

    assert forward == backward


def test_empty_input_yields_zero_percentage():
    assert aggregate([], GroupBy.COURSE) == {}
    assert summarize("x", []).percentage == 0
    assert overall_percentage([]) == 0


def test_percentage_rounds_half_up():
    assert percentage(1, 8) == 13  # 12.5
    assert percentage(1, 3) == 33
    assert percentage(2, 3) == 67
    assert percentage(0, 0) == 0


def test_overall_percentage_counts_only_present():
    assert overall_percentage(RECORDS) == 60
