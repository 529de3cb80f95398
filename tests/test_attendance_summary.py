import pytest

from attendance.summary import (
    ABSENT,
    PRESENT,
    AttendanceEntry,
    compute_attendance_summary,
    summarize_by_student,
)
from results.exceptions import InconsistentAttendanceTotals


def test_summary_counts_and_percentage():
    summary = compute_attendance_summary([PRESENT, PRESENT, ABSENT, PRESENT])
    assert (summary.total, summary.present, summary.absent, summary.percentage) == (4, 3, 1, 75)


def test_no_records_gives_zero_percent():
    summary = compute_attendance_summary([])
    assert summary.total == 0
    assert summary.percentage == 0


def test_percentage_rounds_half_up_to_whole_number():
    # 1/8 = 12.5%
    summary = compute_attendance_summary([PRESENT] + [ABSENT] * 7)
    assert summary.percentage == 13
    # 2/3 = 66.67%
    assert compute_attendance_summary([PRESENT, PRESENT, ABSENT]).percentage == 67


def test_accepts_entries_and_dicts():
    records = [
        AttendanceEntry(date='2024-01-01', status=PRESENT),
        {'date': '2024-01-02', 'status': ABSENT},
    ]
    summary = compute_attendance_summary(records)
    assert summary.present == 1
    assert summary.absent == 1
    assert summary.percentage == 50


def test_unknown_status_is_inconsistent():
    with pytest.raises(InconsistentAttendanceTotals) as exc:
        compute_attendance_summary([PRESENT, PRESENT, ABSENT, 'Late'])
    assert exc.value.code == 'InconsistentAttendanceTotals'
    assert exc.value.context == {'total': 4, 'present': 2, 'absent': 1}


def test_summarize_by_student_groups_records():
    records = [
        AttendanceEntry(date='2024-01-01', status=PRESENT, student_id=1),
        AttendanceEntry(date='2024-01-01', status=ABSENT, student_id=2),
        AttendanceEntry(date='2024-01-02', status=PRESENT, student_id=1),
    ]
    by_student = summarize_by_student(records)
    assert by_student[1].percentage == 100
    assert by_student[2].percentage == 0
    assert by_student[2].total == 1
