"""
Attendance percentage aggregation.

A student with no recorded days gets 0%, not a null percentage.
"""
from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from results.exceptions import InconsistentAttendanceTotals

PRESENT = 'Present'
ABSENT = 'Absent'
STATUSES = (PRESENT, ABSENT)


@dataclass(frozen=True)
class AttendanceEntry:
    date: object
    status: str
    student_id: int = None


@dataclass(frozen=True)
class AttendanceSummary:
    total: int
    present: int
    absent: int
    percentage: int


def _status_of(record):
    if isinstance(record, str):
        return record
    if isinstance(record, dict):
        return record.get('status')
    return getattr(record, 'status', None)


def compute_attendance_summary(records):
    """Count present/absent days and the whole-number attendance percentage"""
    total = present = absent = 0
    for record in records:
        total += 1
        status = _status_of(record)
        if status == PRESENT:
            present += 1
        elif status == ABSENT:
            absent += 1

    if present + absent != total:
        raise InconsistentAttendanceTotals(
            f"present ({present}) + absent ({absent}) does not match total ({total})",
            total=total,
            present=present,
            absent=absent,
        )

    if total == 0:
        percentage = 0
    else:
        ratio = Decimal(present) / Decimal(total) * 100
        percentage = int(ratio.quantize(Decimal('1'), rounding=ROUND_HALF_UP))
    return AttendanceSummary(total=total, present=present, absent=absent, percentage=percentage)


def summarize_by_student(records):
    """Group records by ``student_id`` and summarize each group"""
    grouped = OrderedDict()
    for record in records:
        if isinstance(record, dict):
            student_id = record.get('student_id')
        else:
            student_id = getattr(record, 'student_id', None)
        grouped.setdefault(student_id, []).append(record)
    return {student_id: compute_attendance_summary(rows) for student_id, rows in grouped.items()}
