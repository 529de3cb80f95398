"""
Rank list computation for an examination.

Turns per-subject mark entries into per-student totals, percentages,
grades and a ranked leaderboard. Nothing here touches the database: the
API layer builds ``MarkEntry`` values from ``MarkRecord`` rows and calls
``compute_rank_list``.

Ranking rules:
- Students are ordered by total marks, highest first.
- Equal totals keep the order in which the students first appear in the
  input. No secondary key is applied.
- Rank is the 1-based position in that order, so tied students get
  consecutive ranks rather than a shared one.
- The first three positions carry a medal tier (gold, silver, bronze),
  assigned strictly by position.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, List, Optional

from .exceptions import InvalidMark, InvalidMaxMarks

logger = logging.getLogger(__name__)

# (lower bound inclusive, grade), best band first
GRADE_BANDS = [
    (Decimal('90'), 'A+'),
    (Decimal('80'), 'A'),
    (Decimal('70'), 'B'),
    (Decimal('60'), 'C'),
    (Decimal('50'), 'D'),
]
FAIL_GRADE = 'F'
GRADE_ORDER = ['F', 'D', 'C', 'B', 'A', 'A+']

TIERS = ('gold', 'silver', 'bronze')

TWO_PLACES = Decimal('0.01')
HUNDRED = Decimal('100')


@dataclass(frozen=True)
class MarkEntry:
    """One student's score on one subject of an exam"""
    student_id: int
    subject_id: Optional[int]
    marks_scored: object
    max_marks: Optional[object] = None
    student_name: str = ''
    roll_number: str = ''


@dataclass(frozen=True)
class StudentRef:
    """Roster entry used to include students with no marks"""
    student_id: int
    student_name: str = ''
    roll_number: str = ''


@dataclass(frozen=True)
class RankedResult:
    student_id: int
    student_name: str
    roll_number: str
    total_marks: Decimal
    total_max: Decimal
    percentage: Decimal
    grade: str
    rank: int
    tier: Optional[str]
    is_tied: bool
    subject_count: int


def grade_for(percentage):
    """Letter grade for a percentage. Band lower bounds are inclusive."""
    value = _to_decimal(percentage)
    if value is None:
        raise ValueError(f"percentage must be numeric, got {percentage!r}")
    for lower_bound, grade in GRADE_BANDS:
        if value >= lower_bound:
            return grade
    return FAIL_GRADE


def tier_for(rank):
    """Medal tier for a 1-based rank, or None outside the top three"""
    if 1 <= rank <= len(TIERS):
        return TIERS[rank - 1]
    return None


def compute_rank_list(exam_max_marks, records: Iterable[MarkEntry], roster: Optional[Iterable[StudentRef]] = None) -> List[RankedResult]:
    """
    Compute the ranked result list for one exam.

    ``exam_max_marks`` applies to every entry that does not carry its own
    ``max_marks``. All entries are validated before anything is aggregated,
    so an invalid entry raises without producing a partial list.
    """
    exam_max = _validate_max_marks(exam_max_marks)

    # (student, subject) -> entry; a later duplicate replaces the earlier one
    latest = {}
    students = {}
    for entry in records:
        marks = _validate_marks(entry)
        entry_max = exam_max if entry.max_marks is None else _validate_max_marks(entry.max_marks, entry)
        if marks > entry_max:
            raise InvalidMark(
                f"marks_scored {marks} exceeds maximum {entry_max} for student {entry.student_id}",
                student_id=entry.student_id,
                subject_id=entry.subject_id,
            )

        if entry.student_id not in students:
            students[entry.student_id] = {
                'name': entry.student_name or '',
                'roll': str(entry.roll_number or ''),
            }

        key = (entry.student_id, entry.subject_id if entry.subject_id is not None else object())
        if key in latest:
            logger.debug(f"Duplicate mark for student {entry.student_id} subject {entry.subject_id}; keeping the latest")
            del latest[key]
        latest[key] = (entry.student_id, marks, entry_max)

    totals = {student_id: [Decimal('0'), Decimal('0'), 0] for student_id in students}
    for student_id, marks, entry_max in latest.values():
        bucket = totals[student_id]
        bucket[0] += marks
        bucket[1] += entry_max
        bucket[2] += 1

    for ref in roster or ():
        if ref.student_id not in students:
            students[ref.student_id] = {'name': ref.student_name or '', 'roll': str(ref.roll_number or '')}
            totals[ref.student_id] = [Decimal('0'), Decimal('0'), 0]

    # sorted() is stable, so equal totals stay in first-appearance order
    ordered = sorted(students, key=lambda sid: totals[sid][0], reverse=True)

    total_counts = {}
    for student_id in ordered:
        total = totals[student_id][0]
        total_counts[total] = total_counts.get(total, 0) + 1

    results = []
    for position, student_id in enumerate(ordered, start=1):
        total_marks, total_max, subject_count = totals[student_id]
        percentage = _percentage(total_marks, total_max)
        results.append(RankedResult(
            student_id=student_id,
            student_name=students[student_id]['name'],
            roll_number=students[student_id]['roll'],
            total_marks=total_marks,
            total_max=total_max,
            percentage=percentage,
            grade=grade_for(percentage),
            rank=position,
            tier=tier_for(position),
            is_tied=total_counts[total_marks] > 1,
            subject_count=subject_count,
        ))
    return results


def _percentage(total_marks, total_max):
    if total_max == 0:
        return Decimal('0.00')
    return (total_marks / total_max * HUNDRED).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def _to_decimal(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not number.is_finite():
        return None
    return number


def _validate_marks(entry):
    marks = _to_decimal(entry.marks_scored)
    if marks is None:
        logger.warning(f"Rejected non-numeric mark {entry.marks_scored!r} for student {entry.student_id}")
        raise InvalidMark(
            f"marks_scored must be numeric, got {entry.marks_scored!r}",
            student_id=entry.student_id,
            subject_id=entry.subject_id,
        )
    if marks < 0:
        logger.warning(f"Rejected negative mark {marks} for student {entry.student_id}")
        raise InvalidMark(
            f"marks_scored cannot be negative, got {marks}",
            student_id=entry.student_id,
            subject_id=entry.subject_id,
        )
    return marks


def _validate_max_marks(value, entry=None):
    max_marks = _to_decimal(value)
    if max_marks is None or max_marks <= 0:
        context = {'student_id': entry.student_id, 'subject_id': entry.subject_id} if entry else {}
        raise InvalidMaxMarks(f"max_marks must be a positive number, got {value!r}", **context)
    return max_marks
