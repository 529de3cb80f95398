from decimal import Decimal

import pytest

from results.exceptions import AggregationError, InvalidMark, InvalidMaxMarks
from results.ranking import (
    GRADE_ORDER,
    MarkEntry,
    StudentRef,
    compute_rank_list,
    grade_for,
    tier_for,
)


def entries(*rows):
    return [MarkEntry(student_id=sid, subject_id=sub, marks_scored=marks) for sid, sub, marks in rows]


def test_single_subject_ranking_assigns_positions_and_tiers():
    result = compute_rank_list(100, entries((1, 1, 80), (2, 1, 95), (3, 1, 80)))

    assert [r.student_id for r in result] == [2, 1, 3]
    assert [r.rank for r in result] == [1, 2, 3]
    assert [r.tier for r in result] == ['gold', 'silver', 'bronze']
    assert [r.is_tied for r in result] == [False, True, True]
    assert result[0].percentage == Decimal('95.00')
    assert result[0].grade == 'A+'
    assert result[1].grade == 'A'


def test_totals_are_summed_across_subjects():
    result = compute_rank_list(50, entries((1, 1, 40), (1, 2, 30), (2, 1, 45), (2, 2, 20)))

    first, second = result
    assert first.student_id == 1
    assert first.total_marks == Decimal('70')
    assert first.total_max == Decimal('100')
    assert first.percentage == Decimal('70.00')
    assert first.grade == 'B'
    assert first.subject_count == 2
    assert second.total_marks == Decimal('65')


def test_empty_input_gives_empty_list():
    assert compute_rank_list(100, []) == []


def test_negative_mark_is_rejected():
    with pytest.raises(InvalidMark):
        compute_rank_list(100, entries((1, 1, -5)))


@pytest.mark.parametrize('value', ['abc', None, True, float('nan')])
def test_non_numeric_mark_is_rejected(value):
    with pytest.raises(InvalidMark):
        compute_rank_list(100, entries((1, 1, value)))


def test_mark_above_maximum_is_rejected():
    with pytest.raises(InvalidMark) as exc:
        compute_rank_list(100, entries((1, 1, 101)))
    assert exc.value.code == 'InvalidMark'


def test_invalid_entry_anywhere_rejects_whole_list():
    with pytest.raises(InvalidMark):
        compute_rank_list(100, entries((1, 1, 90), (2, 1, 80), (3, 1, -1)))


@pytest.mark.parametrize('max_marks', [0, -10, 'x'])
def test_non_positive_max_marks_is_rejected(max_marks):
    with pytest.raises(InvalidMaxMarks):
        compute_rank_list(max_marks, entries((1, 1, 0)))


def test_per_entry_max_marks_overrides_exam_default():
    records = [
        MarkEntry(student_id=1, subject_id=1, marks_scored=45, max_marks=50),
        MarkEntry(student_id=1, subject_id=2, marks_scored=90, max_marks=100),
    ]
    result = compute_rank_list(100, records)
    assert result[0].total_max == Decimal('150')
    assert result[0].percentage == Decimal('90.00')


def test_later_duplicate_replaces_earlier_mark():
    result = compute_rank_list(100, entries((1, 1, 40), (1, 1, 60)))
    assert result[0].total_marks == Decimal('60')
    assert result[0].subject_count == 1


def test_ties_keep_first_appearance_order():
    result = compute_rank_list(100, entries((7, 1, 50), (3, 1, 50), (5, 1, 50), (9, 1, 50)))
    assert [r.student_id for r in result] == [7, 3, 5, 9]
    assert [r.rank for r in result] == [1, 2, 3, 4]
    assert all(r.is_tied for r in result)
    assert result[3].tier is None


def test_roster_adds_unmarked_students_with_zero_totals():
    roster = [StudentRef(1, 'Alice', '001'), StudentRef(2, 'Bob', '002')]
    result = compute_rank_list(100, entries((1, 1, 70)), roster=roster)

    assert [r.student_id for r in result] == [1, 2]
    absent = result[1]
    assert absent.total_marks == Decimal('0')
    assert absent.total_max == Decimal('0')
    assert absent.percentage == Decimal('0.00')
    assert absent.grade == 'F'
    assert absent.student_name == 'Bob'


def test_names_and_roll_numbers_carry_through():
    records = [MarkEntry(student_id=1, subject_id=1, marks_scored=10, student_name='Alice', roll_number=12)]
    result = compute_rank_list(100, records)
    assert result[0].student_name == 'Alice'
    assert result[0].roll_number == '12'


def test_percentage_rounds_half_up():
    # 2/3 of 100 = 66.666...
    result = compute_rank_list(3, entries((1, 1, 2)))
    assert result[0].percentage == Decimal('66.67')
    result = compute_rank_list(8, entries((1, 1, 1)))
    assert result[0].percentage == Decimal('12.50')


def test_properties_hold_for_mixed_input():
    records = entries((1, 1, 33), (2, 1, 99), (3, 1, 0), (4, 1, 99), (1, 2, 12), (5, 2, 100))
    result = compute_rank_list(100, records)

    assert len(result) == len({r.student_id for r in records})
    totals = [r.total_marks for r in result]
    assert totals == sorted(totals, reverse=True)
    for r in result:
        assert Decimal('0') <= r.percentage <= Decimal('100')
    assert compute_rank_list(100, records) == result


@pytest.mark.parametrize('percentage,grade', [
    (100, 'A+'), (90, 'A+'), (89.99, 'A'), (80, 'A'), (79.99, 'B'), (70, 'B'),
    (60, 'C'), (59.99, 'D'), (50, 'D'), (49.99, 'F'), (0, 'F'),
])
def test_grade_band_boundaries(percentage, grade):
    assert grade_for(percentage) == grade


def test_grade_is_monotonic_in_percentage():
    grades = [GRADE_ORDER.index(grade_for(p / 4)) for p in range(0, 401)]
    assert grades == sorted(grades)


def test_grade_for_rejects_non_numeric():
    with pytest.raises(ValueError):
        grade_for('high')


def test_tier_for_top_three_only():
    assert [tier_for(r) for r in (1, 2, 3, 4, 0)] == ['gold', 'silver', 'bronze', None, None]


def test_errors_share_a_base_class():
    assert issubclass(InvalidMark, AggregationError)
    assert issubclass(InvalidMaxMarks, AggregationError)
