import pytest

from client.presentation import filter_and_sort, medal_for

RESULTS = [
    {'student_id': 2, 'student_name': 'Bob', 'roll_number': '002', 'total_marks': '95.00', 'rank': 1, 'tier': 'gold'},
    {'student_id': 1, 'student_name': 'alice', 'roll_number': '001', 'total_marks': '80.00', 'rank': 2, 'tier': 'silver'},
    {'student_id': 3, 'student_name': 'Carol', 'roll_number': '013', 'total_marks': '80.00', 'rank': 3, 'tier': 'bronze'},
    {'student_id': 4, 'student_name': 'Dan', 'roll_number': '004', 'total_marks': '41.50', 'rank': 4, 'tier': None},
]


def ids(rows):
    return [row['student_id'] for row in rows]


def test_default_is_rank_order():
    shuffled = [RESULTS[2], RESULTS[0], RESULTS[3], RESULTS[1]]
    assert ids(filter_and_sort(shuffled)) == [2, 1, 3, 4]


def test_rank_descending():
    assert ids(filter_and_sort(RESULTS, order='desc')) == [4, 3, 1, 2]


def test_sort_by_name_is_case_insensitive():
    assert ids(filter_and_sort(RESULTS, sort_by='name')) == [1, 2, 3, 4]


def test_sort_by_marks_is_numeric():
    assert ids(filter_and_sort(RESULTS, sort_by='marks')) == [4, 1, 3, 2]


def test_search_matches_name_roll_or_total():
    assert ids(filter_and_sort(RESULTS, query='ALI')) == [1]
    assert ids(filter_and_sort(RESULTS, query='013')) == [3]
    assert ids(filter_and_sort(RESULTS, query='80')) == [1, 3]


def test_filtering_keeps_server_rank_and_medal():
    rows = filter_and_sort(RESULTS, query='carol')
    assert rows[0]['rank'] == 3
    assert medal_for(rows[0])['tier'] == 'bronze'


def test_medal_for_untiered_row():
    assert medal_for(RESULTS[3]) is None
    assert medal_for(RESULTS[0])['icon'] == 'trophy'


def test_invalid_sort_options():
    with pytest.raises(ValueError):
        filter_and_sort(RESULTS, sort_by='grade')
    with pytest.raises(ValueError):
        filter_and_sort(RESULTS, order='up')
