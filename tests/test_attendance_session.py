import pytest

from attendance.session import AttendanceMarkingSession, EmptyAttendanceSubmission
from attendance.summary import ABSENT, PRESENT


class FakeClient:

    def __init__(self):
        self.payloads = []

    def mark_attendance(self, payload):
        self.payloads.append(payload)
        return {'success': True, 'saved': len(payload['attendance_records']), 'errors': []}


@pytest.fixture
def session():
    return AttendanceMarkingSession(class_id=4, date='2024-03-01', student_ids=[10, 11, 12])


def test_toggle_sets_and_clears_status(session):
    assert session.toggle(10, PRESENT) == PRESENT
    assert session.toggle(10, PRESENT) is None
    assert session.toggle(10, ABSENT) == ABSENT
    assert session.toggle(10, PRESENT) == PRESENT


def test_toggle_rejects_unknown_student_and_status(session):
    with pytest.raises(ValueError):
        session.toggle(99, PRESENT)
    with pytest.raises(ValueError):
        session.toggle(10, 'Late')
    with pytest.raises(ValueError):
        session.toggle(None, PRESENT)
    with pytest.raises(ValueError):
        session.status_of(None)

    session.toggle(10, PRESENT)
    with pytest.raises(ValueError):
        session.toggle(10, None)
    assert session.status_of(10) == PRESENT


def test_mark_all_rejects_missing_status(session):
    session.mark_all_present()
    with pytest.raises(ValueError):
        session.mark_all(None)
    assert session.stats()['present'] == 3


def test_stats_counts_unmarked(session):
    session.toggle(10, PRESENT)
    session.toggle(11, ABSENT)
    assert session.stats() == {'present': 1, 'absent': 1, 'unmarked': 1, 'total': 3}


def test_mark_all_overrides_individual_marks(session):
    session.toggle(10, ABSENT)
    session.mark_all_present()
    assert [session.status_of(s) for s in (10, 11, 12)] == [PRESENT] * 3
    session.mark_all_absent()
    assert session.stats()['absent'] == 3


def test_payload_only_contains_marked_students(session):
    session.toggle(12, ABSENT)
    session.toggle(10, PRESENT)
    assert session.payload() == {
        'class_id': 4,
        'date': '2024-03-01',
        'attendance_records': [
            {'student_id': 10, 'status': PRESENT},
            {'student_id': 12, 'status': ABSENT},
        ],
    }


def test_empty_submission_makes_no_request(session):
    client = FakeClient()
    with pytest.raises(EmptyAttendanceSubmission):
        session.submit(client)
    assert client.payloads == []


def test_submit_sends_payload_and_resets(session):
    client = FakeClient()
    session.toggle(11, PRESENT)
    response = session.submit(client)

    assert response['saved'] == 1
    assert client.payloads[0]['attendance_records'] == [{'student_id': 11, 'status': PRESENT}]
    assert session.stats()['unmarked'] == 3


def test_from_existing_prefills_known_students():
    records = [
        {'student_id': 1, 'status': PRESENT},
        {'student_id': 2, 'status': ABSENT},
        {'student_id': 99, 'status': PRESENT},
    ]
    session = AttendanceMarkingSession.from_existing(1, '2024-03-01', [1, 2, 3], records)
    assert session.status_of(1) == PRESENT
    assert session.status_of(2) == ABSENT
    assert session.status_of(3) is None
    assert session.stats()['total'] == 3
