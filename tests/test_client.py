import json

import pytest
import requests

from attendance.session import AttendanceMarkingSession
from client.api import APIError, SchoolAPIClient


def make_response(status_code, body=None, reason='OK'):
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response._content = json.dumps(body).encode() if body is not None else b''
    return response


class FakeSession:

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({'method': method, 'url': url, **kwargs})
        return self.responses.pop(0)


def test_login_stores_token_for_later_calls():
    session = FakeSession(
        make_response(200, {'token': 'abc', 'refresh': 'r', 'user': {'role': 'teacher'}}),
        make_response(200, {'user_id': 1}),
    )
    client = SchoolAPIClient('http://school.test/api/v1/', session=session)

    client.login_teacher('teacher1', 'pass')
    assert client.token == 'abc'
    login_call = session.calls[0]
    assert login_call['url'] == 'http://school.test/api/v1/auth/teacher/login'
    assert 'Authorization' not in login_call['headers']

    client.get_me()
    assert session.calls[1]['headers']['Authorization'] == 'Bearer abc'


def test_rank_list_request():
    session = FakeSession(make_response(200, {'results': []}))
    client = SchoolAPIClient('http://school.test/api/v1', token='t', session=session)

    client.get_rank_list(5, include_roster=True)
    call = session.calls[0]
    assert call['method'] == 'GET'
    assert call['url'] == 'http://school.test/api/v1/marks/exam/5/ranklist'
    assert call['params'] == {'include_roster': 'true'}
    assert call['timeout'] == 10


def test_error_response_raises_api_error():
    session = FakeSession(make_response(400, {'detail': 'bad mark', 'code': 'InvalidMark'}, reason='Bad Request'))
    client = SchoolAPIClient('http://school.test/api/v1', token='t', session=session)

    with pytest.raises(APIError) as exc:
        client.get_rank_list(1)
    assert exc.value.status == 400
    assert exc.value.message == 'bad mark'
    assert exc.value.body['code'] == 'InvalidMark'


def test_error_without_json_body_uses_reason():
    session = FakeSession(make_response(502, reason='Bad Gateway'))
    client = SchoolAPIClient('http://school.test/api/v1', session=session)

    with pytest.raises(APIError) as exc:
        client.get_exams_for_class(3)
    assert exc.value.status == 502
    assert exc.value.message == 'Bad Gateway'
    assert exc.value.body is None


def test_connection_failure_raises_api_error():
    class BrokenSession:
        def request(self, *args, **kwargs):
            raise requests.ConnectionError('refused')

    client = SchoolAPIClient('http://school.test/api/v1', session=BrokenSession())
    with pytest.raises(APIError) as exc:
        client.get_me()
    assert exc.value.status is None


def test_student_attendance_passes_date_range():
    session = FakeSession(make_response(200, {'summary': {}}))
    client = SchoolAPIClient('http://school.test/api/v1', token='t', session=session)

    client.get_student_attendance(8, start_date='2024-01-01', end_date='2024-01-31')
    assert session.calls[0]['params'] == {'start_date': '2024-01-01', 'end_date': '2024-01-31'}


def test_marking_session_submits_through_client():
    session = FakeSession(make_response(200, {'success': True, 'saved': 1, 'errors': []}))
    client = SchoolAPIClient('http://school.test/api/v1', token='t', session=session)

    marking = AttendanceMarkingSession(2, '2024-05-06', [1, 2])
    marking.toggle(2, 'Absent')
    assert marking.submit(client)['saved'] == 1

    call = session.calls[0]
    assert call['method'] == 'POST'
    assert call['url'] == 'http://school.test/api/v1/attendance/mark'
    assert call['json'] == {
        'class_id': 2,
        'date': '2024-05-06',
        'attendance_records': [{'student_id': 2, 'status': 'Absent'}],
    }
