"""
HTTP client for the school API.

Wraps a ``requests.Session`` so the bearer token obtained at login is sent
with every later call. Non-2xx responses raise ``APIError`` carrying the
status code and the decoded body.
"""
import logging

import requests

logger = logging.getLogger(__name__)


class APIError(Exception):

    def __init__(self, message, status=None, body=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.body = body

    def __str__(self):
        if self.status is None:
            return self.message
        return f"{self.status}: {self.message}"


class SchoolAPIClient:

    def __init__(self, base_url, token=None, session=None, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, endpoint):
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _headers(self, auth=True):
        headers = {'Content-Type': 'application/json'}
        if auth and self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    @staticmethod
    def _decode(response):
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def request(self, method, endpoint, json=None, params=None, auth=True):
        url = self._url(endpoint)
        try:
            response = self.session.request(
                method,
                url,
                json=json,
                params=params,
                headers=self._headers(auth),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise APIError(f"Request failed: {e}") from e

        data = self._decode(response)
        if not 200 <= response.status_code < 300:
            message = None
            if isinstance(data, dict):
                message = data.get('detail') or data.get('message') or data.get('error')
            message = message or response.reason or 'API Error'
            logger.warning(f"{method} {url} returned {response.status_code}: {message}")
            raise APIError(message, status=response.status_code, body=data)
        return data

    def get(self, endpoint, params=None):
        return self.request('GET', endpoint, params=params)

    def post(self, endpoint, json=None):
        return self.request('POST', endpoint, json=json)

    def put(self, endpoint, json=None):
        return self.request('PUT', endpoint, json=json)

    def delete(self, endpoint):
        return self.request('DELETE', endpoint)

    # Auth

    def _login(self, role, username, password):
        data = self.request(
            'POST',
            f'auth/{role}/login',
            json={'username': username, 'password': password},
            auth=False,
        )
        self.token = data.get('token')
        return data

    def login_teacher(self, username, password):
        return self._login('teacher', username, password)

    def login_student(self, username, password):
        return self._login('student', username, password)

    def get_me(self):
        return self.get('auth/me')

    # Results

    def get_exams_for_class(self, class_id):
        return self.get(f'exams/class/{class_id}')

    def get_rank_list(self, exam_id, include_roster=False):
        params = {'include_roster': 'true'} if include_roster else None
        return self.get(f'marks/exam/{exam_id}/ranklist', params=params)

    # Attendance

    def get_class_attendance(self, class_id, date):
        return self.get(f'attendance/class/{class_id}', params={'date': str(date)})

    def mark_attendance(self, payload):
        return self.post('attendance/mark', json=payload)

    def get_student_attendance(self, student_id, start_date=None, end_date=None):
        params = {}
        if start_date:
            params['start_date'] = str(start_date)
        if end_date:
            params['end_date'] = str(end_date)
        return self.get(f'attendance/student/{student_id}', params=params or None)
