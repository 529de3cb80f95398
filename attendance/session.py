"""
Client-side attendance marking state for one class and date.

Each student is unset, Present or Absent. Selecting the status a student
already has clears it again. Only marked students are submitted, and an
empty submission is refused before any request is made.
"""
import logging

from .summary import ABSENT, PRESENT, STATUSES

logger = logging.getLogger(__name__)

_UNSET = object()


class EmptyAttendanceSubmission(ValueError):
    """Raised when submitting with no student marked"""


class AttendanceMarkingSession:

    def __init__(self, class_id, date, student_ids):
        self.class_id = class_id
        self.date = str(date)
        self._order = []
        self._marks = {}
        for student_id in student_ids:
            if student_id not in self._marks:
                self._order.append(student_id)
                self._marks[student_id] = None

    @classmethod
    def from_existing(cls, class_id, date, student_ids, records):
        """Build a session pre-filled from the server's records for the date"""
        session = cls(class_id, date, student_ids)
        session.load_existing(records)
        return session

    def load_existing(self, records):
        """Replace local state with existing records (dicts or objects with student_id/status)"""
        for student_id in self._order:
            self._marks[student_id] = None
        for record in records or ():
            if isinstance(record, dict):
                student_id, status = record.get('student_id'), record.get('status')
            else:
                student_id, status = getattr(record, 'student_id', None), getattr(record, 'status', None)
            if student_id in self._marks and status in STATUSES:
                self._marks[student_id] = status

    def _check(self, student_id=_UNSET, status=_UNSET):
        if student_id is not _UNSET and student_id not in self._marks:
            raise ValueError(f"Student {student_id} is not part of this attendance session")
        if status is not _UNSET and status not in STATUSES:
            raise ValueError(f"Invalid attendance status: {status!r}")

    def status_of(self, student_id):
        self._check(student_id=student_id)
        return self._marks[student_id]

    def toggle(self, student_id, status):
        self._check(student_id=student_id, status=status)
        current = self._marks[student_id]
        self._marks[student_id] = None if current == status else status
        return self._marks[student_id]

    def mark_all(self, status):
        self._check(status=status)
        for student_id in self._order:
            self._marks[student_id] = status

    def mark_all_present(self):
        self.mark_all(PRESENT)

    def mark_all_absent(self):
        self.mark_all(ABSENT)

    def stats(self):
        present = sum(1 for s in self._marks.values() if s == PRESENT)
        absent = sum(1 for s in self._marks.values() if s == ABSENT)
        total = len(self._order)
        return {'present': present, 'absent': absent, 'unmarked': total - present - absent, 'total': total}

    def payload(self):
        records = [
            {'student_id': student_id, 'status': self._marks[student_id]}
            for student_id in self._order
            if self._marks[student_id] is not None
        ]
        if not records:
            raise EmptyAttendanceSubmission('Please mark attendance for at least one student')
        return {'class_id': self.class_id, 'date': self.date, 'attendance_records': records}

    def submit(self, client):
        """Send marked entries through ``client.mark_attendance`` and reset on success"""
        payload = self.payload()
        response = client.mark_attendance(payload)
        logger.info(f"Submitted attendance for class {self.class_id} on {self.date}: {len(payload['attendance_records'])} records")
        self.clear()
        return response

    def clear(self):
        for student_id in self._order:
            self._marks[student_id] = None
