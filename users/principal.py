"""
Explicit identity passed to views instead of reading role state off the
request in many places.
"""
from dataclasses import dataclass
from typing import Optional

from .models import Profile


@dataclass(frozen=True)
class Principal:
    id: int
    role: Optional[str]
    student_id: Optional[int] = None

    @property
    def is_teacher(self):
        return self.role == Profile.TEACHER

    @property
    def is_student(self):
        return self.role == Profile.STUDENT

    @classmethod
    def from_user(cls, user):
        if user is None or not user.is_authenticated:
            return None
        profile = getattr(user, 'profile', None)
        role = profile.role if profile else None
        student = getattr(user, 'student_profile', None)
        return cls(id=user.id, role=role, student_id=student.id if student else None)

    @classmethod
    def from_request(cls, request):
        return cls.from_user(getattr(request, 'user', None))
