import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from academics.models import ClassRoom, StudentProfile, Subject
from results.models import Examination
from users.models import Profile

User = get_user_model()


@pytest.fixture(autouse=True)
def test_settings(settings):
    settings.SECURE_SSL_REDIRECT = False
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture
def make_teacher(db):
    def _make(username='teacher1', full_name='Teacher One', password='pass1234'):
        user = User.objects.create_user(username=username, password=password, full_name=full_name)
        Profile.objects.create(user=user, role=Profile.TEACHER)
        return user
    return _make


@pytest.fixture
def teacher(make_teacher):
    return make_teacher()


@pytest.fixture
def classroom(teacher):
    return ClassRoom.objects.create(name='Grade 5', section='A', class_teacher=teacher)


@pytest.fixture
def make_student(db):
    def _make(username, roll_number, classroom=None, full_name=None, password='pass1234'):
        user = User.objects.create_user(username=username, password=password, full_name=full_name or username.title())
        Profile.objects.create(user=user, role=Profile.STUDENT)
        return StudentProfile.objects.create(user=user, roll_number=roll_number, classroom=classroom)
    return _make


@pytest.fixture
def students(make_student, classroom):
    return [
        make_student('alice', '001', classroom, 'Alice'),
        make_student('bob', '002', classroom, 'Bob'),
        make_student('carol', '003', classroom, 'Carol'),
    ]


@pytest.fixture
def subjects(classroom, teacher):
    return [
        Subject.objects.create(name='Mathematics', classroom=classroom, teacher=teacher),
        Subject.objects.create(name='English', classroom=classroom, teacher=teacher),
    ]


@pytest.fixture
def exam(classroom):
    return Examination.objects.create(name='Mid Term', classroom=classroom, max_marks=100)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def teacher_client(teacher):
    client = APIClient()
    client.force_authenticate(user=teacher)
    return client


@pytest.fixture
def student_client(students):
    client = APIClient()
    client.force_authenticate(user=students[0].user)
    return client
