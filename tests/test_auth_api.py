import pytest

from academics.models import StudentProfile
from users.models import Profile


@pytest.mark.django_db
def test_teacher_register_returns_tokens(api_client):
    response = api_client.post('/api/v1/auth/teacher/register', {
        'username': 'mrsmith', 'password': 'secret123', 'full_name': 'Mr Smith',
    }, format='json')

    assert response.status_code == 201
    body = response.json()
    assert body['user']['role'] == Profile.TEACHER
    assert body['token']
    assert body['refresh']


@pytest.mark.django_db
def test_student_register_creates_unassigned_student(api_client):
    response = api_client.post('/api/v1/auth/student/register', {
        'username': 'jane', 'password': 'secret123', 'full_name': 'Jane Doe', 'roll_no': '17',
    }, format='json')

    assert response.status_code == 201
    student = StudentProfile.objects.get(user__username='jane')
    assert student.roll_number == '17'
    assert student.classroom is None


@pytest.mark.django_db
def test_register_duplicate_username_conflicts(api_client, teacher):
    response = api_client.post('/api/v1/auth/teacher/register', {
        'username': teacher.username, 'password': 'x', 'full_name': 'Again',
    }, format='json')
    assert response.status_code == 409


@pytest.mark.django_db
def test_register_missing_fields(api_client):
    response = api_client.post('/api/v1/auth/teacher/register', {'username': 'nopass'}, format='json')
    assert response.status_code == 400


@pytest.mark.django_db
def test_login_checks_role(api_client, teacher):
    ok = api_client.post('/api/v1/auth/teacher/login', {'username': 'teacher1', 'password': 'pass1234'}, format='json')
    assert ok.status_code == 200
    assert ok.json()['user']['role'] == Profile.TEACHER

    wrong_role = api_client.post('/api/v1/auth/student/login', {'username': 'teacher1', 'password': 'pass1234'}, format='json')
    assert wrong_role.status_code == 401

    bad_password = api_client.post('/api/v1/auth/teacher/login', {'username': 'teacher1', 'password': 'nope'}, format='json')
    assert bad_password.status_code == 401


@pytest.mark.django_db
def test_token_authenticates_me(api_client, students):
    login = api_client.post('/api/v1/auth/student/login', {'username': 'alice', 'password': 'pass1234'}, format='json')
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.json()['token']}")

    response = api_client.get('/api/v1/auth/me')
    assert response.status_code == 200
    body = response.json()
    assert body['role'] == Profile.STUDENT
    assert body['student_id'] == students[0].id
    assert body['class_name'] == 'Grade 5'


@pytest.mark.django_db
def test_me_requires_authentication(api_client):
    assert api_client.get('/api/v1/auth/me').status_code == 401


@pytest.mark.django_db
def test_health_is_public(api_client):
    response = api_client.get('/api/v1/health')
    assert response.status_code == 200
    assert response.json() == {'status': 'ok'}
