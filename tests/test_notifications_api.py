import pytest
from rest_framework.test import APIClient

from notifications.models import Notification


@pytest.mark.django_db
def test_announcement_reaches_class_students(teacher_client, student_client, classroom):
    response = teacher_client.post('/api/v1/notifications/announcement', {
        'content': 'Sports day on Friday', 'target_class_id': classroom.id,
    }, format='json')
    assert response.status_code == 201

    feed = student_client.get('/api/v1/notifications').json()
    assert [n['content'] for n in feed] == ['Sports day on Friday']


@pytest.mark.django_db
def test_students_cannot_announce(student_client):
    response = student_client.post('/api/v1/notifications/announcement', {'content': 'hi'}, format='json')
    assert response.status_code == 403


@pytest.mark.django_db
def test_leave_request_defaults_to_class_teacher(student_client, teacher_client, teacher):
    response = student_client.post('/api/v1/notifications/leave-request', {'content': 'Sick today'}, format='json')
    assert response.status_code == 201
    assert response.json()['target_teacher_id'] == teacher.id
    assert response.json()['status'] == Notification.PENDING

    pending = teacher_client.get('/api/v1/notifications/leave-requests?status=pending').json()
    assert [n['content'] for n in pending] == ['Sick today']


@pytest.mark.django_db
def test_leave_request_without_class_teacher(make_student):
    student = make_student('orphan', '050')
    client = APIClient()
    client.force_authenticate(user=student.user)
    response = client.post('/api/v1/notifications/leave-request', {'content': 'Away'}, format='json')
    assert response.status_code == 400


@pytest.mark.django_db
def test_only_target_teacher_decides_leave(student_client, teacher_client, make_teacher):
    request_id = student_client.post(
        '/api/v1/notifications/leave-request', {'content': 'Family trip'}, format='json'
    ).json()['id']

    other = APIClient()
    other.force_authenticate(user=make_teacher('teacher2', 'Teacher Two'))
    url = f'/api/v1/notifications/leave-request/{request_id}/status'
    assert other.put(url, {'status': 'APPROVED'}, format='json').status_code == 403

    response = teacher_client.put(url, {'status': 'APPROVED'}, format='json')
    assert response.status_code == 200
    assert Notification.objects.get(pk=request_id).status == Notification.APPROVED

    assert teacher_client.put(url, {'status': 'MAYBE'}, format='json').status_code == 400


@pytest.mark.django_db
def test_only_creator_deletes(teacher_client, student_client):
    notification_id = teacher_client.post(
        '/api/v1/notifications/announcement', {'content': 'Exam schedule'}, format='json'
    ).json()['id']

    assert student_client.delete(f'/api/v1/notifications/{notification_id}').status_code == 403
    assert teacher_client.delete(f'/api/v1/notifications/{notification_id}').status_code == 204
    assert not Notification.objects.filter(pk=notification_id).exists()
