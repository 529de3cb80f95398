import io
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.urls import reverse

from academics.models import ClassRoom, StudentProfile
from attendance.models import AttendanceRecord
from results.models import Examination, MarkRecord
from results.views import build_rank_list


def upload(admin_client, exam, text):
    url = reverse('admin:results_examination_import_marks', args=[exam.id])
    csv_file = SimpleUploadedFile('marks.csv', text.encode('utf-8'), content_type='text/csv')
    return admin_client.post(url, {'file': csv_file})


@pytest.mark.django_db
def test_import_marks_creates_and_updates(admin_client, exam, students, subjects):
    MarkRecord.objects.create(examination=exam, student=students[1], subject=subjects[0], marks_scored=10)

    response = upload(admin_client, exam, "roll_number,subject_name,marks_scored\n001,Mathematics,50\n002,Mathematics,65.5\n")

    assert response.status_code == 302
    marks = {m.student_id: m.marks_scored for m in MarkRecord.objects.filter(examination=exam)}
    assert marks == {students[0].id: 50, students[1].id: Decimal('65.5')}


@pytest.mark.django_db
def test_import_marks_skips_invalid_cells_and_keeps_valid_rows(admin_client, exam, students, subjects):
    MarkRecord.objects.create(examination=exam, student=students[2], subject=subjects[0], marks_scored=70)

    response = upload(admin_client, exam, (
        "roll_number,subject_name,marks_scored\n"
        "001,Mathematics,50\n"
        "002,Mathematics,nan\n"
        "003,Mathematics,\n"
        "003,English,abc\n"
        "002,English,150\n"
    ))

    assert response.status_code == 302
    marks = {(m.student_id, m.subject_id): m.marks_scored for m in MarkRecord.objects.filter(examination=exam)}
    assert marks == {
        (students[0].id, subjects[0].id): 50,
        (students[2].id, subjects[0].id): 70,
    }


@pytest.mark.django_db
def test_seed_demo_data_is_rerunnable():
    options = {'classes': 2, 'students': 3, 'subjects': 2, 'attendance_days': 2, 'seed': 7}
    call_command('seed_demo_data', stdout=io.StringIO(), **options)
    call_command('seed_demo_data', stdout=io.StringIO(), **options)

    assert ClassRoom.objects.count() == 2
    assert StudentProfile.objects.count() == 6
    assert MarkRecord.objects.count() == 12
    assert AttendanceRecord.objects.count() == 12

    exam = Examination.objects.select_related('classroom').first()
    rank_list = build_rank_list(exam)
    assert [r.rank for r in rank_list] == [1, 2, 3]
    assert all(r.subject_count == 2 for r in rank_list)
