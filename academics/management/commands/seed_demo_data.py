from datetime import date, time, timedelta
from random import Random

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from academics.models import ClassRoom, StudentProfile, Subject, TimetableEntry
from attendance.models import AttendanceRecord
from results.models import Examination, MarkRecord
from users.models import Profile

User = get_user_model()

SUBJECT_NAMES = ['Mathematics', 'English', 'Science', 'Social Studies', 'Computer', 'Art']
WEEKDAYS = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday']


class Command(BaseCommand):
    help = "Seed demo data: teachers, classes, subjects, timetable, students, exams, marks and attendance"

    def add_arguments(self, parser):
        parser.add_argument('--classes', type=int, default=2, help='Number of classrooms to create')
        parser.add_argument('--students', type=int, default=10, help='Number of students per classroom')
        parser.add_argument('--subjects', type=int, default=4, help='Number of subjects per classroom')
        parser.add_argument('--attendance-days', type=int, default=7, help='Number of past days to create attendance for')
        parser.add_argument('--password', type=str, default='demo1234', help='Password for every demo login')
        parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible data')

    def handle(self, *args, **options):
        num_classes = options['classes']
        num_students = options['students']
        num_subjects = options['subjects']
        attendance_days = options['attendance_days']
        password = options['password']
        rng = Random(options['seed'])

        if num_subjects > len(SUBJECT_NAMES):
            raise CommandError(f"At most {len(SUBJECT_NAMES)} subjects per class are supported")

        with transaction.atomic():
            teachers = []
            for i in range(1, num_classes + 1):
                teachers.append(self._user(f"teacher{i}", f"Teacher {i}", Profile.TEACHER, password))
            self.stdout.write(self.style.SUCCESS(f"Teachers: {len(teachers)}"))

            marks_created = 0
            attendance_created = 0
            for i, teacher in enumerate(teachers, start=1):
                classroom, _ = ClassRoom.objects.get_or_create(
                    name=f"Grade {i}", section='A', defaults={'class_teacher': teacher}
                )

                subjects = []
                for name in SUBJECT_NAMES[:num_subjects]:
                    subject, _ = Subject.objects.get_or_create(
                        classroom=classroom, name=name, defaults={'teacher': teacher}
                    )
                    subjects.append(subject)

                for period, subject in enumerate(subjects, start=1):
                    for day in WEEKDAYS:
                        TimetableEntry.objects.get_or_create(
                            classroom=classroom,
                            day_of_week=day,
                            period_number=period,
                            defaults={
                                'subject': subject,
                                'start_time': time(8 + period, 0),
                                'end_time': time(8 + period, 45),
                            },
                        )

                students = []
                for n in range(1, num_students + 1):
                    user = self._user(f"student{i}_{n}", f"Student {i}-{n}", Profile.STUDENT, password)
                    student, _ = StudentProfile.objects.get_or_create(
                        user=user, defaults={'roll_number': f"{i}{n:03d}", 'classroom': classroom}
                    )
                    students.append(student)

                exam, _ = Examination.objects.get_or_create(
                    classroom=classroom, name='Mid Term', defaults={'max_marks': 100}
                )
                for student in students:
                    for subject in subjects:
                        _, created = MarkRecord.objects.update_or_create(
                            examination=exam,
                            student=student,
                            subject=subject,
                            defaults={'marks_scored': rng.randint(35, 100)},
                        )
                        marks_created += int(created)

                today = date.today()
                for days_ago in range(attendance_days):
                    day = today - timedelta(days=days_ago)
                    for student in students:
                        status = AttendanceRecord.PRESENT if rng.random() < 0.85 else AttendanceRecord.ABSENT
                        _, created = AttendanceRecord.objects.update_or_create(
                            student=student, date=day, defaults={'status': status, 'classroom': classroom}
                        )
                        attendance_created += int(created)

                self.stdout.write(self.style.SUCCESS(
                    f"{classroom}: {len(subjects)} subjects, {len(students)} students"
                ))

        self.stdout.write(self.style.SUCCESS(f"Marks created: {marks_created}"))
        self.stdout.write(self.style.SUCCESS(f"Attendance records created: {attendance_created}"))
        self.stdout.write(self.style.SUCCESS("Demo data seeding completed."))

    def _user(self, username, full_name, role, password):
        user, created = User.objects.get_or_create(username=username, defaults={'full_name': full_name})
        if created:
            user.set_password(password)
            user.save(update_fields=['password'])
        Profile.objects.get_or_create(user=user, defaults={'role': role})
        return user
