from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

# Use the project's custom user model
User = settings.AUTH_USER_MODEL


class ClassRoom(models.Model):
    name = models.CharField(max_length=50)  # e.g., Grade 5
    section = models.CharField(max_length=10)  # e.g., A
    class_teacher = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='homerooms')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('name', 'section')
        ordering = ['name', 'section']
        indexes = [
            models.Index(fields=['class_teacher'], name='classroom_teacher_idx'),
        ]

    def __str__(self):
        return f"{self.name}-{self.section}"


class StudentProfile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='student_profile')
    roll_number = models.CharField(max_length=50)
    # Students may register before a teacher assigns them a class
    classroom = models.ForeignKey(ClassRoom, on_delete=models.SET_NULL, null=True, blank=True, related_name='students')

    class Meta:
        ordering = ['roll_number']
        indexes = [
            models.Index(fields=['classroom'], name='student_classroom_idx'),
            models.Index(fields=['roll_number'], name='student_roll_number_idx'),
        ]

    @property
    def full_name(self):
        return self.user.get_full_name() or self.user.username

    def __str__(self):
        return f"{self.full_name} ({self.roll_number})"


class Subject(models.Model):
    name = models.CharField(max_length=100)
    classroom = models.ForeignKey(ClassRoom, on_delete=models.CASCADE, related_name='subjects')
    teacher = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='subjects_taught')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['classroom', 'name']
        indexes = [
            models.Index(fields=['classroom'], name='subject_classroom_idx'),
            models.Index(fields=['teacher'], name='subject_teacher_idx'),
            models.Index(fields=['classroom', 'teacher'], name='subject_class_teacher_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.classroom})"


class TimetableEntry(models.Model):
    DAYS = [
        ('Monday', 'Monday'),
        ('Tuesday', 'Tuesday'),
        ('Wednesday', 'Wednesday'),
        ('Thursday', 'Thursday'),
        ('Friday', 'Friday'),
        ('Saturday', 'Saturday'),
        ('Sunday', 'Sunday'),
    ]

    classroom = models.ForeignKey(ClassRoom, on_delete=models.CASCADE, related_name='timetable')
    subject = models.ForeignKey(Subject, on_delete=models.CASCADE, related_name='timetable_entries')
    day_of_week = models.CharField(max_length=10, choices=DAYS)
    period_number = models.PositiveIntegerField()
    start_time = models.TimeField()
    end_time = models.TimeField()

    class Meta:
        unique_together = ('classroom', 'day_of_week', 'period_number')
        ordering = ['classroom', 'day_of_week', 'period_number']
        indexes = [
            models.Index(fields=['classroom', 'day_of_week'], name='timetable_class_day_idx'),
        ]

    def clean(self):
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValidationError({'end_time': 'End time must be after start time.'})

    def __str__(self):
        return f"{self.classroom} {self.day_of_week} P{self.period_number} - {self.subject.name}"
