from django.db import models

from academics.models import ClassRoom, StudentProfile


class AttendanceRecord(models.Model):
    PRESENT = 'Present'
    ABSENT = 'Absent'
    STATUS_CHOICES = [
        (PRESENT, 'Present'),
        (ABSENT, 'Absent'),
    ]

    student = models.ForeignKey(StudentProfile, on_delete=models.CASCADE, related_name='attendances')
    classroom = models.ForeignKey(ClassRoom, on_delete=models.CASCADE, related_name='attendance_records')
    date = models.DateField()
    status = models.CharField(max_length=10, choices=STATUS_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['student', 'date'], name='unique_student_date'),
        ]
        ordering = ['-date']
        indexes = [
            models.Index(fields=['classroom', 'date'], name='attendance_class_date_idx'),
            models.Index(fields=['student', 'date'], name='attendance_student_date_idx'),
            models.Index(fields=['date'], name='attendance_date_idx'),
        ]

    def __str__(self):
        return f"{self.student.full_name} - {self.date} - {'P' if self.status == self.PRESENT else 'A'}"
