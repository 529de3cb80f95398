from django.core.validators import MinValueValidator
from django.db import models

from academics.models import ClassRoom, StudentProfile, Subject


class Examination(models.Model):
    """Exam/Test definition"""
    name = models.CharField(max_length=255)
    classroom = models.ForeignKey(ClassRoom, on_delete=models.CASCADE, related_name='examinations')
    max_marks = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    # Free-form descriptor shown to users, never interpreted
    grade_scale = models.CharField(max_length=50, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', 'name']
        indexes = [
            models.Index(fields=['classroom'], name='exam_classroom_idx'),
        ]

    def __str__(self):
        return f"{self.name} - {self.classroom}"


class MarkRecord(models.Model):
    """One student's score on one subject in an exam"""
    examination = models.ForeignKey(Examination, on_delete=models.CASCADE, related_name='marks')
    student = models.ForeignKey(StudentProfile, on_delete=models.CASCADE, related_name='marks')
    subject = models.ForeignKey(Subject, on_delete=models.CASCADE, related_name='marks')
    marks_scored = models.DecimalField(max_digits=5, decimal_places=2, validators=[MinValueValidator(0)])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['examination', 'student', 'subject'], name='unique_exam_student_subject'),
        ]
        ordering = ['examination', 'student', 'subject']
        indexes = [
            models.Index(fields=['examination', 'student'], name='mark_exam_student_idx'),
            models.Index(fields=['student'], name='mark_student_idx'),
            models.Index(fields=['subject'], name='mark_subject_idx'),
        ]

    def __str__(self):
        return f"{self.student.full_name} - {self.subject.name} - {self.marks_scored}"
