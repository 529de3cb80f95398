from django.conf import settings
from django.db import models

from academics.models import ClassRoom, StudentProfile

User = settings.AUTH_USER_MODEL


class Notification(models.Model):
    LEAVE_REQUEST = 'LEAVE_REQUEST'
    ANNOUNCEMENT = 'ANNOUNCEMENT'
    TYPE_CHOICES = [
        (LEAVE_REQUEST, 'Leave Request'),
        (ANNOUNCEMENT, 'Announcement'),
    ]

    PENDING = 'PENDING'
    APPROVED = 'APPROVED'
    REJECTED = 'REJECTED'
    STATUS_CHOICES = [
        (PENDING, 'Pending'),
        (APPROVED, 'Approved'),
        (REJECTED, 'Rejected'),
    ]

    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    content = models.TextField()
    created_by_student = models.ForeignKey(StudentProfile, on_delete=models.CASCADE, null=True, blank=True, related_name='leave_requests')
    created_by_teacher = models.ForeignKey(User, on_delete=models.CASCADE, null=True, blank=True, related_name='announcements')
    # Announcements without a target class go to every class
    target_classroom = models.ForeignKey(ClassRoom, on_delete=models.CASCADE, null=True, blank=True, related_name='notifications')
    target_teacher = models.ForeignKey(User, on_delete=models.CASCADE, null=True, blank=True, related_name='received_requests')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['type', 'status'], name='notification_type_status_idx'),
            models.Index(fields=['type', 'target_classroom'], name='notification_type_class_idx'),
            models.Index(fields=['target_teacher'], name='notification_teacher_idx'),
        ]

    def __str__(self):
        return f"{self.type} - {self.content[:30]}"
