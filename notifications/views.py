import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from academics.models import StudentProfile
from users.permissions import IsStudent, IsTeacher
from users.principal import Principal
from .models import Notification
from .serializers import (
    AnnouncementSerializer,
    LeaveRequestSerializer,
    LeaveStatusSerializer,
    NotificationSerializer,
)

logger = logging.getLogger(__name__)


class NotificationViewSet(mixins.ListModelMixin,
                          mixins.DestroyModelMixin,
                          viewsets.GenericViewSet):
    queryset = Notification.objects.select_related(
        'created_by_student__user', 'created_by_teacher', 'target_classroom', 'target_teacher'
    ).all()
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        """Teachers see their own announcements and requests sent to them; students see their class feed"""
        queryset = super().get_queryset()
        principal = Principal.from_request(self.request)
        if principal.is_teacher:
            return queryset.filter(Q(created_by_teacher_id=principal.id) | Q(target_teacher_id=principal.id))
        if principal.is_student:
            student = StudentProfile.objects.filter(pk=principal.student_id).first()
            class_id = student.classroom_id if student else None
            announcements = Q(type=Notification.ANNOUNCEMENT) & (
                Q(target_classroom__isnull=True) | Q(target_classroom_id=class_id)
            )
            return queryset.filter(announcements | Q(created_by_student_id=principal.student_id))
        return queryset.none()

    def perform_destroy(self, instance):
        principal = Principal.from_request(self.request)
        is_creator = (
            instance.created_by_teacher_id == principal.id
            or (principal.student_id is not None and instance.created_by_student_id == principal.student_id)
        )
        if not is_creator:
            raise PermissionDenied('Only the creator can delete this notification.')
        instance.delete()

    @action(detail=False, methods=['post'], permission_classes=[IsAuthenticated, IsTeacher])
    def announcement(self, request):
        serializer = AnnouncementSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        notification = Notification.objects.create(
            type=Notification.ANNOUNCEMENT,
            content=serializer.validated_data['content'],
            created_by_teacher=request.user,
            target_classroom=serializer.validated_data.get('target_class_id'),
        )
        return Response(NotificationSerializer(notification).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'], url_path='leave-request', permission_classes=[IsAuthenticated, IsStudent])
    def leave_request(self, request):
        """Send a leave request to the given teacher, or to the student's class teacher"""
        serializer = LeaveRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        student = get_object_or_404(StudentProfile.objects.select_related('classroom'), pk=Principal.from_request(request).student_id)

        target = serializer.validated_data.get('target_teacher_id')
        if target is None and student.classroom:
            target = student.classroom.class_teacher
        if target is None:
            return Response(
                {"detail": "No class teacher assigned; provide target_teacher_id"},
                status=status.HTTP_400_BAD_REQUEST
            )

        notification = Notification.objects.create(
            type=Notification.LEAVE_REQUEST,
            content=serializer.validated_data['content'],
            created_by_student=student,
            target_classroom=student.classroom,
            target_teacher=target,
        )
        return Response(NotificationSerializer(notification).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'], url_path='leave-requests', permission_classes=[IsAuthenticated, IsTeacher])
    def leave_requests(self, request):
        queryset = self.get_queryset().filter(type=Notification.LEAVE_REQUEST, target_teacher_id=request.user.id)
        status_filter = request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter.upper())
        return Response(self.get_serializer(queryset, many=True).data)

    @action(detail=False, methods=['put'], url_path=r'leave-request/(?P<notification_id>\d+)/status',
            permission_classes=[IsAuthenticated, IsTeacher])
    def leave_status(self, request, notification_id=None):
        notification = get_object_or_404(Notification, pk=notification_id, type=Notification.LEAVE_REQUEST)
        if notification.target_teacher_id != request.user.id:
            return Response(
                {"detail": "Only the teacher this request was sent to can decide it"},
                status=status.HTTP_403_FORBIDDEN
            )
        serializer = LeaveStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        notification.status = serializer.validated_data['status']
        notification.save(update_fields=['status'])
        logger.info(f"Leave request {notification.id} {notification.status.lower()} by teacher {request.user.id}")
        return Response(NotificationSerializer(notification).data)
