import logging

from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils.dateparse import parse_date
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from academics.models import ClassRoom, StudentProfile
from results.exceptions import AggregationError
from users.permissions import IsTeacher
from users.principal import Principal
from .models import AttendanceRecord
from .serializers import (
    AttendanceRecordSerializer,
    AttendanceSummarySerializer,
    DateRangeSerializer,
    MarkAttendanceSerializer,
    StudentAttendanceStatisticsSerializer,
)
from .summary import compute_attendance_summary, summarize_by_student

logger = logging.getLogger(__name__)


def _in_range(queryset, start_date=None, end_date=None):
    if start_date:
        queryset = queryset.filter(date__gte=start_date)
    if end_date:
        queryset = queryset.filter(date__lte=end_date)
    return queryset


class AttendanceRecordViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    queryset = AttendanceRecord.objects.select_related('student__user', 'classroom').all()
    serializer_class = AttendanceRecordSerializer
    permission_classes = [IsAuthenticated, IsTeacher]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['classroom', 'student', 'date', 'status']

    @action(detail=False, methods=['post'])
    def mark(self, request):
        """Create or overwrite attendance for a class on one date"""
        payload = MarkAttendanceSerializer(data=request.data)
        if not payload.is_valid():
            return Response(
                {"detail": "class_id, date and a non-empty attendance_records list are required", "errors": payload.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        data = payload.validated_data
        classroom = get_object_or_404(ClassRoom, pk=data['class_id'])

        student_ids = [entry['student_id'] for entry in data['attendance_records']]
        students = {s.id: s for s in StudentProfile.objects.filter(id__in=student_ids)}

        saved = 0
        errors = []
        with transaction.atomic():
            for entry in data['attendance_records']:
                student = students.get(entry['student_id'])
                if student is None:
                    errors.append({'student_id': entry['student_id'], 'error': 'Student not found'})
                    continue
                if student.classroom_id != classroom.id:
                    errors.append({'student_id': student.id, 'error': f'Student does not belong to class {classroom}'})
                    continue
                AttendanceRecord.objects.update_or_create(
                    student=student,
                    date=data['date'],
                    defaults={'status': entry['status'], 'classroom': classroom},
                )
                saved += 1

        logger.info(f"Attendance for class {classroom} on {data['date']}: {saved} saved, {len(errors)} rejected")
        return Response({
            'success': True,
            'saved': saved,
            'errors': errors,
        })

    @action(detail=False, methods=['get'], url_path=r'class/(?P<class_id>\d+)')
    def by_class(self, request, class_id=None):
        """Records for a class on ?date=YYYY-MM-DD"""
        date = request.query_params.get('date')
        if not date:
            return Response({"detail": "date parameter is required"}, status=status.HTTP_400_BAD_REQUEST)
        return self._class_records(class_id, date)

    @action(detail=False, methods=['get'], url_path=r'class/(?P<class_id>\d+)/date/(?P<date>[0-9-]+)')
    def by_class_date(self, request, class_id=None, date=None):
        return self._class_records(class_id, date)

    def _class_records(self, class_id, date):
        try:
            day = parse_date(date)
        except ValueError:
            day = None
        if day is None:
            return Response({"detail": "Invalid date format. Use YYYY-MM-DD"}, status=status.HTTP_400_BAD_REQUEST)
        classroom = get_object_or_404(ClassRoom, pk=class_id)
        records = self.get_queryset().filter(classroom=classroom, date=day).order_by('student__roll_number')
        return Response(self.get_serializer(records, many=True).data)

    @action(detail=False, methods=['get'], url_path=r'student/(?P<student_id>\d+)',
            permission_classes=[IsAuthenticated])
    def by_student(self, request, student_id=None):
        """A student's records and summary, optionally limited to ?start_date=&end_date="""
        principal = Principal.from_request(request)
        if not principal.is_teacher and principal.student_id != int(student_id):
            return Response({"detail": "You can only view your own attendance"}, status=status.HTTP_403_FORBIDDEN)

        date_range = DateRangeSerializer(data=request.query_params)
        date_range.is_valid(raise_exception=True)
        student = get_object_or_404(StudentProfile, pk=student_id)

        records = _in_range(
            self.get_queryset().filter(student=student),
            **date_range.validated_data
        )
        try:
            summary = compute_attendance_summary(records)
        except AggregationError as e:
            logger.error(f"Attendance data for student {student.id} is inconsistent: {e}")
            return Response({"detail": str(e), "code": e.code}, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'student_id': student.id,
            'summary': AttendanceSummarySerializer(summary).data,
            'records': self.get_serializer(records, many=True).data,
        })

    @action(detail=False, methods=['get'], url_path=r'statistics/(?P<class_id>\d+)')
    def statistics(self, request, class_id=None):
        """Per-student attendance report for a class"""
        date_range = DateRangeSerializer(data=request.query_params)
        date_range.is_valid(raise_exception=True)
        classroom = get_object_or_404(ClassRoom, pk=class_id)

        students = classroom.students.select_related('user').order_by('roll_number')
        records = _in_range(
            AttendanceRecord.objects.filter(student__in=students),
            **date_range.validated_data
        ).only('student_id', 'status')

        try:
            by_student = summarize_by_student(records)
            empty = compute_attendance_summary([])
        except AggregationError as e:
            logger.error(f"Attendance data for class {classroom.id} is inconsistent: {e}")
            return Response({"detail": str(e), "code": e.code}, status=status.HTTP_400_BAD_REQUEST)

        reports = []
        for student in students:
            summary = by_student.get(student.id, empty)
            reports.append({
                'student_id': student.id,
                'student_name': student.full_name,
                'roll_number': student.roll_number,
                'total_days': summary.total,
                'present_days': summary.present,
                'absent_days': summary.absent,
                'attendance_percentage': summary.percentage,
            })

        return Response({
            'class_id': classroom.id,
            'students': StudentAttendanceStatisticsSerializer(reports, many=True).data,
        })
