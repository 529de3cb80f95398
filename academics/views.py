import logging

from django.db import transaction
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from attendance.models import AttendanceRecord
from attendance.summary import compute_attendance_summary
from results.exceptions import AggregationError
from results.models import Examination
from users.permissions import IsStudent, IsTeacher, TeacherWriteOrReadOnly
from users.principal import Principal
from .models import ClassRoom, StudentProfile, Subject, TimetableEntry
from .serializers import (
    AssignStudentsSerializer,
    ClassRoomDetailSerializer,
    ClassRoomSerializer,
    StudentProfileSerializer,
    SubjectSerializer,
    TimetableEntrySerializer,
)

logger = logging.getLogger(__name__)


class ClassRoomViewSet(viewsets.ModelViewSet):
    queryset = ClassRoom.objects.select_related('class_teacher').annotate(
        student_count=Count('students', distinct=True)
    ).order_by('name', 'section')
    serializer_class = ClassRoomSerializer
    permission_classes = [TeacherWriteOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['class_teacher']
    search_fields = ['name', 'section']

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return ClassRoomDetailSerializer
        return ClassRoomSerializer

    @action(detail=False, methods=['get'], url_path='my-classes', permission_classes=[IsAuthenticated, IsTeacher])
    def my_classes(self, request):
        """Classes where the teacher is class teacher, and classes where they teach a subject"""
        principal = Principal.from_request(request)
        homerooms = self.get_queryset().filter(class_teacher_id=principal.id)
        subjects = Subject.objects.filter(teacher_id=principal.id).select_related('classroom').order_by(
            'classroom__name', 'classroom__section'
        )
        return Response({
            'class_teacher': ClassRoomSerializer(homerooms, many=True).data,
            'subject_teacher': [
                {
                    'class_id': subject.classroom_id,
                    'class_name': subject.classroom.name,
                    'section_name': subject.classroom.section,
                    'subject_id': subject.id,
                    'subject_name': subject.name,
                }
                for subject in subjects
            ],
        })

    @action(detail=False, methods=['put'], url_path='assign-class', permission_classes=[IsAuthenticated, IsTeacher])
    def assign_class(self, request):
        """Assign a list of students to a class"""
        serializer = AssignStudentsSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"detail": "Class ID and student IDs array are required", "errors": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        classroom = get_object_or_404(ClassRoom, pk=serializer.validated_data['class_id'])
        student_ids = serializer.validated_data['student_ids']

        with transaction.atomic():
            updated = StudentProfile.objects.filter(id__in=student_ids).update(classroom=classroom)

        logger.info(f"Assigned {updated} student(s) to class {classroom}")
        students = StudentProfile.objects.filter(id__in=student_ids).select_related('user', 'classroom')
        return Response({
            'message': f"{updated} student(s) assigned to class",
            'students': StudentProfileSerializer(students, many=True).data,
        })

    @action(detail=True, methods=['get'])
    def students(self, request, pk=None):
        """Get all students in a specific class"""
        classroom = self.get_object()
        students = classroom.students.select_related('user').order_by('roll_number')
        return Response(StudentProfileSerializer(students, many=True).data)


class StudentProfileViewSet(mixins.ListModelMixin,
                            mixins.RetrieveModelMixin,
                            mixins.UpdateModelMixin,
                            mixins.DestroyModelMixin,
                            viewsets.GenericViewSet):
    queryset = StudentProfile.objects.select_related('user', 'classroom').order_by('roll_number')
    serializer_class = StudentProfileSerializer
    permission_classes = [IsAuthenticated, IsTeacher]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['classroom']
    search_fields = ['user__full_name', 'user__username', 'roll_number']

    def perform_destroy(self, instance):
        # Deleting the student removes the login as well
        instance.user.delete()

    @action(detail=False, methods=['get'], url_path=r'class/(?P<class_id>\d+)')
    def by_class(self, request, class_id=None):
        classroom = get_object_or_404(ClassRoom, pk=class_id)
        students = self.get_queryset().filter(classroom=classroom)
        return Response(self.get_serializer(students, many=True).data)

    @action(detail=False, methods=['get'], permission_classes=[IsAuthenticated, IsStudent])
    def profile(self, request):
        student = get_object_or_404(self.get_queryset(), pk=Principal.from_request(request).student_id)
        return Response(self.get_serializer(student).data)

    @action(detail=False, methods=['get'], permission_classes=[IsAuthenticated, IsStudent])
    def dashboard(self, request):
        """Profile, attendance summary and exam count for the logged in student"""
        student = get_object_or_404(self.get_queryset(), pk=Principal.from_request(request).student_id)
        records = AttendanceRecord.objects.filter(student=student)
        try:
            summary = compute_attendance_summary(records)
        except AggregationError as e:
            logger.error(f"Attendance data for student {student.id} is inconsistent: {e}")
            return Response({"detail": str(e), "code": e.code}, status=status.HTTP_400_BAD_REQUEST)

        exam_count = 0
        if student.classroom_id:
            exam_count = Examination.objects.filter(classroom_id=student.classroom_id).count()

        return Response({
            'student': self.get_serializer(student).data,
            'attendance': {
                'total': summary.total,
                'present': summary.present,
                'absent': summary.absent,
                'percentage': summary.percentage,
            },
            'exam_count': exam_count,
        })


class SubjectViewSet(viewsets.ModelViewSet):
    queryset = Subject.objects.select_related('classroom', 'teacher').all()
    serializer_class = SubjectSerializer
    permission_classes = [TeacherWriteOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['classroom', 'teacher']
    search_fields = ['name']

    @action(detail=False, methods=['get'], url_path=r'class/(?P<class_id>\d+)')
    def by_class(self, request, class_id=None):
        subjects = self.get_queryset().filter(classroom_id=class_id)
        return Response(self.get_serializer(subjects, many=True).data)


class TimetableEntryViewSet(viewsets.ModelViewSet):
    queryset = TimetableEntry.objects.select_related('classroom', 'subject').all()
    serializer_class = TimetableEntrySerializer
    permission_classes = [TeacherWriteOrReadOnly]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['classroom', 'day_of_week']

    @action(detail=False, methods=['get'], url_path=r'class/(?P<class_id>\d+)')
    def by_class(self, request, class_id=None):
        entries = self.get_queryset().filter(classroom_id=class_id)
        return Response(self.get_serializer(entries, many=True).data)

    @action(detail=False, methods=['get'], url_path=r'today/(?P<class_id>\d+)')
    def today(self, request, class_id=None):
        day = timezone.localdate().strftime('%A')
        entries = self.get_queryset().filter(Q(classroom_id=class_id) & Q(day_of_week=day)).order_by('period_number')
        return Response({'day': day, 'entries': self.get_serializer(entries, many=True).data})
