import csv
import io
import logging

from django.db import transaction
from django.db.models import Avg, Count, Max, Min
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from users.permissions import IsStudent, IsTeacher, TeacherWriteOrReadOnly
from users.principal import Principal
from .exceptions import AggregationError
from .models import Examination, MarkRecord
from .ranking import MarkEntry, StudentRef, compute_rank_list, grade_for
from .serializers import (
    BulkMarksSerializer,
    ExaminationSerializer,
    MarkEntrySerializer,
    MarkRecordSerializer,
    RankedResultSerializer,
)

logger = logging.getLogger(__name__)


def mark_entries_for(examination):
    """Engine input for an exam, in the order marks were first recorded"""
    records = MarkRecord.objects.filter(examination=examination).select_related('student__user').order_by('created_at', 'id')
    return [
        MarkEntry(
            student_id=record.student_id,
            subject_id=record.subject_id,
            marks_scored=record.marks_scored,
            student_name=record.student.full_name,
            roll_number=record.student.roll_number,
        )
        for record in records
    ]


def build_rank_list(examination, include_roster=False):
    roster = None
    if include_roster:
        roster = [
            StudentRef(student_id=s.id, student_name=s.full_name, roll_number=s.roll_number)
            for s in examination.classroom.students.select_related('user').order_by('roll_number')
        ]
    return compute_rank_list(examination.max_marks, mark_entries_for(examination), roster=roster)


def aggregation_error_response(error):
    return Response({"detail": str(error), "code": error.code}, status=status.HTTP_400_BAD_REQUEST)


class ExaminationViewSet(viewsets.ModelViewSet):
    queryset = Examination.objects.select_related('classroom').all()
    serializer_class = ExaminationSerializer
    permission_classes = [TeacherWriteOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['classroom']
    search_fields = ['name']

    @action(detail=False, methods=['get'], url_path=r'class/(?P<class_id>\d+)')
    def by_class(self, request, class_id=None):
        exams = self.get_queryset().filter(classroom_id=class_id)
        return Response(self.get_serializer(exams, many=True).data)


class MarkRecordViewSet(mixins.ListModelMixin,
                        mixins.RetrieveModelMixin,
                        mixins.DestroyModelMixin,
                        viewsets.GenericViewSet):
    queryset = MarkRecord.objects.select_related('examination', 'student__user', 'subject').all()
    serializer_class = MarkRecordSerializer
    permission_classes = [IsAuthenticated, IsTeacher]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['examination', 'student', 'subject']
    search_fields = ['student__user__full_name', 'student__roll_number']

    def create(self, request, *args, **kwargs):
        """Create or overwrite the mark for one (exam, student, subject)"""
        serializer = MarkEntrySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            record, created = serializer.save()
        logger.info(f"{'Created' if created else 'Updated'} mark {record.id} for student {record.student_id} in exam {record.examination_id}")
        return Response(
            MarkRecordSerializer(record).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )

    def update(self, request, *args, **kwargs):
        record = self.get_object()
        data = {
            'exam_id': record.examination_id,
            'student_id': record.student_id,
            'subject_id': record.subject_id,
            'marks_scored': request.data.get('marks_scored'),
        }
        serializer = MarkEntrySerializer(data=data, context={'examination': record.examination})
        serializer.is_valid(raise_exception=True)
        record, _ = serializer.save()
        return Response(MarkRecordSerializer(record).data)

    @action(detail=False, methods=['post'])
    def bulk(self, request):
        """Create or update marks in bulk for an examination"""
        payload = BulkMarksSerializer(data=request.data)
        if not payload.is_valid():
            return Response(
                {"detail": "No marks data provided", "errors": payload.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        examination = get_object_or_404(Examination.objects.select_related('classroom'), pk=payload.validated_data['exam_id'])

        created = 0
        updated = 0
        errors = []
        with transaction.atomic():
            for idx, item in enumerate(payload.validated_data['marks']):
                entry = MarkEntrySerializer(
                    data={**item, 'exam_id': examination.id},
                    context={'examination': examination},
                )
                if not entry.is_valid():
                    errors.append({'index': idx, 'error': entry.errors})
                    continue
                _, is_created = entry.save()
                if is_created:
                    created += 1
                else:
                    updated += 1

        logger.info(f"Bulk marks for exam {examination.id}: {created} created, {updated} updated, {len(errors)} rejected")
        return Response({
            'message': 'Bulk marks entry completed',
            'created': created,
            'updated': updated,
            'errors': errors,
        })

    @action(detail=False, methods=['get'], url_path=r'exam/(?P<exam_id>\d+)')
    def by_exam(self, request, exam_id=None):
        examination = get_object_or_404(Examination, pk=exam_id)
        records = self.filter_queryset(self.get_queryset()).filter(examination=examination)
        return Response(self.get_serializer(records, many=True).data)

    @action(detail=False, methods=['get'], url_path=r'exam/(?P<exam_id>\d+)/ranklist',
            permission_classes=[IsAuthenticated])
    def ranklist(self, request, exam_id=None):
        """Ranked results for an exam. ?include_roster=true adds unmarked students with zero totals."""
        examination = get_object_or_404(Examination.objects.select_related('classroom'), pk=exam_id)
        include_roster = request.query_params.get('include_roster', '').lower() in ('1', 'true', 'yes')
        try:
            rank_list = build_rank_list(examination, include_roster=include_roster)
        except AggregationError as e:
            logger.error(f"Cannot rank exam {examination.id}: {e}")
            return aggregation_error_response(e)
        return Response({
            'exam_id': examination.id,
            'exam_name': examination.name,
            'max_marks': examination.max_marks,
            'results': RankedResultSerializer(rank_list, many=True).data,
        })

    @action(detail=False, methods=['get'], url_path=r'exam/(?P<exam_id>\d+)/export')
    def export_csv(self, request, exam_id=None):
        """Export the rank list to CSV"""
        examination = get_object_or_404(Examination.objects.select_related('classroom'), pk=exam_id)
        try:
            rank_list = build_rank_list(examination)
        except AggregationError as e:
            return aggregation_error_response(e)

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(['Rank', 'Roll Number', 'Student Name', 'Total Obtained', 'Total Possible', 'Percentage', 'Grade', 'Medal'])
        for row in rank_list:
            writer.writerow([
                row.rank,
                row.roll_number,
                row.student_name,
                row.total_marks,
                row.total_max,
                row.percentage,
                row.grade,
                row.tier or '',
            ])
        # Encoded in one piece so the BOM is written once
        response = HttpResponse(buffer.getvalue(), content_type='text/csv; charset=utf-8-sig')
        response['Content-Disposition'] = f'attachment; filename="ranklist_exam_{examination.id}.csv"'
        return response

    @action(detail=False, methods=['get'], url_path=r'exam/(?P<exam_id>\d+)/my-marks',
            permission_classes=[IsAuthenticated, IsStudent])
    def my_marks(self, request, exam_id=None):
        """The logged in student's subject marks for one exam, with a summary"""
        examination = get_object_or_404(Examination, pk=exam_id)
        principal = Principal.from_request(request)
        records = self.get_queryset().filter(examination=examination, student_id=principal.student_id)
        try:
            rank_list = compute_rank_list(examination.max_marks, [
                MarkEntry(student_id=r.student_id, subject_id=r.subject_id, marks_scored=r.marks_scored)
                for r in records
            ])
        except AggregationError as e:
            return aggregation_error_response(e)

        summary = rank_list[0] if rank_list else None
        return Response({
            'exam_id': examination.id,
            'exam_name': examination.name,
            'marks': self.get_serializer(records, many=True).data,
            'total': str(summary.total_marks) if summary else '0',
            'max_total': str(summary.total_max) if summary else '0',
            'percentage': str(summary.percentage) if summary else '0.00',
            'grade': summary.grade if summary else None,
        })

    @action(detail=False, methods=['get'], url_path=r'student/(?P<student_id>\d+)',
            permission_classes=[IsAuthenticated])
    def by_student(self, request, student_id=None):
        principal = Principal.from_request(request)
        if not principal.is_teacher and principal.student_id != int(student_id):
            return Response({"detail": "You can only view your own marks"}, status=status.HTTP_403_FORBIDDEN)
        records = self.get_queryset().filter(student_id=student_id)
        exam_id = request.query_params.get('exam_id')
        if exam_id:
            records = records.filter(examination_id=exam_id)
        return Response(self.get_serializer(records, many=True).data)

    @action(detail=False, methods=['get'], url_path=r'performance/(?P<exam_id>\d+)')
    def performance(self, request, exam_id=None):
        """Per-subject average, highest and lowest marks for an exam"""
        examination = get_object_or_404(Examination, pk=exam_id)
        rows = (
            MarkRecord.objects.filter(examination=examination)
            .values('subject_id', 'subject__name')
            .annotate(
                students=Count('id'),
                average=Avg('marks_scored'),
                highest=Max('marks_scored'),
                lowest=Min('marks_scored'),
            )
            .order_by('subject__name')
        )
        subjects = []
        for row in rows:
            average = float(row['average'] or 0)
            subjects.append({
                'subject_id': row['subject_id'],
                'subject_name': row['subject__name'],
                'students': row['students'],
                'average': round(average, 2),
                'highest': row['highest'],
                'lowest': row['lowest'],
                'average_grade': grade_for(average / examination.max_marks * 100),
            })
        return Response({
            'exam_id': examination.id,
            'max_marks': examination.max_marks,
            'subjects': subjects,
        })
