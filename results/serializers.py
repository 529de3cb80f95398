from rest_framework import serializers

from academics.models import ClassRoom, StudentProfile, Subject
from .models import Examination, MarkRecord


class ExaminationSerializer(serializers.ModelSerializer):
    classroom_id = serializers.PrimaryKeyRelatedField(source='classroom', queryset=ClassRoom.objects.all())
    class_name = serializers.CharField(source='classroom.name', read_only=True)
    section_name = serializers.CharField(source='classroom.section', read_only=True)
    max_marks = serializers.IntegerField(min_value=1)

    class Meta:
        model = Examination
        fields = ['id', 'name', 'classroom_id', 'class_name', 'section_name', 'max_marks', 'grade_scale', 'created_at']
        read_only_fields = ['created_at']


class MarkRecordSerializer(serializers.ModelSerializer):
    exam_id = serializers.IntegerField(source='examination_id', read_only=True)
    exam_name = serializers.CharField(source='examination.name', read_only=True)
    student_id = serializers.IntegerField(read_only=True)
    student_name = serializers.CharField(source='student.full_name', read_only=True)
    roll_number = serializers.CharField(source='student.roll_number', read_only=True)
    subject_id = serializers.IntegerField(read_only=True)
    subject_name = serializers.CharField(source='subject.name', read_only=True)
    max_marks = serializers.IntegerField(source='examination.max_marks', read_only=True)

    class Meta:
        model = MarkRecord
        fields = ['id', 'exam_id', 'exam_name', 'student_id', 'student_name', 'roll_number',
                  'subject_id', 'subject_name', 'marks_scored', 'max_marks', 'updated_at']


class MarkEntrySerializer(serializers.Serializer):
    """Validates one submitted mark before it is written"""
    exam_id = serializers.IntegerField()
    student_id = serializers.IntegerField()
    subject_id = serializers.IntegerField()
    marks_scored = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=0)

    def validate(self, data):
        examination = self.context.get('examination')
        if examination is None or examination.id != data['exam_id']:
            try:
                examination = Examination.objects.select_related('classroom').get(pk=data['exam_id'])
            except Examination.DoesNotExist:
                raise serializers.ValidationError({'exam_id': f"Exam with id {data['exam_id']} not found"})

        try:
            student = StudentProfile.objects.get(pk=data['student_id'])
        except StudentProfile.DoesNotExist:
            raise serializers.ValidationError({'student_id': f"Student with id {data['student_id']} not found"})
        if student.classroom_id != examination.classroom_id:
            raise serializers.ValidationError({'student_id': f"Student does not belong to class {examination.classroom}"})

        try:
            subject = Subject.objects.get(pk=data['subject_id'])
        except Subject.DoesNotExist:
            raise serializers.ValidationError({'subject_id': f"Subject with id {data['subject_id']} not found"})
        if subject.classroom_id != examination.classroom_id:
            raise serializers.ValidationError({'subject_id': f"Subject does not belong to class {examination.classroom}"})

        if data['marks_scored'] > examination.max_marks:
            raise serializers.ValidationError({'marks_scored': f"Marks cannot exceed {examination.max_marks}"})

        data['examination'] = examination
        data['student'] = student
        data['subject'] = subject
        return data

    def save(self):
        data = self.validated_data
        return MarkRecord.objects.update_or_create(
            examination=data['examination'],
            student=data['student'],
            subject=data['subject'],
            defaults={'marks_scored': data['marks_scored']},
        )


class BulkMarksSerializer(serializers.Serializer):
    exam_id = serializers.IntegerField()
    marks = serializers.ListField(child=serializers.DictField(), allow_empty=False)


class RankedResultSerializer(serializers.Serializer):
    """Serializer for a computed rank list row"""
    student_id = serializers.IntegerField()
    student_name = serializers.CharField()
    roll_number = serializers.CharField()
    total_marks = serializers.DecimalField(max_digits=9, decimal_places=2)
    total_max = serializers.DecimalField(max_digits=9, decimal_places=2)
    percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    grade = serializers.CharField()
    rank = serializers.IntegerField()
    tier = serializers.CharField(allow_null=True)
    is_tied = serializers.BooleanField()
    subject_count = serializers.IntegerField()
