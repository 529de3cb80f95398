from rest_framework import serializers

from .models import AttendanceRecord


class AttendanceRecordSerializer(serializers.ModelSerializer):
    student_id = serializers.IntegerField(read_only=True)
    class_id = serializers.IntegerField(source='classroom_id', read_only=True)
    student_name = serializers.SerializerMethodField()
    roll_number = serializers.CharField(source='student.roll_number', read_only=True)

    class Meta:
        model = AttendanceRecord
        fields = ['id', 'student_id', 'student_name', 'roll_number', 'class_id', 'date', 'status']

    def get_student_name(self, obj):
        return obj.student.full_name


class AttendanceEntrySerializer(serializers.Serializer):
    student_id = serializers.IntegerField()
    status = serializers.ChoiceField(choices=AttendanceRecord.STATUS_CHOICES)


class MarkAttendanceSerializer(serializers.Serializer):
    class_id = serializers.IntegerField()
    date = serializers.DateField()
    attendance_records = AttendanceEntrySerializer(many=True, allow_empty=False)


class DateRangeSerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, data):
        start, end = data.get('start_date'), data.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError('start_date must not be after end_date')
        return data


class AttendanceSummarySerializer(serializers.Serializer):
    """Serializer for a student's attendance summary"""
    total = serializers.IntegerField()
    present = serializers.IntegerField()
    absent = serializers.IntegerField()
    percentage = serializers.IntegerField()


class StudentAttendanceStatisticsSerializer(serializers.Serializer):
    """Serializer for one row of a class attendance report"""
    student_id = serializers.IntegerField()
    student_name = serializers.CharField()
    roll_number = serializers.CharField()
    total_days = serializers.IntegerField()
    present_days = serializers.IntegerField()
    absent_days = serializers.IntegerField()
    attendance_percentage = serializers.IntegerField()
