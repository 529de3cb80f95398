from rest_framework import serializers
from django.contrib.auth import get_user_model

from .models import ClassRoom, StudentProfile, Subject, TimetableEntry

User = get_user_model()


class ClassRoomSerializer(serializers.ModelSerializer):
    class_teacher_id = serializers.PrimaryKeyRelatedField(
        source='class_teacher', queryset=User.objects.filter(profile__role='teacher'),
        allow_null=True, required=False
    )
    class_teacher_name = serializers.SerializerMethodField()
    student_count = serializers.SerializerMethodField()

    class Meta:
        model = ClassRoom
        fields = ['id', 'name', 'section', 'class_teacher_id', 'class_teacher_name', 'student_count', 'created_at']
        read_only_fields = ['created_at']

    def get_class_teacher_name(self, obj):
        if obj.class_teacher:
            return obj.class_teacher.get_full_name() or obj.class_teacher.username
        return None

    def get_student_count(self, obj):
        annotated = getattr(obj, 'student_count', None)
        if annotated is not None:
            return annotated
        return obj.students.count()


class StudentProfileSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)
    full_name = serializers.CharField(source='user.full_name', required=False)
    classroom_id = serializers.PrimaryKeyRelatedField(
        source='classroom', queryset=ClassRoom.objects.all(), allow_null=True, required=False
    )
    class_name = serializers.SerializerMethodField()
    section_name = serializers.SerializerMethodField()

    class Meta:
        model = StudentProfile
        fields = ['id', 'username', 'full_name', 'roll_number', 'classroom_id', 'class_name', 'section_name']

    def get_class_name(self, obj):
        return obj.classroom.name if obj.classroom else None

    def get_section_name(self, obj):
        return obj.classroom.section if obj.classroom else None

    def update(self, instance, validated_data):
        user_data = validated_data.pop('user', {})
        if 'full_name' in user_data:
            instance.user.full_name = user_data['full_name']
            instance.user.save(update_fields=['full_name'])
        return super().update(instance, validated_data)


class ClassRoomDetailSerializer(ClassRoomSerializer):
    students = serializers.SerializerMethodField()

    class Meta(ClassRoomSerializer.Meta):
        fields = ClassRoomSerializer.Meta.fields + ['students']

    def get_students(self, obj):
        students = obj.students.select_related('user').order_by('roll_number')
        return StudentProfileSerializer(students, many=True).data


class AssignStudentsSerializer(serializers.Serializer):
    class_id = serializers.IntegerField()
    student_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)


class SubjectSerializer(serializers.ModelSerializer):
    classroom_id = serializers.PrimaryKeyRelatedField(source='classroom', queryset=ClassRoom.objects.all())
    teacher_id = serializers.PrimaryKeyRelatedField(
        source='teacher', queryset=User.objects.filter(profile__role='teacher'),
        allow_null=True, required=False
    )
    teacher_name = serializers.SerializerMethodField()

    class Meta:
        model = Subject
        fields = ['id', 'name', 'classroom_id', 'teacher_id', 'teacher_name']

    def get_teacher_name(self, obj):
        if obj.teacher:
            return obj.teacher.get_full_name() or obj.teacher.username
        return None


class TimetableEntrySerializer(serializers.ModelSerializer):
    classroom_id = serializers.PrimaryKeyRelatedField(source='classroom', queryset=ClassRoom.objects.all())
    subject_id = serializers.PrimaryKeyRelatedField(source='subject', queryset=Subject.objects.all())
    subject_name = serializers.CharField(source='subject.name', read_only=True)

    class Meta:
        model = TimetableEntry
        fields = ['id', 'classroom_id', 'subject_id', 'subject_name', 'day_of_week', 'period_number', 'start_time', 'end_time']

    def validate(self, data):
        start = data.get('start_time', getattr(self.instance, 'start_time', None))
        end = data.get('end_time', getattr(self.instance, 'end_time', None))
        if start and end and end <= start:
            raise serializers.ValidationError({'end_time': 'End time must be after start time.'})
        classroom = data.get('classroom', getattr(self.instance, 'classroom', None))
        subject = data.get('subject', getattr(self.instance, 'subject', None))
        if classroom and subject and subject.classroom_id != classroom.id:
            raise serializers.ValidationError({'subject_id': f'Subject does not belong to class {classroom}'})
        return data
