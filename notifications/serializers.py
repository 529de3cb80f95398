from rest_framework import serializers
from django.contrib.auth import get_user_model

from academics.models import ClassRoom
from .models import Notification

User = get_user_model()


class NotificationSerializer(serializers.ModelSerializer):
    created_by_name = serializers.SerializerMethodField()
    target_class_id = serializers.IntegerField(source='target_classroom_id', read_only=True)
    target_teacher_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Notification
        fields = ['id', 'type', 'content', 'status', 'created_by_name', 'target_class_id', 'target_teacher_id', 'created_at']

    def get_created_by_name(self, obj):
        if obj.created_by_student:
            return obj.created_by_student.full_name
        if obj.created_by_teacher:
            return obj.created_by_teacher.get_full_name() or obj.created_by_teacher.username
        return None


class AnnouncementSerializer(serializers.Serializer):
    content = serializers.CharField()
    target_class_id = serializers.PrimaryKeyRelatedField(
        queryset=ClassRoom.objects.all(), required=False, allow_null=True
    )


class LeaveRequestSerializer(serializers.Serializer):
    content = serializers.CharField()
    target_teacher_id = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(profile__role='teacher'), required=False, allow_null=True
    )


class LeaveStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[Notification.APPROVED, Notification.REJECTED])
