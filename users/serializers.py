from rest_framework import serializers
from django.contrib.auth import get_user_model

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    role = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'full_name', 'role']
        read_only_fields = ['id']

    def get_role(self, obj):
        profile = getattr(obj, 'profile', None)
        return profile.role if profile else None


class RegistrationSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=100)
    password = serializers.CharField(write_only=True)
    full_name = serializers.CharField(max_length=255)

    def validate_username(self, value):
        return value.strip()


class StudentRegistrationSerializer(RegistrationSerializer):
    roll_no = serializers.CharField(max_length=50)


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(write_only=True)
