import logging

from django.contrib.auth import authenticate, get_user_model
from django.db import transaction
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from academics.models import StudentProfile
from .models import Profile
from .principal import Principal
from .serializers import (
    LoginSerializer,
    RegistrationSerializer,
    StudentRegistrationSerializer,
    UserSerializer,
)

User = get_user_model()
logger = logging.getLogger(__name__)


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {'token': str(refresh.access_token), 'refresh': str(refresh)}


class RegisterView(APIView):
    """Create a user with a fixed role and return a token pair"""
    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    serializer_class = RegistrationSerializer
    role = None

    def post(self, request):
        serializer = self.serializer_class(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"detail": "All fields are required", "errors": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        data = serializer.validated_data

        if User.objects.filter(username=data['username']).exists():
            return Response({"detail": "Username already exists"}, status=status.HTTP_409_CONFLICT)

        with transaction.atomic():
            user = User.objects.create_user(
                username=data['username'],
                password=data['password'],
                full_name=data['full_name'],
            )
            Profile.objects.create(user=user, role=self.role)
            self.after_create(user, data)

        logger.info(f"Registered {self.role} {user.username}")
        return Response({
            "message": f"{self.role.title()} registered successfully",
            "user": UserSerializer(user).data,
            **_tokens_for(user),
        }, status=status.HTTP_201_CREATED)

    def after_create(self, user, data):
        pass


class TeacherRegisterView(RegisterView):
    role = Profile.TEACHER


class StudentRegisterView(RegisterView):
    serializer_class = StudentRegistrationSerializer
    role = Profile.STUDENT

    def after_create(self, user, data):
        # New students start without a class; a teacher assigns one later
        StudentProfile.objects.create(user=user, roll_number=data['roll_no'])


class LoginView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    role = None

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"detail": "Username and password are required"},
                status=status.HTTP_400_BAD_REQUEST
            )

        user = authenticate(
            request,
            username=serializer.validated_data['username'],
            password=serializer.validated_data['password'],
        )
        principal = Principal.from_user(user) if user else None
        if principal is None or principal.role != self.role:
            logger.warning(f"Failed {self.role} login for {serializer.validated_data['username']}")
            return Response({"detail": "Invalid credentials"}, status=status.HTTP_401_UNAUTHORIZED)

        return Response({
            "message": "Login successful",
            "user": _describe_user(user),
            **_tokens_for(user),
        })


class TeacherLoginView(LoginView):
    role = Profile.TEACHER


class StudentLoginView(LoginView):
    role = Profile.STUDENT


class CurrentUserView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        principal = Principal.from_request(request)
        if principal.role is None:
            return Response({"detail": "Invalid user role"}, status=status.HTTP_400_BAD_REQUEST)
        return Response(_describe_user(request.user))


def _describe_user(user):
    principal = Principal.from_user(user)
    data = {
        'user_id': user.id,
        'username': user.username,
        'full_name': user.get_full_name(),
        'role': principal.role,
    }
    if principal.is_student:
        student = getattr(user, 'student_profile', None)
        classroom = student.classroom if student else None
        data.update({
            'student_id': student.id if student else None,
            'roll_no': student.roll_number if student else None,
            'class_id': classroom.id if classroom else None,
            'class_name': classroom.name if classroom else None,
            'section_name': classroom.section if classroom else None,
        })
    return data
