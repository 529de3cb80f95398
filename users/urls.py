from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import (
    CurrentUserView,
    StudentLoginView,
    StudentRegisterView,
    TeacherLoginView,
    TeacherRegisterView,
)

urlpatterns = [
    path('teacher/register', TeacherRegisterView.as_view(), name='teacher-register'),
    path('teacher/login', TeacherLoginView.as_view(), name='teacher-login'),
    path('student/register', StudentRegisterView.as_view(), name='student-register'),
    path('student/login', StudentLoginView.as_view(), name='student-login'),
    path('me', CurrentUserView.as_view(), name='current-user'),
    path('token/refresh', TokenRefreshView.as_view(), name='token-refresh'),
]
