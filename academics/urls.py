from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ClassRoomViewSet, StudentProfileViewSet, SubjectViewSet, TimetableEntryViewSet

router = DefaultRouter(trailing_slash=False)
router.register('classes', ClassRoomViewSet)
router.register('students', StudentProfileViewSet)
router.register('subjects', SubjectViewSet)
router.register('timetable', TimetableEntryViewSet)

urlpatterns = [
    path('', include(router.urls)),
]
