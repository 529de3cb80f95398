from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import AttendanceRecordViewSet

router = DefaultRouter(trailing_slash=False)
router.register('attendance', AttendanceRecordViewSet)

urlpatterns = [path('', include(router.urls))]
