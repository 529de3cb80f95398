from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ExaminationViewSet, MarkRecordViewSet

router = DefaultRouter(trailing_slash=False)
router.register('exams', ExaminationViewSet)
router.register('marks', MarkRecordViewSet)

urlpatterns = [
    path('', include(router.urls)),
]
