from django.contrib import admin
from django.urls import path, include
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


@api_view(['GET'])
@permission_classes([AllowAny])
def health(request):
    return Response({'status': 'ok'})


urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/health', health, name='health'),
    path('api/v1/auth/', include('users.urls')),
    path('api/v1/', include('academics.urls')),
    path('api/v1/', include('results.urls')),
    path('api/v1/', include('attendance.urls')),
    path('api/v1/', include('notifications.urls')),
]
