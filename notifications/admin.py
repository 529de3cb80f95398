from django.contrib import admin
from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['id', 'type', 'status', 'target_classroom', 'target_teacher', 'created_at']
    list_filter = ['type', 'status']
    search_fields = ['content']
