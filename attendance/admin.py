from django.contrib import admin
from .models import AttendanceRecord

@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    list_display = ['id', 'student', 'classroom', 'date', 'status']
    list_filter = ['date', 'status', 'classroom']
