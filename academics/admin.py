from django.contrib import admin

from .models import ClassRoom, StudentProfile, Subject, TimetableEntry


@admin.register(ClassRoom)
class ClassRoomAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'section', 'class_teacher', 'student_count']
    search_fields = ['name', 'section']

    def student_count(self, obj):
        return obj.students.count()
    student_count.short_description = 'Students'


@admin.register(StudentProfile)
class StudentProfileAdmin(admin.ModelAdmin):
    list_display = ['id', 'student_name', 'roll_number', 'classroom']
    list_filter = ['classroom']
    search_fields = ['user__username', 'user__full_name', 'roll_number']

    def student_name(self, obj):
        return obj.full_name
    student_name.short_description = 'Student'


@admin.register(Subject)
class SubjectAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'classroom', 'teacher']
    list_filter = ['classroom']
    search_fields = ['name']


@admin.register(TimetableEntry)
class TimetableEntryAdmin(admin.ModelAdmin):
    list_display = ['id', 'classroom', 'day_of_week', 'period_number', 'subject', 'start_time', 'end_time']
    list_filter = ['classroom', 'day_of_week']
