from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Profile, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['id', 'username', 'full_name', 'role', 'is_staff']
    search_fields = ['username', 'full_name']
    fieldsets = BaseUserAdmin.fieldsets + (
        ('School', {'fields': ('full_name',)}),
    )

    def role(self, obj):
        profile = getattr(obj, 'profile', None)
        return profile.role if profile else '-'
    role.short_description = 'Role'


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'role']
    list_filter = ['role']
    search_fields = ['user__username', 'user__full_name']
