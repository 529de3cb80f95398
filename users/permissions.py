from rest_framework import permissions

from .principal import Principal


class IsTeacher(permissions.BasePermission):
    message = 'Only teachers can perform this action.'

    def has_permission(self, request, view):
        principal = Principal.from_request(request)
        return bool(principal and principal.is_teacher)


class IsStudent(permissions.BasePermission):
    message = 'Only students can perform this action.'

    def has_permission(self, request, view):
        principal = Principal.from_request(request)
        return bool(principal and principal.is_student and principal.student_id)


class TeacherWriteOrReadOnly(permissions.BasePermission):
    """
    Role based permission.
    - Read allowed to any authenticated user
    - Create/Update/Delete allowed to teachers only
    """

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        principal = Principal.from_request(request)
        return bool(principal and principal.is_teacher)
