# exams/permissions.py
from rest_framework.permissions import BasePermission

STAFF_ROLES = {"TEACHER", "ADMIN"}


class IsTeacherOrAdmin(BasePermission):
    """
    Notes et carnet: réservés au personnel enseignant et aux admins,
    en lecture comme en écriture.
    Le périmètre par classe est vérifié dans la vue (exams.utils).
    """
    message = "Teacher or admin role required."

    def has_permission(self, request, view):
        user = request.user
        if not getattr(user, "is_authenticated", False):
            return False
        return user.is_superuser or getattr(user, "role", None) in STAFF_ROLES
