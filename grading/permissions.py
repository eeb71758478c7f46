# grading/permissions.py
from rest_framework.permissions import BasePermission, SAFE_METHODS

from exams.permissions import STAFF_ROLES

ADMIN_ROLES = {"ADMIN"}

class IsAdminOrReadOnly(BasePermission):
    """
    - Lecture: personnel (TEACHER, ADMIN) ou superuser; élèves et parents exclus
    - Écriture: rôle ADMIN (ou superuser)
    """
    def has_permission(self, request, view):
        user = request.user
        if not getattr(user, "is_authenticated", False):
            return False
        if user.is_superuser:
            return True
        role = getattr(user, "role", None)
        if request.method in SAFE_METHODS:
            return role in STAFF_ROLES
        return role in ADMIN_ROLES
