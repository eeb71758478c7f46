# exams/utils.py
from accounts.models import TeacherAssignment, User


def _classroom_scope(user, classroom_id, need_edit):
    """
    ADMIN (ou superuser): toutes les classes.
    TEACHER: seulement les classes assignées (avec can_edit pour écrire).
    Autres rôles: rien.
    """
    if not getattr(user, "is_authenticated", False):
        return False
    if user.is_superuser or user.role == User.Role.ADMIN:
        return True
    if user.role != User.Role.TEACHER:
        return False

    qs = TeacherAssignment.objects.filter(teacher=user, classroom_id=classroom_id)
    if need_edit:
        qs = qs.filter(can_edit=True)
    return qs.exists()


def teacher_can_edit(user, classroom_id: int) -> bool:
    return _classroom_scope(user, classroom_id, need_edit=True)


def teacher_can_view(user, classroom_id: int) -> bool:
    return _classroom_scope(user, classroom_id, need_edit=False)
