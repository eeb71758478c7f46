from django.db import models
from django.contrib.auth.models import AbstractUser
from core.models import Classroom
# Create your models here.

class User(AbstractUser):
    class Role(models.TextChoices):
        ADMIN = "ADMIN"
        TEACHER = "TEACHER"
        STUDENT = "STUDENT"
        GUARDIAN = "GUARDIAN"
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.TEACHER)

class TeacherAssignment(models.Model):
    """Classe confiée à un enseignant; can_edit=False -> carnet en lecture seule."""
    teacher = models.ForeignKey(User, on_delete=models.CASCADE, related_name="class_assignments",
                                limit_choices_to={"role": User.Role.TEACHER})
    classroom = models.ForeignKey(Classroom, on_delete=models.CASCADE, related_name="teacher_assignments")
    can_edit = models.BooleanField(default=True)

    class Meta:
        unique_together = (("teacher", "classroom"),)

    def __str__(self):
        mode = "edit" if self.can_edit else "read"
        return f"{self.teacher.username} @ {self.classroom} [{mode}]"
