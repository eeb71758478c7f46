from django.db import models
from core.models import Classroom
# Create your models here.

class Student(models.Model):
    SEX_CHOICES = (("M","M"),("F","F"))
    matricule = models.CharField(max_length=32, unique=True)
    last_name = models.CharField(max_length=64)
    first_name = models.CharField(max_length=64)
    sex = models.CharField(max_length=1, choices=SEX_CHOICES, blank=True)
    dob = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ["last_name","first_name"]

    def __str__(self):
        return f"{self.matricule} - {self.last_name} {self.first_name}"

    @property
    def full_name(self):
        return f"{self.last_name} {self.first_name}"

class Enrollment(models.Model):
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="enrollments")
    classroom = models.ForeignKey(Classroom, on_delete=models.PROTECT, related_name="enrollments")
    roll_number = models.PositiveIntegerField(default=0)
    date_enrolled = models.DateField(auto_now_add=True)
    active = models.BooleanField(default=True)

    class Meta:
        unique_together = (("student","classroom"),)
        ordering = ["classroom","roll_number","student__last_name","student__first_name"]

    def __str__(self):
        return f"{self.student} @ {self.classroom}"
