from django.db import models
from django.core.validators import MinValueValidator
from core.models import AcademicYear, Classroom, Subject
from enrollments.models import Enrollment

# Create your models here.

class Exam(models.Model):
    name = models.CharField(max_length=64)  # 'First Terminal', 'Final', ...
    year = models.ForeignKey(AcademicYear, on_delete=models.PROTECT, related_name="exams")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = (("year", "name"),)
        ordering = ["year__name", "created_at"]

    def __str__(self):
        return f"{self.name} ({self.year.name})"

class ExamSchedule(models.Model):
    """Une matière d'un examen pour une classe; porte le barème (full_marks)."""
    exam = models.ForeignKey(Exam, on_delete=models.CASCADE, related_name="schedules")
    classroom = models.ForeignKey(Classroom, on_delete=models.CASCADE, related_name="exam_schedules")
    subject = models.ForeignKey(Subject, on_delete=models.PROTECT, related_name="exam_schedules")
    exam_date = models.DateField(null=True, blank=True)
    full_marks = models.PositiveIntegerField(default=100, validators=[MinValueValidator(1)])
    pass_marks = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        unique_together = (("exam", "classroom", "subject"),)
        ordering = ["exam", "classroom", "subject__name"]

    def __str__(self):
        return f"{self.exam} | {self.classroom} | {self.subject.name} /{self.full_marks}"

class Mark(models.Model):
    enrollment = models.ForeignKey(Enrollment, on_delete=models.CASCADE, related_name="marks")
    schedule = models.ForeignKey(ExamSchedule, on_delete=models.CASCADE, related_name="marks")
    # 0 <= marks_obtained <= schedule.full_marks (exams.validators.clean_marks)
    marks_obtained = models.DecimalField(max_digits=6, decimal_places=2, validators=[MinValueValidator(0)])
    remarks = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = (("enrollment", "schedule"),)
        ordering = ["schedule", "enrollment"]

    def __str__(self):
        return f"{self.enrollment} → {self.schedule}: {self.marks_obtained}"
