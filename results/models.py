from django.db import models
from enrollments.models import Enrollment
from exams.models import Exam
from grading.models import GradingSystem

# Create your models here.
class Result(models.Model):
    """
    Agrégat persisté d'un élève pour un examen.
    Référence le système de notation utilisé: bloque sa suppression (PROTECT).
    """
    enrollment = models.ForeignKey(Enrollment, on_delete=models.CASCADE, related_name="results")
    exam = models.ForeignKey(Exam, on_delete=models.CASCADE, related_name="results")
    total_marks = models.DecimalField(max_digits=8, decimal_places=2, default=0)
    total_full_marks = models.DecimalField(max_digits=8, decimal_places=2, default=0)
    percentage = models.DecimalField(max_digits=5, decimal_places=2, default=0)  # moyenne des % par matière
    gpa = models.DecimalField(max_digits=4, decimal_places=2, null=True, blank=True)
    final_grade = models.CharField(max_length=8, blank=True)
    grading_system = models.ForeignKey(GradingSystem, on_delete=models.PROTECT, related_name="results")
    rank = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = (("enrollment", "exam"),)
        ordering = ["exam", "rank", "-percentage"]

    def __str__(self):
        return f"{self.enrollment.student} - {self.exam}: {self.percentage}% ({self.final_grade})"
