from django.db import models

# Create your models here.
class AcademicYear(models.Model):
    """
    Exemple de nom: '2025/2026'
    """
    name = models.CharField(max_length=9, unique=True)
    start_date = models.DateField(null=True, blank=True)
    end_date   = models.DateField(null=True, blank=True)
    is_current = models.BooleanField(default=False)

    class Meta:
        ordering = ["-name"]

    def __str__(self):
        return self.name

class Classroom(models.Model):
    year    = models.ForeignKey(AcademicYear, on_delete=models.PROTECT, related_name="classes")
    name    = models.CharField(max_length=32)  # 'Grade 5', 'Form 2B', etc.
    section = models.CharField(max_length=8, blank=True)

    class Meta:
        unique_together = (("year", "name", "section"),)
        ordering = ["year", "name", "section"]

    def __str__(self):
        label = f"{self.name} {self.section}".strip()
        return f"{label} ({self.year})"

class Subject(models.Model):
    code = models.CharField(max_length=16, unique=True)  # 'MATH', 'ENG', ...
    name = models.CharField(max_length=64)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
