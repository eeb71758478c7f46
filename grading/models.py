from django.db import models
# Create your models here.

class GradingSystem(models.Model):
    name = models.CharField(max_length=64, unique=True)
    # Un seul système par défaut: grading.services (verrou + transaction), contrainte partielle en filet
    is_default = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-is_default", "name"]
        constraints = [
            models.UniqueConstraint(
                fields=["is_default"],
                condition=models.Q(is_default=True),
                name="grading_one_default_system",
            ),
        ]

    def __str__(self):
        return f"{self.name}{' (default)' if self.is_default else ''}"

class GradeBand(models.Model):
    grading_system = models.ForeignKey(GradingSystem, on_delete=models.CASCADE, related_name="bands")
    grade_name = models.CharField(max_length=8)  # A+, A, B, ...
    min_percentage = models.DecimalField(max_digits=5, decimal_places=2)  # inclusif
    max_percentage = models.DecimalField(max_digits=5, decimal_places=2)  # inclusif
    points = models.DecimalField(max_digits=4, decimal_places=2, default=0)

    class Meta:
        ordering = ["-min_percentage"]

    def __str__(self):
        return f"{self.grade_name}: {self.min_percentage}-{self.max_percentage}"
