import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("enrollments", "0001_initial"),
        ("exams", "0001_initial"),
        ("grading", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Result",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("total_marks", models.DecimalField(decimal_places=2, default=0, max_digits=8)),
                ("total_full_marks", models.DecimalField(decimal_places=2, default=0, max_digits=8)),
                ("percentage", models.DecimalField(decimal_places=2, default=0, max_digits=5)),
                ("gpa", models.DecimalField(blank=True, decimal_places=2, max_digits=4, null=True)),
                ("final_grade", models.CharField(blank=True, max_length=8)),
                ("rank", models.PositiveIntegerField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("enrollment", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="results", to="enrollments.enrollment")),
                ("exam", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="results", to="exams.exam")),
                ("grading_system", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="results", to="grading.gradingsystem")),
            ],
            options={
                "ordering": ["exam", "rank", "-percentage"],
                "unique_together": {("enrollment", "exam")},
            },
        ),
    ]
