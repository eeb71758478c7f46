import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("core", "0001_initial"),
        ("enrollments", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Exam",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("year", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="exams", to="core.academicyear")),
            ],
            options={
                "ordering": ["year__name", "created_at"],
                "unique_together": {("year", "name")},
            },
        ),
        migrations.CreateModel(
            name="ExamSchedule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("exam_date", models.DateField(blank=True, null=True)),
                ("full_marks", models.PositiveIntegerField(default=100, validators=[django.core.validators.MinValueValidator(1)])),
                ("pass_marks", models.PositiveIntegerField(blank=True, null=True)),
                ("classroom", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="exam_schedules", to="core.classroom")),
                ("exam", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="schedules", to="exams.exam")),
                ("subject", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="exam_schedules", to="core.subject")),
            ],
            options={
                "ordering": ["exam", "classroom", "subject__name"],
                "unique_together": {("exam", "classroom", "subject")},
            },
        ),
        migrations.CreateModel(
            name="Mark",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("marks_obtained", models.DecimalField(decimal_places=2, max_digits=6, validators=[django.core.validators.MinValueValidator(0)])),
                ("remarks", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("enrollment", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="marks", to="enrollments.enrollment")),
                ("schedule", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="marks", to="exams.examschedule")),
            ],
            options={
                "ordering": ["schedule", "enrollment"],
                "unique_together": {("enrollment", "schedule")},
            },
        ),
    ]
