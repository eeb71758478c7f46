import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("core", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Student",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("matricule", models.CharField(max_length=32, unique=True)),
                ("last_name", models.CharField(max_length=64)),
                ("first_name", models.CharField(max_length=64)),
                ("sex", models.CharField(blank=True, choices=[("M", "M"), ("F", "F")], max_length=1)),
                ("dob", models.DateField(blank=True, null=True)),
            ],
            options={"ordering": ["last_name", "first_name"]},
        ),
        migrations.CreateModel(
            name="Enrollment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("roll_number", models.PositiveIntegerField(default=0)),
                ("date_enrolled", models.DateField(auto_now_add=True)),
                ("active", models.BooleanField(default=True)),
                ("classroom", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="enrollments", to="core.classroom")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="enrollments", to="enrollments.student")),
            ],
            options={
                "ordering": ["classroom", "roll_number", "student__last_name", "student__first_name"],
                "unique_together": {("student", "classroom")},
            },
        ),
    ]
