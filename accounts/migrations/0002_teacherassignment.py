import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("accounts", "0001_initial"),
        ("core", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="TeacherAssignment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("can_edit", models.BooleanField(default=True)),
                ("classroom", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="teacher_assignments", to="core.classroom")),
                ("teacher", models.ForeignKey(limit_choices_to={"role": "TEACHER"}, on_delete=django.db.models.deletion.CASCADE, related_name="class_assignments", to=settings.AUTH_USER_MODEL)),
            ],
            options={"unique_together": {("teacher", "classroom")}},
        ),
    ]
