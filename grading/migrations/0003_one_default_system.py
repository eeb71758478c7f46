from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("grading", "0002_seed_default_system"),
    ]

    operations = [
        migrations.AddConstraint(
            model_name="gradingsystem",
            constraint=models.UniqueConstraint(
                condition=models.Q(("is_default", True)),
                fields=("is_default",),
                name="grading_one_default_system",
            ),
        ),
    ]
