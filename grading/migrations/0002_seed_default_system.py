from django.db import migrations

def seed(apps, schema_editor):
    GradingSystem = apps.get_model("grading", "GradingSystem")
    GradeBand = apps.get_model("grading", "GradeBand")

    # Pas de nouveau défaut si un autre système l'est déjà
    has_default = GradingSystem.objects.filter(is_default=True).exists()
    system, created = GradingSystem.objects.get_or_create(
        name="Default A-F", defaults={"is_default": not has_default}
    )
    if not created:
        return

    bands = [
        ("A", 80, 100, 4.0),
        ("B", 60, 79, 3.0),
        ("C", 40, 59, 2.0),
        ("F", 0, 39, 0.0),
    ]
    for name, lo, hi, points in bands:
        GradeBand.objects.create(
            grading_system=system, grade_name=name,
            min_percentage=lo, max_percentage=hi, points=points,
        )

def unseed(apps, schema_editor):
    GradingSystem = apps.get_model("grading", "GradingSystem")
    GradingSystem.objects.filter(name="Default A-F", results__isnull=True).delete()

class Migration(migrations.Migration):

    dependencies = [
        ("grading", "0001_initial"),
        ("results", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed, reverse_code=unseed),
    ]
