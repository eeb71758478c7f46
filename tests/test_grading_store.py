# tests/test_grading_store.py

from decimal import Decimal
from unittest import mock

import pytest
from django.db import DatabaseError, IntegrityError, transaction

from grading import services
from grading.exceptions import (
    ConflictError, NotFoundError, ReferentialIntegrityError, StorageError, ValidationError,
)
from grading.models import GradeBand, GradingSystem
from results.models import Result

pytestmark = pytest.mark.django_db


def test_create_returns_bands_sorted_desc(example_bands):
    system = services.create_grading_system("  Standard  ", example_bands)
    assert system.name == "Standard"
    assert system.is_default is False
    assert [b.grade_name for b in system.bands.all()] == ["A", "B", "C", "F"]


def test_create_default_clears_previous_default(example_bands):
    first = services.create_grading_system("First", example_bands, is_default=True)
    second = services.create_grading_system("Second", example_bands, is_default=True)

    assert list(GradingSystem.objects.filter(is_default=True)) == [second]
    first.refresh_from_db()
    assert first.is_default is False


def test_second_default_row_is_rejected_by_constraint(default_system):
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            GradingSystem.objects.create(name="Rogue", is_default=True)
    assert list(GradingSystem.objects.filter(is_default=True)) == [default_system]


def test_create_default_racing_another_default_conflicts(default_system, example_bands):
    # l'autre transaction a posé son défaut après notre nettoyage
    with mock.patch("grading.services._clear_defaults", return_value=[]):
        with pytest.raises(ConflictError) as exc:
            services.create_grading_system("Late", example_bands, is_default=True)
    assert "concurrently" in str(exc.value.detail)
    assert list(GradingSystem.objects.filter(is_default=True)) == [default_system]
    assert not GradingSystem.objects.filter(name="Late").exists()


def test_default_changes_take_the_default_lock(default_system, example_bands):
    with mock.patch("grading.services._lock_default_slot") as lock:
        services.create_grading_system("Plain", example_bands)
        assert lock.call_count == 0
        other = services.create_grading_system("Other", example_bands, is_default=True)
        assert lock.call_count >= 1
        lock.reset_mock()
        services.update_grading_system(default_system.pk, is_default=True)
        assert lock.call_count >= 1
    assert list(GradingSystem.objects.filter(is_default=True)) == [default_system]
    other.refresh_from_db()
    assert other.is_default is False


def test_create_rejects_empty_bands_and_name(example_bands):
    with pytest.raises(ValidationError):
        services.create_grading_system("Empty", [])
    with pytest.raises(ValidationError):
        services.create_grading_system("   ", example_bands)
    assert GradingSystem.objects.count() == 0


def test_create_rejects_overlap_before_any_write(example_bands):
    bad = example_bands + [{"grade_name": "B+", "min_percentage": 70, "max_percentage": 85, "points": 3.5}]
    with pytest.raises(ValidationError):
        services.create_grading_system("Overlap", bad)
    assert GradingSystem.objects.count() == 0
    assert GradeBand.objects.count() == 0


def test_create_duplicate_name_conflicts(example_bands):
    services.create_grading_system("Standard", example_bands)
    with pytest.raises(ConflictError):
        services.create_grading_system("Standard", example_bands)
    assert GradingSystem.objects.count() == 1


def test_create_rolls_back_when_band_insert_fails(example_bands):
    with mock.patch.object(GradeBand.objects, "bulk_create", side_effect=DatabaseError("disk full")):
        with pytest.raises(StorageError) as exc:
            services.create_grading_system("Broken", example_bands)
    assert str(exc.value.detail) == "Operation failed."
    assert GradingSystem.objects.count() == 0


def test_get_active_prefers_explicit_then_default(example_bands):
    default = services.create_grading_system("Default", example_bands, is_default=True)
    other = services.create_grading_system("Other", example_bands)

    assert services.get_active_grading_system().pk == default.pk
    assert services.get_active_grading_system(other.pk).pk == other.pk


def test_get_active_without_default_is_not_found(example_bands):
    services.create_grading_system("Not default", example_bands)
    with pytest.raises(NotFoundError):
        services.get_active_grading_system()


def test_get_unknown_is_not_found():
    with pytest.raises(NotFoundError):
        services.get_grading_system(999)


def test_list_puts_default_first(example_bands):
    services.create_grading_system("Alpha", example_bands)
    services.create_grading_system("Zulu", example_bands, is_default=True)
    assert [s.name for s in services.list_grading_systems()] == ["Zulu", "Alpha"]


# --- update ---


def test_update_replaces_whole_band_set(default_system):
    new_bands = [
        {"grade_name": "PASS", "min_percentage": 50, "max_percentage": 100, "points": 1},
        {"grade_name": "FAIL", "min_percentage": 0, "max_percentage": 49.99, "points": 0},
    ]
    system = services.update_grading_system(default_system.pk, bands=new_bands)

    assert [b.grade_name for b in system.bands.all()] == ["PASS", "FAIL"]
    assert GradeBand.objects.filter(grading_system=system).count() == 2
    assert system.name == default_system.name


def test_update_invalid_bands_keeps_previous_set(default_system):
    bad = [
        {"grade_name": "X", "min_percentage": 0, "max_percentage": 60, "points": 1},
        {"grade_name": "Y", "min_percentage": 50, "max_percentage": 100, "points": 2},
    ]
    with pytest.raises(ValidationError):
        services.update_grading_system(default_system.pk, bands=bad)
    assert GradeBand.objects.filter(grading_system=default_system).count() == 4


def test_update_set_default_moves_flag(default_system, example_bands):
    other = services.create_grading_system("Other", example_bands)
    services.update_grading_system(other.pk, is_default=True)

    assert list(GradingSystem.objects.filter(is_default=True).values_list("pk", flat=True)) == [other.pk]


def test_update_rename_to_existing_conflicts(default_system, example_bands):
    other = services.create_grading_system("Other", example_bands)
    with pytest.raises(ConflictError):
        services.update_grading_system(other.pk, name=default_system.name)
    other.refresh_from_db()
    assert other.name == "Other"


def test_update_unknown_is_not_found(example_bands):
    with pytest.raises(NotFoundError):
        services.update_grading_system(999, name="Ghost")


# --- delete ---


def test_delete_unreferenced_removes_bands(default_system):
    services.delete_grading_system(default_system.pk)
    assert not GradingSystem.objects.exists()
    assert not GradeBand.objects.exists()


def test_delete_referenced_is_refused(default_system, enrollments, exam):
    Result.objects.create(
        enrollment=enrollments[0], exam=exam, grading_system=default_system,
        percentage=Decimal("90"), final_grade="A",
    )
    with pytest.raises(ReferentialIntegrityError):
        services.delete_grading_system(default_system.pk)

    assert GradingSystem.objects.filter(pk=default_system.pk).exists()
    assert GradeBand.objects.filter(grading_system=default_system).count() == 4


def test_delete_unknown_is_not_found():
    with pytest.raises(NotFoundError):
        services.delete_grading_system(999)
