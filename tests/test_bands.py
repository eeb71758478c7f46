# tests/test_bands.py

from decimal import Decimal

import pytest

from grading.bands import resolve, unclassified, validate_bands
from grading.exceptions import ValidationError


def band(name, lo, hi, points):
    return {"grade_name": name, "min_percentage": lo, "max_percentage": hi, "points": points}


# --- validate_bands ---


def test_validate_accepts_example_bands_in_any_order(example_bands):
    ordered = validate_bands(list(reversed(example_bands)))
    assert [b["grade_name"] for b in ordered] == ["F", "C", "B", "A"]
    assert ordered[0]["min_percentage"] == Decimal("0")


def test_validate_accepts_touching_bounds_and_gaps():
    ordered = validate_bands([band("A", 50, 100, 4), band("F", 0, 50, 0)])
    assert len(ordered) == 2

    ordered = validate_bands([band("A", 80, 100, 4), band("F", 0, 30, 0)])
    assert [b["grade_name"] for b in ordered] == ["F", "A"]


def test_validate_rejects_overlap(example_bands):
    with pytest.raises(ValidationError) as exc:
        validate_bands(example_bands + [band("B+", 70, 85, 3.5)])
    assert "overlapping ranges" in str(exc.value.detail)


@pytest.mark.parametrize("lo,hi", [(50, 50), (60, 40)])
def test_validate_rejects_min_not_below_max(lo, hi):
    with pytest.raises(ValidationError) as exc:
        validate_bands([band("A", lo, hi, 4)])
    assert "min must be less than max" in str(exc.value.detail)


@pytest.mark.parametrize("field", ["grade_name", "min_percentage", "max_percentage", "points"])
def test_validate_reports_missing_field(field):
    b = band("A", 80, 100, 4)
    del b[field]
    with pytest.raises(ValidationError) as exc:
        validate_bands([b])
    assert f"{field} is required" in str(exc.value.detail)


@pytest.mark.parametrize("value", ["abc", True, "NaN"])
def test_validate_rejects_non_numeric(value):
    with pytest.raises(ValidationError) as exc:
        validate_bands([band("A", value, 100, 4)])
    assert "must be a number" in str(exc.value.detail)


def test_validate_empty_set_is_valid():
    assert validate_bands([]) == []


# --- resolve ---


@pytest.mark.parametrize("pct,grade,points", [
    (80, "A", 4),
    (100, "A", 4),
    (79, "B", 3),
    (59.5, "F", 0),   # entre C (40-59) et B (60-79): hors tranches
    (39.9, "F", 0),
    (0, "F", 0),
    (45, "C", 2),
])
def test_resolve_example_bands(example_bands, pct, grade, points):
    res = resolve(pct, example_bands)
    assert res.grade_name == grade
    assert res.points == Decimal(points)


def test_resolve_inside_band_is_classified(example_bands):
    assert resolve(65, example_bands).classified is True
    assert resolve(39.5, example_bands).classified is False


def test_resolve_outside_every_band_never_raises():
    bands = [band("A", 80, 100, 4), band("D", 30, 50, 1)]
    res = resolve(10, bands)
    assert res.grade_name == "D"
    assert res.points == Decimal("0")
    assert res.classified is False

    assert resolve(150, bands).grade_name == "D"


def test_resolve_without_bands_falls_back_to_f():
    res = resolve(75, [])
    assert res == unclassified([])
    assert res.grade_name == "F"


def test_resolve_shared_bound_picks_lowest_min():
    bands = [band("A", 50, 100, 4), band("F", 0, 50, 0)]
    assert resolve(50, bands).grade_name == "F"
    assert resolve(50.01, bands).grade_name == "A"


def test_resolve_accepts_model_instances(default_system):
    res = resolve(85, default_system.bands.all())
    assert res.grade_name == "A"
    assert res.points == Decimal("4")
