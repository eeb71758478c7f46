# tests/test_editor.py

from decimal import Decimal

import pytest

from gradebook.editor import (
    CellState, EditableCell, EditorStateError, GradeBookEditor, GradeBookRow,
)
from grading.exceptions import StorageError


def make_editor(example_bands, save):
    rows = [
        GradeBookRow(1, "Abena Kofi", [
            EditableCell(10, 100, 100, Decimal("90")),
            EditableCell(10, 200, 50, Decimal("45")),
        ], enrollment_id=11),
        GradeBookRow(2, "Bello Ada", [
            EditableCell(10, 100, 100, Decimal("50")),
            EditableCell(10, 200, 50, None),
        ], enrollment_id=12),
    ]
    return GradeBookEditor(rows, example_bands, save)


class Recorder:
    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def __call__(self, row, cell, value):
        self.calls.append((row.enrollment_id, cell.key, value))
        if self.fail:
            raise StorageError()


# --- EditableCell ---


def test_cell_happy_path():
    cell = EditableCell(1, 1, 100, Decimal("40"))
    cell.begin_edit()
    assert cell.state is CellState.EDITING

    saved = []
    assert cell.commit("72.5", saved.append) is True
    assert saved == [Decimal("72.50")]
    assert cell.value == Decimal("72.50")
    assert cell.state is CellState.DISPLAY


def test_cell_cancel_restores_captured_value():
    cell = EditableCell(1, 1, 100, Decimal("40"))
    cell.begin_edit()
    cell.cancel()
    assert cell.state is CellState.DISPLAY
    assert cell.value == Decimal("40")


@pytest.mark.parametrize("raw,message", [
    ("abc", "marks must be a number"),
    ("", "marks must be a number"),
    ("-1", "marks cannot be negative"),
    ("101", "marks cannot exceed full marks (100)"),
])
def test_cell_invalid_input_stays_editing_without_save(raw, message):
    cell = EditableCell(1, 1, 100, Decimal("40"))
    cell.begin_edit()
    saved = []

    assert cell.commit(raw, saved.append) is False
    assert saved == []
    assert cell.state is CellState.EDITING
    assert cell.error == message
    assert cell.value == Decimal("40")


def test_cell_save_failure_reverts_and_allows_retry():
    cell = EditableCell(1, 1, 100, Decimal("40"))
    cell.begin_edit()

    def boom(value):
        raise StorageError()

    assert cell.commit("80", boom) is False
    assert cell.state is CellState.ERROR
    assert cell.value == Decimal("40")
    assert cell.error == "Operation failed."

    cell.begin_edit()
    assert cell.state is CellState.EDITING


@pytest.mark.parametrize("action", ["cancel", "commit"])
def test_cell_rejects_transitions_outside_editing(action):
    cell = EditableCell(1, 1, 100)
    with pytest.raises(EditorStateError):
        if action == "cancel":
            cell.cancel()
        else:
            cell.commit("10", lambda v: None)


def test_cell_cannot_begin_twice():
    cell = EditableCell(1, 1, 100)
    cell.begin_edit()
    with pytest.raises(EditorStateError):
        cell.begin_edit()


# --- GradeBookEditor ---


def test_editor_computes_initial_summaries(example_bands):
    editor = make_editor(example_bands, Recorder())
    assert editor.rows[1].summary["gpa"] == Decimal("4.00")
    # la cellule vide ne compte pas
    assert editor.rows[2].summary["graded_count"] == 1
    assert editor.rows[2].summary["overall_grade"] == "C"


def test_editor_commit_recomputes_row(example_bands):
    save = Recorder()
    editor = make_editor(example_bands, save)

    editor.edit(2, 10, 200)
    assert editor.commit(2, 10, 200, "30") is True

    assert save.calls == [(12, (10, 200), Decimal("30.00"))]
    summary = editor.rows[2].summary
    assert summary["graded_count"] == 2
    assert summary["gpa"] == Decimal("2.50")
    assert editor.rows[2].error is None


def test_editor_failure_flags_row_and_keeps_others(example_bands):
    editor = make_editor(example_bands, Recorder(fail=True))
    before = editor.rows[1].summary

    editor.edit(1, 10, 100)
    assert editor.commit(1, 10, 100, "10") is False

    row = editor.rows[1]
    assert row.error == "Operation failed."
    assert row.cells[(10, 100)].value == Decimal("90")
    assert row.summary == before
    assert editor.rows[2].error is None


def test_editor_validation_error_does_not_flag_row(example_bands):
    editor = make_editor(example_bands, Recorder())
    editor.edit(1, 10, 200)
    assert editor.commit(1, 10, 200, "60") is False
    assert editor.rows[1].error is None
    assert editor.cell(1, 10, 200).state is CellState.EDITING


def test_editor_from_gradebook_payload():
    payload = {
        "gradingSystem": {"id": 1, "name": "S", "bands": [
            {"gradeName": "P", "minPercentage": 50, "maxPercentage": 100, "points": 1},
            {"gradeName": "F", "minPercentage": 0, "maxPercentage": 49, "points": 0},
        ]},
        "students": [
            {"studentId": 5, "enrollmentId": 50, "name": "X", "grades": [
                {"examId": 1, "subjectId": 2, "fullMarks": 20, "marksObtained": Decimal("15")},
            ]},
        ],
    }
    editor = GradeBookEditor.from_gradebook(payload, Recorder())
    assert editor.rows[5].enrollment_id == 50
    assert editor.rows[5].summary["overall_grade"] == "P"
