"""
Interactive Grade-Book Editor: édition d'une note, cellule par cellule.

Machine à états d'une cellule:
    DISPLAY -> EDITING -> SAVING -> DISPLAY
                          SAVING -> ERROR -> EDITING

- begin_edit() capture la valeur courante;
- commit() valide la saisie (numérique, >= 0, <= barème) AVANT toute écriture;
- succès: la cellule prend la nouvelle valeur et la ligne est ré-agrégée;
- échec d'écriture: la cellule revient à la valeur capturée et la ligne porte
  l'erreur. Une cellule en échec ne casse jamais le reste du carnet.
"""
import enum
import logging

from exams.validators import clean_marks
from grading.exceptions import ValidationError
from .aggregator import MarkCell, aggregate

logger = logging.getLogger(__name__)


class CellState(enum.Enum):
    DISPLAY = "display"
    EDITING = "editing"
    SAVING = "saving"
    ERROR = "error"


class EditorStateError(Exception):
    """Transition interdite (ex: commit sans begin_edit)."""


class EditableCell:
    def __init__(self, exam_id, subject_id, full_marks, value=None):
        self.exam_id = exam_id
        self.subject_id = subject_id
        self.full_marks = full_marks
        self.value = value
        self.state = CellState.DISPLAY
        self.error = None
        self._captured = value

    @property
    def key(self):
        return (self.exam_id, self.subject_id)

    def begin_edit(self):
        if self.state not in (CellState.DISPLAY, CellState.ERROR):
            raise EditorStateError(f"cannot edit a cell in state {self.state.value}")
        self._captured = self.value
        self.state = CellState.EDITING

    def cancel(self):
        if self.state is not CellState.EDITING:
            raise EditorStateError(f"cannot cancel a cell in state {self.state.value}")
        self.value = self._captured
        self.error = None
        self.state = CellState.DISPLAY

    def commit(self, raw, save):
        """
        save(value) persiste la note; toute exception = échec d'écriture.
        Retourne True si la note est enregistrée.
        """
        if self.state is not CellState.EDITING:
            raise EditorStateError(f"cannot commit a cell in state {self.state.value}")
        try:
            value = clean_marks(raw, self.full_marks)
        except ValidationError as exc:
            # saisie refusée: pas d'écriture, on reste en édition
            self.error = str(exc.detail)
            return False

        self.state = CellState.SAVING
        try:
            save(value)
        except Exception as exc:
            self.value = self._captured
            self.error = str(getattr(exc, "detail", "") or exc) or "Failed to update grade"
            self.state = CellState.ERROR
            logger.warning("Grade cell %s save failed: %s", self.key, self.error, exc_info=True)
            return False

        self.value = value
        self.error = None
        self.state = CellState.DISPLAY
        return True

    def as_mark_cell(self):
        return MarkCell(self.exam_id, self.subject_id, self.value, self.full_marks)


class GradeBookRow:
    def __init__(self, student_id, name, cells, enrollment_id=None):
        self.student_id = student_id
        self.enrollment_id = enrollment_id
        self.name = name
        self.cells = {c.key: c for c in cells}
        self.summary = None
        self.error = None

    def mark_cells(self):
        return [c.as_mark_cell() for c in self.cells.values()]


class GradeBookEditor:
    """
    rows: GradeBookRow; bands: tranches du système actif;
    save(row, cell, value): callback de persistance (cf. gradebook.services.save_cell).
    """

    def __init__(self, rows, bands, save):
        self.rows = {r.student_id: r for r in rows}
        self.bands = list(bands)
        self.save = save
        for row in self.rows.values():
            self.recompute(row)

    @classmethod
    def from_gradebook(cls, payload, save):
        """Construit l'éditeur depuis le payload de gradebook.services.build_gradebook."""
        bands = [
            {
                "grade_name": b["gradeName"],
                "min_percentage": b["minPercentage"],
                "max_percentage": b["maxPercentage"],
                "points": b["points"],
            }
            for b in payload["gradingSystem"]["bands"]
        ]
        rows = []
        for s in payload["students"]:
            cells = [
                EditableCell(g["examId"], g["subjectId"], g["fullMarks"], g["marksObtained"])
                for g in s["grades"]
            ]
            rows.append(GradeBookRow(s["studentId"], s["name"], cells, enrollment_id=s["enrollmentId"]))
        return cls(rows, bands, save)

    def cell(self, student_id, exam_id, subject_id):
        return self.rows[student_id].cells[(exam_id, subject_id)]

    def edit(self, student_id, exam_id, subject_id):
        row = self.rows[student_id]
        cell = row.cells[(exam_id, subject_id)]
        cell.begin_edit()
        return cell

    def cancel(self, student_id, exam_id, subject_id):
        self.cell(student_id, exam_id, subject_id).cancel()

    def commit(self, student_id, exam_id, subject_id, raw):
        row = self.rows[student_id]
        cell = row.cells[(exam_id, subject_id)]
        ok = cell.commit(raw, lambda value: self.save(row, cell, value))
        if ok:
            row.error = None
            self.recompute(row)
        elif cell.state is CellState.ERROR:
            row.error = cell.error
        return ok

    def recompute(self, row):
        row.summary = aggregate(row.mark_cells(), self.bands)
        return row.summary
