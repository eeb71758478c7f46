"""
Grade-Book Aggregator: notes brutes d'un élève -> note par cellule, GPA, mention globale.

Pur et sans état: aucune requête ORM ici.
  - cellule = (examen, matière); pourcentage = obtenu / barème * 100
  - cellule sans note -> listée mais ignorée du GPA et de la moyenne
  - GPA = moyenne simple des points des cellules notées (None si aucune)
  - mention globale = resolve(moyenne des pourcentages), jamais la moyenne des lettres
"""
from collections import namedtuple
from decimal import Decimal, ROUND_HALF_UP

from grading.bands import resolve

D0 = Decimal("0")
D100 = Decimal("100")

MarkCell = namedtuple("MarkCell", ["exam_id", "subject_id", "marks_obtained", "full_marks"])


def _q(x):
    return Decimal(str(x)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def percentage_of(marks_obtained, full_marks):
    """None si pas de note ou barème non positif."""
    if marks_obtained is None or not full_marks:
        return None
    full = Decimal(str(full_marks))
    if full <= D0:
        return None
    return Decimal(str(marks_obtained)) / full * D100


def grade_cell(cell, bands):
    cell = MarkCell(*cell)
    pct = percentage_of(cell.marks_obtained, cell.full_marks)
    row = {
        "exam_id": cell.exam_id,
        "subject_id": cell.subject_id,
        "marks_obtained": cell.marks_obtained,
        "full_marks": cell.full_marks,
        "percentage": None,
        "grade": None,
        "points": None,
        "graded": pct is not None,
        "classified": False,
    }
    if pct is None:
        return row, None
    res = resolve(pct, bands)
    row.update({
        "percentage": _q(pct),
        "grade": res.grade_name,
        "points": res.points,
        "classified": res.classified,
    })
    return row, pct


def aggregate(cells, bands):
    """
    cells: itérable de MarkCell (ou tuples équivalents)
    bands: tranches du système de notation actif
    """
    bands = list(bands)
    rows = []
    percentages, points = [], []
    total_marks = D0
    total_full = D0

    for cell in cells:
        row, pct = grade_cell(cell, bands)
        rows.append(row)
        if pct is None:
            continue
        percentages.append(pct)
        points.append(Decimal(str(row["points"])))
        total_marks += Decimal(str(row["marks_obtained"]))
        total_full += Decimal(str(row["full_marks"]))

    n = len(percentages)
    if n == 0:
        # GPA "non disponible": ni zéro inventé, ni erreur
        return {
            "cells": rows,
            "graded_count": 0,
            "total_marks": D0,
            "total_full_marks": D0,
            "gpa": None,
            "average_percentage": None,
            "overall_grade": None,
        }

    average = sum(percentages, D0) / n
    return {
        "cells": rows,
        "graded_count": n,
        "total_marks": _q(total_marks),
        "total_full_marks": _q(total_full),
        "gpa": _q(sum(points, D0) / n),
        "average_percentage": _q(average),
        "overall_grade": resolve(average, bands).grade_name,
    }
