"""
Grade-book côté serveur: lecture du carnet d'une classe et édition d'une note.

Le carnet est calculé à la volée par l'agrégateur (gradebook.aggregator) avec
le système de notation actif; une édition met à jour la note et, si les
résultats de l'examen ont déjà été traités, le Result de l'élève et les rangs
de sa classe, dans la même transaction.
"""
import logging
from collections import OrderedDict

from core.models import Classroom
from enrollments.models import Enrollment
from exams.models import ExamSchedule, Mark
from exams.validators import clean_marks
from grading.exceptions import ConflictError, NotFoundError
from grading.services import atomic_write, get_active_grading_system
from results.services import exam_cells, refresh_result
from .aggregator import MarkCell, aggregate, grade_cell

logger = logging.getLogger(__name__)


def _band_payload(system):
    return {
        "id": system.id,
        "name": system.name,
        "bands": [
            {
                "gradeName": b.grade_name,
                "minPercentage": b.min_percentage,
                "maxPercentage": b.max_percentage,
                "points": b.points,
            }
            for b in system.bands.all()
        ],
    }


def _cell_payload(row, schedule):
    return {
        "examId": schedule.exam_id,
        "examName": schedule.exam.name,
        "subjectId": schedule.subject_id,
        "subjectName": schedule.subject.name,
        "marksObtained": row["marks_obtained"],
        "fullMarks": schedule.full_marks,
        "percentage": row["percentage"],
        "grade": row["grade"],
        "points": row["points"],
        "graded": row["graded"],
    }


def _summary_payload(summary):
    return {
        "gpa": summary["gpa"],
        "averagePercentage": summary["average_percentage"],
        "overallGrade": summary["overall_grade"],
        "gradedCount": summary["graded_count"],
        "totalMarks": summary["total_marks"],
        "totalFullMarks": summary["total_full_marks"],
    }


def _schedules(classroom_id, exam_id=None):
    qs = (ExamSchedule.objects
          .filter(classroom_id=classroom_id)
          .select_related("exam", "subject")
          .order_by("exam__created_at", "exam_id", "subject__name"))
    if exam_id:
        qs = qs.filter(exam_id=exam_id)
    return list(qs)


def build_gradebook(classroom_id, exam_id=None, grading_system_id=None):
    """
    Carnet d'une classe: élèves x cellules (examen, matière), GPA et mention
    par élève, examens avec leurs matières et barèmes, système de notation utilisé.
    Les cellules sans note sont listées (graded=False).
    """
    try:
        classroom = Classroom.objects.select_related("year").get(pk=classroom_id)
    except (Classroom.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Classroom not found")

    system = get_active_grading_system(grading_system_id)
    bands = list(system.bands.all())
    schedules = _schedules(classroom.id, exam_id)
    enrollments = list(
        Enrollment.objects.filter(classroom=classroom, active=True)
        .select_related("student")
        .order_by("roll_number", "student__last_name", "student__first_name")
    )
    marks = {
        (enr_id, sch_id): value
        for enr_id, sch_id, value in Mark.objects.filter(schedule__in=schedules, enrollment__in=enrollments)
        .values_list("enrollment_id", "schedule_id", "marks_obtained")
    }

    students = []
    for e in enrollments:
        cells = [MarkCell(s.exam_id, s.subject_id, marks.get((e.id, s.id)), s.full_marks) for s in schedules]
        summary = aggregate(cells, bands)
        students.append({
            "studentId": e.student_id,
            "enrollmentId": e.id,
            "name": e.student.full_name,
            "rollNumber": e.roll_number,
            "grades": [_cell_payload(row, s) for row, s in zip(summary["cells"], schedules)],
            **_summary_payload(summary),
        })

    exams = OrderedDict()
    for s in schedules:
        exam = exams.setdefault(s.exam_id, {
            "id": s.exam_id,
            "name": s.exam.name,
            "date": s.exam.created_at,
            "subjects": [],
        })
        exam["subjects"].append({
            "id": s.subject_id,
            "name": s.subject.name,
            "fullMarks": s.full_marks,
            "passMarks": s.pass_marks,
        })

    return {
        "classroom": {"id": classroom.id, "name": str(classroom)},
        "students": students,
        "exams": list(exams.values()),
        "gradingSystem": _band_payload(system),
    }


def update_mark(enrollment_id, exam_id, subject_id, marks_obtained, remarks=None, grading_system_id=None):
    """
    Saisie/modification d'une note depuis le carnet.
    Validation complète avant toute écriture; note + Result dans une seule transaction.
    """
    try:
        enrollment = Enrollment.objects.select_related("student").get(pk=enrollment_id)
    except (Enrollment.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Student enrollment not found")
    try:
        schedule = ExamSchedule.objects.select_related("exam", "subject").get(
            exam_id=exam_id, classroom_id=enrollment.classroom_id, subject_id=subject_id,
        )
    except (ExamSchedule.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Exam schedule not found for this combination")

    value = clean_marks(marks_obtained, schedule.full_marks)
    system = get_active_grading_system(grading_system_id)
    bands = list(system.bands.all())

    # création concurrente de la même note -> unique (enrollment, schedule)
    with atomic_write("GRADEBOOK_UPDATE", conflict=ConflictError("Mark was modified concurrently, please retry")):
        mark = Mark.objects.select_for_update().filter(enrollment=enrollment, schedule=schedule).first()
        if mark is None:
            mark = Mark(enrollment=enrollment, schedule=schedule)
        mark.marks_obtained = value
        if remarks is not None:
            mark.remarks = remarks.strip()
        mark.save()
        result = refresh_result(enrollment, schedule.exam_id)

    logger.info(
        "Mark %s set to %s (enrollment=%s, exam=%s, subject=%s)",
        mark.pk, value, enrollment.pk, schedule.exam_id, schedule.subject_id,
    )

    row, _ = grade_cell(MarkCell(schedule.exam_id, schedule.subject_id, value, schedule.full_marks), bands)
    all_schedules = _schedules(enrollment.classroom_id)
    return {
        "mark": {"id": mark.id, "marksObtained": mark.marks_obtained, "remarks": mark.remarks},
        "cell": _cell_payload(row, schedule),
        "summary": _summary_payload(aggregate(exam_cells(enrollment, None, all_schedules), bands)),
        "examSummary": _summary_payload(aggregate(exam_cells(enrollment, schedule.exam_id), bands)),
        "result": None if result is None else {
            "id": result.id,
            "percentage": result.percentage,
            "gpa": result.gpa,
            "finalGrade": result.final_grade,
            "rank": result.rank,
        },
    }


def save_cell(row, cell, value):
    """Callback `save` de GradeBookEditor: persiste la cellule éditée."""
    return update_mark(row.enrollment_id, cell.exam_id, cell.subject_id, value)
