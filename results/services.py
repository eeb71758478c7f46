import logging
from collections import defaultdict
from decimal import Decimal, ROUND_HALF_UP

from core.models import Classroom
from enrollments.models import Enrollment
from exams.models import Exam, ExamSchedule, Mark
from gradebook.aggregator import MarkCell, aggregate
from grading.exceptions import NotFoundError, ValidationError
from grading.services import atomic_write, get_active_grading_system, get_grading_system
from .models import Result

logger = logging.getLogger(__name__)


def _q2(x: Decimal) -> Decimal:
    return x.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def build_standard_competition_ranks(avg_map):
    """
    avg_map: dict { result_id: pourcentage }
    return: (rank_map, class_avg)
       - rank_map: {result_id: rank} avec la règle 1,1,3,4...
       - class_avg: moyenne de classe arrondie à 2 décimales (None si vide)
    """
    if not avg_map:
        return {}, None

    # fréquences par valeur Decimal (2 décimales)
    freq = defaultdict(int)
    dec_map = {}
    for k, v in avg_map.items():
        dv = _q2(Decimal(str(v)))
        dec_map[k] = dv
        freq[dv] += 1

    uniq = sorted(freq.keys(), reverse=True)
    rank_by_val = {}
    current = 1
    for val in uniq:
        rank_by_val[val] = current
        current += freq[val]

    rank_map = {pk: rank_by_val[dec_map[pk]] for pk in dec_map.keys()}
    class_avg = _q2(sum(dec_map.values()) / Decimal(len(dec_map)))
    return rank_map, class_avg


def exam_cells(enrollment, exam_id, schedules=None, marks=None):
    """
    Cellules (examen, matière) d'un élève pour un examen.
    schedules: épreuves à couvrir; par défaut celles de la classe pour cet examen
    marks: {schedule_id: marks_obtained} (chargé si absent)
    """
    if schedules is None:
        schedules = list(ExamSchedule.objects.filter(exam_id=exam_id, classroom_id=enrollment.classroom_id))
    if marks is None:
        marks = dict(
            Mark.objects.filter(enrollment=enrollment, schedule__in=schedules)
            .values_list("schedule_id", "marks_obtained")
        )
    return [MarkCell(s.exam_id, s.subject_id, marks.get(s.id), s.full_marks) for s in schedules]


def _apply_summary(result, summary):
    result.total_marks = summary["total_marks"]
    result.total_full_marks = summary["total_full_marks"]
    result.percentage = summary["average_percentage"] if summary["average_percentage"] is not None else Decimal("0")
    result.gpa = summary["gpa"]
    result.final_grade = summary["overall_grade"] or ""


def assign_ranks(exam_id, classroom_id):
    """Rangs de la classe pour un examen, sur le pourcentage."""
    results = list(Result.objects.filter(exam_id=exam_id, enrollment__classroom_id=classroom_id))
    rank_map, class_avg = build_standard_competition_ranks({r.pk: r.percentage for r in results})
    for r in results:
        if r.rank != rank_map[r.pk]:
            r.rank = rank_map[r.pk]
            r.save(update_fields=["rank", "updated_at"])
    return rank_map, class_avg


def refresh_result(enrollment, exam_id):
    """
    Recalcule le Result existant d'un élève après modification d'une note,
    avec le système de notation du résultat, puis les rangs de sa classe.
    Ne crée rien: sans Result, les résultats n'ont pas encore été traités.
    À appeler dans la transaction de l'appelant.
    """
    result = (Result.objects.select_for_update()
              .filter(enrollment=enrollment, exam_id=exam_id)
              .first())
    if result is None:
        return None

    system = get_grading_system(result.grading_system_id)
    summary = aggregate(exam_cells(enrollment, exam_id), system.bands.all())
    _apply_summary(result, summary)
    result.save()
    assign_ranks(exam_id, enrollment.classroom_id)
    result.refresh_from_db(fields=["rank"])
    logger.info("Result %s refreshed (enrollment=%s, exam=%s)", result.pk, enrollment.pk, exam_id)
    return result


def process_results(exam_id, classroom_id, grading_system_id=None):
    """
    Calcule et enregistre les résultats de toute une classe pour un examen.
    Refuse de traiter tant qu'une note manque.
    Retourne (results, summary).
    """
    try:
        exam = Exam.objects.select_related("year").get(pk=exam_id)
    except (Exam.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Exam not found")
    try:
        classroom = Classroom.objects.get(pk=classroom_id)
    except (Classroom.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Classroom not found")

    system = get_active_grading_system(grading_system_id)
    bands = list(system.bands.all())

    schedules = list(ExamSchedule.objects.filter(exam=exam, classroom=classroom).select_related("subject"))
    if not schedules:
        raise NotFoundError("No exam schedules found for this exam and class")

    enrollments = list(
        Enrollment.objects.filter(classroom=classroom, active=True).select_related("student")
    )
    if not enrollments:
        raise NotFoundError("No students found for this class")

    marks = defaultdict(dict)
    for enr_id, sch_id, value in (Mark.objects
                                  .filter(schedule__in=schedules, enrollment__in=enrollments)
                                  .values_list("enrollment_id", "schedule_id", "marks_obtained")):
        marks[enr_id][sch_id] = value

    missing = sum(1 for e in enrollments for s in schedules if s.id not in marks[e.id])
    if missing:
        raise ValidationError(
            f"Cannot process results. Missing marks for {missing} student-subject combinations. "
            "Please enter all marks first."
        )

    with atomic_write("RESULTS_PROCESS"):
        for e in enrollments:
            summary = aggregate(exam_cells(e, exam.id, schedules, marks[e.id]), bands)
            result = (Result.objects.select_for_update()
                      .filter(enrollment=e, exam=exam).first()
                      or Result(enrollment=e, exam=exam))
            _apply_summary(result, summary)
            result.grading_system = system
            result.rank = None
            result.save()
        # moyenne de classe calculée avec les rangs, sur les pourcentages arrondis
        _, class_avg = assign_ranks(exam.id, classroom.id)

    results = list(
        Result.objects.filter(exam=exam, enrollment__in=enrollments)
        .select_related("enrollment__student", "exam", "grading_system")
        .order_by("rank", "enrollment__roll_number")
    )
    percentages = [r.percentage for r in results]
    gpas = [r.gpa for r in results if r.gpa is not None]
    summary = {
        "totalStudents": len(results),
        "examName": exam.name,
        "className": str(classroom),
        "academicYear": exam.year.name,
        "gradingSystem": system.name,
        "averagePercentage": class_avg,
        "averageGPA": _q2(sum(gpas, Decimal("0")) / len(gpas)) if gpas else None,
        "highestPercentage": max(percentages),
        "lowestPercentage": min(percentages),
    }
    logger.info(
        "Results processed for exam=%s classroom=%s: %d students (system=%s)",
        exam.id, classroom.id, len(results), system.pk,
    )
    return results, summary
