from rest_framework import serializers

from enrollments.models import Enrollment
from grading.exceptions import ValidationError
from grading.services import atomic_write
from results.services import refresh_result
from .models import ExamSchedule, Mark
from .validators import clean_marks


# -------------------------
#  Model Serializers
# -------------------------

class MarkSerializer(serializers.ModelSerializer):
    enrollmentId = serializers.IntegerField(source="enrollment_id", read_only=True)
    examScheduleId = serializers.IntegerField(source="schedule_id", read_only=True)
    examId = serializers.IntegerField(source="schedule.exam_id", read_only=True)
    subjectId = serializers.IntegerField(source="schedule.subject_id", read_only=True)
    studentName = serializers.CharField(source="enrollment.student.full_name", read_only=True)
    marksObtained = serializers.DecimalField(source="marks_obtained", max_digits=6, decimal_places=2, read_only=True)
    fullMarks = serializers.IntegerField(source="schedule.full_marks", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Mark
        fields = [
            "id", "enrollmentId", "examScheduleId", "examId", "subjectId", "studentName",
            "marksObtained", "fullMarks", "remarks", "updatedAt",
        ]


# -------------------------
#  BULK SERIALIZER
# -------------------------

class BulkMarksUpsertSerializer(serializers.Serializer):
    """
    Upsert des notes pour UNE épreuve (examen x classe x matière).

    Body:
    {
      "examScheduleId": 10,
      "marks": [
        { "enrollmentId": 101, "marksObtained": 17.5, "remarks": "" },
        { "enrollmentId": 102, "marksObtained": 12 }
      ]
    }
    Les entrées invalides sont ignorées avec une raison; les résultats déjà
    calculés des élèves touchés sont recalculés dans la même transaction.
    """
    examScheduleId = serializers.IntegerField()
    marks = serializers.ListField(child=serializers.DictField(), allow_empty=True)

    def validate(self, attrs):
        try:
            schedule = ExamSchedule.objects.select_related("exam").get(id=attrs["examScheduleId"])
        except ExamSchedule.DoesNotExist:
            raise serializers.ValidationError("Exam schedule not found.")
        attrs["schedule_obj"] = schedule

        # Validation basique des entrées
        for e in attrs.get("marks", []):
            if "enrollmentId" not in e:
                raise serializers.ValidationError("Each entry must have 'enrollmentId'.")
            if "marksObtained" not in e:
                raise serializers.ValidationError("Each entry must have 'marksObtained'.")
            # cast/bornes au moment du create() pour différencier les raisons de skip
        return attrs

    def create(self, validated):
        schedule = validated["schedule_obj"]
        results = {"created": [], "updated": [], "skipped": []}
        touched = []

        with atomic_write("MARKS_BULK_UPSERT"):
            existing = {m.enrollment_id: m for m in Mark.objects.select_for_update().filter(schedule=schedule)}

            for e in validated.get("marks", []):
                enr_id = e.get("enrollmentId")

                # 1) valeur: numérique, dans [0..full_marks]
                try:
                    val = clean_marks(e.get("marksObtained"), schedule.full_marks)
                except ValidationError as exc:
                    reason = "Invalid value" if "number" in str(exc.detail) else "Out of range"
                    results["skipped"].append({"enrollmentId": enr_id, "reason": reason})
                    continue

                # 2) l'inscription doit exister et être dans la classe de l'épreuve
                try:
                    enrollment = Enrollment.objects.get(id=enr_id)
                except (Enrollment.DoesNotExist, ValueError, TypeError):
                    results["skipped"].append({"enrollmentId": enr_id, "reason": "Enrollment not found"})
                    continue
                if enrollment.classroom_id != schedule.classroom_id:
                    results["skipped"].append({"enrollmentId": enr_id, "reason": "Class mismatch"})
                    continue

                remarks = (e.get("remarks") or "").strip()

                # 3) Upsert
                if enrollment.id in existing:
                    m = existing[enrollment.id]
                    if m.marks_obtained != val or m.remarks != remarks:
                        m.marks_obtained = val
                        m.remarks = remarks
                        m.save(update_fields=["marks_obtained", "remarks", "updated_at"])
                    results["updated"].append(m.id)
                else:
                    m = Mark.objects.create(enrollment=enrollment, schedule=schedule,
                                            marks_obtained=val, remarks=remarks)
                    existing[enrollment.id] = m
                    results["created"].append(m.id)
                touched.append(enrollment)

            for enrollment in {t.id: t for t in touched}.values():
                refresh_result(enrollment, schedule.exam_id)

        return results
