from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from enrollments.models import Enrollment
from exams.permissions import IsTeacherOrAdmin
from exams.utils import teacher_can_edit, teacher_can_view
from grading.exceptions import NotFoundError
from .serializers import GradeBookQuerySerializer, GradeUpdateSerializer
from .services import build_gradebook, update_mark


class GradeBookView(APIView):
    """GET /api/gradebook/?classroom=<id>&exam=<id> -> carnet de la classe"""
    permission_classes = [IsTeacherOrAdmin]

    def get(self, request):
        q = GradeBookQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        params = q.validated_data

        if not teacher_can_view(request.user, params["classroom"]):
            raise PermissionDenied("Access denied to this class")

        gradebook = build_gradebook(
            params["classroom"], params.get("exam"), params.get("gradingSystem"),
        )
        return Response({"gradeBook": gradebook})


class GradeUpdateView(APIView):
    """POST /api/gradebook/update/ -> saisie d'une note depuis le carnet"""
    permission_classes = [IsTeacherOrAdmin]

    def post(self, request):
        ser = GradeUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        classroom_id = (Enrollment.objects
                        .filter(pk=data["enrollmentId"])
                        .values_list("classroom_id", flat=True)
                        .first())
        if classroom_id is None:
            raise NotFoundError("Student enrollment not found")
        if not teacher_can_edit(request.user, classroom_id):
            raise PermissionDenied("Access denied to this class")

        payload = update_mark(
            data["enrollmentId"], data["examId"], data["subjectId"], data["marksObtained"],
            remarks=data.get("remarks"), grading_system_id=data.get("gradingSystemId"),
        )
        return Response({"message": "Grade updated successfully", **payload})
