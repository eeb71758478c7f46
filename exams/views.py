# exams/views.py
from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from django_filters.rest_framework import DjangoFilterBackend

from accounts.models import User
from .models import Mark
from .serializers import MarkSerializer, BulkMarksUpsertSerializer
from .permissions import IsTeacherOrAdmin
from .utils import teacher_can_edit


class MarkViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Mark.objects.select_related(
        "enrollment__student", "schedule__exam", "schedule__subject"
    )
    serializer_class = MarkSerializer
    permission_classes = [IsTeacherOrAdmin]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["schedule", "enrollment"]  # GET /api/marks/?schedule=<id>

    def get_queryset(self):
        qs = super().get_queryset()
        user = self.request.user
        if not user.is_superuser and user.role == User.Role.TEACHER:
            # un enseignant ne voit que les classes qui lui sont assignées
            qs = qs.filter(schedule__classroom__teacher_assignments__teacher=user)
        exam = self.request.query_params.get("exam")
        if exam:
            qs = qs.filter(schedule__exam_id=exam)
        return qs

    @action(detail=False, methods=["post"], url_path="bulk")
    def bulk(self, request, *args, **kwargs):
        """Upsert de notes pour une épreuve."""
        ser = BulkMarksUpsertSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        schedule = ser.validated_data["schedule_obj"]

        if not teacher_can_edit(request.user, schedule.classroom_id):
            raise PermissionDenied("Not allowed to edit marks for this class.")

        result = ser.save()
        return Response(result, status=status.HTTP_200_OK)
