from rest_framework import status, viewsets
from rest_framework.response import Response
from rest_framework.views import APIView
from django_filters.rest_framework import DjangoFilterBackend

from grading.permissions import IsAdminOrReadOnly
from .models import Result
from .serializers import ProcessResultsSerializer, ResultSerializer
from .services import process_results


class ResultViewSet(viewsets.ReadOnlyModelViewSet):
    """GET /api/results/?exam=<id>&enrollment=<id>&enrollment__classroom=<id>"""
    queryset = Result.objects.select_related("enrollment__student", "exam", "grading_system")
    serializer_class = ResultSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["exam", "enrollment", "enrollment__classroom"]


class ProcessResultsView(APIView):
    """POST /api/results/process/ -> calcule et classe les résultats d'une classe (ADMIN)."""
    permission_classes = [IsAdminOrReadOnly]

    def post(self, request):
        ser = ProcessResultsSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        results, summary = process_results(
            data["examId"], data["classroomId"], data.get("gradingSystemId"),
        )
        return Response(
            {
                "message": f"Successfully processed results for {len(results)} students",
                "results": ResultSerializer(results, many=True).data,
                "summary": summary,
            },
            status=status.HTTP_201_CREATED,
        )
