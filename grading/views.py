from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .exceptions import ValidationError
from .permissions import IsAdminOrReadOnly
from .serializers import GradingSystemSerializer, GradingSystemWriteSerializer


class GradingSystemListView(APIView):
    """
    GET    /api/grading-systems/            -> liste (défaut en premier)
    POST   /api/grading-systems/            -> création (201)
    PUT    /api/grading-systems/  {id, ...} -> mise à jour (id dans le body)
    DELETE /api/grading-systems/?id=<id>    -> suppression
    """
    permission_classes = [IsAdminOrReadOnly]

    def get(self, request):
        systems = services.list_grading_systems()
        return Response(GradingSystemSerializer(systems, many=True).data)

    def post(self, request):
        ser = GradingSystemWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        system = services.create_grading_system(**ser.to_service_kwargs())
        return Response(GradingSystemSerializer(system).data, status=status.HTTP_201_CREATED)

    def put(self, request):
        pk = (request.data or {}).get("id")
        if not pk:
            raise ValidationError("Grading system ID is required")
        return _update(request, pk)

    def delete(self, request):
        pk = request.query_params.get("id")
        if not pk:
            raise ValidationError("Grading system ID is required")
        return _delete(pk)


class GradingSystemDetailView(APIView):
    """GET / PUT / PATCH / DELETE /api/grading-systems/<id>/"""
    permission_classes = [IsAdminOrReadOnly]

    def get(self, request, pk):
        return Response(GradingSystemSerializer(services.get_grading_system(pk)).data)

    def put(self, request, pk):
        return _update(request, pk)

    def patch(self, request, pk):
        return _update(request, pk)

    def delete(self, request, pk):
        return _delete(pk)


def _update(request, pk):
    # PUT et PATCH: tous les champs sont optionnels
    ser = GradingSystemWriteSerializer(data=request.data, partial=True)
    ser.is_valid(raise_exception=True)
    system = services.update_grading_system(pk, **ser.to_service_kwargs())
    return Response(GradingSystemSerializer(system).data)


def _delete(pk):
    services.delete_grading_system(pk)
    return Response({"detail": "Grading system deleted successfully"}, status=status.HTTP_200_OK)
