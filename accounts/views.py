import logging

from django.db import DatabaseError, connection
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import MeSerializer

logger = logging.getLogger(__name__)


class MeView(APIView):
    """GET /api/me/ -> utilisateur courant, rôle et classes affectées."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(MeSerializer(request.user).data)


class HealthView(APIView):
    """
    GET /api/health/ -> 200 si la base répond, 503 sinon.
    Sans authentification, pour la supervision du déploiement.
    """
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            connection.ensure_connection()
        except DatabaseError:
            logger.exception("Health check: database unreachable")
            return Response(
                {"status": "degraded", "database": "unreachable"},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return Response({"status": "ok", "database": "ok"})
