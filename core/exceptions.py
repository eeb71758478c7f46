import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """
    Handler DRF global:
      - APIException / Http404 / PermissionDenied -> handler DRF standard
      - tout le reste -> 500 JSON opaque, cause loggée côté serveur
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.error(
        "Unhandled error in %s", view.__class__.__name__ if view else "unknown view",
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return Response({"detail": "Operation failed."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
