# grading/exceptions.py
from rest_framework import status
from rest_framework.exceptions import APIException


class GradingError(APIException):
    """Base des erreurs du moteur de notation (rendues par DRF en {"detail": ...})."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid grading request."
    default_code = "grading_error"


class ValidationError(GradingError):
    default_detail = "Invalid input."
    default_code = "invalid"


class ConflictError(GradingError):
    default_detail = "A grading system with this name already exists."
    default_code = "conflict"


class ReferentialIntegrityError(GradingError):
    default_detail = "Cannot delete grading system that is being used in results."
    default_code = "referenced"


class NotFoundError(GradingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class StorageError(GradingError):
    # le détail reste générique: la cause réelle est loggée côté serveur
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Operation failed."
    default_code = "storage_error"
