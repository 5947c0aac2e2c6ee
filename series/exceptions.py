# series/exceptions.py
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound


class ConflictError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Ya existe una serie con ese código para este tipo de documento."
    default_code = "series_conflict"


class SeriesNotFound(NotFound):
    default_detail = "Serie no encontrada."
    default_code = "series_not_found"


class InactiveSeriesError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "La serie no está activa."
    default_code = "series_inactive"


class AllocationConflict(APIException):
    """
    Contención sostenida al asignar número. No implica datos corruptos:
    el llamante puede reintentar más tarde.
    """
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "No se ha podido generar el número de documento, inténtelo de nuevo."
    default_code = "allocation_conflict"
