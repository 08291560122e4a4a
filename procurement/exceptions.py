"""Custom exception handler for the procurement REST API."""

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler


def custom_exception_handler(exc, context):
    """Report Django validation errors as 400s and add ``status_code``.

    Unknown exceptions fall through to DRF, which lets them become a 500.
    """
    if isinstance(exc, DjangoValidationError):
        exc = DRFValidationError(detail=exc.messages)

    if isinstance(exc, Http404):
        return Response({"detail": "Not found.", "status_code": 404}, status=404)

    response = exception_handler(exc, context)
    if response is not None and isinstance(response.data, dict):
        response.data["status_code"] = response.status_code
    return response
