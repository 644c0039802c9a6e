# ho_core/common/api/exceptions.py

from __future__ import annotations

import logging
import uuid
from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated, NotFound, PermissionDenied, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger("api_errors")

GENERIC_MESSAGE = "Request failed."


def ensure_request_id(request) -> str:
    """
    Returns request.request_id, assigning a fresh one first if it is missing.
    Called from RequestIdMiddleware and from the exception handler.
    """
    rid = getattr(request, "request_id", None) if request is not None else None
    if not rid:
        rid = uuid.uuid4().hex
        if request is not None:
            setattr(request, "request_id", rid)
    return rid


def build_error_envelope(*, request=None, code: str, message: str, details: Any = None) -> dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "request_id": ensure_request_id(request),
        }
    }


class ExportFailed(APIException):
    """
    422 for report exports that could not be produced (renderer missing, bad chart image).
    Nothing is returned to the client except the envelope.
    """
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "Export failed."
    default_code = "export_failed"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


def _code_for(exc: Exception, http_status: int) -> str:
    if isinstance(exc, ValidationError):
        return "validation_error"
    if isinstance(exc, NotAuthenticated):
        return "not_authenticated"
    if isinstance(exc, PermissionDenied):
        return "permission_denied"
    if isinstance(exc, (Http404, NotFound)):
        return "not_found"
    if isinstance(exc, APIException):
        return exc.default_code or "api_error"
    return "server_error" if http_status >= 500 else "error"


def _message_and_details(data: Any) -> tuple[str, Any]:
    """
    {"detail": "..."}            -> ("...", None)
    {"detail": "...", **rest}    -> ("...", rest)
    anything else                -> (GENERIC_MESSAGE, data)
    A single-item detail list is unwrapped so the message reads as plain text.
    """
    if not (isinstance(data, dict) and "detail" in data):
        return GENERIC_MESSAGE, data

    detail = data["detail"]
    if isinstance(detail, list) and len(detail) == 1:
        detail = detail[0]
    rest = {k: v for k, v in data.items() if k != "detail"}
    return str(detail), rest or None


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")

    # Service-layer validation that escaped a view still gets a 400.
    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(exc.message_dict if hasattr(exc, "message_dict") else exc.messages)

    response = drf_exception_handler(exc, context)

    if response is None:
        logger.error("Unhandled error (request_id=%s)", ensure_request_id(request), exc_info=exc)
        return Response(
            build_error_envelope(request=request, code="server_error", message="Unexpected server error."),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    message, details = _message_and_details(response.data)
    return Response(
        build_error_envelope(
            request=request,
            code=_code_for(exc, response.status_code),
            message=message,
            details=details,
        ),
        status=response.status_code,
        headers=response.headers,
    )
