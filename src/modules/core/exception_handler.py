"""Project-wide DRF exception handler.

Views and services never build error responses themselves: they raise,
and this handler translates the failure into the standard error body::

    {"timestamp", "status", "error", "message", "path"}

Shape-validation failures (Pydantic ``ValidationError``) additionally
carry ``validationErrors`` mapping each field to its message.  Unexpected
exceptions become a generic 500; the traceback only reaches the logs.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, Optional

import structlog
from django.utils import timezone
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from modules.core.exceptions import AlreadyExistsError, NotFoundError

logger = structlog.get_logger(__name__)

VALIDATION_ERROR = "Validation Error"
VALIDATION_MESSAGE = "Error de validación en los datos proporcionados"
INTERNAL_ERROR_MESSAGE = "Ha ocurrido un error interno en el servidor"

_FORWARDED_HEADERS = ("WWW-Authenticate", "Retry-After")


def validation_errors(exc: PydanticValidationError) -> Dict[str, str]:
    """Flatten Pydantic errors into ``{field: message}``.

    Messages raised as ``ValueError`` by DTO validators are used verbatim
    (without Pydantic's ``"Value error, "`` prefix).  Only the first error
    of each field is kept.
    """
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "body"
        cause = error.get("ctx", {}).get("error")
        if error["type"] == "value_error" and cause is not None:
            message = str(cause)
        else:
            message = error["msg"]
        errors.setdefault(field, message)
    return errors


def error_body(
    status_code: int,
    error: str,
    message: str,
    path: str,
    validation: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "timestamp": timezone.now().isoformat(),
        "status": status_code,
        "error": error,
        "message": message,
        "path": path,
    }
    if validation is not None:
        body["validationErrors"] = validation
    return body


def _detail_message(data: Any) -> str:
    if isinstance(data, dict) and "detail" in data:
        return str(data["detail"])
    return str(data)


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Translate any exception raised inside a DRF view."""
    request = context.get("request")
    path = request.path if request is not None else ""
    log = logger.bind(path=path, exception=type(exc).__name__)

    if isinstance(exc, NotFoundError):
        log.warning("api.not_found", message=str(exc))
        return Response(
            error_body(404, HTTPStatus.NOT_FOUND.phrase, str(exc), path),
            status=status.HTTP_404_NOT_FOUND,
        )

    if isinstance(exc, AlreadyExistsError):
        log.warning("api.conflict", message=str(exc))
        return Response(
            error_body(409, HTTPStatus.CONFLICT.phrase, str(exc), path),
            status=status.HTTP_409_CONFLICT,
        )

    # PydanticValidationError subclasses ValueError: keep this branch first.
    if isinstance(exc, PydanticValidationError):
        fields = validation_errors(exc)
        log.warning("api.validation_failed", fields=sorted(fields))
        return Response(
            error_body(400, VALIDATION_ERROR, VALIDATION_MESSAGE, path, fields),
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, ValueError):
        log.warning("api.bad_request", message=str(exc))
        return Response(
            error_body(400, HTTPStatus.BAD_REQUEST.phrase, str(exc), path),
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = drf_exception_handler(exc, context)
    if response is not None:
        log.warning("api.request_rejected", status_code=response.status_code)
        headers = {
            name: response[name] for name in _FORWARDED_HEADERS if response.has_header(name)
        }
        return Response(
            error_body(
                response.status_code,
                HTTPStatus(response.status_code).phrase,
                _detail_message(response.data),
                path,
            ),
            status=response.status_code,
            headers=headers,
        )

    log.exception("api.unhandled_error")
    return Response(
        error_body(
            500,
            HTTPStatus.INTERNAL_SERVER_ERROR.phrase,
            INTERNAL_ERROR_MESSAGE,
            path,
        ),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
