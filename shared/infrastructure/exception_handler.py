"""DRF exception handler that renders domain errors.

Domain errors carry a stable code and context instead of a formatted
sentence, so clients can localize the message themselves.
"""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.domain.exceptions import (
    DomainError,
    NotFoundError,
    OperationFailed,
    StateConflictError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (StateConflictError, status.HTTP_409_CONFLICT),
    (OperationFailed, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: DomainError) -> int:
    for error_class, http_status in STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            return http_status
    return status.HTTP_400_BAD_REQUEST


def domain_exception_handler(exc, context):  # type: ignore
    if isinstance(exc, DomainError):
        http_status = status_for(exc)
        if http_status >= 500:
            logger.error(f"Operation failed: {exc.message}", extra={"code": exc.code})
        return Response(exc.to_dict(), status=http_status)
    return drf_exception_handler(exc, context)
