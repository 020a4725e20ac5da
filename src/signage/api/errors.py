"""Translate domain errors into JSON error responses."""

from __future__ import annotations

import logging
from enum import StrEnum

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..exceptions import (
    AppError,
    ConflictError,
    InvalidInputError,
    NotFoundError,
    PayloadTooLargeError,
    UpstreamFailureError,
)

logger = logging.getLogger(__name__)


class FailureReason(StrEnum):
    INVALID_REQUEST = "invalid_request"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    UPSTREAM_FAILURE = "upstream_failure"
    INTERNAL_ERROR = "internal_error"


_STATUS_BY_ERROR: list[tuple[type[AppError], int, FailureReason]] = [
    (InvalidInputError, status.HTTP_400_BAD_REQUEST, FailureReason.INVALID_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND, FailureReason.NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT, FailureReason.CONFLICT),
    (PayloadTooLargeError, status.HTTP_413_CONTENT_TOO_LARGE, FailureReason.PAYLOAD_TOO_LARGE),
    (UpstreamFailureError, status.HTTP_500_INTERNAL_SERVER_ERROR, FailureReason.UPSTREAM_FAILURE),
]


def error_response(status_code: int, reason: FailureReason, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": {
                "status": "error",
                "failure_reason": reason.value,
                "message": message,
            }
        },
    )


def classify(exc: AppError) -> tuple[int, FailureReason]:
    for error_type, status_code, reason in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code, reason
    return status.HTTP_500_INTERNAL_SERVER_ERROR, FailureReason.INTERNAL_ERROR


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status_code, reason = classify(exc)
    if status_code >= 500:
        logger.error(
            "api.upstream_failure",
            extra={"path": request.url.path, "error": str(exc)},
        )
    return error_response(status_code, reason, str(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()]
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        FailureReason.INVALID_REQUEST,
        f"invalid request fields: {', '.join(fields) or 'body'}",
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("api.unexpected_error", extra={"path": request.url.path})
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, FailureReason.INTERNAL_ERROR, str(exc) or type(exc).__name__
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unexpected_error_handler)
