"""Domain level exceptions and helpers shared by services and repositories."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from sqlalchemy import exc as sa_exc

__all__ = [
    "AppError",
    "InvalidInputError",
    "NotFoundError",
    "ConflictError",
    "PayloadTooLargeError",
    "UpstreamFailureError",
    "ObjectStoreError",
    "handle_sqlalchemy_errors",
]


class AppError(Exception):
    """Base class for application specific errors."""


class InvalidInputError(AppError):
    """Raised for malformed identifiers or missing required fields."""


class NotFoundError(AppError):
    """Raised when a store, file or metadata record is absent."""


class ConflictError(AppError):
    """Raised when creating an entity whose identifier is taken."""


class PayloadTooLargeError(AppError):
    """Raised when an upload exceeds the configured size cap."""


class UpstreamFailureError(AppError):
    """Raised when the object store or the status table fails.

    The core never retries; the message of the upstream error is kept so the
    caller sees what actually went wrong.
    """


class ObjectStoreError(UpstreamFailureError):
    """Raised when an object store call fails."""


@dataclass(slots=True)
class _EntityContext:
    entity: str | None = None

    def format(self, message: str) -> str:
        if self.entity:
            return f"{self.entity}: {message}"
        return message


def _translate_sqlalchemy_error(exc: Exception, *, context: _EntityContext) -> AppError:
    if isinstance(exc, sa_exc.IntegrityError):
        return ConflictError(context.format("integrity constraint violated"))
    return UpstreamFailureError(context.format(str(exc)))


@contextmanager
def handle_sqlalchemy_errors(*, entity: str | None = None) -> Iterator[None]:
    """Translate SQLAlchemy errors into domain specific ones."""

    context = _EntityContext(entity)
    try:
        yield
    except sa_exc.SQLAlchemyError as exc:
        raise _translate_sqlalchemy_error(exc, context=context) from exc
