"""API error types mapped to HTTP status codes."""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError


class ApiError(Exception):
    """Base error carrying the HTTP status the API layer should answer with."""

    status = 500

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class ValidationError(ApiError):
    status = 400


class NotFoundError(ApiError):
    status = 404


class InternalError(ApiError):
    """Unexpected failure; `message` is safe to show, details stay in the logs."""

    status = 500


def first_error_message(exc: PydanticValidationError) -> str:
    """Human-readable message of the first pydantic error."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    err = errors[0]
    cause = (err.get("ctx") or {}).get("error")
    if cause is not None:
        return str(cause)
    loc = ".".join(str(part) for part in err.get("loc", ()))
    return f"{loc}: {err.get('msg', 'invalid value')}" if loc else str(err.get("msg", "Invalid request"))


def validation_error_from(exc: PydanticValidationError) -> ValidationError:
    return ValidationError(first_error_message(exc))
