"""Interface layer error handling.

Domain errors carry a ``kind``; this module turns them into HTTP responses
with a ``{"error": kind, "message": text}`` body.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from cleartrack.domain.error import DomainError

STATUS_BY_KIND: dict[str, int] = {
    "unauthenticated": status.HTTP_401_UNAUTHORIZED,
    "permission-denied": status.HTTP_403_FORBIDDEN,
    "invalid-argument": status.HTTP_400_BAD_REQUEST,
    "not-found": status.HTTP_404_NOT_FOUND,
    "failed-precondition": status.HTTP_409_CONFLICT,
    "deadline-exceeded": status.HTTP_410_GONE,
    "already-exists": status.HTTP_409_CONFLICT,
    "internal": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_MESSAGE = "An internal error occurred"


class ErrorResponse(BaseModel):
    """Error body returned by every failing route."""

    error: str
    message: str


def error_response(kind: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_KIND.get(kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
        content=ErrorResponse(error=kind, message=message).model_dump(),
    )


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    if exc.kind == "internal":
        logfire.error(
            "Internal domain error",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )
    else:
        logfire.info(
            "Request failed",
            path=request.url.path,
            kind=exc.kind,
            error_type=type(exc).__name__,
        )
    return error_response(exc.kind, str(exc))


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies and parameters as ``invalid-argument``."""
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        message = error.get("msg", "Invalid value")
        details.append(f"{location}: {message}" if location else message)
    return error_response("invalid-argument", "; ".join(details) or "Invalid request")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logfire.exception(
        "Unhandled error", path=request.url.path, error_type=type(exc).__name__
    )
    return error_response("internal", INTERNAL_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on an application."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
