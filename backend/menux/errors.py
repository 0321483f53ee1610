"""Access-control error taxonomy and its HTTP mapping.

Service code raises these; the handlers registered in ``menux.main`` turn
them into JSON responses of the form ``{"detail": ..., "kind": ...}``.
A denial (401/403) is never reported for an infrastructure failure (503).
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AccessError(Exception):
    """Base class for every error surfaced by the access-control layer."""

    kind = "access_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AccessError):
    """Malformed input, rejected before any store call."""

    kind = "validation_error"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class Unauthenticated(AccessError):
    """No session is present; the caller must sign in."""

    kind = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(AccessError):
    """A session is present but the identity does not hold the admin role."""

    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AccessError):
    """Approve/reject target has no pending request."""

    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class TransportError(AccessError):
    """The record store or identity provider failed; retryable by the caller."""

    kind = "transport_error"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


async def access_error_handler(request: Request, exc: AccessError) -> JSONResponse:
    if isinstance(exc, TransportError):
        logger.warning("Transport failure on %s %s: %s", request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "kind": exc.kind},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AccessError, access_error_handler)
