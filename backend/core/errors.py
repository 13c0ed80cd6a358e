"""
core/errors.py: Service error taxonomy and FastAPI exception handlers.

Services raise these; the handlers below turn them into the structured
failure body {"success": false, "message": ..., "error": <code>} so the UI
can display the message without treating it as fatal.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

log = logging.getLogger("shipmaint.api")


class ServiceError(Exception):
    """Base class for every failure a service reports to its caller."""
    code = "error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message, "error": self.code}


class NotFound(ServiceError):
    """Referenced row does not exist."""
    code = "not_found"
    status_code = 404


class Conflict(ServiceError):
    """Delete blocked by dependants, or a unique key is already taken."""
    code = "conflict"
    status_code = 409


class ValidationError(ServiceError):
    """Missing required field or malformed value."""
    code = "validation_error"
    status_code = 422


class StorageError(ServiceError):
    """Underlying database failure. Surfaced after rollback."""
    code = "storage_error"
    status_code = 500


class AuthenticationFailed(ServiceError):
    code = "authentication_failed"
    status_code = 401


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers that map service errors to structured JSON failures."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if isinstance(exc, StorageError):
            log.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        problems = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
            problems.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", "invalid"))
        body = ValidationError("; ".join(problems) or "Invalid request").to_dict()
        return JSONResponse(status_code=ValidationError.status_code, content=body)
