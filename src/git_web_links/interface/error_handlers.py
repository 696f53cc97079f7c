"""Global exception handlers — translate domain errors to HTTP responses.

Domain errors are mapped by their ``kind`` tag; every failure uses the
``{"status": "error", "message": "..."}`` envelope.  Pipeline failures never
get here: the get-link command reports them as notifications.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from git_web_links.domain.exceptions import ErrorKind, GitWebLinksError
from git_web_links.interface.schemas import ErrorResponse

logger = logging.getLogger(__name__)

_KIND_STATUS: dict[ErrorKind, int] = {
    ErrorKind.INVALID_URI: 422,
    ErrorKind.NOTIFICATION_NOT_FOUND: 404,
}


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    @app.exception_handler(GitWebLinksError)
    async def domain_handler(request: Request, exc: GitWebLinksError) -> JSONResponse:
        status_code = _KIND_STATUS.get(exc.kind)
        if status_code is None:
            logger.error("Unmapped %s error on %s: %s", exc.kind.value, request.url.path, exc)
            return _error_json(500, "An unexpected error occurred.")
        logger.warning("%s: %s", type(exc).__name__, exc)
        return _error_json(status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
            problems.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(problems))

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred.")
