"""Global exception handlers — map engine exceptions to HTTP responses.

Engine errors carry their own status code and a caller-safe message, so
route handlers stay on the happy path and never build error bodies.  Every
error body has the shape ``{"error": "<message>"}``.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from survey_engine.errors import SurveyError

logger = logging.getLogger(__name__)


async def survey_error_handler(request: Request, exc: SurveyError) -> JSONResponse:
    """Return the engine error's message with its mapped status code."""
    if exc.status_code >= 500:
        logger.error("%s at %s: %s", type(exc).__name__, request.url.path, exc.message)
    else:
        logger.warning(
            "%s [%d] at %s: %s",
            type(exc).__name__, exc.status_code, request.url.path, exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def _format_location(loc: tuple) -> str:
    # Drop the leading "body"/"path"/"query" marker
    parts = [str(p) for p in loc[1:]] or [str(p) for p in loc]
    return ".".join(parts)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map request-schema failures to 400, naming every offending field."""
    details = [
        f"{_format_location(tuple(err.get('loc', ())))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    ]
    message = "Invalid request: " + "; ".join(details)
    logger.warning("Request validation failed at %s: %s", request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — log full traceback, return 500."""
    logger.exception("Unhandled exception at %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
