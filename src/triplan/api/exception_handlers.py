"""
Maps tracker and feed exceptions to JSON error bodies.

Every error leaves the API as ``{"error": {"code", "message", "details"?}}``
so the dashboard can branch on ``code`` without parsing messages.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import TriPlanError
from ..integrations.base import IntegrationError, RateLimitError

logger = logging.getLogger(__name__)


def error_json(
    status_code: int,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build the error envelope; ``details`` is omitted when empty."""
    error: Dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error}, headers=headers)


async def handle_triplan_error(request: Request, exc: TriPlanError) -> JSONResponse:
    # Client mistakes are routine; only storage and other server faults get logged
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code.value}: {exc.message}")
    return error_json(exc.status_code, exc.code.value, exc.message, exc.details)


async def handle_feed_error(request: Request, exc: IntegrationError) -> JSONResponse:
    """Report a workout feed failure, passing Retry-After through on rate limits."""
    logger.warning(f"{exc.provider or 'feed'} error during {request.url.path}: {exc.message}")
    body = exc.to_dict()["error"]
    headers = None
    if isinstance(exc, RateLimitError) and exc.retry_after:
        headers = {"Retry-After": str(exc.retry_after)}
    return error_json(
        exc.status_code,
        body["code"],
        body["message"],
        body.get("details"),
        headers=headers,
    )


async def handle_model_validation_error(
    request: Request,
    exc: PydanticValidationError,
) -> JSONResponse:
    """Flatten pydantic errors raised while building models inside a route."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.info(f"{request.method} {request.url.path}: {len(errors)} invalid field(s)")
    return error_json(422, "VALIDATION_ERROR", "Request validation failed", {"errors": errors})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_json(500, "INTERNAL_ERROR", "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TriPlanError, handle_triplan_error)
    app.add_exception_handler(IntegrationError, handle_feed_error)
    app.add_exception_handler(PydanticValidationError, handle_model_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
