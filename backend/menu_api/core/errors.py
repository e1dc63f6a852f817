"""
Exception handlers rendering every error as ``{"message", "code"}``.

Usage:
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config.logging import get_logger
from shared.utils.schemas import ErrorResponse

logger = get_logger(__name__)


def _error_response(status_code: int, message: str, errors: list[dict] | None = None, headers=None) -> JSONResponse:
    body = ErrorResponse(message=message, code=status_code, errors=errors)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """AppException and framework HTTP errors (404 route, 405 method)."""
    return _error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and parameters are client errors (400)."""
    errors = jsonable_encoder(exc.errors())
    logger.info(
        "Request validation failed",
        path=request.url.path,
        fields=[".".join(str(p) for p in e.get("loc", ())) for e in errors],
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, "Validation error", errors=errors)


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
