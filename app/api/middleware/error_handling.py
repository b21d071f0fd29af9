# 📄 File: app/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# Catches every error raised while answering a request and turns it into the same kind
# of clear JSON message, so the apps always know what went wrong and how to react.
# 🧪 Purpose (Technical Summary):
# FastAPI exception handlers mapping the NCFCAException hierarchy, request validation
# errors, HTTPException and unexpected exceptions to one error body:
# ``{statusCode, error, message, details, path, timestamp, requestId}``. Server errors
# are logged with their traceback; client errors at INFO.
# 🔗 Dependencies:
# FastAPI, starlette, app.shared.core.exceptions, logging
# 🔄 Connected Modules / Calls From:
# app.main (register_exception_handlers), all API endpoints

import logging
from http import HTTPStatus
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.shared.core.exceptions import NCFCAException
from app.shared.utils.helpers import utc_now

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal server error occurred"


def _reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def create_error_response(
    request: Request,
    status_code: int,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    error_code: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """
    Create a standardized error response.

    Args:
        request: Request being answered
        status_code: HTTP status code
        message: Human-readable error message
        details: Additional error details
        error_code: Machine-readable code, sent as X-Error-Code
        headers: Extra response headers

    Returns:
        JSON error response
    """
    request_id = getattr(request.state, "request_id", None)
    content = {
        "statusCode": status_code,
        "error": _reason_phrase(status_code),
        "message": message,
        "details": details or {},
        "path": request.url.path,
        "timestamp": utc_now().isoformat(),
        "requestId": request_id,
    }

    response = JSONResponse(status_code=status_code, content=jsonable_encoder(content), headers=headers)
    if request_id:
        response.headers["X-Request-ID"] = request_id
    if error_code:
        response.headers["X-Error-Code"] = error_code
    return response


async def ncfca_exception_handler(request: Request, exc: NCFCAException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"Server error in {request.method} {request.url.path}: {exc.message}",
            extra={"error_code": exc.error_code},
            exc_info=exc,
        )
    else:
        logger.info(
            f"Client error in {request.method} {request.url.path}: {exc.error_code} {exc.message}",
            extra={"error": exc.to_dict()},
        )
    message = exc.message if exc.status_code < 500 else INTERNAL_ERROR_MESSAGE
    details = exc.details if exc.status_code < 500 else {}
    return create_error_response(request, exc.status_code, message, details, error_code=exc.error_code)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    validation_errors = [
        {
            "field": ".".join(str(loc) for loc in error.get("loc", [])),
            "message": error.get("msg", "Validation error"),
            "type": error.get("type", "validation_error"),
        }
        for error in exc.errors()
    ]
    logger.info(f"Validation error in {request.method} {request.url.path}: {len(validation_errors)} field(s)")
    return create_error_response(
        request,
        422,
        "Request validation failed",
        {"validation_errors": validation_errors},
        error_code="VALIDATION_ERROR",
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else _reason_phrase(exc.status_code)
    details = exc.detail if isinstance(exc.detail, dict) else {}
    return create_error_response(
        request,
        exc.status_code,
        message,
        details,
        error_code=f"HTTP_{exc.status_code}",
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} in {request.method} {request.url.path}",
        exc_info=exc,
    )
    return create_error_response(request, 500, INTERNAL_ERROR_MESSAGE, error_code="INTERNAL_SERVER_ERROR")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error body mapping on ``app``."""
    app.add_exception_handler(NCFCAException, ncfca_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
