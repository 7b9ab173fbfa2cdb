from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from .exceptions import SchoolApiException

logger = logging.getLogger(__name__)


def _body(request: Request, status_code: int, code: str, message, **extra) -> dict:
    body = {
        "statusCode": status_code,
        "code": code,
        "message": message,
        "path": request.url.path,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    body.update(extra)
    return body

async def school_api_exception_handler(request: Request, exc: SchoolApiException):
    """Handle application exceptions raised by services"""
    if exc.status_code >= 500:
        logger.error(f"{exc.code}: {exc.detail} - Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_body(request, exc.status_code, exc.code, exc.detail),
        headers=exc.headers,
    )

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle framework HTTP errors (404 routes, 405, bearer auth)"""
    return JSONResponse(
        status_code=exc.status_code,
        content=_body(request, exc.status_code, "http_error", exc.detail),
        headers=getattr(exc, "headers", None),
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request body/query validation errors"""
    return JSONResponse(
        status_code=422,
        content=_body(
            request, 422, "validation_error", "Request validation failed",
            errors=jsonable_encoder(exc.errors()),
        ),
    )

async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unexpected error: {str(exc)} - Path: {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=_body(request, 500, "internal_error", "Internal server error"),
    )

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SchoolApiException, school_api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
