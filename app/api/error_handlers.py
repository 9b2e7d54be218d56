# app/api/error_handlers.py

"""
Maps every failure to the `{"success": false, "message": ...}` envelope.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.errors import AppError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **extra})


def _describe_validation_error(error: dict) -> str:
    # Drop the leading "body"/"query"/"path" marker from the location
    field = ".".join(str(part) for part in error.get("loc", ())[1:])
    return f"{field}: {error.get('msg')}" if field else error.get("msg", "")


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        details = [_describe_validation_error(error) for error in exc.errors()]
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            f"Validation failed: {', '.join(details)}",
            details=details,
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            return _error_response(exc.status_code, "Route not found", path=request.url.path)
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(APIError)
    async def handle_storage_error(request: Request, exc: APIError):
        logger.error(f"Supabase request failed on {request.method} {request.url.path}: {exc.message}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
