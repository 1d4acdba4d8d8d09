# backend/errors.py
import logging
from typing import Any, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("files")


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(ApiError):
    status_code = 404


class InvalidPath(ApiError):
    status_code = 400


class PermissionDenied(ApiError):
    status_code = 403


class IoError(ApiError):
    status_code = 500


class InvalidRequest(ApiError):
    status_code = 400


def envelope(data: Any = None, code: int = 0, message: str = "success") -> dict:
    return {"code": code, "message": message, "data": data}


def success(data: Any = None) -> JSONResponse:
    return JSONResponse(envelope(data))


def error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(envelope(None, status_code, message), status_code=status_code, headers=headers)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"[API] {request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def os_error_handler(request: Request, exc: OSError) -> JSONResponse:
    logger.exception(f"[API] {request.method} {request.url.path} failed: {exc}")
    return error_response(IoError.status_code, str(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(InvalidRequest.status_code, f"Invalid request: {exc.errors()}")


def install(app) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(OSError, os_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
