# app/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.errors import AppError, ConflictError, NotFoundError
from app.utils.logging import get_logger

logger = get_logger(__name__)


def error_body(message: str, code: str, details: list | None = None) -> dict:
    return {"error": {"message": message, "code": code, "details": details or []}}


def _render(err: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=err.status_code,
        content=error_body(err.message, err.code, err.details),
    )


async def app_error_handler(request: Request, exc: AppError):
    return _render(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "path": ".".join(str(p) for p in e.get("loc", ()) if p != "body"),
            "issue": e.get("msg", ""),
        }
        for e in exc.errors()
    ]
    return JSONResponse(status_code=400, content=error_body("Validation failed", "VALIDATION_ERROR", details))


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return _render(ConflictError("Resource already exists"))


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return _render(NotFoundError("Route not found"))
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), "HTTP_ERROR"),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
