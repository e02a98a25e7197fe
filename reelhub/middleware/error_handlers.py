"""
Exception handlers: every failure leaves the API as an ErrorResponse body.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from reelhub.db.helpers import DatabaseError
from reelhub.errors import AppError
from reelhub.infrastructure.observability.logging import get_logger
from reelhub.models.api.common import ErrorResponse

logger = get_logger(__name__)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.info(
        "Request failed",
        path=request.url.path,
        error=exc.code,
        message=exc.message,
        **{k: str(v) for k, v in exc.context.items()},
    )
    return _error_response(exc.status_code, exc.code, exc.message)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error(
        "Database unavailable for request",
        path=request.url.path,
        operation=exc.operation,
        recoverable=exc.recoverable,
        error=str(exc),
    )
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "service_unavailable",
        "Service temporarily unavailable, please retry",
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{field}: {first.get('msg', 'invalid input')}" if field else "Invalid request"
    return _error_response(status.HTTP_400_BAD_REQUEST, "validation_error", message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
