"""
Mapping of service exceptions to HTTP responses.

Every error response has the same body:

    {"statusCode", "timestamp", "path", "method", "message", "error",
     "requestId", "details"?}
"""

from datetime import UTC, datetime
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from syllabus_graph.utils.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    SyllabusGraphError,
    ValidationError,
)
from syllabus_graph.utils.logger import get_logger

logger = get_logger(__name__)

STATUS_CODES: dict[type[SyllabusGraphError], int] = {
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFoundError: 404,
    ConflictError: 409,
}


def status_code_for(exc: SyllabusGraphError) -> int:
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return 500


def error_response(
    request: Request, status_code: int, message: str, details: list[str] | None = None
) -> JSONResponse:
    body = {
        "statusCode": status_code,
        "timestamp": datetime.now(UTC).isoformat(),
        "path": request.url.path,
        "method": request.method,
        "message": message,
        "error": HTTPStatus(status_code).phrase,
        "requestId": getattr(request.state, "request_id", None),
    }
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


async def syllabus_error_handler(request: Request, exc: SyllabusGraphError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code == 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return error_response(request, 500, "Internal server error")

    logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    return error_response(request, status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"][1:])
        details.append(f"{field}: {error['msg']}" if field else error["msg"])
    return error_response(request, 400, "Validation failed", details)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (unknown path, wrong method) raised by Starlette itself."""
    response = error_response(request, exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(request, 500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SyllabusGraphError, syllabus_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
