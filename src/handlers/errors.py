"""Exception handlers translating failures into ErrorDetail payloads."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from src.context.user_context import get_user_context
from src.models.errors import ErrorCode, ErrorDetail, ServiceError
from src.utils.logging import get_logger

logger = get_logger(__name__)

STATUS_BY_CODE = {
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
}


def _correlation_id() -> str | None:
    ctx = get_user_context()
    return ctx.request_id if ctx else None


def _error_response(
    status_code: int, code: ErrorCode, message: str, details: dict[str, Any] | None = None
) -> JSONResponse:
    detail = ErrorDetail(
        code=code, message=message, details=details, correlation_id=_correlation_id()
    )
    return JSONResponse(content=jsonable_encoder(detail), status_code=status_code)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request body/query failed DTO validation before reaching the handler."""
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    logger.info("request_validation_failed", path=request.url.path, error_count=len(errors))
    return _error_response(
        422,
        ErrorCode.INVALID_INPUT,
        "Request validation failed",
        {"errors": errors},
    )


async def service_exception_handler(request: Request, exc: ServiceError) -> JSONResponse:
    status_code = STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    logger.warning(
        "service_error",
        path=request.url.path,
        error_code=exc.code.value,
        error_message=exc.message,
        details=exc.details,
    )
    return _error_response(status_code, exc.code, exc.message, exc.details)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ServiceError, service_exception_handler)  # type: ignore[arg-type]
