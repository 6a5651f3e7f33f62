"""
Error translation for the HTTP layer.

Maps domain error classes onto status codes and renders a uniform
ApiErrorResponse body.
"""

from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from wishlist.application.dtos import ApiErrorResponse
from wishlist.core.observability import get_logger
from wishlist.domain.shared.exceptions import (
    ConcurrencyError,
    DomainError,
    InvalidQuantityError,
    ItemNotFoundError,
    StorageFailureError,
    WishlistNotFoundError,
    WishlistValidationError,
)

logger = get_logger(__name__)

# Most specific classes first
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ItemNotFoundError, status.HTTP_404_NOT_FOUND),
    (WishlistNotFoundError, status.HTTP_404_NOT_FOUND),
    (WishlistValidationError, status.HTTP_400_BAD_REQUEST),
    (ConcurrencyError, status.HTTP_409_CONFLICT),
    (StorageFailureError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_code_for(error: DomainError) -> int:
    for error_class, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_class):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: dict | None = None,
) -> JSONResponse:
    body = ApiErrorResponse(
        code=code,
        message=message,
        timestamp=datetime.now(timezone.utc),
        path=request.url.path,
        details=details or {},
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    error = exc.to_dict()
    return _error_response(
        request,
        status_code_for(exc),
        error["code"],
        error["message"],
        error["details"],
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render malformed bodies as 400s in the same shape as domain validation errors."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "type": error["type"],
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    if any("quantity" in error["loc"] for error in exc.errors()):
        code = InvalidQuantityError.code
    else:
        code = WishlistValidationError.code
    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        code,
        "; ".join(f"{e['field']}: {e['message']}" for e in errors),
        {"errors": errors},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred. Please try again later.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
