"""Global exception handlers that map domain exceptions to HTTP responses."""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from app.errors import (
    CONFLICT,
    NOT_FOUND,
    STORE_ERROR,
    VALIDATION_ERROR,
    ConflictError,
    DomainValidationError,
    NotFoundError,
    StoreError,
)
from app.schemas.error import ErrorResponse


def _error_response(status_code: int, detail: str, code: str) -> JSONResponse:
    """Return a standardized error response with detail and machine-readable code."""
    body = ErrorResponse(detail=detail, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def domain_validation_error_handler(
    _request: Request, exc: DomainValidationError
) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        str(exc),
        VALIDATION_ERROR,
    )


def conflict_error_handler(_request: Request, exc: ConflictError) -> JSONResponse:
    return _error_response(
        status.HTTP_409_CONFLICT,
        str(exc),
        CONFLICT,
    )


def not_found_error_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(
        status.HTTP_404_NOT_FOUND,
        str(exc),
        NOT_FOUND,
    )


def store_error_handler(_request: Request, exc: StoreError) -> JSONResponse:
    # Details of the underlying store failure stay in the logs
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        str(exc),
        STORE_ERROR,
    )


def register_exception_handlers(app):
    """Register domain exception handlers on the FastAPI app."""
    app.add_exception_handler(DomainValidationError, domain_validation_error_handler)
    app.add_exception_handler(ConflictError, conflict_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
