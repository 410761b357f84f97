"""Global exception handlers for the API."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from api.schemas.base import ErrorDetail, ErrorResponse
from onboarding import errors as onboarding_errors

logger = structlog.get_logger()

# HTTP status for each onboarding error kind
ONBOARD_ERROR_STATUS = {
    onboarding_errors.NotFoundError: 404,
    onboarding_errors.InvalidStateError: 409,
    onboarding_errors.BatchInProgressError: 409,
    onboarding_errors.ValidationError: 422,
    onboarding_errors.OnboardTimeoutError: 504,
    onboarding_errors.StorageError: 500,
}


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        message: str,
        code: str = "API_ERROR",
        status_code: int = 400,
        details: dict = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ValidationAPIError(APIError):
    """Validation error."""

    def __init__(self, message: str, field: str = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=422,
            details={"field": field} if field else {},
        )


def onboard_error_status(exc: onboarding_errors.OnboardError) -> int:
    for error_class in type(exc).__mro__:
        if error_class in ONBOARD_ERROR_STATUS:
            return ONBOARD_ERROR_STATUS[error_class]
    return 400


def _error_body(code: str, message: str, details: dict) -> dict:
    return ErrorResponse(error=ErrorDetail(code=code, message=message, details=details)).model_dump()


def setup_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        """Handle custom API errors."""
        logger.warning(
            "API error",
            code=exc.code,
            message=exc.message,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.code, exc.message, exc.details),
        )

    @app.exception_handler(onboarding_errors.OnboardError)
    async def onboard_error_handler(request: Request, exc: onboarding_errors.OnboardError) -> JSONResponse:
        """Handle errors raised by the onboarding core."""
        status_code = onboard_error_status(exc)
        log_method = logger.error if status_code >= 500 else logger.warning
        log_method(
            "Onboarding error",
            code=exc.code,
            message=exc.message,
            candidate_id=exc.candidate_id,
            path=request.url.path,
        )

        details = {"candidateId": exc.candidate_id} if exc.candidate_id else {}
        field = getattr(exc, "field", None)
        if field:
            details["field"] = field
        return JSONResponse(
            status_code=status_code,
            content=_error_body(exc.code, exc.message, details),
        )

    @app.exception_handler(RequestValidationError)
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = exc.errors()
        first_error = errors[0] if errors else {}
        field = ".".join(str(loc) for loc in first_error.get("loc", []))
        message = first_error.get("msg", "Validation error")

        logger.warning(
            "Validation error",
            field=field,
            message=message,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=422,
            content=_error_body("VALIDATION_ERROR", message, {"field": field}),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Handle database errors."""
        logger.error(
            "Database error",
            error=str(exc),
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("DATABASE_ERROR", "A database error occurred", {}),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected errors."""
        logger.exception(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "An unexpected error occurred", {}),
        )
