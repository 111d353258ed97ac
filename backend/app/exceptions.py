import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from app.errors import ErrorType, ERROR_STATUS_MAP

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Custom exception that services can raise."""

    def __init__(self, error_type: ErrorType, message: str):
        self.error_type = error_type
        self.message = message
        super().__init__(message)


class CartValidationError(AppException):
    """Cart or total failed shape validation. Raised before any store access."""

    def __init__(self, reason: str, line: int | None = None):
        self.line = line
        self.reason = reason
        message = reason if line is None else f"Invalid cart line {line}: {reason}"
        super().__init__(ErrorType.VALIDATION_ERROR, message)


class ProductNotFound(AppException):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(ErrorType.PRODUCT_NOT_FOUND, f"Product with ID {product_id} not found.")


class InsufficientStock(AppException):
    def __init__(self, product_id: int, product_name: str, available: int, requested: int):
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            ErrorType.INSUFFICIENT_STOCK,
            f"Insufficient stock for {product_name} (ID: {product_id}). "
            f"Available: {available}, Requested: {requested}"
        )


class StoreFailure(AppException):
    """Persistence failed inside a unit of work. The message stays opaque to callers."""

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(ErrorType.STORE_FAILURE, message)


async def app_exception_handler(_request: Request, exc: AppException) -> JSONResponse:
    """Global handler for AppException - converts to proper HTTP response."""
    status_code = ERROR_STATUS_MAP.get(exc.error_type, 500)
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.error_type.value, "details": exc.message}
    )


async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are client errors (400), not 422."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        details = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        details = "Invalid request"
    return JSONResponse(
        status_code=400,
        content={"error": ErrorType.VALIDATION_ERROR.value, "details": details}
    )


async def generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Global handler for unhandled exceptions - returns 500."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": ErrorType.INTERNAL_ERROR.value, "details": "Internal server error"}
    )
