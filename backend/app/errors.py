from enum import Enum


class ErrorType(Enum):
    VALIDATION_ERROR = "validation_error"
    PRODUCT_NOT_FOUND = "product_not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    TRANSACTION_NOT_FOUND = "transaction_not_found"
    DUPLICATE_BARCODE = "duplicate_barcode"
    PRODUCT_IN_USE = "product_in_use"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_CONFIGURED = "not_configured"
    STORE_FAILURE = "store_failure"
    INTERNAL_ERROR = "internal_error"


# Map error types to HTTP status codes
ERROR_STATUS_MAP = {
    ErrorType.VALIDATION_ERROR: 400,
    ErrorType.PRODUCT_NOT_FOUND: 404,
    ErrorType.TRANSACTION_NOT_FOUND: 404,
    ErrorType.INSUFFICIENT_STOCK: 409,
    ErrorType.DUPLICATE_BARCODE: 409,
    ErrorType.PRODUCT_IN_USE: 409,
    ErrorType.UNAUTHORIZED: 401,
    ErrorType.FORBIDDEN: 403,
    ErrorType.NOT_CONFIGURED: 503,
    ErrorType.STORE_FAILURE: 500,
    ErrorType.INTERNAL_ERROR: 500,
}
