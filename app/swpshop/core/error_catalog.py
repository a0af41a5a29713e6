from dataclasses import dataclass

from fastapi import status

from swpshop_client_sdk.results import ApiError, ErrorType


@dataclass(frozen=True)
class ErrorDefinition:
    code: str
    message: str
    status_code: int
    error_type: ErrorType


class ErrorCatalog:
    INVALID_FILTER = ErrorDefinition(
        "INVALID_FILTER",
        "Filter must be valid JSON.",
        status.HTTP_400_BAD_REQUEST,
        ErrorType.VALIDATION,
    )
    PRODUCT_NOT_FOUND = ErrorDefinition(
        "PRODUCT_NOT_FOUND",
        "Product not found.",
        status.HTTP_404_NOT_FOUND,
        ErrorType.NOT_FOUND,
    )
    VALIDATION_ERROR = ErrorDefinition(
        "VALIDATION_ERROR",
        "Invalid request parameters.",
        status.HTTP_400_BAD_REQUEST,
        ErrorType.VALIDATION,
    )
    ROUTE_NOT_FOUND = ErrorDefinition(
        "ROUTE_NOT_FOUND",
        "Route not found.",
        status.HTTP_404_NOT_FOUND,
        ErrorType.NOT_FOUND,
    )
    INTERNAL_ERROR = ErrorDefinition(
        "INTERNAL_ERROR",
        "Internal Server Error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorType.HTTP,
    )


def catalog_error(definition: ErrorDefinition, details: object | None = None) -> ApiError:
    return ApiError(
        type=definition.error_type,
        message=definition.message,
        status=definition.status_code,
        code=definition.code,
        details=details,
    )


class AppError(Exception):
    """Carries an ``ApiError`` out of a route to the exception handlers.

    ``upstream`` marks failures reported by the CMS rather than raised locally.
    """

    def __init__(self, error: ApiError, *, upstream: bool = False):
        self.error = error
        self.upstream = upstream
        super().__init__(error.message)

    @classmethod
    def from_definition(cls, definition: ErrorDefinition, details: object | None = None) -> "AppError":
        return cls(catalog_error(definition, details))
