"""Domain exceptions for the storage gateway.

Defines gateway-level exceptions that are independent of any storage
provider. Provider SDK errors are not wrapped in these; they propagate
to the caller unchanged.
"""

from typing import Any


class StorageGatewayException(Exception):
    """Base exception for all storage gateway errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, bucket, key).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(StorageGatewayException):
    """Raised when a request record is malformed (e.g. empty bucket or key)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class StorageConfigurationError(StorageGatewayException):
    """Raised when the gateway cannot be built from the given settings."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        details: dict[str, Any] = {"missing": missing} if missing else {}
        super().__init__(message, "CONFIGURATION_ERROR", details)
