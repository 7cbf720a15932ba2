"""Infrastructure exceptions raised by storage backends implemented here.

The S3 backend lets botocore errors through untouched. These classes are
for failures detected by this package itself (the local filesystem
backend has no SDK to raise on its behalf).
"""

from storage_gateway.domain.exceptions import StorageGatewayException


class StorageException(StorageGatewayException):
    """Base exception for storage operations."""


class StorageNotFoundError(StorageException):
    """Object not found in storage."""

    def __init__(self, bucket: str, key: str) -> None:
        super().__init__(
            f"File not found: {bucket}/{key}",
            "STORAGE_NOT_FOUND",
            {"bucket": bucket, "key": key},
        )


class StoragePermissionError(StorageException):
    """Object path escapes the storage root, or access is otherwise refused."""

    def __init__(self, path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {path}",
            "STORAGE_PERMISSION_ERROR",
            {"path": path, "operation": operation},
        )


class StorageConflictError(StorageException):
    """Key collides with an existing object as file versus directory.

    The local backend maps keys onto paths, so "a" and "a/b" cannot both
    exist in one bucket.
    """

    def __init__(self, bucket: str, key: str) -> None:
        super().__init__(
            f"Key conflicts with an existing object: {bucket}/{key}",
            "STORAGE_CONFLICT",
            {"bucket": bucket, "key": key},
        )
