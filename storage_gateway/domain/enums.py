"""Domain enumerations for the storage gateway."""

from enum import Enum


class StorageOperation(str, Enum):
    """Kind of gateway operation.

    Used to label log records so a failure can be classified as a write,
    read, delete, list or signing failure without wrapping the provider's
    exception.
    """

    WRITE = "write"
    READ = "read"
    DELETE = "delete"
    LIST = "list"
    SIGN = "sign"

    @classmethod
    def values(cls) -> list[str]:
        """Return all operation values as strings."""
        return [op.value for op in cls]


class StorageBackend(str, Enum):
    """Supported storage backends."""

    LOCAL = "local"
    S3 = "s3"

    @classmethod
    def values(cls) -> list[str]:
        """Return all backend values as strings."""
        return [backend.value for backend in cls]
