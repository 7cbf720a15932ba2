"""Domain layer: request records, enums, and exceptions.

No dependencies on storage providers. Used by the infrastructure layer.
"""

from storage_gateway.domain.enums import StorageBackend, StorageOperation
from storage_gateway.domain.exceptions import (
    StorageConfigurationError,
    StorageGatewayException,
    ValidationException,
)
from storage_gateway.domain.requests import (
    DeleteFileRequest,
    DownloadFileRequest,
    FileReference,
    ListFilesRequest,
    SignedUrlRequest,
    UploadFileRequest,
)

__all__ = [
    "StorageBackend",
    "StorageOperation",
    "StorageGatewayException",
    "ValidationException",
    "StorageConfigurationError",
    "FileReference",
    "UploadFileRequest",
    "DownloadFileRequest",
    "DeleteFileRequest",
    "ListFilesRequest",
    "SignedUrlRequest",
]
