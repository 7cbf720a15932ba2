"""Provider-agnostic object storage gateway.

Build a gateway with StorageFactory.create_storage_gateway() and call it
with the request records from storage_gateway.domain.
"""

from storage_gateway.domain import (
    DeleteFileRequest,
    DownloadFileRequest,
    FileReference,
    ListFilesRequest,
    SignedUrlRequest,
    StorageConfigurationError,
    StorageGatewayException,
    UploadFileRequest,
    ValidationException,
)
from storage_gateway.infrastructure.storage import (
    BaseStorageGateway,
    StorageFactory,
    StorageGatewayProtocol,
)

__all__ = [
    "StorageFactory",
    "StorageGatewayProtocol",
    "BaseStorageGateway",
    "FileReference",
    "UploadFileRequest",
    "DownloadFileRequest",
    "DeleteFileRequest",
    "ListFilesRequest",
    "SignedUrlRequest",
    "StorageGatewayException",
    "StorageConfigurationError",
    "ValidationException",
]
