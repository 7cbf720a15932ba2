"""Storage: local filesystem and S3-compatible gateways.

The factory builds a gateway from storage_gateway.core.config. Backends
are imported lazily inside StorageFactory.create_storage_gateway() so the
local backend does not load boto3.

Implementations implement StorageGatewayProtocol (upload_files,
download_files, delete_files, list_files, get_signed_url).
"""

from storage_gateway.infrastructure.storage.base import BaseStorageGateway
from storage_gateway.infrastructure.storage.factory import StorageFactory
from storage_gateway.infrastructure.storage.protocol import StorageGatewayProtocol

__all__ = [
    "BaseStorageGateway",
    "StorageFactory",
    "StorageGatewayProtocol",
]
