"""Storage gateway protocol (DIP). Implementations: LocalStorageGateway, S3StorageGateway."""

from collections.abc import Sequence
from typing import Protocol

from storage_gateway.domain.requests import (
    DeleteFileRequest,
    DownloadFileRequest,
    ListFilesRequest,
    SignedUrlRequest,
    UploadFileRequest,
)


class StorageGatewayProtocol(Protocol):
    """Protocol for object storage gateways (local, S3-compatible).

    Batch operations run their items concurrently and fail with the first
    item error; there is no rollback of items that already succeeded.
    """

    async def upload_files(self, requests: Sequence[UploadFileRequest]) -> None:
        """Write each request's content at its key, overwriting existing objects."""
        ...

    async def download_files(
        self, requests: Sequence[DownloadFileRequest]
    ) -> list[bytes]:
        """Read full content of each object, in input order."""
        ...

    async def delete_files(self, requests: Sequence[DeleteFileRequest]) -> None:
        """Delete each addressed object."""
        ...

    async def list_files(self, request: ListFilesRequest) -> list[str]:
        """Return keys in the bucket that start with the prefix (empty = all)."""
        ...

    async def get_signed_url(self, request: SignedUrlRequest) -> str:
        """Return a time-limited URL allowing anonymous read of one object."""
        ...
