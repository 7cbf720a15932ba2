"""Provider-independent gateway behaviour: fan-out, logging, tracing.

Concrete gateways implement one coroutine per object operation; this
class turns them into batch calls. Errors from the provider are logged
once and re-raised unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import ClassVar

from storage_gateway.core.constants import DEFAULT_SIGNED_URL_EXPIRY
from storage_gateway.domain.enums import StorageOperation
from storage_gateway.domain.requests import (
    DeleteFileRequest,
    DownloadFileRequest,
    ListFilesRequest,
    SignedUrlRequest,
    UploadFileRequest,
)
from storage_gateway.shared.telemetry.logging import get_logger
from storage_gateway.shared.telemetry.tracing import (
    add_span_attributes,
    get_trace_id,
    traced,
)


class BaseStorageGateway(ABC):
    """Batch facade over single-object provider calls.

    Within a batch every item is dispatched at once (no concurrency cap).
    The first item to fail fails the whole call with its own exception;
    the other items are not cancelled and their outcomes are discarded.
    """

    provider_name: ClassVar[str] = "storage"

    def __init__(
        self,
        logger: logging.Logger | None = None,
        default_expires_in: int = DEFAULT_SIGNED_URL_EXPIRY,
    ) -> None:
        """Initialize shared gateway state.

        Args:
            logger: Logger for start/completion/error notices; defaults to
                the module logger of the concrete gateway.
            default_expires_in: Signed URL lifetime (seconds) used when a
                request does not set one.
        """
        self._logger = logger or get_logger(type(self).__module__)
        self.default_expires_in = default_expires_in

    # Provider hooks

    @abstractmethod
    async def _put_object(self, request: UploadFileRequest) -> None:
        """Write one object."""

    @abstractmethod
    async def _get_object(self, request: DownloadFileRequest) -> bytes:
        """Read one object to completion."""

    @abstractmethod
    async def _delete_object(self, request: DeleteFileRequest) -> None:
        """Delete one object."""

    @abstractmethod
    async def _list_keys(self, bucket: str, prefix: str) -> list[str]:
        """Return keys in bucket starting with prefix."""

    @abstractmethod
    async def _presign_get(self, bucket: str, key: str, expires_in: int) -> str:
        """Return a pre-authenticated read URL."""

    # Batch operations

    @traced("storage.upload_files")
    async def upload_files(self, requests: Sequence[UploadFileRequest]) -> None:
        """Upload all requests concurrently; fail on the first rejected write."""
        add_span_attributes(count=len(requests), backend=self.provider_name)
        self._logger.info(
            "Uploading %d file(s) to %s...", len(requests), self.provider_name
        )
        try:
            await asyncio.gather(*(self._put_object(r) for r in requests))
        except Exception:
            self._log_failure(
                f"Failed to upload files to {self.provider_name}",
                StorageOperation.WRITE,
            )
            raise
        self._logger.info("Upload completed successfully.")

    @traced("storage.download_files")
    async def download_files(
        self, requests: Sequence[DownloadFileRequest]
    ) -> list[bytes]:
        """Download all requests concurrently; results follow input order."""
        add_span_attributes(count=len(requests), backend=self.provider_name)
        self._logger.info(
            "Downloading %d file(s) from %s...", len(requests), self.provider_name
        )
        try:
            contents = await asyncio.gather(*(self._get_object(r) for r in requests))
        except Exception:
            self._log_failure(
                f"Failed to download files from {self.provider_name}",
                StorageOperation.READ,
            )
            raise
        self._logger.info("Download completed successfully.")
        return list(contents)

    @traced("storage.delete_files")
    async def delete_files(self, requests: Sequence[DeleteFileRequest]) -> None:
        """Delete all requests concurrently; fail on the first rejected delete."""
        add_span_attributes(count=len(requests), backend=self.provider_name)
        self._logger.info(
            "Deleting %d file(s) from %s...", len(requests), self.provider_name
        )
        try:
            await asyncio.gather(*(self._delete_object(r) for r in requests))
        except Exception:
            self._log_failure(
                f"Failed to delete files from {self.provider_name}",
                StorageOperation.DELETE,
            )
            raise
        self._logger.info("Deletion completed successfully.")

    @traced("storage.list_files")
    async def list_files(self, request: ListFilesRequest) -> list[str]:
        """Return keys in the bucket matching the prefix; [] when none match."""
        prefix = request.resolved_prefix
        add_span_attributes(bucket=request.bucket, backend=self.provider_name)
        self._logger.info(
            'Listing files from bucket "%s" with prefix "%s"...',
            request.bucket,
            prefix,
        )
        try:
            keys = await self._list_keys(request.bucket, prefix)
        except Exception:
            self._log_failure(
                f"Failed to list files from {self.provider_name}",
                StorageOperation.LIST,
            )
            raise
        self._logger.info("Found %d file(s).", len(keys))
        return keys

    @traced("storage.get_signed_url")
    async def get_signed_url(self, request: SignedUrlRequest) -> str:
        """Return a signed read URL, passed through as the provider issued it."""
        expires_in = request.resolve_expires_in(self.default_expires_in)
        add_span_attributes(bucket=request.bucket, backend=self.provider_name)
        self._logger.info(
            "Generating signed URL for %s://%s/%s...",
            self.provider_name,
            request.bucket,
            request.key,
        )
        try:
            url = await self._presign_get(request.bucket, request.key, expires_in)
        except Exception:
            self._log_failure("Failed to generate signed URL", StorageOperation.SIGN)
            raise
        self._logger.info("Signed URL generated successfully.")
        return url

    def _log_failure(self, message: str, operation: StorageOperation) -> None:
        """Record one error entry with the active exception's traceback."""
        self._logger.error(
            message,
            exc_info=True,
            extra={"operation": operation.value, "trace_id": get_trace_id()},
        )
