"""Local filesystem gateway with path validation and atomic writes."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import secrets
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, cast

import aiofiles
import aiofiles.os

from storage_gateway.core.constants import (
    CHUNK_SIZE,
    DEFAULT_SIGNED_URL_EXPIRY,
    META_DIR,
    TEMP_DIR,
    TEMP_PREFIX,
)
from storage_gateway.domain.requests import (
    DeleteFileRequest,
    DownloadFileRequest,
    FileReference,
    UploadFileRequest,
)
from storage_gateway.infrastructure.exceptions import (
    StorageConflictError,
    StorageNotFoundError,
    StoragePermissionError,
)
from storage_gateway.infrastructure.storage.base import BaseStorageGateway
from storage_gateway.shared.utils.datetime import utc_now


class LocalStorageGateway(BaseStorageGateway):
    """Local filesystem storage laid out as <storage_root>/<bucket>/<key>.

    Keys must already be in canonical form: "x/../y.txt", "./a.txt", "a//b"
    and "dir/" are refused with StoragePermissionError rather than mapped
    onto a different path. Bucket names may not start with "." because
    <storage_root>/.meta holds the JSON sidecars (content type, size,
    upload time) mirroring the bucket trees, and <storage_root>/.tmp holds
    in-flight uploads that are renamed into place. Any key name is
    therefore usable inside a bucket.

    Keys map onto paths, so a key cannot be both an object and a
    directory of objects: with "a" stored, uploading "a/b" raises
    StorageConflictError, and so does "a" once "a/b" exists.

    Signed URLs are backed by in-memory tokens checked with
    validate_download_token().
    """

    provider_name = "local"

    def __init__(
        self,
        storage_root: str,
        base_url: str | None = None,
        logger: logging.Logger | None = None,
        default_expires_in: int = DEFAULT_SIGNED_URL_EXPIRY,
    ) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory; each bucket is a subdirectory.
            base_url: Base URL for download links (e.g. https://files.example.com).
            logger: Optional logger; defaults to this module's logger.
            default_expires_in: Signed URL lifetime when a request sets none.
        """
        super().__init__(logger=logger, default_expires_in=default_expires_in)
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/") if base_url else None
        self.meta_root = self.storage_root / META_DIR
        self.temp_root = self.storage_root / TEMP_DIR
        for path in (self.storage_root, self.meta_root, self.temp_root):
            path.mkdir(parents=True, exist_ok=True, mode=0o750)
        self._download_tokens: dict[str, tuple[FileReference, datetime]] = {}

    def _bucket_path(self, bucket: str) -> Path:
        """Resolve bucket directory. Raises StoragePermissionError on traversal."""
        bucket_path = (self.storage_root / bucket).resolve()
        if (
            bucket.startswith(".")
            or bucket_path.parent != self.storage_root
            or bucket_path.name != bucket
        ):
            raise StoragePermissionError(bucket, "path_validation")
        return bucket_path

    def _object_path(self, bucket: str, key: str) -> Path:
        """Resolve object path under its bucket.

        Raises:
            StoragePermissionError: Key escapes the bucket or is not canonical.
        """
        bucket_path = self._bucket_path(bucket)
        full_path = (bucket_path / key).resolve()
        try:
            relative = full_path.relative_to(bucket_path)
        except ValueError as e:
            raise StoragePermissionError(f"{bucket}/{key}", "path_validation") from e
        if not relative.parts:
            raise StoragePermissionError(f"{bucket}/{key}", "path_validation")
        # Two spellings must never reach the same file
        if relative.as_posix() != key:
            raise StoragePermissionError(f"{bucket}/{key}", "key_normalization")
        return full_path

    def _meta_path(self, bucket: str, key: str) -> Path:
        return self.meta_root / bucket / key

    async def _write_metadata(self, meta_path: Path, metadata: dict[str, Any]) -> None:
        """Write JSON sidecar."""
        meta_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
        async with aiofiles.open(meta_path, "w") as f:
            await f.write(json.dumps(metadata, indent=2))
        os.chmod(meta_path, 0o640)

    async def read_metadata(self, reference: FileReference) -> dict[str, Any]:
        """Return the stored sidecar (content_type, size, uploaded_at) for an object.

        Raises:
            StorageNotFoundError: Object does not exist.
        """
        file_path = self._object_path(reference.bucket, reference.key)
        if not file_path.is_file():
            raise StorageNotFoundError(reference.bucket, reference.key)
        meta_path = self._meta_path(reference.bucket, reference.key)
        if not meta_path.is_file():
            return {}
        async with aiofiles.open(meta_path, "r") as f:
            result = json.loads(await f.read())
        return cast(dict[str, Any], result) if isinstance(result, dict) else {}

    async def _put_object(self, request: UploadFileRequest) -> None:
        """Write via temp file + rename.

        Raises:
            StorageConflictError: A parent of the key is an object, or the
                key is a directory of objects.
        """
        target_path = self._object_path(request.bucket, request.key)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
        except (FileExistsError, NotADirectoryError) as e:
            raise StorageConflictError(request.bucket, request.key) from e
        if target_path.is_dir():
            raise StorageConflictError(request.bucket, request.key)
        content = bytes(request.content)

        temp_fd, temp_path = tempfile.mkstemp(dir=self.temp_root, prefix=TEMP_PREFIX)
        os.close(temp_fd)
        try:
            async with aiofiles.open(temp_path, "wb") as f:
                await f.write(content)
            os.chmod(temp_path, 0o640)
            try:
                os.replace(temp_path, target_path)
            except (IsADirectoryError, NotADirectoryError) as e:
                raise StorageConflictError(request.bucket, request.key) from e
        finally:
            if Path(temp_path).exists():
                os.unlink(temp_path)

        await self._write_metadata(
            self._meta_path(request.bucket, request.key),
            {
                "bucket": request.bucket,
                "key": request.key,
                "content_type": request.resolved_content_type,
                "size": len(content),
                "uploaded_at": utc_now().isoformat(),
            },
        )

    async def _get_object(self, request: DownloadFileRequest) -> bytes:
        file_path = self._object_path(request.bucket, request.key)
        if not file_path.is_file():
            raise StorageNotFoundError(request.bucket, request.key)
        chunks: list[bytes] = []
        async with aiofiles.open(file_path, "rb") as f:
            while True:
                chunk = await f.read(CHUNK_SIZE)
                if not chunk:
                    break
                chunks.append(chunk)
        return b"".join(chunks)

    async def _delete_object(self, request: DeleteFileRequest) -> None:
        """Remove object and sidecar; a missing object is not an error."""
        file_path = self._object_path(request.bucket, request.key)
        if not file_path.is_file():
            return
        await aiofiles.os.remove(file_path)
        self._prune_empty_dirs(file_path.parent, self._bucket_path(request.bucket))

        meta_path = self._meta_path(request.bucket, request.key)
        if meta_path.is_file():
            await aiofiles.os.remove(meta_path)
            self._prune_empty_dirs(meta_path.parent, self.meta_root / request.bucket)

    @staticmethod
    def _prune_empty_dirs(start: Path, stop: Path) -> None:
        """Remove empty directories from start up to (not including) stop."""
        parent = start
        while parent != stop:
            try:
                if any(parent.iterdir()):
                    break
                parent.rmdir()
            except OSError:
                break
            parent = parent.parent

    async def _list_keys(self, bucket: str, prefix: str) -> list[str]:
        bucket_path = self._bucket_path(bucket)

        def _walk() -> list[str]:
            if not bucket_path.is_dir():
                return []
            keys = []
            for path in bucket_path.rglob("*"):
                if not path.is_file():
                    continue
                key = path.relative_to(bucket_path).as_posix()
                if key.startswith(prefix):
                    keys.append(key)
            return sorted(keys)


        return await asyncio.to_thread(_walk)

    async def _presign_get(self, bucket: str, key: str, expires_in: int) -> str:
        """Return a token URL; the object need not exist yet, as with S3."""
        self._object_path(bucket, key)
        token = secrets.token_urlsafe(32)
        expires_at = utc_now() + timedelta(seconds=expires_in)
        self._download_tokens[token] = (FileReference(bucket, key), expires_at)
        self._cleanup_expired_tokens()
        path = f"/storage/download/{token}"
        return f"{self.base_url}{path}" if self.base_url else path

    def _cleanup_expired_tokens(self) -> None:
        """Remove expired download tokens."""
        now = utc_now()
        for token in [t for t, (_, exp) in self._download_tokens.items() if exp <= now]:
            del self._download_tokens[token]

    def validate_download_token(self, token: str) -> FileReference | None:
        """Return the object reference if token is known and not expired."""
        if token not in self._download_tokens:
            return None
        reference, expires_at = self._download_tokens[token]
        if utc_now() > expires_at:
            del self._download_tokens[token]
            return None
        return reference
