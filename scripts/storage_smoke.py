"""Smoke-test the configured storage backend end to end.

Uploads one object, lists it, downloads it, signs a URL for it, deletes it
and lists again. Exits non-zero if any step does not behave as expected.

Usage:
    python -m scripts.storage_smoke <bucket> [key]

Backend and credentials come from the environment / .env
(STORAGE_BACKEND, STORAGE_ROOT, S3_REGION or AWS_REGION, ...).
"""

import asyncio
import sys

from storage_gateway.domain.requests import (
    DeleteFileRequest,
    DownloadFileRequest,
    ListFilesRequest,
    SignedUrlRequest,
    UploadFileRequest,
)
from storage_gateway.infrastructure.storage.factory import StorageFactory
from storage_gateway.shared.telemetry.logging import setup_logging

_CONTENT = b"Hello"


async def main() -> None:
    """Run upload, list, download, sign, delete and list against one key."""
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.storage_smoke <bucket> [key]", file=sys.stderr)
        sys.exit(2)
    bucket = sys.argv[1]
    key = sys.argv[2] if len(sys.argv) > 2 else "storage-smoke/f.txt"

    setup_logging()
    gateway = StorageFactory.create_storage_gateway()

    await gateway.upload_files(
        [UploadFileRequest(bucket, key, _CONTENT, content_type="text/plain")]
    )
    keys = await gateway.list_files(ListFilesRequest(bucket, prefix=key))
    if key not in keys:
        print(f"Uploaded key missing from listing: {keys}", file=sys.stderr)
        sys.exit(1)

    (content,) = await gateway.download_files([DownloadFileRequest(bucket, key)])
    if content != _CONTENT:
        print(f"Downloaded content differs: {content!r}", file=sys.stderr)
        sys.exit(1)

    url = await gateway.get_signed_url(SignedUrlRequest(bucket, key, expires_in=60))
    print(f"Signed URL: {url}")

    await gateway.delete_files([DeleteFileRequest(bucket, key)])
    keys = await gateway.list_files(ListFilesRequest(bucket, prefix=key))
    if key in keys:
        print("Deleted key still listed", file=sys.stderr)
        sys.exit(1)

    print("Done. Storage backend OK.")


if __name__ == "__main__":
    asyncio.run(main())
