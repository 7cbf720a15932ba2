"""S3-compatible object storage gateway (AWS S3, MinIO, etc.)."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import boto3
from botocore.config import Config

from storage_gateway.core.constants import CHUNK_SIZE, DEFAULT_SIGNED_URL_EXPIRY
from storage_gateway.domain.requests import (
    DeleteFileRequest,
    DownloadFileRequest,
    UploadFileRequest,
)
from storage_gateway.infrastructure.storage.base import BaseStorageGateway


def create_s3_client(
    region: str,
    access_key: str,
    secret_key: str,
    endpoint_url: str | None = None,
) -> Any:
    """Build a boto3 S3 client from explicit configuration.

    Args:
        region: Provider region.
        access_key: Access key id.
        secret_key: Secret access key.
        endpoint_url: Custom endpoint (MinIO/Spaces); None for AWS.

    Returns:
        boto3 S3 client.
    """
    extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
    return boto3.client(
        "s3",
        region_name=region,
        aws_access_key_id=access_key,
        aws_secret_access_key=secret_key,
        config=Config(signature_version="s3v4"),
        **extra,
    )


class S3StorageGateway(BaseStorageGateway):
    """S3-compatible gateway over an injected boto3 client.

    boto3 is synchronous, so each call runs via asyncio.to_thread. The
    client is only read from and is shared by concurrent calls. Provider
    errors (ClientError, BotoCoreError) reach the caller unchanged.
    """

    provider_name = "s3"

    def __init__(
        self,
        client: Any,
        logger: logging.Logger | None = None,
        default_expires_in: int = DEFAULT_SIGNED_URL_EXPIRY,
    ) -> None:
        """Initialize with a ready S3 client.

        Args:
            client: boto3 S3 client (see create_s3_client).
            logger: Optional logger; defaults to this module's logger.
            default_expires_in: Signed URL lifetime when a request sets none.
        """
        super().__init__(logger=logger, default_expires_in=default_expires_in)
        self._client = client

    @property
    def client(self) -> Any:
        return self._client

    async def _put_object(self, request: UploadFileRequest) -> None:
        await asyncio.to_thread(
            self._client.put_object,
            Bucket=request.bucket,
            Key=request.key,
            Body=bytes(request.content),
            ContentType=request.resolved_content_type,
        )

    async def _get_object(self, request: DownloadFileRequest) -> bytes:
        def _get() -> bytes:
            resp = self._client.get_object(Bucket=request.bucket, Key=request.key)
            body = resp["Body"]
            try:
                return b"".join(body.iter_chunks(chunk_size=CHUNK_SIZE))
            finally:
                body.close()

        return await asyncio.to_thread(_get)

    async def _delete_object(self, request: DeleteFileRequest) -> None:
        await asyncio.to_thread(
            self._client.delete_object,
            Bucket=request.bucket,
            Key=request.key,
        )

    async def _list_keys(self, bucket: str, prefix: str) -> list[str]:
        def _list() -> list[str]:
            keys: list[str] = []
            list_kw: dict[str, Any] = {"Bucket": bucket, "Prefix": prefix}
            while True:
                resp = self._client.list_objects_v2(**list_kw)
                keys.extend(obj["Key"] for obj in resp.get("Contents") or [])
                if not resp.get("IsTruncated"):
                    return keys
                list_kw["ContinuationToken"] = resp["NextContinuationToken"]

        return await asyncio.to_thread(_list)

    async def _presign_get(self, bucket: str, key: str, expires_in: int) -> str:
        return await asyncio.to_thread(
            self._client.generate_presigned_url,
            "get_object",
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=expires_in,
        )
