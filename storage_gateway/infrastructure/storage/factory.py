"""Storage gateway factory: creates local or S3 backend from settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from storage_gateway.domain.enums import StorageBackend
from storage_gateway.domain.exceptions import StorageConfigurationError
from storage_gateway.infrastructure.storage.base import BaseStorageGateway

if TYPE_CHECKING:
    from storage_gateway.core.config import Settings


class StorageFactory:
    """Factory for gateway instances based on configuration."""

    @staticmethod
    def create_storage_gateway(
        settings: "Settings | None" = None,
        logger: logging.Logger | None = None,
    ) -> BaseStorageGateway:
        """Create a storage gateway from settings.

        Configuration is checked here, before any client is built, so a
        missing region or credential fails at startup rather than on the
        first request.

        Args:
            settings: Settings; if None, uses get_settings().
            logger: Optional logger passed to the gateway.

        Returns:
            LocalStorageGateway or S3StorageGateway.

        Raises:
            StorageConfigurationError: Unknown backend or missing required config.
        """
        from storage_gateway.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == StorageBackend.LOCAL.value:
            from storage_gateway.infrastructure.storage.local_storage import (
                LocalStorageGateway,
            )

            if not s.storage_root:
                raise StorageConfigurationError(
                    "STORAGE_ROOT required for local backend", ["storage_root"]
                )
            return LocalStorageGateway(
                storage_root=s.storage_root,
                base_url=s.storage_base_url,
                logger=logger,
                default_expires_in=s.signed_url_default_expiry,
            )
        if backend == StorageBackend.S3.value:
            from storage_gateway.infrastructure.storage.s3_storage import (
                S3StorageGateway,
                create_s3_client,
            )

            secret_key = (
                s.s3_secret_key.get_secret_value() if s.s3_secret_key else ""
            )
            missing = [
                name
                for name, value in (
                    ("s3_region", s.s3_region),
                    ("s3_access_key", s.s3_access_key),
                    ("s3_secret_key", secret_key),
                )
                if not value
            ]
            if missing:
                raise StorageConfigurationError(
                    "S3 backend requires region and credentials; missing: "
                    + ", ".join(missing),
                    missing,
                )
            client = create_s3_client(
                region=s.s3_region,
                access_key=s.s3_access_key,
                secret_key=secret_key,
                endpoint_url=s.s3_endpoint_url,
            )
            return S3StorageGateway(
                client,
                logger=logger,
                default_expires_in=s.signed_url_default_expiry,
            )
        raise StorageConfigurationError(
            f"Unknown storage backend: {backend}. "
            f"Supported: {', '.join(repr(v) for v in StorageBackend.values())}"
        )
