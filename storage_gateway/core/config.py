"""Gateway configuration (settings and environment).

Single source of truth for configuration. Uses pydantic-settings with
.env support. Backend-specific requirements (region, credentials, root
directory) are checked by StorageFactory when the gateway is built.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from storage_gateway.core.constants import DEFAULT_SIGNED_URL_EXPIRY
from storage_gateway.domain.enums import StorageBackend


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    S3 region and credentials also accept the conventional AWS_REGION,
    AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY variable names.
    """

    # App
    app_name: str = "storage-gateway"
    debug: bool = False

    # Storage
    storage_backend: str = StorageBackend.LOCAL.value
    storage_root: str = "/var/storage-gateway"
    storage_base_url: str | None = None
    signed_url_default_expiry: int = DEFAULT_SIGNED_URL_EXPIRY

    # S3-compatible provider
    s3_region: str | None = Field(
        default=None,
        validation_alias=AliasChoices("s3_region", "aws_region"),
    )
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("s3_access_key", "aws_access_key_id"),
    )
    s3_secret_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("s3_secret_key", "aws_secret_access_key"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def validate_storage(self) -> "Settings":
        """Normalize and validate the storage backend name."""
        self.storage_backend = self.storage_backend.lower()
        if self.storage_backend not in StorageBackend.values():
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. "
                f"Must be one of: {', '.join(repr(v) for v in StorageBackend.values())}"
            )
        if self.signed_url_default_expiry <= 0:
            raise ValueError("signed_url_default_expiry must be positive")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars so
    the next get_settings() uses the new values.
    """
    return Settings()
