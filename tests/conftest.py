"""Pytest configuration and fixtures for storage_gateway.

Environment variables that feed Settings are cleared for every test so a
developer's shell or CI secrets never leak into configuration tests.
"""

import logging
from unittest.mock import MagicMock

import pytest

from storage_gateway.core.config import get_settings
from storage_gateway.infrastructure.storage.local_storage import LocalStorageGateway
from storage_gateway.infrastructure.storage.s3_storage import S3StorageGateway

_SETTINGS_ENV_VARS = (
    "STORAGE_BACKEND",
    "STORAGE_ROOT",
    "STORAGE_BASE_URL",
    "SIGNED_URL_DEFAULT_EXPIRY",
    "S3_REGION",
    "S3_ENDPOINT_URL",
    "S3_ACCESS_KEY",
    "S3_SECRET_KEY",
    "AWS_REGION",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "DEBUG",
)


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch: pytest.MonkeyPatch):
    """Drop settings env vars and the cached Settings before each test."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def gateway_logger(caplog: pytest.LogCaptureFixture) -> logging.Logger:
    """Logger injected into gateways; caplog captures it at INFO."""
    caplog.set_level(logging.INFO, logger="tests.storage")
    return logging.getLogger("tests.storage")


@pytest.fixture
def s3_client() -> MagicMock:
    """Stand-in for a boto3 S3 client."""
    return MagicMock()


@pytest.fixture
def s3_gateway(s3_client: MagicMock, gateway_logger: logging.Logger) -> S3StorageGateway:
    return S3StorageGateway(s3_client, logger=gateway_logger)


@pytest.fixture
def local_gateway(tmp_path, gateway_logger: logging.Logger) -> LocalStorageGateway:
    return LocalStorageGateway(
        storage_root=str(tmp_path / "storage"),
        base_url="https://files.example.com/",
        logger=gateway_logger,
    )


@pytest.fixture
def error_records(caplog: pytest.LogCaptureFixture):
    """Return a callable listing ERROR records from the injected gateway logger."""

    def _records() -> list[logging.LogRecord]:
        return [
            r for r in caplog.records
            if r.name == "tests.storage" and r.levelno == logging.ERROR
        ]

    return _records
