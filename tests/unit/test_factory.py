"""Tests for StorageFactory (backend selection and eager config checks)."""

import pytest

from storage_gateway.core.config import Settings
from storage_gateway.domain.exceptions import StorageConfigurationError
from storage_gateway.domain.requests import SignedUrlRequest
from storage_gateway.infrastructure.storage.factory import StorageFactory
from storage_gateway.infrastructure.storage.local_storage import LocalStorageGateway
from storage_gateway.infrastructure.storage.s3_storage import S3StorageGateway


def _s3_settings(**overrides: object) -> Settings:
    values = {
        "storage_backend": "s3",
        "s3_region": "eu-west-1",
        "s3_access_key": "AKIAEXAMPLE",
        "s3_secret_key": "secret",
        "s3_endpoint_url": "http://localhost:9000",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_local_backend(tmp_path) -> None:
    settings = Settings(
        _env_file=None,
        storage_backend="local",
        storage_root=str(tmp_path / "root"),
        storage_base_url="https://files.example.com",
        signed_url_default_expiry=600,
    )
    gateway = StorageFactory.create_storage_gateway(settings)
    assert isinstance(gateway, LocalStorageGateway)
    assert gateway.storage_root == (tmp_path / "root").resolve()
    assert gateway.base_url == "https://files.example.com"
    assert gateway.default_expires_in == 600


def test_local_backend_requires_root() -> None:
    settings = Settings(_env_file=None, storage_backend="local", storage_root="")
    with pytest.raises(StorageConfigurationError) as exc_info:
        StorageFactory.create_storage_gateway(settings)
    assert exc_info.value.details == {"missing": ["storage_root"]}


def test_s3_backend_builds_client() -> None:
    gateway = StorageFactory.create_storage_gateway(_s3_settings())
    assert isinstance(gateway, S3StorageGateway)
    assert gateway.client.meta.region_name == "eu-west-1"
    assert gateway.client.meta.endpoint_url == "http://localhost:9000"


@pytest.mark.parametrize(
    ("field", "value"),
    [("s3_region", None), ("s3_access_key", None), ("s3_secret_key", "")],
)
def test_s3_backend_missing_config_fails_fast(field: str, value: object) -> None:
    with pytest.raises(StorageConfigurationError) as exc_info:
        StorageFactory.create_storage_gateway(_s3_settings(**{field: value}))
    assert exc_info.value.details == {"missing": [field]}
    assert exc_info.value.error_code == "CONFIGURATION_ERROR"


def test_s3_backend_reports_every_missing_field() -> None:
    settings = Settings(_env_file=None, storage_backend="s3")
    with pytest.raises(StorageConfigurationError, match="s3_region, s3_access_key, s3_secret_key"):
        StorageFactory.create_storage_gateway(settings)


def test_unknown_backend_rejected(tmp_path) -> None:
    settings = Settings(_env_file=None, storage_root=str(tmp_path))
    settings.storage_backend = "ftp"
    with pytest.raises(StorageConfigurationError, match="Unknown storage backend: ftp"):
        StorageFactory.create_storage_gateway(settings)


def test_uses_get_settings_when_none_given(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "local")
    monkeypatch.setenv("STORAGE_ROOT", str(tmp_path / "env-root"))
    gateway = StorageFactory.create_storage_gateway()
    assert isinstance(gateway, LocalStorageGateway)
    assert gateway.storage_root == (tmp_path / "env-root").resolve()


@pytest.mark.asyncio
async def test_s3_signed_url_from_real_client() -> None:
    """Presigning is local to botocore, so a real client works offline."""
    gateway = StorageFactory.create_storage_gateway(_s3_settings())
    url = await gateway.get_signed_url(SignedUrlRequest("b", "f.txt"))
    assert url.startswith("http://")
    assert "localhost:9000" in url
    assert "f.txt" in url
    assert "X-Amz-Expires=3600" in url
    assert "X-Amz-Signature=" in url
