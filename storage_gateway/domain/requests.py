"""Request records accepted by storage gateways.

Request records are immutable and self-validating. They carry no identity
and are consumed by the call that receives them; nothing here is persisted.
"""

from dataclasses import dataclass

from storage_gateway.core.constants import (
    DEFAULT_CONTENT_TYPE,
    DEFAULT_SIGNED_URL_EXPIRY,
)
from storage_gateway.domain.exceptions import ValidationException


def _require_non_empty(value: str, field_name: str) -> None:
    """Raise ValidationException unless value is a non-empty string."""
    if not isinstance(value, str) or not value:
        raise ValidationException(
            f"{field_name} must be a non-empty string", field=field_name
        )


@dataclass(frozen=True)
class FileReference:
    """Addresses one stored object: bucket (container) plus object key."""

    bucket: str
    key: str

    def __post_init__(self) -> None:
        _require_non_empty(self.bucket, "bucket")
        _require_non_empty(self.key, "key")


@dataclass(frozen=True)
class UploadFileRequest(FileReference):
    """Object content to write at a reference, replacing any existing object.

    content_type defaults to application/octet-stream when omitted.
    """

    content: bytes | bytearray
    content_type: str | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if not isinstance(self.content, (bytes, bytearray)):
            raise ValidationException(
                "content must be bytes or bytearray", field="content"
            )

    @property
    def resolved_content_type(self) -> str:
        return self.content_type or DEFAULT_CONTENT_TYPE


@dataclass(frozen=True)
class DownloadFileRequest(FileReference):
    """Reference to an object whose full content should be read."""


@dataclass(frozen=True)
class DeleteFileRequest(FileReference):
    """Reference to an object that should be removed."""


@dataclass(frozen=True)
class ListFilesRequest:
    """Keys in a bucket, optionally filtered by key prefix.

    An empty or missing prefix matches every key.
    """

    bucket: str
    prefix: str | None = None

    def __post_init__(self) -> None:
        _require_non_empty(self.bucket, "bucket")
        if self.prefix is not None and not isinstance(self.prefix, str):
            raise ValidationException("prefix must be a string", field="prefix")

    @property
    def resolved_prefix(self) -> str:
        return self.prefix or ""


@dataclass(frozen=True)
class SignedUrlRequest(FileReference):
    """Reference plus lifetime (seconds) of a pre-authenticated read URL."""

    expires_in: int | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.expires_in is None:
            return
        # bool is an int subclass; True is not a lifetime
        if (
            isinstance(self.expires_in, bool)
            or not isinstance(self.expires_in, int)
            or self.expires_in <= 0
        ):
            raise ValidationException(
                "expires_in must be a positive number of seconds",
                field="expires_in",
            )

    def resolve_expires_in(self, default: int = DEFAULT_SIGNED_URL_EXPIRY) -> int:
        """Return expires_in, or default when the request leaves it unset."""
        if self.expires_in is None:
            return default
        return self.expires_in
