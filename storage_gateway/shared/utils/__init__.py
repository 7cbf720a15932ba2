"""Shared utilities: datetime helpers."""

from storage_gateway.shared.utils.datetime import utc_now

__all__ = ["utc_now"]
