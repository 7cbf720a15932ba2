"""Shared utilities: telemetry and cross-cutting helpers.

Used by core and infrastructure. No storage logic.
"""

from storage_gateway.shared.utils import utc_now

__all__ = ["utc_now"]
