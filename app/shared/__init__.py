"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.utils import ensure_utc, generate_cuid

__all__ = [
    "ensure_utc",
    "generate_cuid",
]
