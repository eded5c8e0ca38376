"""Security layer: allow-list filtering and audit logging."""

from __future__ import annotations

from clipgate.security.audit import AuditLogger
from clipgate.security.filter import ALLOWED_BYTES, is_safe, sanitize_bytes, sanitize_label

__all__ = [
    "ALLOWED_BYTES",
    "AuditLogger",
    "is_safe",
    "sanitize_bytes",
    "sanitize_label",
]
