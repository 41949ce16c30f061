"""Core module exports."""

from semver_audit.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    SemverAuditError,
)
from semver_audit.core.logging import (
    bound_audit_id,
    clear_audit_id,
    configure_logging,
    get_audit_id,
    get_logger,
    set_audit_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "SemverAuditError",
    # Logging
    "bound_audit_id",
    "clear_audit_id",
    "configure_logging",
    "get_audit_id",
    "get_logger",
    "set_audit_id",
]
