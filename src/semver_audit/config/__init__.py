"""Config module exports."""

from semver_audit.config.loader import get_snapshot_dir, load_config
from semver_audit.config.models import (
    AuditConfig,
    LoggingConfig,
    LogOutputConfig,
    SemverAuditConfig,
    SnapshotConfig,
)

__all__ = [
    "load_config",
    "get_snapshot_dir",
    "SemverAuditConfig",
    "AuditConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "SnapshotConfig",
]
