"""Audit error types.

Raised by collaborators and the orchestration layer. The diff engine
itself never raises.
"""

from __future__ import annotations

from typing import Any

from semver_audit.core.errors import ErrorCode


class AuditError(Exception):
    """Base error for audit operations."""

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def details(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON-facing callers."""
        return {
            "code": self.error_code.value,
            "error": self.error_code.name,
            "message": str(self),
            "details": self.details(),
        }


class MalformedUpgradeSpecError(AuditError):
    """Upgrade spec is not of the form module@version."""

    error_code = ErrorCode.AUDIT_MALFORMED_UPGRADE_SPEC

    def __init__(self, spec: str) -> None:
        super().__init__(
            f"invalid upgrade specification: {spec!r} (expected format: module@version)"
        )
        self.spec = spec

    def details(self) -> dict[str, Any]:
        return {"spec": self.spec}


class DependencyNotFoundError(AuditError):
    """Target module is not among the consumer's dependencies."""

    error_code = ErrorCode.AUDIT_DEPENDENCY_NOT_FOUND

    def __init__(self, module: str) -> None:
        super().__init__(f"module {module} not found in project dependencies")
        self.module = module

    def details(self) -> dict[str, Any]:
        return {"module": self.module}


class SurfaceLoadError(AuditError):
    """A module version's exported surface could not be loaded."""

    error_code = ErrorCode.AUDIT_SURFACE_LOAD_FAILED

    def __init__(self, module: str, version: str, reason: str | None = None) -> None:
        message = f"failed to load surface of {module}@{version}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.module = module
        self.version = version
        self.reason = reason

    def details(self) -> dict[str, Any]:
        return {"module": self.module, "version": self.version, "reason": self.reason}


class DependencyResolutionError(AuditError):
    """The consumer's dependency set could not be determined."""

    error_code = ErrorCode.AUDIT_DEPENDENCY_RESOLUTION_FAILED

    def __init__(self, reason: str) -> None:
        super().__init__(f"failed to resolve project dependencies: {reason}")
        self.reason = reason

    def details(self) -> dict[str, Any]:
        return {"reason": self.reason}


class SnapshotFormatError(AuditError):
    """A snapshot document is missing, unreadable, or fails validation."""

    error_code = ErrorCode.AUDIT_SNAPSHOT_FORMAT

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"invalid snapshot {path}: {reason}")
        self.path = path
        self.reason = reason

    def details(self) -> dict[str, Any]:
        return {"path": self.path, "reason": self.reason}
