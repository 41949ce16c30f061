"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SEMVER_AUDIT__SECTION__KEY)
3. Project YAML (.semver-audit/config.yaml)
4. Global YAML (~/.config/semver-audit/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    SEMVER_AUDIT__<SECTION>__<KEY>=<VALUE>

Examples:
    SEMVER_AUDIT__LOGGING__LEVEL=DEBUG
    SEMVER_AUDIT__AUDIT__DETECT_UNUSED=true
    SEMVER_AUDIT__SNAPSHOTS__DIRECTORY=/var/cache/semver-audit
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SEMVER_AUDIT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs per-category diff counts.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class AuditConfig(BaseModel):
    """Audit behavior configuration.

    Env vars:
        SEMVER_AUDIT__AUDIT__DETECT_UNUSED: Run the unused-dependency pass
        SEMVER_AUDIT__AUDIT__MAX_REPORTED_LOCATIONS: Cap used_at entries in output
    """

    detect_unused: bool = Field(
        default=False,
        description="Also report direct dependencies that no import resolves to. "
        "Failures in this pass are logged as warnings, never fatal.",
    )
    max_reported_locations: int = Field(
        default=0,
        description="Cap on usage locations per entry when serializing results. "
        "0 means unlimited. The in-memory diff is never truncated.",
    )

    @field_validator("max_reported_locations")
    @classmethod
    def validate_max_reported_locations(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"max_reported_locations must be >= 0, got {v}")
        return v


class SnapshotConfig(BaseModel):
    """Snapshot document location.

    Env vars:
        SEMVER_AUDIT__SNAPSHOTS__DIRECTORY: Directory holding surface/project snapshots
    """

    directory: str | None = Field(
        default=None,
        description="Directory containing <module>@<version>.json surfaces and "
        "project.json. Relative paths resolve against the project root. "
        "Default: .semver-audit/snapshots in the project.",
    )


class SemverAuditConfig(BaseModel):
    """Root configuration for semver-audit.

    All settings can be configured via:
    1. Environment variables: SEMVER_AUDIT__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    audit: AuditConfig = Field(default_factory=AuditConfig)
    snapshots: SnapshotConfig = Field(default_factory=SnapshotConfig)
