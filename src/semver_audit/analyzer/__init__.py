"""Usage-aware API compatibility analysis.

Public API re-exports for the analyzer subpackage.
"""

from semver_audit.analyzer.collaborators import (
    DependencyResolver,
    SurfaceExtractor,
    UsageScanner,
)
from semver_audit.analyzer.engine import diff_interface, diff_surfaces
from semver_audit.analyzer.errors import (
    AuditError,
    DependencyNotFoundError,
    DependencyResolutionError,
    MalformedUpgradeSpecError,
    SnapshotFormatError,
    SurfaceLoadError,
)
from semver_audit.analyzer.models import (
    AddedSymbol,
    AuditResult,
    ChangedSignature,
    Diff,
    FunctionSignature,
    InterfaceChange,
    InterfaceDescriptor,
    Location,
    RemovedSymbol,
    Surface,
    SymbolKind,
    TypeDescriptor,
    Upgrade,
)
from semver_audit.analyzer.ops import Auditor
from semver_audit.analyzer.snapshots import (
    ProjectSnapshot,
    SnapshotSurfaceExtractor,
    dump_surface_document,
    load_surface_document,
    load_usage_document,
    snapshot_auditor,
)
from semver_audit.analyzer.upgrade import parse_upgrade
from semver_audit.analyzer.usage import UsageIndex, UsageIndexBuilder, usage_from_mapping

__all__ = [
    # Models
    "AddedSymbol",
    "AuditResult",
    "ChangedSignature",
    "Diff",
    "FunctionSignature",
    "InterfaceChange",
    "InterfaceDescriptor",
    "Location",
    "RemovedSymbol",
    "Surface",
    "SymbolKind",
    "TypeDescriptor",
    "Upgrade",
    "UsageIndex",
    "UsageIndexBuilder",
    "usage_from_mapping",
    # Engine
    "diff_interface",
    "diff_surfaces",
    # Orchestration
    "Auditor",
    "DependencyResolver",
    "SurfaceExtractor",
    "UsageScanner",
    "parse_upgrade",
    # Snapshots
    "ProjectSnapshot",
    "SnapshotSurfaceExtractor",
    "dump_surface_document",
    "load_surface_document",
    "load_usage_document",
    "snapshot_auditor",
    # Errors
    "AuditError",
    "DependencyNotFoundError",
    "DependencyResolutionError",
    "MalformedUpgradeSpecError",
    "SnapshotFormatError",
    "SurfaceLoadError",
]
