"""Data models for API-compatibility auditing.

All models are frozen dataclasses with no I/O coupling. A ``Surface`` is
built once per (module, version) and never mutated; a ``Diff`` is produced
once per audit by the engine and wrapped into one ``AuditResult``.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class SymbolKind(str, Enum):
    """Category of an exported symbol."""

    FUNCTION = "function"
    TYPE = "type"
    INTERFACE = "interface"


# ============================================================================
# Surface model
# ============================================================================


@dataclass(frozen=True, slots=True)
class FunctionSignature:
    """An exported function or method.

    Methods are keyed ``TypeName.MethodName`` in the owning surface.
    ``signature`` is the extractor's normalized form and is compared as an
    opaque string.
    """

    name: str
    signature: str
    pkg_path: str
    is_method: bool = False


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """An exported named type (not an interface)."""

    name: str
    kind: str  # underlying-kind description, e.g. "struct{Name string}"
    pkg_path: str


@dataclass(frozen=True, slots=True)
class InterfaceDescriptor:
    """An exported interface. Method order is irrelevant."""

    name: str
    methods: frozenset[str]
    pkg_path: str

    def __post_init__(self) -> None:
        if not isinstance(self.methods, frozenset):
            object.__setattr__(self, "methods", frozenset(self.methods))


def _freeze(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True, slots=True)
class Surface:
    """Exported API of one module version.

    Each mapping is keyed by a symbol name that is unique across all three
    mappings. Mappings are read-only views over private copies.
    """

    functions: Mapping[str, FunctionSignature] = field(default_factory=dict)
    types: Mapping[str, TypeDescriptor] = field(default_factory=dict)
    interfaces: Mapping[str, InterfaceDescriptor] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "functions", _freeze(self.functions))
        object.__setattr__(self, "types", _freeze(self.types))
        object.__setattr__(self, "interfaces", _freeze(self.interfaces))

        overlap = (
            (self.functions.keys() & self.types.keys())
            | (self.functions.keys() & self.interfaces.keys())
            | (self.types.keys() & self.interfaces.keys())
        )
        if overlap:
            names = ", ".join(sorted(overlap))
            raise ValueError(f"Symbol names declared in more than one category: {names}")

    @classmethod
    def empty(cls) -> Surface:
        return cls()

    def kind_of(self, name: str) -> SymbolKind | None:
        """Return the category a name is declared in, if any."""
        if name in self.functions:
            return SymbolKind.FUNCTION
        if name in self.types:
            return SymbolKind.TYPE
        if name in self.interfaces:
            return SymbolKind.INTERFACE
        return None

    def names(self) -> frozenset[str]:
        return frozenset(self.functions) | frozenset(self.types) | frozenset(self.interfaces)

    def __len__(self) -> int:
        return len(self.functions) + len(self.types) + len(self.interfaces)


@dataclass(frozen=True, slots=True)
class Location:
    """A source position in the consumer codebase."""

    file: str
    line: int

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "line": self.line}

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


# ============================================================================
# Diff model
# ============================================================================


def _locations_to_list(locations: Iterable[Location], limit: int) -> list[dict[str, Any]]:
    items = [loc.to_dict() for loc in locations]
    return items[:limit] if limit > 0 else items


@dataclass(frozen=True, slots=True)
class RemovedSymbol:
    """A symbol the consumer uses that no longer exists."""

    name: str
    kind: SymbolKind
    used_at: tuple[Location, ...]

    def to_dict(self, max_locations: int = 0) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "used_at": _locations_to_list(self.used_at, max_locations),
        }


@dataclass(frozen=True, slots=True)
class AddedSymbol:
    """A symbol new in the target version. Informational only."""

    name: str
    kind: SymbolKind

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "kind": self.kind.value}


@dataclass(frozen=True, slots=True)
class ChangedSignature:
    """A used function or method whose normalized signature differs."""

    name: str
    old_signature: str
    new_signature: str
    used_at: tuple[Location, ...]

    def to_dict(self, max_locations: int = 0) -> dict[str, Any]:
        return {
            "name": self.name,
            "old_signature": self.old_signature,
            "new_signature": self.new_signature,
            "used_at": _locations_to_list(self.used_at, max_locations),
        }


@dataclass(frozen=True, slots=True)
class InterfaceChange:
    """A used interface whose method set differs."""

    name: str
    added_methods: tuple[str, ...]
    removed_methods: tuple[str, ...]
    used_at: tuple[Location, ...]

    def to_dict(self, max_locations: int = 0) -> dict[str, Any]:
        return {
            "name": self.name,
            "added_methods": list(self.added_methods),
            "removed_methods": list(self.removed_methods),
            "used_at": _locations_to_list(self.used_at, max_locations),
        }


@dataclass(frozen=True, slots=True)
class Diff:
    """Usage-filtered changelist between two surfaces.

    Every sequence is sorted by symbol name. Presentation code renders
    exactly what is here and must not re-apply filtering.
    """

    removed: tuple[RemovedSymbol, ...] = ()
    added: tuple[AddedSymbol, ...] = ()
    changed: tuple[ChangedSignature, ...] = ()
    interface_changes: tuple[InterfaceChange, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.removed or self.added or self.changed or self.interface_changes)

    @property
    def breaking_count(self) -> int:
        return len(self.removed) + len(self.changed) + len(self.interface_changes)

    @property
    def affected_locations(self) -> int:
        """Total consumer locations touched by breaking entries."""
        return (
            sum(len(r.used_at) for r in self.removed)
            + sum(len(c.used_at) for c in self.changed)
            + sum(len(i.used_at) for i in self.interface_changes)
        )

    def to_dict(self, max_locations: int = 0) -> dict[str, Any]:
        return {
            "removed": [r.to_dict(max_locations) for r in self.removed],
            "added": [a.to_dict() for a in self.added],
            "changed": [c.to_dict(max_locations) for c in self.changed],
            "interface_changes": [i.to_dict(max_locations) for i in self.interface_changes],
        }


# ============================================================================
# Audit model
# ============================================================================


@dataclass(frozen=True, slots=True)
class Upgrade:
    """A requested dependency upgrade.

    ``old_version`` is unknown until the consumer's pinned version has been
    resolved.
    """

    module: str
    new_version: str
    old_version: str | None = None

    def with_old_version(self, version: str) -> Upgrade:
        return dataclasses.replace(self, old_version=version)

    def __str__(self) -> str:
        return f"{self.module}@{self.new_version}"


@dataclass(frozen=True, slots=True)
class AuditResult:
    """Outcome of one audit run, handed to presentation code.

    ``has_breaking_changes`` and ``has_warnings`` are the only predicates an
    exit-code policy should consult.

    ``max_locations`` is the serialization cap on ``used_at`` entries the
    auditor was configured with. The diff itself is never truncated.
    """

    module: str
    old_version: str
    new_version: str
    diff: Diff
    unused_dependencies: tuple[str, ...] = ()
    max_locations: int = 0

    @property
    def has_breaking_changes(self) -> bool:
        d = self.diff
        return len(d.removed) > 0 or len(d.changed) > 0 or len(d.interface_changes) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.diff.added) > 0 or len(self.unused_dependencies) > 0

    @property
    def breaking_count(self) -> int:
        return self.diff.breaking_count

    @property
    def affected_locations(self) -> int:
        return self.diff.affected_locations

    def with_unused_dependencies(self, deps: Iterable[str]) -> AuditResult:
        return dataclasses.replace(self, unused_dependencies=tuple(deps))

    def to_dict(self, max_locations: int | None = None) -> dict[str, Any]:
        """Serialize to the output data contract.

        Args:
            max_locations: Cap on ``used_at`` entries per item; 0 = unlimited.
                           None uses the cap stored on the result.
        """
        if max_locations is None:
            max_locations = self.max_locations
        return {
            "module": self.module,
            "old_version": self.old_version,
            "new_version": self.new_version,
            "breaking": self.has_breaking_changes,
            "has_warnings": self.has_warnings,
            "breaking_count": self.breaking_count,
            "affected_locations": self.affected_locations,
            **self.diff.to_dict(max_locations),
            "unused_dependencies": list(self.unused_dependencies),
        }
