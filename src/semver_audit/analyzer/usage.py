"""Usage index: which exported symbols the consumer references, and where.

A ``UsageIndex`` is built once per audit run from a full scan of the
consumer codebase and is read-only afterwards. Scanners accumulate into a
``UsageIndexBuilder``; location order is the order of ``record`` calls so
"used in" reporting is reproducible.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from semver_audit.analyzer.models import Location


@dataclass(frozen=True, slots=True)
class UsageIndex:
    """Resolved-symbol table for one target module.

    Attributes:
        symbols: symbol name -> locations referencing it (duplicates kept,
                 recorded order preserved)
        imports: import path -> whether it resolves to the target module
    """

    symbols: Mapping[str, tuple[Location, ...]] = field(default_factory=dict)
    imports: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {name: tuple(locs) for name, locs in self.symbols.items()}
        object.__setattr__(self, "symbols", MappingProxyType(frozen))
        object.__setattr__(self, "imports", MappingProxyType(dict(self.imports)))

    @classmethod
    def empty(cls) -> UsageIndex:
        return cls()

    def locations_for(self, name: str) -> tuple[Location, ...]:
        return self.symbols.get(name, ())

    def is_used(self, name: str) -> bool:
        """True iff the name has at least one recorded location."""
        return len(self.locations_for(name)) > 0

    def resolves(self, import_path: str) -> bool:
        return self.imports.get(import_path, False)

    @property
    def used_names(self) -> frozenset[str]:
        return frozenset(name for name, locs in self.symbols.items() if locs)

    def __len__(self) -> int:
        return sum(len(locs) for locs in self.symbols.values())


class UsageIndexBuilder:
    """Append-only accumulator for scanners."""

    def __init__(self) -> None:
        self._symbols: dict[str, list[Location]] = {}
        self._imports: dict[str, bool] = {}

    def record(self, name: str, file: str, line: int) -> UsageIndexBuilder:
        self._symbols.setdefault(name, []).append(Location(file=file, line=line))
        return self

    def record_location(self, name: str, location: Location) -> UsageIndexBuilder:
        self._symbols.setdefault(name, []).append(location)
        return self

    def record_import(self, import_path: str, resolves: bool = True) -> UsageIndexBuilder:
        # A path seen resolving once stays resolving.
        self._imports[import_path] = self._imports.get(import_path, False) or resolves
        return self

    def build(self) -> UsageIndex:
        return UsageIndex(symbols=self._symbols, imports=self._imports)


def usage_from_mapping(
    symbols: Mapping[str, Iterable[Location | tuple[str, int]]],
    imports: Mapping[str, bool] | None = None,
) -> UsageIndex:
    """Build an index from plain data, accepting ``(file, line)`` pairs."""
    builder = UsageIndexBuilder()
    for name, locations in symbols.items():
        for loc in locations:
            if isinstance(loc, Location):
                builder.record_location(name, loc)
            else:
                file, line = loc
                builder.record(name, file, line)
    for path, resolves in (imports or {}).items():
        builder.record_import(path, resolves)
    return builder.build()
