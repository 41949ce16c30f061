"""Pure, usage-aware API diff engine.

Compares two Surfaces of the same module and classifies changes. No I/O,
no failure states, inputs are never mutated.

Change types:
- removed: symbol in old but not new (reported only if used)
- added: symbol in new but not old (always reported)
- changed: function/method with textually different signature (only if used)
- interface: same interface name, different method set (only if used)

"Used" means the symbol's own name has at least one location in the
UsageIndex. No call-graph or type-flow analysis is attempted, so a type
referenced only in a declaration still counts as used.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from semver_audit.analyzer.models import (
    AddedSymbol,
    ChangedSignature,
    Diff,
    InterfaceChange,
    InterfaceDescriptor,
    RemovedSymbol,
    Surface,
    SymbolKind,
)
from semver_audit.analyzer.usage import UsageIndex

log = structlog.get_logger(__name__)


def diff_surfaces(old: Surface, new: Surface, usage: UsageIndex) -> Diff:
    """Compute the usage-filtered diff between two surfaces.

    Args:
        old: surface at the consumer's pinned version
        new: surface at the requested target version
        usage: consumer's resolved-symbol index for this module

    Returns:
        Diff with every sequence sorted by symbol name.
    """
    removed: list[RemovedSymbol] = []
    added: list[AddedSymbol] = []

    # Pass 1: functions and methods
    changed = _diff_functions(old, new, usage, removed, added)

    # Pass 2: named types (presence only)
    _diff_presence(old.types, new.types, SymbolKind.TYPE, usage, removed, added)

    # Pass 3: interfaces
    interface_changes = _diff_interfaces(old, new, usage, removed, added)

    diff = Diff(
        removed=tuple(sorted(removed, key=lambda r: (r.name, r.kind.value))),
        added=tuple(sorted(added, key=lambda a: (a.name, a.kind.value))),
        changed=tuple(sorted(changed, key=lambda c: c.name)),
        interface_changes=tuple(sorted(interface_changes, key=lambda i: i.name)),
    )
    log.debug(
        "diff_computed",
        removed=len(diff.removed),
        added=len(diff.added),
        changed=len(diff.changed),
        interface_changes=len(diff.interface_changes),
    )
    return diff


def _diff_functions(
    old: Surface,
    new: Surface,
    usage: UsageIndex,
    removed: list[RemovedSymbol],
    added: list[AddedSymbol],
) -> list[ChangedSignature]:
    changed: list[ChangedSignature] = []

    for name, old_fn in old.functions.items():
        new_fn = new.functions.get(name)
        if new_fn is None:
            _record_removal(name, SymbolKind.FUNCTION, usage, removed)
            continue
        # Byte-for-byte: normalization is the extractor's job.
        if old_fn.signature != new_fn.signature and usage.is_used(name):
            changed.append(
                ChangedSignature(
                    name=name,
                    old_signature=old_fn.signature,
                    new_signature=new_fn.signature,
                    used_at=usage.locations_for(name),
                )
            )

    for name in new.functions:
        if name not in old.functions:
            added.append(AddedSymbol(name=name, kind=SymbolKind.FUNCTION))

    return changed


def _diff_presence(
    old: Mapping[str, object],
    new: Mapping[str, object],
    kind: SymbolKind,
    usage: UsageIndex,
    removed: list[RemovedSymbol],
    added: list[AddedSymbol],
) -> None:
    """Classify names present in only one of two mappings."""
    for name in old:
        if name not in new:
            _record_removal(name, kind, usage, removed)
    for name in new:
        if name not in old:
            added.append(AddedSymbol(name=name, kind=kind))


def _diff_interfaces(
    old: Surface,
    new: Surface,
    usage: UsageIndex,
    removed: list[RemovedSymbol],
    added: list[AddedSymbol],
) -> list[InterfaceChange]:
    _diff_presence(old.interfaces, new.interfaces, SymbolKind.INTERFACE, usage, removed, added)

    changes: list[InterfaceChange] = []
    for name, old_iface in old.interfaces.items():
        new_iface = new.interfaces.get(name)
        if new_iface is None:
            continue
        change = diff_interface(name, old_iface, new_iface, usage)
        if change is not None:
            changes.append(change)
    return changes


def diff_interface(
    name: str,
    old: InterfaceDescriptor,
    new: InterfaceDescriptor,
    usage: UsageIndex,
) -> InterfaceChange | None:
    """Symmetric difference of two method sets, reported only if used.

    Each method's full signature is the set element, so a renamed method
    shows up as one removal plus one addition.
    """
    removed_methods = old.methods - new.methods
    added_methods = new.methods - old.methods
    if not (removed_methods or added_methods):
        return None
    if not usage.is_used(name):
        return None
    return InterfaceChange(
        name=name,
        added_methods=tuple(sorted(added_methods)),
        removed_methods=tuple(sorted(removed_methods)),
        used_at=usage.locations_for(name),
    )


def _record_removal(
    name: str,
    kind: SymbolKind,
    usage: UsageIndex,
    removed: list[RemovedSymbol],
) -> None:
    locations = usage.locations_for(name)
    if locations:
        removed.append(RemovedSymbol(name=name, kind=kind, used_at=locations))
