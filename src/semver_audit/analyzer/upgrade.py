"""Parsing of ``module@version`` upgrade specifications."""

from __future__ import annotations

from semver_audit.analyzer.errors import MalformedUpgradeSpecError
from semver_audit.analyzer.models import Upgrade


def parse_upgrade(spec: str) -> Upgrade:
    """Parse ``module@version`` into an Upgrade.

    Exactly one ``@`` is allowed and both sides must be non-empty after
    trimming whitespace. The old version is left unresolved.

    Raises:
        MalformedUpgradeSpecError: if the spec does not match the format.
    """
    parts = spec.split("@")
    if len(parts) != 2:
        raise MalformedUpgradeSpecError(spec)

    module = parts[0].strip()
    version = parts[1].strip()
    if not module or not version:
        raise MalformedUpgradeSpecError(spec)

    return Upgrade(module=module, new_version=version)
