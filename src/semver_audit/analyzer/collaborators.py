"""Collaborator protocols for audit orchestration.

Surface extraction, usage scanning and dependency resolution live outside
the engine. The Auditor receives implementations of these protocols at
construction time.
"""

from collections.abc import Iterable
from typing import Protocol

from semver_audit.analyzer.models import Surface
from semver_audit.analyzer.usage import UsageIndex


class DependencyResolver(Protocol):
    """View of the consumer's dependency set."""

    def pinned_version(self, module: str) -> str | None:
        """Version of ``module`` the consumer currently resolves, if any.

        Returns None when the module is not a (transitive) dependency.

        Raises:
            DependencyResolutionError: If the dependency set cannot be read.
        """
        ...

    def direct_dependencies(self) -> Iterable[str]:
        """Module paths the consumer declares directly."""
        ...

    def imported_modules(self) -> Iterable[str]:
        """Module paths any loaded consumer package imports from."""
        ...


class SurfaceExtractor(Protocol):
    """Produces the exported surface of a module at a version.

    Implementations own signature normalization: the same API must yield
    identical signature strings regardless of parameter names.
    """

    def load_surface(self, module: str, version: str) -> Surface:
        """Load the surface of ``module@version``.

        Raises:
            SurfaceLoadError: If the module version cannot be loaded.
        """
        ...


class UsageScanner(Protocol):
    """Scans the consumer codebase for references into one module."""

    def scan(self, module: str) -> UsageIndex:
        """Build the usage index for ``module`` over the whole consumer."""
        ...
