"""Audit orchestration: sequence collaborators and assemble the result.

Flow: parse spec -> resolve pinned version -> load old and new surfaces ->
scan usage once -> diff -> optional unused-dependency pass.

Primary-path failures always propagate as typed errors. Only the
unused-dependency pass degrades to a logged warning.
"""

from __future__ import annotations

import structlog

from semver_audit.analyzer.collaborators import (
    DependencyResolver,
    SurfaceExtractor,
    UsageScanner,
)
from semver_audit.analyzer.engine import diff_surfaces
from semver_audit.analyzer.errors import (
    AuditError,
    DependencyNotFoundError,
    DependencyResolutionError,
    SurfaceLoadError,
)
from semver_audit.analyzer.models import AuditResult, Surface, Upgrade
from semver_audit.analyzer.upgrade import parse_upgrade
from semver_audit.analyzer.usage import UsageIndex
from semver_audit.config.models import AuditConfig
from semver_audit.core.errors import InternalError
from semver_audit.core.logging import bound_audit_id

log = structlog.get_logger(__name__)


class Auditor:
    """Runs upgrade audits against injected collaborators."""

    def __init__(
        self,
        resolver: DependencyResolver,
        extractor: SurfaceExtractor,
        scanner: UsageScanner,
        config: AuditConfig | None = None,
    ) -> None:
        self._resolver = resolver
        self._extractor = extractor
        self._scanner = scanner
        self._config = config or AuditConfig()

    @property
    def config(self) -> AuditConfig:
        return self._config

    def audit(
        self,
        upgrade: Upgrade | str,
        *,
        detect_unused: bool | None = None,
    ) -> AuditResult:
        """Audit one dependency upgrade.

        Args:
            upgrade: Upgrade or ``module@version`` spec string.
            detect_unused: Run the unused-dependency pass. None falls back
                           to ``config.detect_unused``.

        Raises:
            MalformedUpgradeSpecError: Spec string is not ``module@version``.
            DependencyNotFoundError: Module is not a consumer dependency.
            DependencyResolutionError: Dependency set could not be read.
            SurfaceLoadError: Old or new surface could not be loaded.
        """
        if isinstance(upgrade, str):
            upgrade = parse_upgrade(upgrade)
        if detect_unused is None:
            detect_unused = self._config.detect_unused

        with bound_audit_id():
            log.info("audit_started", module=upgrade.module, target=upgrade.new_version)
            upgrade = self._resolve_old_version(upgrade)
            assert upgrade.old_version is not None

            old_surface = self._load_surface(upgrade.module, upgrade.old_version)
            new_surface = self._load_surface(upgrade.module, upgrade.new_version)
            usage = self._scan_usage(upgrade.module)

            diff = diff_surfaces(old_surface, new_surface, usage)
            result = AuditResult(
                module=upgrade.module,
                old_version=upgrade.old_version,
                new_version=upgrade.new_version,
                diff=diff,
                max_locations=self._config.max_reported_locations,
            )

            if detect_unused:
                result = result.with_unused_dependencies(self._unused_or_warn())

            log.info(
                "audit_completed",
                module=result.module,
                old_version=result.old_version,
                new_version=result.new_version,
                breaking=result.has_breaking_changes,
                breaking_count=result.breaking_count,
                affected_locations=result.affected_locations,
            )
            return result

    def find_unused_dependencies(self) -> list[str]:
        """Direct dependencies that no consumer import resolves to.

        Returns:
            Sorted, de-duplicated module paths.

        Raises:
            DependencyResolutionError: Dependency or import set unavailable.
            SurfaceLoadError: Resolver needed a surface it could not load.
        """
        try:
            direct = set(self._resolver.direct_dependencies())
            imported = set(self._resolver.imported_modules())
        except (SurfaceLoadError, DependencyResolutionError):
            raise
        except Exception as e:
            raise DependencyResolutionError(f"{type(e).__name__}: {e}") from e
        return sorted(direct - imported)

    def _resolve_old_version(self, upgrade: Upgrade) -> Upgrade:
        current = self._resolver.pinned_version(upgrade.module)
        if current is None:
            raise DependencyNotFoundError(upgrade.module)
        log.debug("pinned_version_resolved", module=upgrade.module, version=current)
        return upgrade.with_old_version(current)

    def _load_surface(self, module: str, version: str) -> Surface:
        try:
            surface = self._extractor.load_surface(module, version)
        except SurfaceLoadError:
            raise
        except AuditError as e:
            raise SurfaceLoadError(module, version, str(e)) from e
        except Exception as e:
            raise SurfaceLoadError(module, version, f"{type(e).__name__}: {e}") from e
        log.debug("surface_loaded", module=module, version=version, symbols=len(surface))
        return surface

    def _scan_usage(self, module: str) -> UsageIndex:
        try:
            usage = self._scanner.scan(module)
        except AuditError:
            raise
        except Exception as e:
            raise InternalError.unexpected(
                f"usage scan failed for {module}: {type(e).__name__}: {e}", module=module
            ) from e
        log.debug("usage_scanned", module=module, references=len(usage))
        return usage

    def _unused_or_warn(self) -> list[str]:
        try:
            return self.find_unused_dependencies()
        except (SurfaceLoadError, DependencyResolutionError) as e:
            log.warning("unused_detection_failed", error=str(e))
            return []
