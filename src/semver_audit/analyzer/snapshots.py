"""File-backed collaborators reading pre-extracted snapshot documents.

Layout of a snapshot directory:
- ``<module>@<version>.json``: one Surface document per module version,
  with ``/`` in the module path replaced by ``__``
- ``project.json``: the consumer's dependency set and per-module usage

No source analysis happens here; documents are produced by an external
extractor and scanner.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from semver_audit.analyzer.errors import (
    DependencyResolutionError,
    SnapshotFormatError,
    SurfaceLoadError,
)
from semver_audit.analyzer.models import Surface
from semver_audit.analyzer.ops import Auditor
from semver_audit.analyzer.schema import ProjectDoc, SurfaceDoc, UsageDoc
from semver_audit.analyzer.usage import UsageIndex

if TYPE_CHECKING:
    from semver_audit.config.models import SemverAuditConfig

log = structlog.get_logger(__name__)

PROJECT_SNAPSHOT = "project.json"


def _read_json(path: Path) -> Any:
    if not path.is_file():
        raise SnapshotFormatError(str(path), "file not found")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotFormatError(str(path), str(e)) from e
    except json.JSONDecodeError as e:
        raise SnapshotFormatError(str(path), f"invalid JSON: {e}") from e


def _validation_reason(e: ValidationError) -> str:
    err = e.errors()[0]
    loc = ".".join(str(part) for part in err["loc"])
    return f"{loc}: {err['msg']}" if loc else err["msg"]


def load_surface_document(path: Path) -> Surface:
    """Load and validate a Surface document.

    Raises:
        SnapshotFormatError: Missing file, bad JSON, schema violation, or a
                             name declared in two categories.
    """
    data = _read_json(path)
    try:
        return SurfaceDoc.model_validate(data).to_surface()
    except ValidationError as e:
        raise SnapshotFormatError(str(path), _validation_reason(e)) from e
    except ValueError as e:
        raise SnapshotFormatError(str(path), str(e)) from e


def load_usage_document(path: Path) -> UsageIndex:
    """Load and validate a UsageIndex document."""
    data = _read_json(path)
    try:
        return UsageDoc.model_validate(data).to_usage_index()
    except ValidationError as e:
        raise SnapshotFormatError(str(path), _validation_reason(e)) from e


def dump_surface_document(surface: Surface) -> dict[str, Any]:
    """Serialize a Surface into its document form (sorted for stable output)."""
    return SurfaceDoc.from_surface(surface).model_dump()


def surface_filename(module: str, version: str) -> str:
    return f"{module.replace('/', '__')}@{version}.json"


class SnapshotSurfaceExtractor:
    """SurfaceExtractor reading ``<module>@<version>.json`` documents."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, module: str, version: str) -> Path:
        return self._directory / surface_filename(module, version)

    def load_surface(self, module: str, version: str) -> Surface:
        path = self.path_for(module, version)
        try:
            surface = load_surface_document(path)
        except SnapshotFormatError as e:
            raise SurfaceLoadError(module, version, e.reason) from e
        log.debug("surface_snapshot_read", path=str(path), symbols=len(surface))
        return surface


class ProjectSnapshot:
    """DependencyResolver and UsageScanner backed by ``project.json``."""

    def __init__(self, doc: ProjectDoc, source: str = "<memory>") -> None:
        self._doc = doc
        self._source = source
        self._usage_cache: dict[str, UsageIndex] = {}

    @classmethod
    def load(cls, path: Path) -> ProjectSnapshot:
        """Raises DependencyResolutionError if the document is unusable."""
        try:
            data = _read_json(path)
            try:
                doc = ProjectDoc.model_validate(data)
            except ValidationError as e:
                raise SnapshotFormatError(str(path), _validation_reason(e)) from e
        except SnapshotFormatError as e:
            raise DependencyResolutionError(str(e)) from e
        return cls(doc, source=str(path))

    @property
    def source(self) -> str:
        return self._source

    def pinned_version(self, module: str) -> str | None:
        return self._doc.dependencies.get(module)

    def direct_dependencies(self) -> Iterable[str]:
        return list(self._doc.direct_dependencies)

    def imported_modules(self) -> Iterable[str]:
        return list(self._doc.imported_modules)

    def scan(self, module: str) -> UsageIndex:
        if module not in self._usage_cache:
            doc = self._doc.usage.get(module)
            self._usage_cache[module] = doc.to_usage_index() if doc else UsageIndex.empty()
        return self._usage_cache[module]


def snapshot_auditor(
    directory: Path,
    config: SemverAuditConfig | None = None,
) -> Auditor:
    """Build an Auditor whose collaborators all read from ``directory``.

    Raises:
        DependencyResolutionError: ``project.json`` is missing or invalid.
    """
    project = ProjectSnapshot.load(directory / PROJECT_SNAPSHOT)
    extractor = SnapshotSurfaceExtractor(directory)
    return Auditor(
        resolver=project,
        extractor=extractor,
        scanner=project,
        config=config.audit if config is not None else None,
    )
