"""Shared builders for analyzer tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from semver_audit.analyzer.models import (
    FunctionSignature,
    InterfaceDescriptor,
    Surface,
    TypeDescriptor,
)
from semver_audit.analyzer.usage import UsageIndex, usage_from_mapping

PKG = "example.com/lib"


def make_surface(
    functions: dict[str, str] | None = None,
    types: dict[str, str] | None = None,
    interfaces: dict[str, list[str]] | None = None,
) -> Surface:
    """Build a Surface from name -> signature / kind / methods shorthand."""
    return Surface(
        functions={
            name: FunctionSignature(
                name=name, signature=sig, pkg_path=PKG, is_method="." in name
            )
            for name, sig in (functions or {}).items()
        },
        types={
            name: TypeDescriptor(name=name, kind=kind, pkg_path=PKG)
            for name, kind in (types or {}).items()
        },
        interfaces={
            name: InterfaceDescriptor(name=name, methods=frozenset(methods), pkg_path=PKG)
            for name, methods in (interfaces or {}).items()
        },
    )


def make_usage(**symbols: list[tuple[str, int]]) -> UsageIndex:
    """Build a UsageIndex from keyword name -> [(file, line)]."""
    return usage_from_mapping(symbols, {PKG: True})


class FakeResolver:
    """In-memory DependencyResolver."""

    def __init__(
        self,
        pinned: dict[str, str] | None = None,
        direct: list[str] | None = None,
        imported: list[str] | None = None,
        fail_with: Exception | None = None,
    ) -> None:
        self.pinned = pinned or {}
        self.direct = direct or []
        self.imported = imported or []
        self.fail_with = fail_with

    def pinned_version(self, module: str) -> str | None:
        return self.pinned.get(module)

    def direct_dependencies(self) -> list[str]:
        if self.fail_with is not None:
            raise self.fail_with
        return list(self.direct)

    def imported_modules(self) -> list[str]:
        return list(self.imported)


class FakeExtractor:
    """In-memory SurfaceExtractor recording load order."""

    def __init__(
        self,
        surfaces: dict[tuple[str, str], Surface],
        errors: dict[tuple[str, str], Exception] | None = None,
    ) -> None:
        self.surfaces = surfaces
        self.errors = errors or {}
        self.calls: list[tuple[str, str]] = []

    def load_surface(self, module: str, version: str) -> Surface:
        self.calls.append((module, version))
        if (module, version) in self.errors:
            raise self.errors[(module, version)]
        return self.surfaces[(module, version)]


class FakeScanner:
    """In-memory UsageScanner counting scans."""

    def __init__(self, usage: UsageIndex | None = None, error: Exception | None = None) -> None:
        self.usage = usage or UsageIndex.empty()
        self.error = error
        self.scans: list[str] = []

    def scan(self, module: str) -> UsageIndex:
        self.scans.append(module)
        if self.error is not None:
            raise self.error
        return self.usage


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def snapshot_dir(tmp_path: Path) -> Path:
    """Snapshot directory with a project and two versions of one module."""
    directory = tmp_path / "snapshots"
    write_json(
        directory / "example.com__lib@v1.0.0.json",
        {
            "functions": {
                "Parse": {"signature": "func(string) (Config, error)", "pkg_path": PKG},
                "Legacy": {"signature": "func()", "pkg_path": PKG},
                "Client.Do": {
                    "signature": "func(Request) error",
                    "pkg_path": PKG,
                    "is_method": True,
                },
            },
            "types": {"Config": {"kind": "struct{Name string}", "pkg_path": PKG}},
            "interfaces": {
                "Handler": {"methods": ["Handle() error", "Close() error"], "pkg_path": PKG}
            },
        },
    )
    write_json(
        directory / "example.com__lib@v2.0.0.json",
        {
            "functions": {
                "Parse": {"signature": "func(string, Options) (Config, error)", "pkgPath": PKG},
                "Client.Do": {"signature": "func(Request) error", "pkgPath": PKG, "isMethod": True},
                "ParseFile": {"signature": "func(string) (Config, error)", "pkgPath": PKG},
            },
            "types": {"Config": {"kind": "struct{Name string; Tags []string}", "pkgPath": PKG}},
            "interfaces": {"Handler": {"methods": ["Handle() error"], "pkgPath": PKG}},
        },
    )
    write_json(
        directory / "project.json",
        {
            "dependencies": {PKG: "v1.0.0", "example.com/other": "v0.3.0"},
            "direct_dependencies": [PKG, "example.com/unused", "example.com/other"],
            "imported_modules": [PKG, "example.com/other"],
            "usage": {
                PKG: {
                    "symbols": {
                        "Parse": [{"file": "main.go", "line": 12}],
                        "Legacy": [{"file": "main.go", "line": 20}, {"file": "util.go", "line": 4}],
                        "Handler": [{"file": "handler.go", "line": 8}],
                    },
                    "imports": {PKG: True},
                }
            },
        },
    )
    return directory
