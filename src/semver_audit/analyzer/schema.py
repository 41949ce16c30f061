"""Pydantic models for the input data contract.

Snapshot documents produced by external extractors and scanners are
validated here, then converted into the frozen analyzer models.
"""

from pydantic import BaseModel, ConfigDict, Field

from semver_audit.analyzer.models import (
    FunctionSignature,
    InterfaceDescriptor,
    Location,
    Surface,
    TypeDescriptor,
)
from semver_audit.analyzer.usage import UsageIndex, UsageIndexBuilder


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FunctionDoc(_Document):
    signature: str
    pkg_path: str = Field(default="", alias="pkgPath")
    is_method: bool = Field(default=False, alias="isMethod")


class TypeDoc(_Document):
    kind: str = ""
    pkg_path: str = Field(default="", alias="pkgPath")


class InterfaceDoc(_Document):
    methods: list[str] = Field(default_factory=list)
    pkg_path: str = Field(default="", alias="pkgPath")


class SurfaceDoc(_Document):
    """``{functions, types, interfaces}``; every key optional."""

    functions: dict[str, FunctionDoc] = Field(default_factory=dict)
    types: dict[str, TypeDoc] = Field(default_factory=dict)
    interfaces: dict[str, InterfaceDoc] = Field(default_factory=dict)

    def to_surface(self) -> Surface:
        """Raises ValueError if a name is declared in two categories."""
        return Surface(
            functions={
                name: FunctionSignature(
                    name=name,
                    signature=doc.signature,
                    pkg_path=doc.pkg_path,
                    is_method=doc.is_method,
                )
                for name, doc in self.functions.items()
            },
            types={
                name: TypeDescriptor(name=name, kind=doc.kind, pkg_path=doc.pkg_path)
                for name, doc in self.types.items()
            },
            interfaces={
                name: InterfaceDescriptor(
                    name=name, methods=frozenset(doc.methods), pkg_path=doc.pkg_path
                )
                for name, doc in self.interfaces.items()
            },
        )

    @classmethod
    def from_surface(cls, surface: Surface) -> "SurfaceDoc":
        return cls(
            functions={
                name: FunctionDoc(
                    signature=fn.signature, pkg_path=fn.pkg_path, is_method=fn.is_method
                )
                for name, fn in sorted(surface.functions.items())
            },
            types={
                name: TypeDoc(kind=t.kind, pkg_path=t.pkg_path)
                for name, t in sorted(surface.types.items())
            },
            interfaces={
                name: InterfaceDoc(methods=sorted(iface.methods), pkg_path=iface.pkg_path)
                for name, iface in sorted(surface.interfaces.items())
            },
        )


class LocationDoc(_Document):
    file: str
    line: int = Field(ge=0)


class UsageDoc(_Document):
    """``{symbols: {name: [{file, line}]}, imports: {path: bool}}``."""

    symbols: dict[str, list[LocationDoc]] = Field(default_factory=dict)
    imports: dict[str, bool] = Field(default_factory=dict)

    def to_usage_index(self) -> UsageIndex:
        builder = UsageIndexBuilder()
        for name, locations in self.symbols.items():
            for loc in locations:
                builder.record_location(name, Location(file=loc.file, line=loc.line))
        for path, resolves in self.imports.items():
            builder.record_import(path, resolves)
        return builder.build()


class ProjectDoc(_Document):
    """Consumer-side snapshot: dependency set plus per-module usage."""

    dependencies: dict[str, str] = Field(default_factory=dict)
    direct_dependencies: list[str] = Field(default_factory=list)
    imported_modules: list[str] = Field(default_factory=list)
    usage: dict[str, UsageDoc] = Field(default_factory=dict)
