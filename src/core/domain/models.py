"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a subprocesos ni a helpers de sistema de archivos.

Nota:
- Estos modelos describen *qué* compone un bundle, no *cómo* se produce.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

from core.domain.architecture import Architecture


FRAMEWORK_SUFFIX = ".framework"
DEFAULT_FRAMEWORK_VERSION = "A"
SENTINEL_LABEL = "error package"


def title_case(name: str) -> str:
    """Upper-case the first letter of a package name (`mypkg` -> `Mypkg`)."""

    return name[:1].upper() + name[1:]


class PackageUnit(BaseModel):
    """One bound Go package.

    The sentinel error package has no `PackageUnit`: generator calls receive
    `None` for it.
    """

    model_config = ConfigDict(frozen=True)

    import_path: str = Field(
        ...,
        min_length=1,
        description="Go import path of the bound package.",
    )
    name: str = Field(
        default="",
        description="Package identifier; defaults to the last import path element.",
    )

    @model_validator(mode="before")
    @classmethod
    def _default_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("name") and data.get("import_path"):
            data = {**data, "name": str(data["import_path"]).rstrip("/").rsplit("/", 1)[-1]}
        return data

    @property
    def title(self) -> str:
        return title_case(self.name)


class ArchEnv(BaseModel):
    """Build parameters for one target architecture."""

    model_config = ConfigDict(frozen=True)

    goos: str = Field(default="darwin", min_length=1)
    goarch: Architecture = Field(default_factory=Architecture.default)
    cgo_enabled: bool = Field(default=True)
    extra: dict[str, str] = Field(
        default_factory=dict,
        description="Additional environment variables (CC, CGO_CFLAGS, ...).",
    )

    @property
    def clang_arch(self) -> str:
        return self.goarch.clang_name()

    @property
    def label(self) -> str:
        """Identifier attached to compiler errors (`darwin-x86_64`)."""

        return f"{self.goos}-{self.clang_arch}"

    def to_environ(self) -> dict[str, str]:
        env = {
            "GOOS": self.goos,
            "GOARCH": self.goarch.value,
            "CGO_ENABLED": "1" if self.cgo_enabled else "0",
        }
        env.update(self.extra)
        return env


class ArchitectureArchive(BaseModel):
    """Static archive built for one architecture; never copied into the bundle."""

    arch_env: ArchEnv
    archive_path: Path


class BindingTarget(BaseModel):
    """The logical output unit of one pipeline invocation."""

    name: str = Field(..., min_length=1, description="Primary package name.")
    output_path: Path = Field(..., description="Bundle path, ends with `.framework`.")
    packages: list[PackageUnit] = Field(..., min_length=1)
    architectures: list[ArchEnv] = Field(..., min_length=1)

    @property
    def title(self) -> str:
        return title_case(self.name)

    @property
    def import_paths(self) -> list[str]:
        return [p.import_path for p in self.packages]


class BundleLayout(BaseModel):
    """Paths of a versioned framework bundle on disk.

    Top-level aliases always go through `Versions/Current`, so other tooling
    can repoint the current version without touching them.
    """

    model_config = ConfigDict(frozen=True)

    root: Path
    title: str = Field(..., min_length=1)
    version: str = Field(default=DEFAULT_FRAMEWORK_VERSION, min_length=1)

    @property
    def versions_dir(self) -> Path:
        return self.root / "Versions"

    @property
    def version_dir(self) -> Path:
        return self.versions_dir / self.version

    @property
    def current_link(self) -> Path:
        return self.versions_dir / "Current"

    @property
    def headers_dir(self) -> Path:
        return self.version_dir / "Headers"

    @property
    def resources_dir(self) -> Path:
        return self.version_dir / "Resources"

    @property
    def modules_dir(self) -> Path:
        return self.version_dir / "Modules"

    @property
    def binary_path(self) -> Path:
        return self.version_dir / self.title

    @property
    def info_plist_path(self) -> Path:
        return self.root / "Resources" / "Info.plist"

    @property
    def module_map_path(self) -> Path:
        return self.modules_dir / "module.modulemap"

    def aliases(self) -> dict[str, str]:
        """Top-level symlink name -> target, relative to the bundle root."""

        return {
            "Headers": "Versions/Current/Headers",
            "Resources": "Versions/Current/Resources",
            "Modules": "Versions/Current/Modules",
            self.title: f"Versions/Current/{self.title}",
        }
