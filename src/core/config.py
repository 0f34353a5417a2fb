"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Adaptadores (go, gobind, lipo) y pipeline leen el mismo objeto de config,
  que se pasa de forma explícita en vez de vivir en globales del módulo.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.architecture import Architecture
from core.domain.models import DEFAULT_FRAMEWORK_VERSION


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "osx-bind"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "osx-bind"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "osx-bind"
    return Path.home() / ".config" / "osx-bind"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central configuration of the bind pipeline.

    Why pydantic-settings:
    - Typing + validation at the edge (env vars) without leaking into the core.
    - A single configuration contract for the CLI, the adapters and the tests.
    """

    model_config = SettingsConfigDict(
        env_prefix="OSX_BIND_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    go_command: str = Field(
        default="go",
        min_length=1,
        description="Go toolchain executable used for `go build`.",
    )
    gobind_command: str = Field(
        default="gobind",
        min_length=1,
        description="Binding generator executable.",
    )
    lipo_command: list[str] = Field(
        default_factory=lambda: ["xcrun", "lipo"],
        min_length=1,
        description="Universal-binary tool invocation (argv prefix).",
    )
    build_tags: str = Field(
        default="macosx",
        min_length=1,
        description="Value passed as `-tags=` to every archive build.",
    )
    framework_version: str = Field(
        default=DEFAULT_FRAMEWORK_VERSION,
        min_length=1,
        description="Name of the versioned directory under `Versions/`.",
    )
    default_archs: list[Architecture] = Field(
        default_factory=lambda: [Architecture.AMD64],
        min_length=1,
        description="GOARCH values built when the CLI gets no --arch.",
    )
    max_parallel_builds: int = Field(
        default=1,
        ge=1,
        le=16,
        description="Concurrent per-architecture builds (1 = sequential).",
    )
    work_dir: Path | None = Field(
        default=None,
        description="Working directory for generated sources and archives (temp dir if unset).",
    )
    keep_work_dir: bool = Field(
        default=False,
        description="Keep the working directory after the run (debugging).",
    )

    @field_validator("framework_version")
    @classmethod
    def _plain_version(cls, value: str) -> str:
        if "/" in value or value in (".", "..", "Current"):
            raise ValueError("framework_version must be a plain directory name")
        return value
