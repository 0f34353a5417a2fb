"""Framework bind orchestration.

This module sequences the whole packaging flow for one binding target:
source generation, per-architecture archives, bundle skeleton, universal
merge, headers, property list and module map. The CLI only builds a
`BindRequest` and renders the `BindResult`; progress is reported through
`PipelineHooks` so the core never prints anything itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from pydantic import ValidationError

from adapters import bundle_fs
from core.config import AppSettings
from core.domain.architecture import Architecture
from core.domain.errors import BindError, ConfigurationError, GenerationError
from core.domain.models import (
    FRAMEWORK_SUFFIX,
    SENTINEL_LABEL,
    ArchEnv,
    ArchitectureArchive,
    BindingTarget,
    BundleLayout,
    PackageUnit,
    title_case,
)
from core.interfaces.generator import BindingGenerator
from core.interfaces.toolchain import ArchiveCompiler, UniversalMerger
from core.services.archive_orchestrator import build_archives, merge_archives
from core.services.bundle_layout import init_layout
from core.services.header_synth import (
    BINDINGS_DIR_NAME,
    emit_headers,
    emit_module_map,
    emit_resource_metadata,
    render_entry_source,
)


@dataclass
class BindRequest:
    """Parameters of one bind invocation."""

    packages: Sequence[PackageUnit]
    work_dir: Path
    output: Path | None = None
    architectures: Sequence[ArchEnv] | None = None


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    step: Callable[[str], None] | None = None
    warning: Callable[[str], None] | None = None


@dataclass
class BindResult:
    """Output of a pipeline invocation."""

    target: BindingTarget
    layout: BundleLayout
    header_bases: list[str]
    headers: list[str]
    archives: list[ArchitectureArchive] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def resolve_output_path(title: str, output: Path | str | None) -> Path:
    """Default to `<title>.framework`; reject explicit paths without the suffix."""

    if output is None or str(output) == "":
        return Path(title + FRAMEWORK_SUFFIX)
    path = Path(output)
    if not str(output).rstrip("/").endswith(FRAMEWORK_SUFFIX):
        raise ConfigurationError(f"static framework name {str(output)!r} missing {FRAMEWORK_SUFFIX} suffix")
    return path


def default_architectures(settings: AppSettings) -> list[ArchEnv]:
    return [ArchEnv(goarch=Architecture(a)) for a in settings.default_archs]


def parse_packages(import_paths: Sequence[str]) -> list[PackageUnit]:
    """Build `PackageUnit`s from import paths given on the command line."""

    units: list[PackageUnit] = []
    for raw in import_paths:
        try:
            unit = PackageUnit(import_path=raw.strip())
        except ValidationError:
            raise ConfigurationError(f"invalid package import path {raw!r}") from None
        units.append(unit)
    _check_package_names(units)
    return units


def _check_package_names(packages: Sequence[PackageUnit]) -> None:
    for package in packages:
        if not package.name or package.name in (".", ".."):
            raise ConfigurationError(f"cannot derive a package name from {package.import_path!r}")


def merge_header_bases(
    packages: Sequence[PackageUnit],
    raw_bases: Sequence[str],
) -> tuple[list[str], bool]:
    """Check the generated header bases, one per package plus the sentinel.

    Returns the bases to place into the bundle and whether the sentinel
    reused a package header (the error type was folded into it). Two packages
    sharing a header base would silently overwrite each other, so that is
    rejected.
    """

    *package_bases, sentinel_base = raw_bases
    owners: dict[str, str] = {}
    for package, base in zip(packages, package_bases):
        if base in owners:
            raise ConfigurationError(
                f"packages {owners[base]!r} and {package.import_path!r} "
                f"both generate header {base}.h"
            )
        owners[base] = package.import_path

    if sentinel_base in owners:
        return list(package_bases), True
    return [*package_bases, sentinel_base], False


def plan_target(settings: AppSettings, request: BindRequest) -> BindingTarget:
    """Validate the request and derive the binding target. No side effects."""

    packages = list(request.packages)
    if not packages:
        raise ConfigurationError("no packages to bind")
    _check_package_names(packages)

    architectures = list(request.architectures or default_architectures(settings))
    if not architectures:
        raise ConfigurationError("no target architectures")

    name = packages[0].name
    output = resolve_output_path(title_case(name), request.output)
    return BindingTarget(
        name=name,
        output_path=output,
        packages=packages,
        architectures=architectures,
    )


def _label(package: PackageUnit | None) -> str:
    return package.import_path if package is not None else SENTINEL_LABEL


def generate_sources(
    *,
    target: BindingTarget,
    generator: BindingGenerator,
    src_dir: Path,
) -> list[str]:
    """Run the generator for every package plus the sentinel.

    Returns the header base names in package order, sentinel last.
    """

    units: list[PackageUnit | None] = [*target.packages, None]
    packages = target.packages

    for unit in units:
        try:
            generator.generate_go(unit, packages, src_dir)
        except BindError:
            raise
        except Exception as exc:
            raise GenerationError(_label(unit), str(exc)) from exc

    bases: list[str] = []
    for unit in units:
        try:
            bases.append(generator.generate_header(unit, packages, src_dir))
        except BindError:
            raise
        except Exception as exc:
            raise GenerationError(_label(unit), str(exc)) from exc

    try:
        generator.generate_support(src_dir)
    except BindError:
        raise
    except Exception as exc:
        raise GenerationError("support files", str(exc)) from exc
    return bases


def bind_framework(
    *,
    settings: AppSettings,
    request: BindRequest,
    generator: BindingGenerator,
    compiler: ArchiveCompiler,
    merger: UniversalMerger,
    hooks: PipelineHooks | None = None,
) -> BindResult:
    hooks = hooks or PipelineHooks()

    def step(message: str) -> None:
        if hooks.step:
            hooks.step(message)

    target = plan_target(settings, request)
    title = target.title
    work_dir = request.work_dir
    src_dir = work_dir / "src" / BINDINGS_DIR_NAME
    entry_source = work_dir / "src" / "osxbin" / "main.go"

    step(f"Generating bindings for {len(target.packages)} package(s)")
    bundle_fs.mkdir(src_dir)
    raw_bases = generate_sources(target=target, generator=generator, src_dir=src_dir)
    bundle_fs.write_text(entry_source, render_entry_source())

    header_bases, folded = merge_header_bases(target.packages, raw_bases)
    warnings: list[str] = []
    if folded:
        message = "Generator folded the error package into a package header."
        warnings.append(message)
        if hooks.warning:
            hooks.warning(message)

    step(f"Building {len(target.architectures)} archive(s)")
    archives = build_archives(
        name=target.name,
        entry_source=entry_source,
        architectures=target.architectures,
        compiler=compiler,
        work_dir=work_dir,
        tags=settings.build_tags,
        max_parallel=settings.max_parallel_builds,
    )

    layout = BundleLayout(root=target.output_path, title=title, version=settings.framework_version)
    step(f"Laying out {layout.root}")
    init_layout(layout)

    step("Merging archives")
    merge_archives(archives, merger, layout.binary_path)

    step("Writing headers and metadata")
    headers = emit_headers(
        header_bases,
        src_dir,
        layout.headers_dir,
        title,
        target.import_paths,
    )
    emit_resource_metadata(layout)
    emit_module_map(layout, headers)

    return BindResult(
        target=target,
        layout=layout,
        header_bases=header_bases,
        headers=headers,
        archives=archives,
        warnings=warnings,
    )
