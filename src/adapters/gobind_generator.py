"""`gobind` adapter for binding code generation.

The generator is a black box: for every package (or the sentinel error
package) it deposits `.go`, `.h` and `.m` files into the output directory.
This adapter only knows the naming convention of the headers it produces.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from adapters.command_runner import CommandError, Runner, run_command
from core.config import AppSettings
from core.domain.errors import GenerationError
from core.domain.models import SENTINEL_LABEL, PackageUnit

BIND_PREFIX = "Go"
SENTINEL_BASE = "GoUniverse"


def header_base(package: PackageUnit | None) -> str:
    """Header base name gobind uses for `package` (`mypkg` -> `GoMypkg`)."""

    if package is None:
        return SENTINEL_BASE
    return BIND_PREFIX + package.title


class GobindGenerator:
    """Runs `gobind -lang=<go|objc> -outdir=<dir> [pkg]`."""

    def __init__(self, settings: AppSettings | None = None, *, runner: Runner = run_command) -> None:
        self._settings = settings or AppSettings()
        self._runner = runner

    def _run(self, lang: str, package: PackageUnit | None, out_dir: Path) -> None:
        argv = [self._settings.gobind_command, f"-lang={lang}", f"-outdir={out_dir}"]
        if package is not None:
            argv.append(package.import_path)
        try:
            self._runner(argv)
        except CommandError as exc:
            label = package.import_path if package is not None else SENTINEL_LABEL
            raise GenerationError(label, str(exc)) from exc

    def generate_go(
        self,
        package: PackageUnit | None,
        packages: Sequence[PackageUnit],
        out_dir: Path,
    ) -> None:
        self._run("go", package, out_dir)

    def generate_header(
        self,
        package: PackageUnit | None,
        packages: Sequence[PackageUnit],
        out_dir: Path,
    ) -> str:
        self._run("objc", package, out_dir)
        base = header_base(package)
        if not (out_dir / f"{base}.h").is_file():
            label = package.import_path if package is not None else SENTINEL_LABEL
            raise GenerationError(label, f"generator did not produce {base}.h in {out_dir}")
        return base

    def generate_support(self, out_dir: Path) -> None:
        # Support files ship with every gobind run; nothing extra to emit.
        out_dir.mkdir(parents=True, exist_ok=True)
