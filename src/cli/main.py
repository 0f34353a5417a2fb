"""osx-bind CLI (Typer).

Commands:
- `bind`: packages Go packages into a `<Title>.framework` bundle.
- `doctor`: checks the external toolchain.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.go_toolchain import GoArchiveCompiler, LipoMerger
from adapters.gobind_generator import GobindGenerator
from cli import doctor
from cli.ui_components import build_archives_table, build_bundle_table, print_banner
from core.config import AppSettings
from core.domain.architecture import Architecture
from core.domain.errors import BindError
from core.domain.models import ArchEnv
from core.services.bind_pipeline import BindRequest, PipelineHooks, bind_framework, parse_packages

app = typer.Typer(no_args_is_help=True, help="Build macOS frameworks from Go packages.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def bind(
    packages: list[str] = typer.Argument(..., help="Import paths of the Go packages to bind."),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Bundle path (must end with .framework)."),
    arch: Optional[list[str]] = typer.Option(None, "--arch", help="GOARCH to build (repeatable)."),
    work: Optional[Path] = typer.Option(None, "--work", help="Working directory for sources and archives."),
    keep_work: bool = typer.Option(False, "--keep-work", help="Do not delete the working directory."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log every command executed."),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="No banner, no tables."),
) -> None:
    """Generate bindings, build c-archives and assemble the framework."""

    _configure_logging(verbose)
    settings = AppSettings()
    if not quiet:
        print_banner(_console)

    try:
        architectures = [ArchEnv(goarch=Architecture.parse(a)) for a in arch] if arch else None
        units = parse_packages(packages)
    except BindError as exc:
        _console.print(f"[red]error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    work_dir = work or settings.work_dir
    created_work = work_dir is None
    if work_dir is None:
        work_dir = Path(tempfile.mkdtemp(prefix="osx-bind-"))
    # go runs from inside the work tree, so relative paths would not survive.
    work_dir = Path(work_dir).resolve()
    keep = keep_work or settings.keep_work_dir

    def on_step(message: str) -> None:
        if not quiet:
            _console.print(f"[cyan]>[/cyan] {message}")

    hooks = PipelineHooks(
        step=on_step,
        warning=lambda message: _console.print(f"[yellow]warning:[/yellow] {message}"),
    )
    request = BindRequest(
        packages=units,
        work_dir=work_dir,
        output=output,
        architectures=architectures,
    )

    try:
        result = bind_framework(
            settings=settings,
            request=request,
            generator=GobindGenerator(settings),
            compiler=GoArchiveCompiler(settings, gopath=work_dir),
            merger=LipoMerger(settings),
            hooks=hooks,
        )
    except BindError as exc:
        _console.print(f"[red]error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    finally:
        if keep:
            _console.print(f"[dim]work dir kept at {work_dir}[/dim]")
        elif created_work:
            shutil.rmtree(work_dir, ignore_errors=True)

    if not quiet:
        _console.print(build_archives_table(result))
        _console.print(build_bundle_table(result))
    _console.print(f"[green]Framework written to:[/green] {result.layout.root}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
