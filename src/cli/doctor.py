"""Doctor command for environment diagnostics."""

from __future__ import annotations

import shutil

import typer
from rich.console import Console
from rich.table import Table

from adapters.command_runner import CommandError, run_command
from core.config import AppSettings, get_user_env_file

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_tool(executable: str) -> tuple[bool, str]:
    path = shutil.which(executable)
    if path is None:
        return False, f"{executable} not found on PATH"
    return True, path


def _check_go_version(go_command: str) -> tuple[bool, str]:
    try:
        completed = run_command([go_command, "version"])
    except CommandError as exc:
        return False, str(exc)
    return True, completed.stdout.strip()


@app.command()
def run() -> None:
    """Check the external tools and show the effective configuration."""

    settings = AppSettings()

    table = Table(title="osx-bind doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ok_go, detail_go = _check_go_version(settings.go_command)
    table.add_row("go", "OK" if ok_go else "FAIL", detail_go)

    ok_gobind, detail_gobind = _check_tool(settings.gobind_command)
    table.add_row("gobind", "OK" if ok_gobind else "FAIL", detail_gobind)

    ok_lipo, detail_lipo = _check_tool(settings.lipo_command[0])
    table.add_row("lipo", "OK" if ok_lipo else "FAIL", " ".join(settings.lipo_command) if ok_lipo else detail_lipo)

    table.add_row("Build tags", "OK", settings.build_tags)
    table.add_row("Framework version", "OK", settings.framework_version)
    table.add_row("Default archs", "OK", ", ".join(a.value for a in settings.default_archs))
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    _console.print(table)

    if not (ok_go and ok_gobind and ok_lipo):
        _console.print(
            "\n[yellow]Note:[/yellow] `bind` needs go, gobind and lipo (Xcode command line tools)."
        )
        raise typer.Exit(code=1)
