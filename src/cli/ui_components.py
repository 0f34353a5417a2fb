"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `bind` y `doctor`.
"""

from __future__ import annotations

import os

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.services.bind_pipeline import BindResult


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in --quiet mode)."""

    title = Text("OSX-BIND", style="bold cyan")
    subtitle = Text("Go packages • c-archives • .framework bundles", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_bundle_table(result: BindResult) -> Table:
    """Top-level entries of the produced bundle and where they point."""

    layout = result.layout
    table = Table(title=str(layout.root))
    table.add_column("Entry", style="cyan", no_wrap=True)
    table.add_column("Kind", style="white")
    table.add_column("Target", style="magenta")

    for entry in sorted(layout.root.iterdir(), key=lambda p: p.name):
        if entry.is_symlink():
            table.add_row(entry.name, "symlink", os.readlink(entry))
        elif entry.is_dir():
            table.add_row(entry.name, "dir", "")
        else:
            table.add_row(entry.name, "file", "")
    table.add_row(
        f"Versions/{layout.version}/Headers",
        "headers",
        ", ".join(result.headers),
    )
    return table


def build_archives_table(result: BindResult) -> Table:
    table = Table(title="Architectures")
    table.add_column("GOARCH", style="cyan", no_wrap=True)
    table.add_column("lipo arch", style="white")
    table.add_column("Archive", style="dim")
    for archive in result.archives:
        table.add_row(
            archive.arch_env.goarch.value,
            archive.arch_env.clang_arch,
            str(archive.archive_path),
        )
    return table
