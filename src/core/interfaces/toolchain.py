"""Contracts for the external compiler and the universal-binary tool."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import ArchEnv


@runtime_checkable
class ArchiveCompiler(Protocol):
    """Turns one source tree plus one architecture environment into an archive."""

    def build(self, source: Path, arch_env: ArchEnv, *flags: str) -> Path:
        """Run the build; raise `CompilerError` on failure.

        `flags` always carries `-o <archive>`; the returned path is that archive.
        """

        ...


@runtime_checkable
class UniversalMerger(Protocol):
    """Combines per-architecture archives into one fat binary."""

    def merge(self, inputs: Sequence[tuple[str, Path]], output: Path) -> Path:
        """Merge `(clang arch, archive)` pairs, in order, into `output`.

        Raises `MergeError` when the tool exits with an error.
        """

        ...
