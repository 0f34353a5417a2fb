"""Error hierarchy for the bind pipeline.

Every failure is fatal to the current invocation. The classes only attach
the context needed for diagnosis (package, architecture, argv, path); none
of them is caught and recovered inside the core.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class BindError(Exception):
    """Base class for every error surfaced by the pipeline."""


class ConfigurationError(BindError):
    """Invalid request: reported before any filesystem mutation."""


class GenerationError(BindError):
    """The binding generator failed for one package."""

    def __init__(self, package: str, message: str) -> None:
        super().__init__(f"{package}: {message}")
        self.package = package


class CompilerError(BindError):
    """A per-architecture archive build failed."""

    def __init__(self, arch: str, message: str, *, output: str = "") -> None:
        super().__init__(f"{arch}: {message}")
        self.arch = arch
        self.output = output


class MergeError(BindError):
    """The universal-binary tool exited with an error."""

    def __init__(self, args: Sequence[str], message: str, *, output: str = "") -> None:
        super().__init__(f"{message} (command: {' '.join(args)})")
        self.command = list(args)
        self.output = output


class BundleFilesystemError(BindError):
    """A create/copy/symlink/write step failed while building the bundle."""

    def __init__(self, path: Path | str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = Path(path)
