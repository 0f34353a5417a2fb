"""Wrapper de `subprocess.run`.

Por qué un wrapper:
- Estandariza entorno, captura de salida y reporte de errores para todas las
  herramientas externas (go, gobind, lipo).
- Facilita testeo: los adaptadores aceptan un runner sustituible.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Callable, Mapping, Sequence

from core.domain.errors import BindError

logger = logging.getLogger(__name__)


class CommandError(BindError):
    """An external command could not be started or exited non-zero."""

    def __init__(self, argv: Sequence[str], returncode: int | None, output: str) -> None:
        detail = output.strip() or "no output"
        if returncode is None:
            message = f"could not run {argv[0]}: {detail}"
        else:
            message = f"{argv[0]} exited with status {returncode}: {detail}"
        super().__init__(message)
        self.argv = list(argv)
        self.returncode = returncode
        self.output = output


Runner = Callable[..., "subprocess.CompletedProcess[str]"]


def run_command(
    argv: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run `argv`, merging `env` over the current process environment.

    stdout and stderr are captured together so a failure carries the whole
    tool output.
    """

    full_env = None
    if env:
        full_env = {**os.environ, **env}
        logger.debug("env %s", " ".join(f"{k}={v}" for k, v in env.items()))
    logger.debug("run %s", " ".join(str(a) for a in argv))

    try:
        completed = subprocess.run(
            [str(a) for a in argv],
            env=full_env,
            cwd=str(cwd) if cwd else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise CommandError(argv, None, str(exc)) from exc

    if completed.returncode != 0:
        raise CommandError(argv, completed.returncode, completed.stdout or "")
    if completed.stdout:
        logger.debug("%s", completed.stdout.rstrip())
    return completed
