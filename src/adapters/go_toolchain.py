"""Go compiler and lipo adapters.

Both shell out through `adapters.command_runner` and translate its
`CommandError` into the pipeline's error kinds, attaching the architecture
(for builds) or the argument list (for the merge).
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from adapters.command_runner import CommandError, Runner, run_command
from core.config import AppSettings
from core.domain.errors import CompilerError, MergeError
from core.domain.models import ArchEnv


class GoArchiveCompiler:
    """Runs `go build` with the architecture's environment."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        runner: Runner = run_command,
        gopath: Path | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._runner = runner
        self._gopath = gopath

    def build(self, source: Path, arch_env: ArchEnv, *flags: str) -> Path:
        # go runs from the source directory: every path handed to it is absolute.
        source = Path(source).resolve()
        flags = _absolute_output(flags)
        argv = [self._settings.go_command, "build", *flags, str(source)]
        # The entry source imports the bindings by relative path: GOPATH mode only.
        env = {"GO111MODULE": "off", **arch_env.to_environ()}
        if self._gopath is not None:
            env["GOPATH"] = str(Path(self._gopath).resolve())
        try:
            self._runner(argv, env=env, cwd=source.parent)
        except CommandError as exc:
            raise CompilerError(arch_env.label, str(exc), output=exc.output) from exc
        return Path(_output_flag(flags))


class LipoMerger:
    """Runs `xcrun lipo -create` once for all archives."""

    def __init__(self, settings: AppSettings | None = None, *, runner: Runner = run_command) -> None:
        self._settings = settings or AppSettings()
        self._runner = runner

    def command(self, inputs: Sequence[tuple[str, Path]], output: Path) -> list[str]:
        argv = [*self._settings.lipo_command, "-create"]
        for arch, archive in inputs:
            argv += ["-arch", arch, str(archive)]
        argv += ["-o", str(output)]
        return argv

    def merge(self, inputs: Sequence[tuple[str, Path]], output: Path) -> Path:
        argv = self.command(inputs, output)
        try:
            self._runner(argv)
        except CommandError as exc:
            raise MergeError(argv, str(exc), output=exc.output) from exc
        return output


def _output_flag(flags: Sequence[str]) -> str:
    for i, flag in enumerate(flags[:-1]):
        if flag == "-o":
            return flags[i + 1]
    raise ValueError("build flags must contain -o <path>")


def _absolute_output(flags: Sequence[str]) -> tuple[str, ...]:
    out = list(flags)
    for i, flag in enumerate(out[:-1]):
        if flag == "-o":
            out[i + 1] = str(Path(out[i + 1]).resolve())
    return tuple(out)
