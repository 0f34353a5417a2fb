"""Command runner and toolchain adapters."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from adapters import bundle_fs
from adapters.command_runner import CommandError, run_command
from adapters.go_toolchain import GoArchiveCompiler, LipoMerger
from adapters.gobind_generator import GobindGenerator, header_base
from core.config import AppSettings
from core.domain.architecture import Architecture
from core.domain.errors import BundleFilesystemError, CompilerError, GenerationError, MergeError
from core.domain.models import ArchEnv, PackageUnit


class RecordingRunner:
    def __init__(self, *, fail: bool = False, on_call=None) -> None:
        self.fail = fail
        self.on_call = on_call
        self.calls: list[dict] = []

    def __call__(self, argv, *, env=None, cwd=None):
        self.calls.append({"argv": list(argv), "env": env, "cwd": cwd})
        if self.on_call:
            self.on_call(list(argv))
        if self.fail:
            raise CommandError(argv, 2, "exit status 2")
        return None


def test_run_command_captures_output() -> None:
    completed = run_command([sys.executable, "-c", "print('hello')"])
    assert completed.stdout.strip() == "hello"


def test_run_command_merges_environment() -> None:
    completed = run_command(
        [sys.executable, "-c", "import os; print(os.environ['OSX_BIND_TEST_ARCH'])"],
        env={"OSX_BIND_TEST_ARCH": "arm64"},
    )
    assert completed.stdout.strip() == "arm64"


def test_run_command_failure_carries_output() -> None:
    argv = [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
    with pytest.raises(CommandError) as excinfo:
        run_command(argv)
    assert excinfo.value.returncode == 3
    assert "boom" in excinfo.value.output


def test_run_command_missing_executable() -> None:
    with pytest.raises(CommandError) as excinfo:
        run_command(["osx-bind-definitely-missing-tool"])
    assert excinfo.value.returncode is None


def test_go_compiler_invocation(settings: AppSettings, tmp_path: Path) -> None:
    tmp_path = tmp_path.resolve()
    runner = RecordingRunner()
    compiler = GoArchiveCompiler(settings, runner=runner, gopath=tmp_path)
    source = tmp_path / "src" / "osxbin" / "main.go"
    archive = tmp_path / "mypkg-arm64.a"

    built = compiler.build(
        source,
        ArchEnv(goarch=Architecture.ARM64),
        "-buildmode=c-archive",
        "-tags=macosx",
        "-o",
        str(archive),
    )

    call = runner.calls[0]
    assert built == archive
    assert call["argv"] == ["go", "build", "-buildmode=c-archive", "-tags=macosx", "-o", str(archive), str(source)]
    assert call["env"]["GOARCH"] == "arm64"
    assert call["env"]["GOOS"] == "darwin"
    assert call["env"]["GO111MODULE"] == "off"
    assert call["env"]["GOPATH"] == str(tmp_path)
    assert call["cwd"] == source.parent


def test_go_compiler_makes_relative_work_paths_absolute(
    settings: AppSettings,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.chdir(tmp_path)
    work = tmp_path.resolve() / "work"
    runner = RecordingRunner()
    compiler = GoArchiveCompiler(settings, runner=runner, gopath=Path("work"))

    built = compiler.build(
        Path("work/src/osxbin/main.go"),
        ArchEnv(),
        "-buildmode=c-archive",
        "-o",
        "work/mypkg-amd64.a",
    )

    call = runner.calls[0]
    assert built == work / "mypkg-amd64.a"
    assert call["argv"][-3:] == ["-o", str(work / "mypkg-amd64.a"), str(work / "src" / "osxbin" / "main.go")]
    assert call["env"]["GOPATH"] == str(work)
    assert call["cwd"] == work / "src" / "osxbin"
    assert all(Path(arg).is_absolute() for arg in call["argv"][-2:])


def test_go_compiler_failure_has_arch(settings: AppSettings, tmp_path: Path) -> None:
    compiler = GoArchiveCompiler(settings, runner=RecordingRunner(fail=True))
    with pytest.raises(CompilerError) as excinfo:
        compiler.build(tmp_path / "main.go", ArchEnv(), "-o", str(tmp_path / "a.a"))
    assert excinfo.value.arch == "darwin-x86_64"


def test_lipo_command_and_failure(settings: AppSettings, tmp_path: Path) -> None:
    inputs = [("x86_64", tmp_path / "a-amd64.a"), ("arm64", tmp_path / "a-arm64.a")]
    output = tmp_path / "A"
    expected = [
        "xcrun", "lipo", "-create",
        "-arch", "x86_64", str(tmp_path / "a-amd64.a"),
        "-arch", "arm64", str(tmp_path / "a-arm64.a"),
        "-o", str(output),
    ]

    runner = RecordingRunner()
    assert LipoMerger(settings, runner=runner).merge(inputs, output) == output
    assert runner.calls[0]["argv"] == expected

    with pytest.raises(MergeError) as excinfo:
        LipoMerger(settings, runner=RecordingRunner(fail=True)).merge(inputs, output)
    assert excinfo.value.command == expected


def test_gobind_generator_header_base(settings: AppSettings, tmp_path: Path) -> None:
    pkg = PackageUnit(import_path="example.com/mypkg")

    def write_header(argv: list[str]) -> None:
        if "-lang=objc" in argv:
            base = header_base(pkg) if argv[-1] == pkg.import_path else header_base(None)
            (tmp_path / f"{base}.h").write_text("//", encoding="utf-8")

    runner = RecordingRunner(on_call=write_header)
    generator = GobindGenerator(settings, runner=runner)

    generator.generate_go(pkg, [pkg], tmp_path)
    assert generator.generate_header(pkg, [pkg], tmp_path) == "GoMypkg"
    assert generator.generate_header(None, [pkg], tmp_path) == "GoUniverse"
    assert runner.calls[0]["argv"] == ["gobind", "-lang=go", f"-outdir={tmp_path}", "example.com/mypkg"]
    assert runner.calls[2]["argv"] == ["gobind", "-lang=objc", f"-outdir={tmp_path}"]


def test_gobind_generator_errors(settings: AppSettings, tmp_path: Path) -> None:
    pkg = PackageUnit(import_path="example.com/mypkg")

    with pytest.raises(GenerationError) as excinfo:
        GobindGenerator(settings, runner=RecordingRunner(fail=True)).generate_go(pkg, [pkg], tmp_path)
    assert excinfo.value.package == "example.com/mypkg"

    with pytest.raises(GenerationError, match="GoUniverse.h"):
        GobindGenerator(settings, runner=RecordingRunner()).generate_header(None, [pkg], tmp_path)


def test_bundle_fs_symlink_collision(tmp_path: Path) -> None:
    bundle_fs.symlink("A", tmp_path / "Current")
    with pytest.raises(BundleFilesystemError) as excinfo:
        bundle_fs.symlink("B", tmp_path / "Current")
    assert excinfo.value.path == tmp_path / "Current"


def test_bundle_fs_remove_all_handles_symlinks_and_missing(tmp_path: Path) -> None:
    target = tmp_path / "real"
    target.mkdir()
    (tmp_path / "link").symlink_to("real")

    bundle_fs.remove_all(tmp_path / "link")
    bundle_fs.remove_all(tmp_path / "missing")

    assert not (tmp_path / "link").exists()
    assert target.is_dir()
