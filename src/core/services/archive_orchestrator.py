"""Per-architecture archive builds and the universal merge.

Builds are independent (distinct output paths, shared read-only inputs) and
may run concurrently; the merge is the single synchronization point and
always receives the archives in the order the architectures were given.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Sequence

from core.domain.errors import CompilerError
from core.domain.models import ArchEnv, ArchitectureArchive
from core.interfaces.toolchain import ArchiveCompiler, UniversalMerger


def archive_path(work_dir: Path, name: str, arch_env: ArchEnv) -> Path:
    return work_dir / f"{name}-{arch_env.goarch.value}.a"


def _build_one(
    *,
    name: str,
    entry_source: Path,
    arch_env: ArchEnv,
    compiler: ArchiveCompiler,
    work_dir: Path,
    tags: str,
) -> ArchitectureArchive:
    target = archive_path(work_dir, name, arch_env)
    try:
        built = compiler.build(
            entry_source,
            arch_env,
            "-buildmode=c-archive",
            f"-tags={tags}",
            "-o",
            str(target),
        )
    except CompilerError:
        raise
    except Exception as exc:
        raise CompilerError(arch_env.label, str(exc)) from exc
    return ArchitectureArchive(arch_env=arch_env, archive_path=Path(built))


async def _build_concurrently(
    architectures: Sequence[ArchEnv],
    max_parallel: int,
    **kwargs: object,
) -> list[ArchitectureArchive]:
    semaphore = asyncio.Semaphore(max_parallel)
    failures: list[BaseException] = []

    async def guarded(arch_env: ArchEnv) -> ArchitectureArchive | None:
        async with semaphore:
            # Queued builds are skipped once one has failed.
            if failures:
                return None
            try:
                return await asyncio.to_thread(_build_one, arch_env=arch_env, **kwargs)
            except Exception as exc:
                failures.append(exc)
                return None

    results = await asyncio.gather(*(guarded(arch_env) for arch_env in architectures))
    if failures:
        raise failures[0]
    return list(results)  # type: ignore[arg-type]


def build_archives(
    *,
    name: str,
    entry_source: Path,
    architectures: Sequence[ArchEnv],
    compiler: ArchiveCompiler,
    work_dir: Path,
    tags: str = "macosx",
    max_parallel: int = 1,
) -> list[ArchitectureArchive]:
    """Build one c-archive per architecture, returned in input order."""

    kwargs = dict(
        name=name,
        entry_source=entry_source,
        compiler=compiler,
        work_dir=work_dir,
        tags=tags,
    )
    if max_parallel > 1 and len(architectures) > 1:
        return asyncio.run(_build_concurrently(architectures, max_parallel, **kwargs))
    return [_build_one(arch_env=arch_env, **kwargs) for arch_env in architectures]


def merge_archives(
    archives: Sequence[ArchitectureArchive],
    merger: UniversalMerger,
    output: Path,
) -> Path:
    """Invoke the merge tool exactly once, one `(arch, path)` pair per archive."""

    inputs = [(a.arch_env.clang_arch, a.archive_path) for a in archives]
    return Path(merger.merge(inputs, output))


def produce_merged_binary(
    *,
    name: str,
    entry_source: Path,
    architectures: Sequence[ArchEnv],
    header_bases: Sequence[str],
    compiler: ArchiveCompiler,
    merger: UniversalMerger,
    work_dir: Path,
    output: Path,
    tags: str = "macosx",
    max_parallel: int = 1,
) -> Path:
    """Build every architecture, then merge into `output`.

    `header_bases` is not passed to the compiler: the archives embed the
    generated sources already present next to `entry_source`.

    `bind_framework` calls `build_archives` and `merge_archives` itself
    instead of this helper, because the bundle layout is reset between the
    two steps and `output` only exists once the skeleton is in place. Use
    this helper when `output` already has a parent directory.
    """

    archives = build_archives(
        name=name,
        entry_source=entry_source,
        architectures=architectures,
        compiler=compiler,
        work_dir=work_dir,
        tags=tags,
        max_parallel=max_parallel,
    )
    return merge_archives(archives, merger, output)
