"""Filesystem primitives used to build the bundle.

Every helper fails loudly: `OSError` becomes `BundleFilesystemError` with
the failing path attached. There is no rollback.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from core.domain.errors import BundleFilesystemError

logger = logging.getLogger(__name__)


def remove_all(path: Path) -> None:
    """Remove `path` whatever it is (tree, file, symlink); missing is fine."""

    logger.debug("rm -r %s", path)
    try:
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.exists():
            shutil.rmtree(path)
    except OSError as exc:
        raise BundleFilesystemError(path, f"remove failed: {exc}") from exc


def mkdir(path: Path) -> None:
    logger.debug("mkdir -p %s", path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BundleFilesystemError(path, f"mkdir failed: {exc}") from exc


def symlink(target: str, link: Path) -> None:
    """Create `link` pointing at the relative `target`."""

    logger.debug("ln -s %s %s", target, link)
    try:
        link.symlink_to(target)
    except OSError as exc:
        raise BundleFilesystemError(link, f"symlink to {target!r} failed: {exc}") from exc


def copy_file(dst: Path, src: Path) -> None:
    logger.debug("cp %s %s", src, dst)
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dst)
    except OSError as exc:
        raise BundleFilesystemError(dst, f"copy from {src} failed: {exc}") from exc


def write_text(path: Path, content: str) -> None:
    """Write UTF-8 text, creating parent directories as needed."""

    logger.debug("write %s", path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise BundleFilesystemError(path, f"write failed: {exc}") from exc
