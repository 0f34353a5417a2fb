"""Pytest configuration.

Puts `src/` (application packages) and this directory (shared fakes) on
`sys.path` so tests run from the repository root without an install.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
SRC_DIR = TESTS_DIR.parent / "src"

for path in (SRC_DIR, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from core.config import AppSettings  # noqa: E402
from fakes import FakeCompiler, FakeGenerator, FakeMerger  # noqa: E402


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> AppSettings:
    # Isolate from any developer .env files.
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    return AppSettings(_env_file=None)


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture
def merger() -> FakeMerger:
    return FakeMerger()
