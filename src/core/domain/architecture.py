"""Target architectures for the macOS framework.

This module centralizes the mapping between Go architecture names and the
names clang/lipo expect. Keeping it in the domain layer lets the services
and the adapters share a single source of truth.
"""

from __future__ import annotations

from enum import Enum

from core.domain.errors import ConfigurationError


class Architecture(str, Enum):
    """GOARCH values a darwin c-archive can be built for."""

    AMD64 = "amd64"
    ARM64 = "arm64"
    I386 = "386"
    ARM = "arm"

    @classmethod
    def default(cls) -> "Architecture":
        return cls.AMD64

    @classmethod
    def parse(cls, goarch: str) -> "Architecture":
        """Return the architecture for a GOARCH string or fail loudly."""

        try:
            return cls(goarch.strip().lower())
        except ValueError:
            supported = ", ".join(a.value for a in cls)
            raise ConfigurationError(
                f"unsupported GOARCH {goarch!r} (supported: {supported})"
            ) from None

    def clang_name(self) -> str:
        """Architecture name used by clang and `lipo -arch`."""

        return _CLANG_NAMES[self]


_CLANG_NAMES: dict[Architecture, str] = {
    Architecture.AMD64: "x86_64",
    Architecture.ARM64: "arm64",
    Architecture.I386: "i386",
    Architecture.ARM: "armv7",
}
