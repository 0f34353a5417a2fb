"""Contrato del generador de bindings.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El adaptador de gobind y los fakes de los tests son intercambiables sin
  acoplar el pipeline a ninguno de ellos.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import PackageUnit


@runtime_checkable
class BindingGenerator(Protocol):
    """Emits the generated Go glue and Objective-C headers.

    Rules:
    - `package=None` stands for the sentinel error package.
    - Every call writes into `out_dir` and nowhere else.
    """

    def generate_go(
        self,
        package: PackageUnit | None,
        packages: Sequence[PackageUnit],
        out_dir: Path,
    ) -> None:
        """Write the Go bridging source for `package`."""

        ...

    def generate_header(
        self,
        package: PackageUnit | None,
        packages: Sequence[PackageUnit],
        out_dir: Path,
    ) -> str:
        """Write `.h`/`.m` files for `package` and return the header base name."""

        ...

    def generate_support(self, out_dir: Path) -> None:
        """Write the shared support files (seq runtime, helpers)."""

        ...
