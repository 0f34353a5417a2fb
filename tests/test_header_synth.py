"""Header, module map and property list synthesis."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.domain.errors import BundleFilesystemError, ConfigurationError
from core.domain.models import BundleLayout
from core.services.header_synth import (
    INFO_PLIST,
    emit_headers,
    emit_module_map,
    emit_resource_metadata,
    render_entry_source,
    render_module_map,
    render_umbrella_header,
)


def _write_headers(src: Path, bases: list[str]) -> None:
    src.mkdir(parents=True, exist_ok=True)
    for base in bases:
        (src / f"{base}.h").write_text(f"// {base}\n", encoding="utf-8")


def test_module_map_exact_text() -> None:
    text = render_module_map("Mypkg", ["Mypkg.h"])
    assert text == 'framework module "Mypkg" {\n    header "Mypkg.h"\n\n    export *\n}'


def test_module_map_keeps_header_order_and_ends_with_export() -> None:
    headers = ["GoB.h", "GoA.h", "GoUniverse.h", "B.h"]
    lines = render_module_map("B", headers).splitlines()
    declared = [line.strip() for line in lines if line.strip().startswith("header ")]
    assert declared == [f'header "{h}"' for h in headers]
    assert lines[-2].strip() == "export *"
    assert lines[-1] == "}"


def test_umbrella_header_guard_provenance_and_includes() -> None:
    text = render_umbrella_header(
        "Alpha",
        ["example.com/alpha", "example.com/beta"],
        ["GoAlpha", "GoBeta", "GoUniverse"],
    )
    assert "// example.com/alpha\n// example.com/beta\n" in text
    assert "#ifndef __Alpha_H__\n#define __Alpha_H__\n" in text
    includes = [line for line in text.splitlines() if line.startswith("#include")]
    assert includes == ['#include "GoAlpha.h"', '#include "GoBeta.h"', '#include "GoUniverse.h"']
    assert text.endswith("#endif\n")


def test_entry_source_imports_bindings() -> None:
    source = render_entry_source()
    assert 'import "C"' in source
    assert '_ "../gomobile_bind"' in source
    assert "func main() {}" in source


def test_single_base_copied_verbatim_as_title_header(tmp_path: Path) -> None:
    src, headers_dir = tmp_path / "src", tmp_path / "Headers"
    _write_headers(src, ["GoMypkg"])

    headers = emit_headers(["GoMypkg"], src, headers_dir, "Mypkg")

    assert headers == ["Mypkg.h"]
    assert sorted(p.name for p in headers_dir.iterdir()) == ["Mypkg.h"]
    assert (headers_dir / "Mypkg.h").read_bytes() == (src / "GoMypkg.h").read_bytes()


def test_several_bases_get_copies_plus_umbrella(tmp_path: Path) -> None:
    src, headers_dir = tmp_path / "src", tmp_path / "Headers"
    bases = ["GoAlpha", "GoBeta", "GoUniverse"]
    _write_headers(src, bases)

    headers = emit_headers(bases, src, headers_dir, "Alpha", ["example.com/alpha", "example.com/beta"])

    assert headers == ["GoAlpha.h", "GoBeta.h", "GoUniverse.h", "Alpha.h"]
    assert sorted(p.name for p in headers_dir.iterdir()) == sorted(headers)
    for base in bases:
        assert (headers_dir / f"{base}.h").read_text(encoding="utf-8") == f"// {base}\n"
    umbrella = (headers_dir / "Alpha.h").read_text(encoding="utf-8")
    assert umbrella.index("GoAlpha.h") < umbrella.index("GoBeta.h") < umbrella.index("GoUniverse.h")


def test_no_bases_is_a_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        emit_headers([], tmp_path, tmp_path / "Headers", "X")


def test_missing_generated_header_reports_path(tmp_path: Path) -> None:
    with pytest.raises(BundleFilesystemError) as excinfo:
        emit_headers(["GoMissing"], tmp_path, tmp_path / "Headers", "Missing")
    assert excinfo.value.path == tmp_path / "Headers" / "Missing.h"


def test_module_map_and_plist_are_written_into_layout(tmp_path: Path) -> None:
    layout = BundleLayout(root=tmp_path / "Mypkg.framework", title="Mypkg")
    layout.resources_dir.mkdir(parents=True)
    (layout.root / "Resources").symlink_to("Versions/A/Resources")

    plist = emit_resource_metadata(layout)
    module_map = emit_module_map(layout, ["Mypkg.h"])

    assert plist.read_text(encoding="utf-8") == INFO_PLIST
    assert (layout.resources_dir / "Info.plist").is_file()
    assert module_map == layout.version_dir / "Modules" / "module.modulemap"
    assert 'header "Mypkg.h"' in module_map.read_text(encoding="utf-8")
