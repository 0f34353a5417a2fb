"""Header, module map and property list synthesis.

The renderers are pure functions from structured input to text, so the
contract "given these inputs, produce this exact text" is unit-testable.
The emitters write that text (or copy generated headers) into a bundle.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from adapters import bundle_fs
from core.domain.errors import ConfigurationError
from core.domain.models import BundleLayout


INFO_PLIST = """<?xml version="1.0" encoding="UTF-8"?>
    <!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
    <plist version="1.0">
      <dict>
      </dict>
    </plist>
"""

BINDINGS_DIR_NAME = "gomobile_bind"


def render_entry_source() -> str:
    """`main.go` compiled into every c-archive; it only pulls in the bindings."""

    return f"""
package main

import (
  _ "../{BINDINGS_DIR_NAME}"
)

import "C"

func main() {{}}
"""


def render_umbrella_header(title: str, import_paths: Sequence[str], bases: Sequence[str]) -> str:
    lines = [
        "",
        "// Objective-C API for talking to the following Go packages",
        "//",
    ]
    lines += [f"// {path}" for path in import_paths]
    lines += [
        "//",
        "// File is generated by gomobile bind. Do not edit.",
        f"#ifndef __{title}_H__",
        f"#define __{title}_H__",
        "",
    ]
    lines += [f'#include "{base}.h"' for base in bases]
    lines += ["", "#endif", ""]
    return "\n".join(lines)


def render_module_map(title: str, headers: Sequence[str]) -> str:
    lines = [f'framework module "{title}" {{']
    lines += [f'    header "{header}"' for header in headers]
    lines += ["", "    export *", "}"]
    return "\n".join(lines)


def emit_headers(
    header_bases: Sequence[str],
    src_dir: Path,
    headers_dir: Path,
    title: str,
    import_paths: Sequence[str] = (),
) -> list[str]:
    """Place the headers into the bundle and return their file names.

    One base name: the generated header becomes `<title>.h` verbatim.
    Several: every header is copied under its own name and an umbrella
    `<title>.h` including all of them, in order, is appended.
    """

    if not header_bases:
        raise ConfigurationError("no generated headers to place into the bundle")

    umbrella = f"{title}.h"
    if len(header_bases) == 1:
        bundle_fs.copy_file(headers_dir / umbrella, src_dir / f"{header_bases[0]}.h")
        return [umbrella]

    headers: list[str] = []
    for base in header_bases:
        name = f"{base}.h"
        bundle_fs.copy_file(headers_dir / name, src_dir / name)
        headers.append(name)

    bundle_fs.write_text(
        headers_dir / umbrella,
        render_umbrella_header(title, import_paths, header_bases),
    )
    headers.append(umbrella)
    return headers


def emit_module_map(layout: BundleLayout, headers: Sequence[str]) -> Path:
    bundle_fs.write_text(layout.module_map_path, render_module_map(layout.title, headers))
    return layout.module_map_path


def emit_resource_metadata(layout: BundleLayout) -> Path:
    bundle_fs.write_text(layout.info_plist_path, INFO_PLIST)
    return layout.info_plist_path
