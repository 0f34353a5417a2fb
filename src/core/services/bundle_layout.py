"""Versioned framework skeleton.

`init_layout` is a destructive reset: whatever lives at the bundle root is
removed before the skeleton is recreated, so a failed previous run never
leaks into the next one.
"""

from __future__ import annotations

from adapters import bundle_fs
from core.domain.models import BundleLayout


def init_layout(layout: BundleLayout) -> BundleLayout:
    """Create `Versions/<v>/{Headers,Resources}` and the top-level aliases.

    The `Modules` alias is created dangling; the module map write creates
    the directory it points at.
    """

    root = layout.root
    aliases = layout.aliases()

    bundle_fs.remove_all(root)

    bundle_fs.mkdir(layout.headers_dir)
    bundle_fs.symlink(layout.version, layout.current_link)
    bundle_fs.symlink(aliases["Headers"], root / "Headers")
    bundle_fs.symlink(aliases[layout.title], root / layout.title)

    bundle_fs.mkdir(layout.resources_dir)
    bundle_fs.symlink(aliases["Resources"], root / "Resources")

    bundle_fs.symlink(aliases["Modules"], root / "Modules")
    return layout
