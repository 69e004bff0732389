"""Bundle directory skeleton."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..errors import BundleIOError


@dataclass(frozen=True, slots=True)
class BundleDirectories:
    root: Path
    contents: Path
    macos: Path
    resources: Path
    java: Path

    @property
    def info_plist(self) -> Path:
        return self.contents / "Info.plist"


def bundle_directories(bundle_dir: Path) -> BundleDirectories:
    contents = bundle_dir / "Contents"
    return BundleDirectories(
        root=bundle_dir,
        contents=contents,
        macos=contents / "MacOS",
        resources=contents / "Resources",
        java=contents / "Java",
    )


def create_skeleton(bundle_dir: Path) -> BundleDirectories:
    """Create ``Contents/{MacOS,Resources,Java}`` under ``bundle_dir``.

    Existing directories are left untouched, so running twice is harmless.
    """

    layout = bundle_directories(bundle_dir)
    for directory in (layout.root, layout.contents, layout.macos, layout.resources, layout.java):
        ensure_directory(directory)
    return layout


def ensure_directory(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BundleIOError(
            f"Could not create directory {path}",
            context={"path": path, "operation": "mkdir"},
        ) from exc
    return path
