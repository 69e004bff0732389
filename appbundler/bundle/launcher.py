"""Launcher stub installation."""

from __future__ import annotations

import stat
from importlib import resources
from pathlib import Path
from typing import Optional

from ..errors import BundleIOError, ResourceNotFoundError
from .utils import copy_file

DEFAULT_STUB = "JavaAppLauncher"


def install_launcher(macos_dir: Path, launcher_name: str, stub: Optional[Path] = None) -> Path:
    """Copy the launcher stub into ``macos_dir`` and mark it executable.

    Without an explicit ``stub`` the launcher shipped with the package is used.
    """

    target = macos_dir / launcher_name
    if stub is not None:
        _install(Path(stub), target)
        return target

    packaged = resources.files("appbundler") / "resources" / DEFAULT_STUB
    with resources.as_file(packaged) as source:
        _install(source, target)
    return target


def _install(source: Path, target: Path) -> None:
    if not source.is_file():
        raise ResourceNotFoundError(
            f"Launcher stub {source} not found",
            context={"path": source, "operation": "install_launcher"},
        )
    copy_file(source, target, operation="install_launcher")
    try:
        target.chmod(target.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as exc:
        raise BundleIOError(
            f"Could not mark launcher {target} executable",
            context={"path": target, "operation": "chmod"},
        ) from exc
