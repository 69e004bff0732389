"""Shared helpers used by bundle tooling."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional

from ..errors import BundleIOError


def copy_file(source: Path, destination: Path, *, operation: str = "copy") -> Path:
    """Copy ``source`` to ``destination``, creating parent directories.

    Any filesystem failure, including a missing source, is raised as
    :class:`BundleIOError` naming both paths.
    """

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
    except OSError as exc:
        raise BundleIOError(
            f"Error copying file {source} to {destination}",
            context={"source": source, "destination": destination, "operation": operation},
        ) from exc
    return destination


def write_text(
    path: Path,
    content: str,
    *,
    encoding: str = "utf-8",
    errors: Optional[str] = None,
    newline: Optional[str] = None,
) -> None:
    """Write text to file ensuring parent directories exist."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding=encoding, errors=errors, newline=newline)
    except (OSError, UnicodeEncodeError) as exc:
        raise BundleIOError(
            f"Could not write file {path}",
            context={"path": path, "encoding": encoding, "operation": "write"},
        ) from exc


def resolve_against(path: Path, base: Path) -> Path:
    path = Path(path)
    if not path.is_absolute():
        path = base / path
    return path
