"""Copying resolved dependencies into the bundle's Java directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from ..errors import BundleIOError
from .layout import ResolvedArtifact, artifact_path
from .utils import copy_file

logger = logging.getLogger(__name__)


def collect_dependencies(
    java_dir: Path,
    project: ResolvedArtifact,
    dependencies: Iterable[ResolvedArtifact],
) -> List[str]:
    """Copy the project artifact and its dependencies below ``java_dir``.

    The project's own artifact is copied first, then dependencies in the
    order the provider returned them. The returned layout paths keep that
    order. The first missing or unreadable file aborts the run.
    """

    paths: List[str] = []
    for resolved in (project, *dependencies):
        relative = artifact_path(resolved.artifact)
        destination = java_dir / relative
        if not resolved.file.is_file():
            raise BundleIOError(
                f"Artifact file {resolved.file} for {relative} does not exist",
                context={"source": resolved.file, "destination": destination, "operation": "copy_dependency"},
            )
        logger.debug("Adding %s", resolved.file)
        copy_file(resolved.file, destination, operation="copy_dependency")
        paths.append(relative)
    return paths
