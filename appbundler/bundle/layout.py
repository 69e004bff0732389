"""Repository layout for bundled artifacts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True, slots=True)
class Artifact:
    """Coordinates identifying one binary dependency."""

    group: str
    name: str
    version: str
    classifier: Optional[str] = None
    extension: str = "jar"

    @property
    def filename(self) -> str:
        suffix = f"-{self.classifier}" if self.classifier else ""
        return f"{self.name}-{self.version}{suffix}.{self.extension}"


@dataclass(frozen=True, slots=True)
class ResolvedArtifact:
    """An artifact together with the file the dependency provider resolved."""

    artifact: Artifact
    file: Path


def artifact_path(artifact: Artifact) -> str:
    """Return the layout path of ``artifact`` relative to the Java directory.

    ``com.example:foo:1.0`` maps to ``com/example/foo/1.0/foo-1.0.jar``.
    """

    segments = artifact.group.split(".")
    segments.extend([artifact.name, artifact.version, artifact.filename])
    return "/".join(segments)
