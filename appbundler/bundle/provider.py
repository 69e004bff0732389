"""Dependency providers feeding resolved artifacts to the builder."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Sequence

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ConfigurationError
from .layout import Artifact, ResolvedArtifact


class DependencyProvider(Protocol):
    def resolve(self) -> Sequence[ResolvedArtifact]:  # pragma: no cover - interface
        ...


class StaticDependencyProvider:
    """Provider returning a fixed, already ordered artifact list."""

    def __init__(self, artifacts: Iterable[ResolvedArtifact] = ()) -> None:
        self._artifacts = list(artifacts)

    def resolve(self) -> Sequence[ResolvedArtifact]:
        return list(self._artifacts)


class ArtifactEntry(BaseModel):
    group: str
    name: str
    version: str
    classifier: Optional[str] = None
    extension: str = "jar"
    file: Path

    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)

    def to_resolved(self, base_dir: Path) -> ResolvedArtifact:
        file = self.file if self.file.is_absolute() else base_dir / self.file
        return ResolvedArtifact(
            artifact=Artifact(
                group=self.group,
                name=self.name,
                version=self.version,
                classifier=self.classifier or None,
                extension=self.extension,
            ),
            file=file,
        )


class DependencyListing(BaseModel):
    project: ArtifactEntry
    dependencies: List[ArtifactEntry] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


def load_dependency_listing(path: Path) -> tuple[ResolvedArtifact, StaticDependencyProvider]:
    """Read a YAML/JSON listing of the project artifact and its dependencies.

    Relative ``file`` entries resolve against the listing's directory.
    """

    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(
            f"Dependency listing not found: {path}",
            context={"path": path, "operation": "load_dependencies"},
        )
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        listing = DependencyListing.model_validate(payload)
    except (yaml.YAMLError, ValidationError) as exc:
        raise ConfigurationError(
            f"Invalid dependency listing {path}: {exc}",
            context={"path": path, "operation": "load_dependencies"},
        ) from exc

    base_dir = path.resolve().parent
    project = listing.project.to_resolved(base_dir)
    provider = StaticDependencyProvider(entry.to_resolved(base_dir) for entry in listing.dependencies)
    return project, provider
