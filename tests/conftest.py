from __future__ import annotations

from pathlib import Path

import pytest

from appbundler.bundle.layout import Artifact, ResolvedArtifact
from bundle_support import STUB_BYTES, ProjectTree, write_file


@pytest.fixture()
def project_tree(tmp_path: Path) -> ProjectTree:
    root = tmp_path / "project"
    project_jar = write_file(root / "target" / "app-1.0.0.jar", "app")
    dep_a = write_file(tmp_path / "repo" / "foo-1.0.jar", "foo")
    dep_b = write_file(tmp_path / "repo" / "bar-2.1-natives.jar", "bar")
    stub = write_file(tmp_path / "stub" / "JavaAppLauncher", STUB_BYTES)
    return ProjectTree(
        root=root,
        project=ResolvedArtifact(Artifact("com.example", "app", "1.0.0"), project_jar),
        dependencies=[
            ResolvedArtifact(Artifact("com.example", "foo", "1.0"), dep_a),
            ResolvedArtifact(Artifact("org.acme", "bar", "2.1", classifier="natives"), dep_b),
        ],
        stub=stub,
    )
