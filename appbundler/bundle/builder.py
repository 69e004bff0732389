"""Bundle assembly orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..schemas.config import BundleConfig
from .dependencies import collect_dependencies
from .descriptor import DescriptorRenderer, write_info_plist
from .directories import create_skeleton, ensure_directory
from .launcher import install_launcher
from .layout import ResolvedArtifact
from .provider import DependencyProvider
from .resources import copy_bundled_classpath_resources, copy_resources
from .utils import copy_file

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BundleResult:
    """Paths produced by one bundle run."""

    bundle_dir: Path
    info_plist: Path
    launcher: Path
    classpath: List[str]
    icon: Optional[Path] = None
    additional_resources: List[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "bundle_dir": str(self.bundle_dir),
            "info_plist": str(self.info_plist),
            "launcher": str(self.launcher),
            "icon": str(self.icon) if self.icon else None,
            "classpath": list(self.classpath),
            "additional_resources": list(self.additional_resources),
        }


class BundleBuilder:
    """Assembles a ``.app`` directory for a configured Java application."""

    def __init__(self, *, renderer: Optional[DescriptorRenderer] = None) -> None:
        self.renderer = renderer

    def build(
        self,
        config: BundleConfig,
        *,
        project: ResolvedArtifact,
        provider: DependencyProvider,
    ) -> BundleResult:
        """Build the bundle and return the paths written.

        Steps run in a fixed order and the first failure aborts the run;
        files written before the failure are left in place.
        """

        build_dir = ensure_directory(config.build_dir)
        layout = create_skeleton(config.bundle_dir)
        logger.info("Assembling %s", layout.root)

        launcher = install_launcher(layout.macos, config.launcher_name, self._launcher_stub(config))
        icon = self._copy_icon(config, layout.resources)

        classpath = collect_dependencies(layout.java, project, provider.resolve())
        if config.additional_bundled_classpath_resources:
            classpath.extend(
                copy_bundled_classpath_resources(
                    layout.java,
                    config.bundled_classpath_dir,
                    config.additional_bundled_classpath_resources,
                    base_dir=config.project_dir,
                )
            )

        renderer = self.renderer or DescriptorRenderer(config.resource_dir)
        write_info_plist(layout.info_plist, config, classpath, renderer=renderer)

        additional: List[str] = []
        if config.additional_resources:
            additional = copy_resources(build_dir, config.additional_resources, base_dir=config.project_dir)

        return BundleResult(
            bundle_dir=layout.root,
            info_plist=layout.info_plist,
            launcher=launcher,
            classpath=classpath,
            icon=icon,
            additional_resources=additional,
        )

    def _launcher_stub(self, config: BundleConfig) -> Optional[Path]:
        if config.launcher_stub is None:
            return None
        return config.resolve(config.launcher_stub)

    def _copy_icon(self, config: BundleConfig, resources_dir: Path) -> Optional[Path]:
        if not config.icon_file:
            return None
        icon = config.resource_dir / config.icon_file
        if not icon.is_file():
            logger.info("Icon %s not found; using the default icon", icon)
            return None
        return copy_file(icon, resources_dir / icon.name, operation="copy_icon")
