"""Pydantic models describing one bundle run."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_INCLUDES = ("**/**",)
DEFAULT_LAUNCHER_NAME = "JavaAppLauncher"
DEFAULT_TEMPLATE_ID = "Info.plist.template"

_UNSAFE_NAME_CHARS = re.compile(r"[:/\\]")


def clean_bundle_name(name: str) -> str:
    """Replace characters that cannot appear in a bundle directory name."""

    return _UNSAFE_NAME_CHARS.sub("-", name)


class FileSet(BaseModel):
    """Include/exclude glob rules scoped to one source directory."""

    directory: Path
    includes: List[str] = Field(default_factory=list, description="Ant-style include patterns; empty means everything.")
    excludes: List[str] = Field(default_factory=list)
    use_default_excludes: bool = True

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def effective_includes(self) -> List[str]:
        return list(self.includes) if self.includes else list(DEFAULT_INCLUDES)


class BundleConfig(BaseModel):
    main_class: str = Field(..., description="Class executed when the bundle is opened.")
    bundle_name: str = Field(..., description="Bundle name shown in the menu bar and Dock.")
    version: str = "1.0"
    jvm_version: str = "1.4+"
    working_directory: str = "$APP_ROOT"
    icon_file: Optional[str] = Field(default=None, description="Icon path relative to the resource root.")
    vm_options: Optional[str] = None
    jvm_arguments: List[str] = Field(default_factory=list)
    additional_classpath: List[str] = Field(default_factory=list)
    additional_bundled_classpath_resources: List[FileSet] = Field(default_factory=list)
    additional_resources: List[FileSet] = Field(default_factory=list)
    dictionary_file: str = DEFAULT_TEMPLATE_ID
    launcher_name: str = DEFAULT_LAUNCHER_NAME
    launcher_stub: Optional[Path] = None
    build_directory: Path = Path("target")
    project_root: Path = Path(".")
    resource_root: Path = Path("target/classes")
    bundled_classpath_dir: str = "lib"

    model_config = ConfigDict(extra="forbid", frozen=True, coerce_numbers_to_str=True)

    @field_validator("main_class", "bundle_name")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @property
    def clean_bundle_name(self) -> str:
        return clean_bundle_name(self.bundle_name)

    @property
    def project_dir(self) -> Path:
        return self.project_root.resolve()

    def resolve(self, path: Path) -> Path:
        """Resolve ``path`` against the project root when it is relative."""

        path = Path(path)
        if not path.is_absolute():
            path = self.project_dir / path
        return path

    @property
    def build_dir(self) -> Path:
        return self.resolve(self.build_directory)

    @property
    def resource_dir(self) -> Path:
        return self.resolve(self.resource_root)

    @property
    def bundle_dir(self) -> Path:
        return self.build_dir / f"{self.clean_bundle_name}.app"
