"""Loading bundle configuration from YAML or JSON files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from .errors import ConfigurationError
from .schemas.config import BundleConfig


def load_config(path: Path, *, overrides: Mapping[str, Any] | None = None) -> BundleConfig:
    """Load a :class:`BundleConfig` from ``path``.

    A relative ``project_root`` is taken relative to the configuration file;
    when absent the file's directory is the project root.
    """

    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(
            f"Bundle configuration not found: {path}",
            context={"path": path, "operation": "load_config"},
        )
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"Invalid bundle configuration {path}: {exc}",
            context={"path": path, "operation": "load_config"},
        ) from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(
            f"Bundle configuration {path} must be a mapping",
            context={"path": path, "operation": "load_config"},
        )

    payload = dict(payload)
    project_root = Path(payload.get("project_root", "."))
    if not project_root.is_absolute():
        project_root = path.resolve().parent / project_root
    payload["project_root"] = project_root
    if overrides:
        payload.update({key: value for key, value in overrides.items() if value is not None})

    return config_from_mapping(payload, source=str(path))


def config_from_mapping(payload: Mapping[str, Any], *, source: str = "<mapping>") -> BundleConfig:
    try:
        return BundleConfig.model_validate(dict(payload))
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
        raise ConfigurationError(
            f"Invalid bundle configuration in {source}: {exc}",
            context={"source": source, "fields": ", ".join(fields), "operation": "validate_config"},
        ) from exc
