"""Assemble macOS application bundles for Java programs."""

__version__ = "0.1.0"
from .bundle.builder import BundleBuilder, BundleResult
from .bundle.layout import Artifact, ResolvedArtifact, artifact_path
from .bundle.provider import DependencyProvider, StaticDependencyProvider, load_dependency_listing
from .config import load_config
from .errors import (
    BundleError,
    BundleIOError,
    ConfigurationError,
    ErrorKind,
    ResourceNotFoundError,
    TemplateError,
)
from .schemas.config import BundleConfig, FileSet

__all__ = [
    "__version__",
    "Artifact",
    "ResolvedArtifact",
    "artifact_path",
    "BundleBuilder",
    "BundleResult",
    "BundleConfig",
    "FileSet",
    "load_config",
    "DependencyProvider",
    "StaticDependencyProvider",
    "load_dependency_listing",
    "BundleError",
    "BundleIOError",
    "ConfigurationError",
    "ErrorKind",
    "ResourceNotFoundError",
    "TemplateError",
]
