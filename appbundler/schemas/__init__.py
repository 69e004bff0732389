"""Schema definitions for bundle configuration."""

from .config import BundleConfig, FileSet, clean_bundle_name

__all__ = [
    "BundleConfig",
    "FileSet",
    "clean_bundle_name",
]
