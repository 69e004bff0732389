"""Bundle assembly utilities."""

from .builder import BundleBuilder, BundleResult
from .descriptor import DescriptorRenderer, build_context, write_info_plist
from .directories import BundleDirectories, create_skeleton
from .encoding import detect_xml_encoding
from .layout import Artifact, ResolvedArtifact, artifact_path
from .provider import DependencyProvider, StaticDependencyProvider, load_dependency_listing
from .resources import copy_resources, scan_fileset

__all__ = [
    "Artifact",
    "ResolvedArtifact",
    "artifact_path",
    "BundleBuilder",
    "BundleResult",
    "BundleDirectories",
    "create_skeleton",
    "DependencyProvider",
    "StaticDependencyProvider",
    "load_dependency_listing",
    "DescriptorRenderer",
    "build_context",
    "write_info_plist",
    "detect_xml_encoding",
    "copy_resources",
    "scan_fileset",
]
