"""Copying file sets into the bundle and the build directory."""

from __future__ import annotations

import logging
import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from ..errors import BundleIOError
from ..schemas.config import FileSet
from .directories import ensure_directory
from .utils import copy_file, resolve_against

logger = logging.getLogger(__name__)

# Version control and editor artifacts skipped when a file set keeps the
# default excludes enabled.
DEFAULT_EXCLUDES = (
    # editors and OS metadata
    "**/*~",
    "**/#*#",
    "**/.#*",
    "**/%*%",
    "**/._*",
    "**/.DS_Store",
    "**/.metadata",
    "**/.metadata/**",
    # CVS
    "**/CVS",
    "**/CVS/**",
    "**/.cvsignore",
    # RCS, SCCS, VSS, MKS
    "**/RCS",
    "**/RCS/**",
    "**/SCCS",
    "**/SCCS/**",
    "**/vssver.scc",
    "**/project.pj",
    # Subversion
    "**/.svn",
    "**/.svn/**",
    # Arch, Bazaar
    "**/.arch-ids",
    "**/.arch-ids/**",
    "**/.bzr",
    "**/.bzr/**",
    "**/.MySCMServerInfo",
    # Mercurial
    "**/.hg",
    "**/.hg/**",
    "**/.hgignore",
    # git
    "**/.git",
    "**/.git/**",
    "**/.gitignore",
    "**/.gitattributes",
    # BitKeeper
    "**/BitKeeper",
    "**/BitKeeper/**",
    "**/ChangeSet",
    "**/ChangeSet/**",
    # darcs
    "**/_darcs",
    "**/_darcs/**",
    "**/.darcsrepo",
    "**/.darcsrepo/**",
    "**/-darcs-backup*",
    "**/.darcs-temp-mail",
)


def split_pattern(pattern: str) -> tuple[str, ...]:
    """Split an Ant-style pattern into path segments.

    A trailing separator stands for everything below that directory.
    """

    normalized = pattern.replace("\\", "/").strip()
    if normalized.endswith("/"):
        normalized += "**"
    return tuple(segment for segment in normalized.split("/") if segment)


@lru_cache(maxsize=512)
def _segment_regex(segment: str) -> re.Pattern[str]:
    parts = []
    for char in segment:
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts))


def _match_segments(pattern: Sequence[str], path: Sequence[str]) -> bool:
    if not pattern:
        return not path
    head = pattern[0]
    if head == "**":
        rest = pattern[1:]
        return any(_match_segments(rest, path[index:]) for index in range(len(path) + 1))
    if not path:
        return False
    if _segment_regex(head).fullmatch(path[0]) is None:
        return False
    return _match_segments(pattern[1:], path[1:])


def match_path(pattern: str, relative_path: str) -> bool:
    """Return whether ``relative_path`` (``/`` separated) matches ``pattern``."""

    return _match_segments(split_pattern(pattern), split_pattern(relative_path))


def _matches_any(patterns: Iterable[tuple[str, ...]], segments: tuple[str, ...]) -> bool:
    return any(_match_segments(pattern, segments) for pattern in patterns)


def _walk_files(root: Path, prefix: tuple[str, ...] = ()) -> Iterator[tuple[str, ...]]:
    with os.scandir(root) as entries:
        ordered = sorted(entries, key=lambda entry: entry.name)
    for entry in ordered:
        segments = prefix + (entry.name,)
        if entry.is_dir():
            yield from _walk_files(Path(entry.path), segments)
        elif entry.is_file():
            yield segments


def scan_fileset(source_dir: Path, fileset: FileSet) -> List[str]:
    """Return the files below ``source_dir`` selected by ``fileset``.

    Paths are relative and ``/`` separated. Directories are walked depth
    first with entries in name order, so the result is stable across runs.
    """

    includes = [split_pattern(pattern) for pattern in fileset.effective_includes]
    exclude_patterns = list(fileset.excludes)
    if fileset.use_default_excludes:
        exclude_patterns.extend(DEFAULT_EXCLUDES)
    excludes = [split_pattern(pattern) for pattern in exclude_patterns]

    try:
        return [
            "/".join(segments)
            for segments in _walk_files(source_dir)
            if _matches_any(includes, segments) and not _matches_any(excludes, segments)
        ]
    except OSError as exc:
        raise BundleIOError(
            f"Could not scan resource directory {source_dir}",
            context={"path": source_dir, "operation": "scan"},
        ) from exc


def copy_resources(target_dir: Path, filesets: Sequence[FileSet], *, base_dir: Path) -> List[str]:
    """Copy every file selected by ``filesets`` into ``target_dir``.

    Relative file set directories resolve against ``base_dir``. A file set
    whose directory does not exist contributes nothing; a copy failure from a
    directory that does exist aborts with :class:`BundleIOError`.
    """

    added: List[str] = []
    for fileset in filesets:
        source_dir = resolve_against(fileset.directory, base_dir)
        if not source_dir.exists():
            logger.info("Resource directory %s does not exist; skipping", source_dir)
            continue
        if not source_dir.is_dir():
            raise BundleIOError(
                f"Resource directory {source_dir} is not a directory",
                context={"path": source_dir, "operation": "scan"},
            )

        included = scan_fileset(source_dir, fileset)
        logger.info(
            "Copying %d additional resource%s from %s",
            len(included),
            "" if len(included) == 1 else "s",
            source_dir,
        )
        for relative in included:
            copy_file(source_dir / relative, target_dir / relative, operation="copy_resource")
        added.extend(included)
    return added


def copy_bundled_classpath_resources(
    java_dir: Path,
    target_name: str,
    filesets: Sequence[FileSet],
    *,
    base_dir: Path,
) -> List[str]:
    """Copy class-path resources into ``<java_dir>/<target_name>``.

    Returned entries carry the ``<target_name>/`` prefix so they can be
    appended to the class path as-is.
    """

    destination = ensure_directory(java_dir / target_name)
    copied = copy_resources(destination, filesets, base_dir=base_dir)
    return add_path_prefix(copied, target_name)


def add_path_prefix(filenames: Iterable[str], prefix: str) -> List[str]:
    return [f"{prefix}/{name}" for name in filenames]
