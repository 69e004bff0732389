"""Command-line entry point for bundle assembly."""

from __future__ import annotations

import argparse
import json
import logging
import plistlib
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from appbundler.bundle.builder import BundleBuilder
from appbundler.bundle.provider import load_dependency_listing
from appbundler.config import load_config
from appbundler.errors import BundleError

REQUIRED_PLIST_KEYS = ("CFBundleExecutable", "CFBundleName", "CFBundleIconFile", "CFBundleVersion")
REQUIRED_JAVA_KEYS = ("MainClass", "JVMVersion", "ClassPath", "WorkingDirectory", "Arguments")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.command == "bundle":
            return _handle_bundle(args)
        if args.command == "plist":
            if args.plist_command == "validate":
                return _handle_plist_validate(args)
            parser.error("plist command requires a subcommand")
    except BundleError as exc:
        _print_json({"error": exc.to_dict()})
        return 1

    parser.error(f"Unknown command '{args.command}'")
    return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="appbundler", description="Assemble macOS application bundles.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    bundle = subparsers.add_parser("bundle", help="Assemble an .app bundle.")
    bundle.add_argument("--config", required=True, help="Bundle configuration (YAML or JSON).")
    bundle.add_argument("--dependencies", required=True, help="Resolved project artifact and dependencies.")
    bundle.add_argument("--build-directory")
    bundle.add_argument("--project-root")
    bundle.add_argument("--launcher-stub")
    bundle.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Log progress to stderr.",
    )

    plist = subparsers.add_parser("plist", help="Info.plist utilities.")
    plist_sub = plist.add_subparsers(dest="plist_command", required=True)
    plist_validate = plist_sub.add_parser("validate", help="Check an Info.plist for launcher keys.")
    plist_validate.add_argument("--plist", required=True)

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _handle_bundle(args: argparse.Namespace) -> int:
    overrides = {
        "build_directory": _resolve_optional_path(args.build_directory),
        "project_root": _resolve_optional_path(args.project_root),
        "launcher_stub": _resolve_optional_path(args.launcher_stub),
    }
    config = load_config(Path(args.config), overrides=overrides)
    project, provider = load_dependency_listing(Path(args.dependencies))

    result = BundleBuilder().build(config, project=project, provider=provider)
    payload = {
        **result.to_dict(),
        "logs": [
            f"Bundle written to {result.bundle_dir}",
            f"Info.plist written to {result.info_plist}",
        ],
    }
    _print_json(payload)
    return 0


def _handle_plist_validate(args: argparse.Namespace) -> int:
    plist_path = _resolve_optional_path(args.plist)
    errors: List[str] = []
    payload_plist = _load_plist_safe(plist_path, errors)

    if payload_plist is not None:
        for key in REQUIRED_PLIST_KEYS:
            if key not in payload_plist:
                errors.append(f"Missing key {key}")
        java = payload_plist.get("Java")
        if not isinstance(java, dict):
            errors.append("Missing Java dictionary")
        else:
            for key in REQUIRED_JAVA_KEYS:
                if key not in java:
                    errors.append(f"Missing key Java.{key}")

    payload = {
        "plist_path": str(plist_path),
        "valid": payload_plist is not None and not errors,
        "errors": errors,
        "classpath": (payload_plist or {}).get("Java", {}).get("ClassPath", []) if not errors else [],
    }
    _print_json(payload)
    return 0


def _resolve_optional_path(value: Optional[str]) -> Optional[Path]:
    if value is None:
        return None
    return Path(value).resolve()


def _load_plist_safe(path: Path, errors: List[str]) -> Optional[dict]:
    try:
        with path.open("rb") as handle:
            return plistlib.load(handle)
    except (OSError, plistlib.InvalidFileException, ValueError) as exc:
        errors.append(str(exc))
        return None


def _print_json(payload: Mapping[str, object]) -> None:
    print(json.dumps(payload, indent=2, default=str))
