"""
Command-line entry point.

Decodes Windows activity artifacts from an offline user profile directory and
registry hives, then prints a console report or JSON.

Example:
    footprint --profile /mnt/evidence/Users/alice \\
              --ntuser /mnt/evidence/Users/alice/NTUSER.DAT \\
              --system /mnt/evidence/Windows/System32/config/SYSTEM
"""

from __future__ import annotations

import argparse
import logging
import sys
from functools import partial
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from core.app_version import get_app_version
from core.config import AppConfig, load_app_config
from core.evidence_fs import MountedFS
from core.logging import configure_logging, get_logger
from extractors._shared.appid_loader import load_appid_table
from extractors._shared.known_folders import KnownFolderTable
from extractors.browser.bookmarks import collect_edge_favorites
from extractors.exceptions import ConfigurationError, ExtractorError
from extractors.findings import ArtifactFinding
from extractors.system.jump_lists.collector import collect_jump_list_apps
from extractors.system.registry.collectors import (
    collect_office_mru,
    collect_recent_docs,
    collect_run_mru,
    collect_typed_paths,
    collect_usb_storage,
    collect_user_assist,
)
from extractors.system.registry.source import RegipyHiveSource
from extractors.system.shortcuts.collector import (
    collect_internet_shortcuts,
    collect_recent_shortcuts,
)
from reports.console import findings_to_json, render_console_report

LOGGER = get_logger("run")

EXIT_OK = 0
EXIT_USAGE = 2

Collector = Tuple[str, Callable[[], Iterable[ArtifactFinding]]]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="footprint",
        description="Decode Windows activity artifacts from offline evidence",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"Footprint {get_app_version()}",
    )
    ap.add_argument(
        "--profile",
        type=Path,
        help="User profile directory (shortcuts, Jump Lists, Edge favorites)",
    )
    ap.add_argument("--ntuser", type=Path, help="Offline NTUSER.DAT hive")
    ap.add_argument("--system", type=Path, help="Offline SYSTEM hive (USB storage)")
    ap.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("."),
        help="Base directory containing config/config.yml",
    )
    ap.add_argument("--json", action="store_true", help="Print findings as JSON instead of text")
    ap.add_argument("--log-dir", type=Path, help="Write a rotating log file into this directory")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return ap


def _registry_collectors(
    hive_path: Path, kind: str, folders: KnownFolderTable,
) -> List[Collector]:
    source = RegipyHiveSource.from_file(hive_path)
    if kind == "system":
        return [("USB storage", partial(collect_usb_storage, source))]
    return [
        ("Office MRU", partial(collect_office_mru, source)),
        ("RecentDocs", partial(collect_recent_docs, source)),
        ("RunMRU", partial(collect_run_mru, source)),
        ("TypedPaths", partial(collect_typed_paths, source)),
        ("UserAssist", partial(collect_user_assist, source, folders.lookup)),
    ]


def _profile_collectors(profile: Path, config: AppConfig) -> List[Collector]:
    fs = MountedFS(profile)
    codepage = config.decoding.ansi_codepage
    appids = load_appid_table(config.decoding.appid_csv)
    return [
        ("Recent shortcuts", partial(collect_recent_shortcuts, fs, codepage)),
        ("Internet shortcuts", partial(collect_internet_shortcuts, fs, codepage)),
        ("Jump Lists", partial(collect_jump_list_apps, fs, appids)),
        ("Edge favorites", partial(collect_edge_favorites, fs)),
    ]


def _build_collectors(args: argparse.Namespace, config: AppConfig) -> List[Collector]:
    """Collectors for every input supplied; unreadable inputs are logged and skipped."""
    folders = KnownFolderTable(config.decoding.known_folders)
    collectors: List[Collector] = []

    for hive_path, kind in ((args.ntuser, "ntuser"), (args.system, "system")):
        if hive_path is None:
            continue
        try:
            collectors.extend(_registry_collectors(hive_path, kind, folders))
        except ExtractorError as exc:
            LOGGER.error("Cannot read %s hive: %s", kind.upper(), exc)

    if args.profile is not None:
        try:
            collectors.extend(_profile_collectors(args.profile, config))
        except FileNotFoundError as exc:
            LOGGER.error("Cannot read profile directory: %s", exc)

    return collectors


def run_collectors(collectors: Sequence[Collector]) -> List[ArtifactFinding]:
    """Run collectors in order; a failing collector is logged and skipped."""
    findings: List[ArtifactFinding] = []
    for label, collect in collectors:
        try:
            collected = list(collect())
        except (ExtractorError, OSError) as exc:
            LOGGER.error("%s collector failed: %s", label, exc)
            continue
        LOGGER.info("%s: %d findings", label, len(collected))
        findings.extend(collected)
    return findings


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.profile is None and args.ntuser is None and args.system is None:
        ap.error("Provide at least one of --profile, --ntuser or --system.")

    try:
        config = load_app_config(args.config)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(
        log_dir=args.log_dir or config.logs_dir,
        level=logging.DEBUG if args.verbose else config.logging.level_value,
        max_bytes=config.logging.log_max_mb * 1024 * 1024,
        backup_count=config.logging.log_backup_count,
    )
    LOGGER.debug("Configuration: %s", config.to_json())

    try:
        collectors = _build_collectors(args, config)
    except ConfigurationError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return EXIT_USAGE

    findings = run_collectors(collectors)

    if args.json:
        print(findings_to_json(findings))
    else:
        sources = [str(p) for p in (args.profile, args.ntuser, args.system) if p is not None]
        print(render_console_report(findings, sources=sources), end="")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
