"""
Shortcut collectors over a user profile tree.
"""

from __future__ import annotations

from typing import Iterator, List, Sequence

from core.enums import ArtifactKind
from core.evidence_fs import EvidenceFS
from core.logging import get_logger
from extractors.exceptions import DecodeError
from extractors.findings import ArtifactFinding
from .lnk_parser import DEFAULT_CODEPAGE, parse_shortcut
from .url_parser import parse_url_shortcut

LOGGER = get_logger("extractors.system.shortcuts.collector")

RECENT_SHORTCUT_DIRS = (
    "AppData/Roaming/Microsoft/Windows/Recent",
    "Desktop",
    "AppData/Roaming/Microsoft/Office/Recent",
)

INTERNET_SHORTCUT_DIRS = (
    "Desktop",
    "Downloads",
    "Documents",
)


def _find_files(fs: EvidenceFS, directories: Sequence[str], suffix: str) -> List[str]:
    found: List[str] = []
    for directory in directories:
        files = fs.list_files(directory, suffix)
        LOGGER.debug("Found %d %s files under %s", len(files), suffix, directory)
        found.extend(files)
    return found


def collect_recent_shortcuts(
    fs: EvidenceFS,
    codepage: str = DEFAULT_CODEPAGE,
) -> Iterator[ArtifactFinding]:
    """
    Collect Shell Link targets from the Recent, Desktop and Office Recent folders.

    Args:
        fs: Evidence filesystem rooted at a user profile
        codepage: Code page of ANSI strings inside the shortcuts
    """
    paths = _find_files(fs, RECENT_SHORTCUT_DIRS, ".lnk")
    LOGGER.info("Found %d recent shortcuts", len(paths))

    for path in paths:
        try:
            info = parse_shortcut(fs.read_file(path), codepage)
        except DecodeError as exc:
            LOGGER.warning("Skipping shortcut %s: %s", path, exc)
            continue

        yield ArtifactFinding(
            artifact=ArtifactKind.RECENT_SHORTCUT,
            value=info.target_path or "",
            source=fs.source_name,
            path=path,
            timestamp=info.write_time,
            extra={
                "is_directory": info.is_directory,
                "hotkey": info.hotkey,
                "creation_time": info.creation_time,
                "access_time": info.access_time,
            },
        )


def collect_internet_shortcuts(
    fs: EvidenceFS,
    codepage: str = DEFAULT_CODEPAGE,
) -> Iterator[ArtifactFinding]:
    """Collect ``.url`` shortcut targets from Desktop, Downloads and Documents."""
    paths = _find_files(fs, INTERNET_SHORTCUT_DIRS, ".url")
    LOGGER.info("Found %d internet shortcuts", len(paths))

    for path in paths:
        try:
            url = parse_url_shortcut(fs.read_file(path), codepage)
        except DecodeError as exc:
            LOGGER.warning("Skipping internet shortcut %s: %s", path, exc)
            continue

        yield ArtifactFinding(
            artifact=ArtifactKind.INTERNET_SHORTCUT,
            value=url,
            source=fs.source_name,
            path=path,
        )
