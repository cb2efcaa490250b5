"""
AppID Registry Loader

Windows Jump List AppID table loaded from a two-column ``id,name`` CSV.

AppIDs are CRC64 hashes derived from application executable paths,
used as the 16-character hex prefix of .automaticDestinations-ms filenames.

Example:
    5d696d521de238c3.automaticDestinations-ms -> Google Chrome

Usage:
    from extractors._shared.appid_loader import load_appid_table

    table = load_appid_table()
    table.resolve("5d696d521de238c3")  # "Google Chrome"
    table.resolve("0000000000000000")  # "Unknown"
"""

from __future__ import annotations

import csv
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, Optional

from core.logging import get_logger
from extractors.exceptions import ConfigurationError

LOGGER = get_logger("extractors._shared.appid_loader")

# Bundled table shipped with the package
_APPIDS_CSV_PATH = Path(__file__).parent / "appids.csv"

UNKNOWN_APP = "Unknown"


class AppIdTable:
    """Upper-cased AppID -> application name lookup."""

    def __init__(self, entries: Dict[str, str]) -> None:
        self._entries = {appid.strip().upper(): name.strip() for appid, name in entries.items()}

    def __len__(self) -> int:
        return len(self._entries)

    def resolve(self, appid: str) -> str:
        """
        Get application name for an AppID.

        Args:
            appid: 16-character hex AppID (case-insensitive).

        Returns:
            Application name, or "Unknown" if not found.
        """
        if not appid:
            return UNKNOWN_APP
        return self._entries.get(appid.upper(), UNKNOWN_APP)


def parse_appid_rows(lines: Iterable[str]) -> Dict[str, str]:
    """
    Parse ``id,name`` CSV lines (header first) into a mapping.

    Rows that do not have exactly two fields are skipped.
    """
    reader = csv.reader(lines)
    entries: Dict[str, str] = {}
    header = next(reader, None)
    if header is None:
        return entries

    for row in reader:
        if len(row) != 2:
            LOGGER.debug("Skipping malformed AppID row: %r", row)
            continue
        appid, name = row[0].strip(), row[1].strip()
        if appid:
            entries[appid.upper()] = name
    return entries


def _read_csv(path: Path) -> AppIdTable:
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            entries = parse_appid_rows(handle)
    except OSError as exc:
        raise ConfigurationError(f"AppID table not readable: {path} ({exc})") from exc
    LOGGER.debug("Loaded %d AppIDs from %s", len(entries), path)
    return AppIdTable(entries)


@lru_cache(maxsize=1)
def _load_bundled() -> AppIdTable:
    """Load the bundled AppID table (cached)."""
    return _read_csv(_APPIDS_CSV_PATH)


def load_appid_table(csv_path: Optional[Path] = None) -> AppIdTable:
    """
    Load an AppID table.

    Args:
        csv_path: Optional replacement CSV. The bundled table is used when None.

    Raises:
        ConfigurationError: If the CSV file cannot be read.
    """
    if csv_path is None:
        return _load_bundled()
    return _read_csv(csv_path)
