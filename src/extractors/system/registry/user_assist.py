"""
UserAssist decoding.

Value names under ``UserAssist\\{GUID}\\Count`` are ROT13-encoded program
paths, often rooted at a Known Folder GUID. Value data is a binary record
whose layout depends on the Windows version:

- Legacy (XP/Vista, 16 bytes):
    0-3   session id
    4-7   run count (int32)
    8-15  last run (FILETIME)
- Modern (Win7+, 72 bytes):
    0-3   session id
    4-7   execution counter (int32)
    8-11  run / focus count (int32)
    12-15 focus time in milliseconds (int32)
    60-67 last run (FILETIME)
"""

from __future__ import annotations

import codecs
import re
import struct
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional, Union

from core.timestamps import filetime_to_datetime
from extractors._shared.known_folders import UNMAPPED, lookup_known_folder
from extractors.exceptions import TruncatedValueError

LEGACY_RECORD_SIZE = 16
MODERN_RECORD_SIZE = 68

# Timestamps before the Unix epoch mean "never run"
_MIN_LAST_RUN_YEAR = 1970

GUID_PATTERN = re.compile(
    r"\b[A-F0-9]{8}(?:-[A-F0-9]{4}){3}-[A-F0-9]{12}\b",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class LegacyUserAssistRecord:
    """Record decoded from the 16-byte XP/Vista layout."""

    run_count: int
    last_run: Optional[datetime]


@dataclass(frozen=True, slots=True)
class ModernUserAssistRecord:
    """
    Record decoded from the 72-byte Windows 7+ layout.

    ``run_count`` and ``focus_count`` are read from the same field at offset 8;
    ``execution_count`` is the separate counter at offset 4.
    """

    run_count: int
    focus_count: int
    focus_duration: timedelta
    last_run: Optional[datetime]
    execution_count: int


UserAssistRecord = Union[LegacyUserAssistRecord, ModernUserAssistRecord]


def _last_run(data: bytes, offset: int) -> Optional[datetime]:
    filetime = struct.unpack_from("<q", data, offset)[0]
    dt = filetime_to_datetime(filetime)
    if dt is None or dt.year < _MIN_LAST_RUN_YEAR:
        return None
    return dt


def decode_user_assist_record(data: bytes) -> UserAssistRecord:
    """
    Decode a UserAssist ``Count`` value.

    Args:
        data: Raw value bytes

    Returns:
        LegacyUserAssistRecord for 16 to 67 bytes, ModernUserAssistRecord
        from 68 bytes on

    Raises:
        TruncatedValueError: If fewer than 16 bytes are supplied
    """
    size = len(data)
    if size < LEGACY_RECORD_SIZE:
        raise TruncatedValueError("UserAssist record", LEGACY_RECORD_SIZE, size)

    if size < MODERN_RECORD_SIZE:
        return LegacyUserAssistRecord(
            run_count=struct.unpack_from("<i", data, 4)[0],
            last_run=_last_run(data, 8),
        )

    count = struct.unpack_from("<i", data, 8)[0]
    focus_ms = struct.unpack_from("<i", data, 12)[0]
    return ModernUserAssistRecord(
        run_count=count,
        focus_count=count,
        focus_duration=timedelta(milliseconds=focus_ms),
        last_run=_last_run(data, 60),
        execution_count=struct.unpack_from("<i", data, 4)[0],
    )


def transform_key_name(
    name: str,
    lookup: Callable[[str], str] = lookup_known_folder,
) -> str:
    """
    Decode a UserAssist value name.

    ROT13-decodes ``name``, then replaces the first ``{GUID}`` it contains with
    the known folder name returned by ``lookup``. Names without a GUID, or
    whose GUID is unmapped, are returned as plain ROT13 text.

    Example:
        >>> transform_key_name("{1NP14R77-02R7-4R5Q-O744-2RO1NR5198O7}\\\\abgrcnq.rkr")
        'System32\\\\notepad.exe'
    """
    decoded = codecs.decode(name, "rot_13")

    match = GUID_PATTERN.search(decoded)
    if match is None:
        return decoded

    guid = match.group(0)
    folder = lookup(guid)
    if folder == UNMAPPED:
        return decoded
    return decoded.replace(f"{{{guid}}}", folder)
