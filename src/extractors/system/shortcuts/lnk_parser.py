"""
Shell Link (.lnk) parser.

Walks the fixed ShellLinkHeader, skips the optional LinkTargetIDList and reads
the LocalBasePath from the optional LinkInfo structure:

    Header (76 bytes)
        20  LinkFlags (uint32)
        24  FileAttributes (uint32)
        28  CreationTime / 36 AccessTime / 44 WriteTime (FILETIME)
        64  HotKey (uint16: low byte virtual key, high byte modifiers)
    LinkTargetIDList (LinkFlags & 0x01)
        0   IDListSize (uint16), followed by IDListSize bytes
    LinkInfo (LinkFlags & 0x02)
        8   LinkInfoFlags (uint32)
        16  LocalBasePathOffset (uint32, relative to LinkInfo start)

Extra data blocks, StringData and network targets are not decoded.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from pathlib import Path
from typing import BinaryIO, Optional, Union

from core.timestamps import filetime_to_datetime
from extractors.exceptions import ShortcutParseError

HEADER_SIZE = 76
DEFAULT_CODEPAGE = "cp1252"

# LinkFlags
HAS_LINK_TARGET_ID_LIST = 0x01
HAS_LINK_INFO = 0x02

# LinkInfoFlags
VOLUME_ID_AND_LOCAL_BASE_PATH = 0x01

FILE_ATTRIBUTE_DIRECTORY = 0x10

# Header field offsets
_LINK_FLAGS_OFFSET = 20
_FILE_ATTRIBUTES_OFFSET = 24
_CREATION_TIME_OFFSET = 28
_ACCESS_TIME_OFFSET = 36
_WRITE_TIME_OFFSET = 44
_HOTKEY_OFFSET = 64

# LinkInfo field offsets (relative to LinkInfo start)
_LINK_INFO_FLAGS_OFFSET = 8
_LOCAL_BASE_PATH_OFFSET = 16

# HotKey modifier masks, in output order
HOTKEY_MODIFIERS = (
    (0x02, "ctrl"),
    (0x01, "shift"),
    (0x04, "alt"),
)

VIRTUAL_KEYS = {
    **{k: chr(k) for k in range(0x30, 0x3A)},  # 0-9
    **{k: chr(k) for k in range(0x41, 0x5B)},  # A-Z
    **{k: f"F{k - 0x6F}" for k in range(0x70, 0x88)},  # F1-F24
    0x90: "NUMLOCK",
    0x91: "SCROLL",
}


@dataclass(frozen=True, slots=True)
class ShortcutInfo:
    """Fields decoded from a Shell Link file."""

    target_path: Optional[str]
    is_directory: bool
    hotkey: str
    creation_time: Optional[datetime] = None
    access_time: Optional[datetime] = None
    write_time: Optional[datetime] = None


class _State(Enum):
    HEADER = auto()
    TARGET_ID_LIST = auto()
    LINK_INFO = auto()
    DONE = auto()


class _BoundedReader:
    """Random-access reads over a buffer; every read is bounds-checked."""

    def __init__(self, data: Union[bytes, bytearray, memoryview]) -> None:
        self._data = memoryview(data)

    def __len__(self) -> int:
        return len(self._data)

    def _require(self, offset: int, size: int, field: str) -> None:
        if offset < 0 or offset + size > len(self._data):
            raise ShortcutParseError(
                f"{field}: read of {size} bytes at offset {offset} exceeds "
                f"buffer of {len(self._data)} bytes"
            )

    def uint8(self, offset: int, field: str) -> int:
        self._require(offset, 1, field)
        return self._data[offset]

    def uint16(self, offset: int, field: str) -> int:
        self._require(offset, 2, field)
        return struct.unpack_from("<H", self._data, offset)[0]

    def uint32(self, offset: int, field: str) -> int:
        self._require(offset, 4, field)
        return struct.unpack_from("<I", self._data, offset)[0]

    def int64(self, offset: int, field: str) -> int:
        self._require(offset, 8, field)
        return struct.unpack_from("<q", self._data, offset)[0]

    def seek(self, offset: int, field: str) -> int:
        """Validate a cursor position; the end of the buffer is allowed."""
        if offset < 0 or offset > len(self._data):
            raise ShortcutParseError(
                f"{field}: position {offset} outside buffer of {len(self._data)} bytes"
            )
        return offset

    def cstring(self, offset: int, field: str, encoding: str) -> str:
        """NUL-terminated string at ``offset``; runs to the end if unterminated."""
        self._require(offset, 1, field)
        raw = bytes(self._data[offset:])
        end = raw.find(b"\x00")
        if end != -1:
            raw = raw[:end]
        return raw.decode(encoding, errors="replace")


def decode_hotkey(low: int, high: int) -> str:
    """
    Render a HotKey as ``ctrl+shift+alt+KEY``.

    Modifiers come first in fixed order; the key is emitted only when the
    virtual key code has a known name. Returns ``""`` when nothing is set.
    """
    keys = [name for mask, name in HOTKEY_MODIFIERS if high & mask]
    key_name = VIRTUAL_KEYS.get(low)
    if key_name:
        keys.append(key_name)
    return "+".join(keys)


def _header_time(reader: _BoundedReader, offset: int, field: str) -> Optional[datetime]:
    filetime = reader.int64(offset, field)
    if filetime == 0:
        return None
    return filetime_to_datetime(filetime)


def parse_shortcut(
    data: Union[bytes, bytearray, memoryview],
    codepage: str = DEFAULT_CODEPAGE,
) -> ShortcutInfo:
    """
    Parse a Shell Link file held in memory.

    Args:
        data: Complete .lnk file content
        codepage: Code page of the ANSI LocalBasePath string

    Returns:
        ShortcutInfo; ``target_path`` is None unless LinkInfo carries a
        local base path

    Raises:
        ShortcutParseError: If the buffer is shorter than the header or any
            size/offset field points outside it
    """
    reader = _BoundedReader(data)
    if len(reader) < HEADER_SIZE:
        raise ShortcutParseError(
            f"Shell Link header requires {HEADER_SIZE} bytes, got {len(reader)}"
        )

    state = _State.HEADER
    cursor = 0
    link_flags = 0
    is_directory = False
    hotkey = ""
    times = {}
    target_path: Optional[str] = None

    while state is not _State.DONE:
        if state is _State.HEADER:
            link_flags = reader.uint32(_LINK_FLAGS_OFFSET, "LinkFlags")
            attributes = reader.uint32(_FILE_ATTRIBUTES_OFFSET, "FileAttributes")
            is_directory = bool(attributes & FILE_ATTRIBUTE_DIRECTORY)
            hotkey = decode_hotkey(
                reader.uint8(_HOTKEY_OFFSET, "HotKey"),
                reader.uint8(_HOTKEY_OFFSET + 1, "HotKey"),
            )
            times = {
                "creation_time": _header_time(reader, _CREATION_TIME_OFFSET, "CreationTime"),
                "access_time": _header_time(reader, _ACCESS_TIME_OFFSET, "AccessTime"),
                "write_time": _header_time(reader, _WRITE_TIME_OFFSET, "WriteTime"),
            }
            cursor = HEADER_SIZE
            if link_flags & HAS_LINK_TARGET_ID_LIST:
                state = _State.TARGET_ID_LIST
            elif link_flags & HAS_LINK_INFO:
                state = _State.LINK_INFO
            else:
                state = _State.DONE

        elif state is _State.TARGET_ID_LIST:
            id_list_size = reader.uint16(cursor, "IDListSize")
            cursor = reader.seek(cursor + 2 + id_list_size, "LinkTargetIDList")
            state = _State.LINK_INFO if link_flags & HAS_LINK_INFO else _State.DONE

        elif state is _State.LINK_INFO:
            start = cursor
            info_flags = reader.uint32(start + _LINK_INFO_FLAGS_OFFSET, "LinkInfoFlags")
            if info_flags & VOLUME_ID_AND_LOCAL_BASE_PATH:
                base_offset = reader.uint32(start + _LOCAL_BASE_PATH_OFFSET, "LocalBasePathOffset")
                target_path = reader.cstring(
                    reader.seek(start + base_offset, "LocalBasePath"),
                    "LocalBasePath",
                    codepage,
                )
            state = _State.DONE

    return ShortcutInfo(
        target_path=target_path,
        is_directory=is_directory,
        hotkey=hotkey,
        **times,
    )


def parse_shortcut_stream(stream: BinaryIO, codepage: str = DEFAULT_CODEPAGE) -> ShortcutInfo:
    """Parse a Shell Link from a binary stream (read fully first)."""
    return parse_shortcut(stream.read(), codepage)


def parse_shortcut_file(path: Path, codepage: str = DEFAULT_CODEPAGE) -> ShortcutInfo:
    """Parse a Shell Link file from disk."""
    with path.open("rb") as handle:
        return parse_shortcut_stream(handle, codepage)
