"""Byte-level builders and in-memory fakes for artifact tests."""

from __future__ import annotations

import struct
from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple
from unittest.mock import MagicMock

from core.enums import RegistryValueType
from extractors.exceptions import RegistryAccessError
from extractors.system.registry.values import RawValue


# =============================================================================
# Shell Link
# =============================================================================

LNK_HEADER_SIZE = 76
LINK_INFO_HEADER_SIZE = 28


def build_link_info(base_path: bytes, flags: int = 0x01, terminate: bool = True) -> bytes:
    """LinkInfo structure whose LocalBasePath directly follows its 28-byte header."""
    body = base_path + (b"\x00" if terminate else b"")
    if terminate:
        body += b"\x00"  # empty CommonPathSuffix
    size = LINK_INFO_HEADER_SIZE + len(body)
    header = struct.pack(
        "<IIIIIII",
        size,
        LINK_INFO_HEADER_SIZE,
        flags,
        0,                       # VolumeIDOffset
        LINK_INFO_HEADER_SIZE,   # LocalBasePathOffset
        0,                       # CommonNetworkRelativeLinkOffset
        LINK_INFO_HEADER_SIZE + len(base_path) + 1,
    )
    return header + body


def build_lnk(
    link_flags: int = 0,
    attributes: int = 0,
    hotkey: Tuple[int, int] = (0, 0),
    times: Tuple[int, int, int] = (0, 0, 0),
    id_list: Optional[bytes] = None,
    link_info: Optional[bytes] = None,
) -> bytes:
    """
    Assemble a Shell Link file.

    ``HasLinkTargetIDList`` / ``HasLinkInfo`` are set automatically when
    ``id_list`` / ``link_info`` are given.
    """
    if id_list is not None:
        link_flags |= 0x01
    if link_info is not None:
        link_flags |= 0x02

    header = bytearray(LNK_HEADER_SIZE)
    struct.pack_into("<I", header, 0, LNK_HEADER_SIZE)
    struct.pack_into("<I", header, 20, link_flags)
    struct.pack_into("<I", header, 24, attributes)
    struct.pack_into("<qqq", header, 28, *times)
    header[64] = hotkey[0]
    header[65] = hotkey[1]

    data = bytes(header)
    if id_list is not None:
        data += struct.pack("<H", len(id_list)) + id_list
    if link_info is not None:
        data += link_info
    return data


# =============================================================================
# UserAssist
# =============================================================================

def build_user_assist_legacy(run_count: int, filetime: int, session: int = 1) -> bytes:
    return struct.pack("<iiq", session, run_count, filetime)


def build_user_assist_modern(
    count: int,
    focus_ms: int,
    filetime: int,
    execution_count: int = 0,
    size: int = 72,
) -> bytes:
    data = bytearray(size)
    struct.pack_into("<iiii", data, 0, 0, execution_count, count, focus_ms)
    struct.pack_into("<q", data, 60, filetime)
    return bytes(data)


# =============================================================================
# Registry values
# =============================================================================

def sz_value(name: str, text: str, type_tag: int = RegistryValueType.REG_SZ) -> RawValue:
    return RawValue(name, int(type_tag), (text + "\x00").encode("utf-16-le"))


def multi_sz_value(name: str, items: Sequence[str]) -> RawValue:
    data = ("".join(f"{item}\x00" for item in items) + "\x00").encode("utf-16-le")
    return RawValue(name, int(RegistryValueType.REG_MULTI_SZ), data)


def dword_value(name: str, value: int) -> RawValue:
    return RawValue(name, int(RegistryValueType.REG_DWORD), struct.pack("<I", value))


def binary_value(name: str, data: bytes) -> RawValue:
    return RawValue(name, int(RegistryValueType.REG_BINARY), data)


def recent_docs_blob(filename: str, shell_item: bytes = b"\x14\x00\x1f\x50") -> bytes:
    return (filename + "\x00").encode("utf-16-le") + shell_item


# =============================================================================
# In-memory registry source
# =============================================================================

class FakeKey:
    """Registry key node for FakeRegistrySource."""

    def __init__(
        self,
        name: str,
        values: Iterable[RawValue] = (),
        last_written: Optional[datetime] = None,
    ) -> None:
        self.name = name
        self.values: List[RawValue] = list(values)
        self.children: Dict[str, FakeKey] = {}
        self.last_written = last_written

    def add(self, path: str, values: Iterable[RawValue] = (), last_written: Optional[datetime] = None) -> "FakeKey":
        """Create ``path`` below this key (intermediate keys included) and return its leaf."""
        node = self
        for part in [p for p in path.split("\\") if p]:
            node = node.children.setdefault(part.lower(), FakeKey(part))
        node.values.extend(values)
        if last_written is not None:
            node.last_written = last_written
        return node


class FakeRegistrySource:
    """``RegistrySource`` over a FakeKey tree."""

    def __init__(self, root: Optional[FakeKey] = None, name: str = "NTUSER.DAT") -> None:
        self.root = root or FakeKey("")
        self.name = name

    def open_key(self, path: str) -> FakeKey:
        node = self.root
        for part in [p for p in path.split("\\") if p]:
            child = node.children.get(part.lower())
            if child is None:
                raise RegistryAccessError(path, f"failed at '{part}'")
            node = child
        return node

    def enumerate_children(self, key: FakeKey) -> Iterator[str]:
        for child in key.children.values():
            yield child.name

    def enumerate_values(self, key: FakeKey) -> Iterator[RawValue]:
        yield from key.values

    def read_value(self, key: FakeKey, name: str) -> Optional[RawValue]:
        for raw in key.values:
            if raw.name.lower() == name.lower():
                return raw
        return None

    def last_written(self, key: FakeKey) -> Optional[datetime]:
        return key.last_written


# =============================================================================
# regipy doubles
# =============================================================================

def regipy_value(name: str, value_type: str, value) -> MagicMock:
    val = MagicMock()
    val.name = name
    val.value_type = value_type
    val.value = value
    return val


def regipy_key(name: str, subkeys: Sequence = (), values: Sequence = (), last_modified=None) -> MagicMock:
    key = MagicMock()
    key.name = name
    key.iter_subkeys.side_effect = lambda: iter(list(subkeys))
    key.iter_values.side_effect = lambda **kwargs: iter(list(values))
    key.header.last_modified = last_modified
    return key
