"""
Typed registry value decoding.

Turns a raw ``(type tag, bytes)`` pair read from a hive into a semantic value.
RecentDocs blobs do not follow the generic type tags and have their own decoder.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import StrEnum
from typing import Tuple, Union

from core.enums import RegistryValueType
from extractors.exceptions import TruncatedValueError, UnsupportedTypeError


class ValueKind(StrEnum):
    """Semantic kind of a decoded registry value."""

    TEXT = "text"
    UINT32 = "uint32"
    UINT64 = "uint64"
    MULTI_TEXT = "multi_text"


@dataclass(frozen=True, slots=True)
class RawValue:
    """A registry value exactly as read from the hive."""

    name: str
    type_tag: int
    data: bytes


@dataclass(frozen=True, slots=True)
class DecodedValue:
    """Tagged registry value: ``kind`` says how to read ``value``."""

    kind: ValueKind
    value: Union[str, int, Tuple[str, ...]]

    @property
    def as_text(self) -> str:
        """Text rendering (multi-strings joined with ``; ``)."""
        if self.kind is ValueKind.MULTI_TEXT:
            return "; ".join(self.value)  # type: ignore[arg-type]
        return str(self.value)


def _decode_utf16(data: bytes) -> str:
    # Odd trailing byte is dropped, not an error
    usable = len(data) - (len(data) % 2)
    return bytes(data[:usable]).decode("utf-16-le", errors="replace")


def _decode_string(data: bytes) -> str:
    text = _decode_utf16(data)
    nul = text.find("\x00")
    return text if nul == -1 else text[:nul]


def _decode_multi_string(data: bytes) -> Tuple[str, ...]:
    strings = []
    for segment in _decode_utf16(data).split("\x00"):
        if not segment:
            break
        strings.append(segment)
    return tuple(strings)


def decode_value(type_tag: int, data: bytes) -> DecodedValue:
    """
    Decode a raw registry value.

    Args:
        type_tag: REG_* type tag from the hive
        data: Raw value bytes

    Returns:
        DecodedValue carrying text, a 32/64-bit unsigned integer or a tuple
        of strings

    Raises:
        UnsupportedTypeError: For any tag other than REG_SZ, REG_EXPAND_SZ,
            REG_DWORD, REG_MULTI_SZ and REG_QWORD
        TruncatedValueError: If an integer value is shorter than its width
    """
    if type_tag in (RegistryValueType.REG_SZ, RegistryValueType.REG_EXPAND_SZ):
        return DecodedValue(ValueKind.TEXT, _decode_string(data))

    if type_tag == RegistryValueType.REG_DWORD:
        if len(data) < 4:
            raise TruncatedValueError("REG_DWORD", 4, len(data))
        return DecodedValue(ValueKind.UINT32, struct.unpack_from("<I", data, 0)[0])

    if type_tag == RegistryValueType.REG_QWORD:
        if len(data) < 8:
            raise TruncatedValueError("REG_QWORD", 8, len(data))
        return DecodedValue(ValueKind.UINT64, struct.unpack_from("<Q", data, 0)[0])

    if type_tag == RegistryValueType.REG_MULTI_SZ:
        return DecodedValue(ValueKind.MULTI_TEXT, _decode_multi_string(data))

    raise UnsupportedTypeError(type_tag)


def decode_recent_docs_blob(data: bytes) -> str:
    """
    Extract the filename from a RecentDocs binary value.

    The blob starts with a NUL-terminated UTF-16LE filename followed by shell
    item data. An empty leading segment yields ``""``.
    """
    return _decode_utf16(data).split("\x00", 1)[0]
