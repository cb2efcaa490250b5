"""
Registry source capability.

Collectors read registry data through the ``RegistrySource`` protocol so the
decoders only ever see raw bytes. ``RegipyHiveSource`` implements it over an
offline hive file using regipy.
"""

from __future__ import annotations

import struct
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Optional, Protocol

from construct import ConstructError
from regipy.exceptions import RegipyException
from regipy.registry import RegistryHive

from core.enums import RegistryValueType
from core.logging import get_logger
from core.timestamps import filetime_to_datetime
from extractors.exceptions import RegistryAccessError
from .values import RawValue

LOGGER = get_logger("extractors.system.registry.source")


class RegistrySource(Protocol):
    """Read-only access to one registry hive."""

    name: str

    def open_key(self, path: str) -> Any:
        """Open ``path`` (backslash separated, relative to the hive root).

        Raises:
            RegistryAccessError: If the key does not exist
        """

    def enumerate_children(self, key: Any) -> Iterator[str]:
        """Yield the names of the direct subkeys of ``key``."""

    def enumerate_values(self, key: Any) -> Iterator[RawValue]:
        """Yield every value of ``key`` as raw bytes with its type tag."""

    def read_value(self, key: Any, name: str) -> Optional[RawValue]:
        """Return the named value of ``key`` or None if it does not exist."""

    def last_written(self, key: Any) -> Optional[datetime]:
        """Return the key's last write time, if known."""


def join_key_path(*parts: str) -> str:
    """Join registry path components with backslashes."""
    return "\\".join(part.strip("\\") for part in parts if part)


# =============================================================================
# regipy adapter
# =============================================================================

_STRING_TYPES = (RegistryValueType.REG_SZ, RegistryValueType.REG_EXPAND_SZ)

# Raised by regipy and its construct structs when hive cells are damaged
_HIVE_ERRORS = (RegipyException, ConstructError)


def _value_to_bytes(type_tag: int, value: Any) -> bytes:
    """
    Re-serialize a value decoded by regipy into its on-disk byte form.

    regipy hands back Python objects for typed values; the decoders in
    ``values`` work on bytes, so the conversion is undone here.
    """
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)

    if type_tag in _STRING_TYPES and isinstance(value, str):
        return (value + "\x00").encode("utf-16-le")
    if type_tag == RegistryValueType.REG_DWORD and isinstance(value, int):
        return struct.pack("<I", value & 0xFFFFFFFF)
    if type_tag == RegistryValueType.REG_QWORD and isinstance(value, int):
        return struct.pack("<Q", value & 0xFFFFFFFFFFFFFFFF)
    if type_tag == RegistryValueType.REG_MULTI_SZ and isinstance(value, (list, tuple)):
        return ("".join(f"{item}\x00" for item in value) + "\x00").encode("utf-16-le")

    if isinstance(value, str):
        # Binary data may come back hex-encoded
        try:
            return bytes.fromhex(value)
        except ValueError:
            return value.encode("utf-16-le")
    if isinstance(value, int):
        return struct.pack("<Q", value & 0xFFFFFFFFFFFFFFFF)

    LOGGER.debug("Unexpected value payload %r for type %d", type(value), type_tag)
    return b""


def _raw_value(val: Any) -> RawValue:
    type_tag = int(RegistryValueType.from_name(str(val.value_type)))
    return RawValue(
        name=val.name,
        type_tag=type_tag,
        data=_value_to_bytes(type_tag, val.value),
    )


def _key_label(key: Any) -> str:
    return str(getattr(key, "name", "") or "<root>")


class RegipyHiveSource:
    """``RegistrySource`` over an offline hive parsed by regipy."""

    def __init__(self, hive: Any, name: str = "") -> None:
        self._hive = hive
        self.name = name

    @classmethod
    def from_file(cls, hive_path: Path) -> "RegipyHiveSource":
        """
        Open an offline hive file.

        Raises:
            RegistryAccessError: If the file is missing or not a valid hive
        """
        if not hive_path.is_file():
            raise RegistryAccessError(str(hive_path), "hive file not found")
        try:
            hive = RegistryHive(str(hive_path))
        except Exception as exc:
            raise RegistryAccessError(str(hive_path), f"failed to parse hive: {exc}") from exc
        LOGGER.info("Opened hive %s", hive_path)
        return cls(hive, name=str(hive_path))

    def open_key(self, path: str) -> Any:
        # Manual case-insensitive traversal: regipy's get_key() redirects
        # WOW6432Node paths, which hides the real key
        parts = [p for p in path.replace("/", "\\").split("\\") if p]
        current = self._hive.root

        for part in parts:
            target = part.lower()
            try:
                for subkey in current.iter_subkeys():
                    if subkey.name.lower() == target:
                        current = subkey
                        break
                else:
                    raise RegistryAccessError(path, f"failed at '{part}'")
            except _HIVE_ERRORS as exc:
                raise RegistryAccessError(path, f"corrupt hive data: {exc}") from exc

        return current

    def enumerate_children(self, key: Any) -> Iterator[str]:
        try:
            for subkey in key.iter_subkeys():
                yield subkey.name
        except _HIVE_ERRORS as exc:
            raise RegistryAccessError(_key_label(key), f"failed to list subkeys: {exc}") from exc

    def enumerate_values(self, key: Any) -> Iterator[RawValue]:
        try:
            for val in key.iter_values(trim_values=False):
                yield _raw_value(val)
        except _HIVE_ERRORS as exc:
            raise RegistryAccessError(_key_label(key), f"failed to list values: {exc}") from exc

    def read_value(self, key: Any, name: str) -> Optional[RawValue]:
        target = name.lower()
        for raw in self.enumerate_values(key):
            if raw.name.lower() == target:
                return raw
        return None

    def last_written(self, key: Any) -> Optional[datetime]:
        try:
            modified = key.header.last_modified
        except AttributeError:
            return None
        if isinstance(modified, datetime):
            return modified if modified.tzinfo else modified.replace(tzinfo=timezone.utc)
        # regipy keeps the raw FILETIME in the NK record header
        if isinstance(modified, int) and not isinstance(modified, bool):
            return filetime_to_datetime(modified)
        return None
