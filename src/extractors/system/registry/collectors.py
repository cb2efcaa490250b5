"""
Registry activity collectors.

Each collector walks one well-known key of an NTUSER.DAT or SYSTEM hive
through a ``RegistrySource`` and yields ``ArtifactFinding`` records.

A missing top-level key means the artifact is absent and yields nothing.
Values that fail to decode are logged and skipped; the rest of the key is
still collected.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Iterator, List

from core.enums import ArtifactKind, RegistryValueType
from core.logging import get_logger
from extractors._shared.known_folders import lookup_known_folder
from extractors.exceptions import DecodeError, RegistryAccessError
from extractors.findings import ArtifactFinding
from .mru import normalize_mru_entries
from .source import RegistrySource, join_key_path
from .user_assist import (
    ModernUserAssistRecord,
    decode_user_assist_record,
    transform_key_name,
)
from .values import ValueKind, decode_recent_docs_blob, decode_value

LOGGER = get_logger("extractors.system.registry.collectors")

# =============================================================================
# Key paths
# =============================================================================

EXPLORER_KEY = r"Software\Microsoft\Windows\CurrentVersion\Explorer"
RECENT_DOCS_KEY = EXPLORER_KEY + r"\RecentDocs"
RUN_MRU_KEY = EXPLORER_KEY + r"\RunMRU"
TYPED_PATHS_KEY = EXPLORER_KEY + r"\TypedPaths"
USER_ASSIST_KEY = EXPLORER_KEY + r"\UserAssist"
OFFICE_KEY = r"Software\Microsoft\Office"

SELECT_KEY = "Select"
DEFAULT_CONTROL_SET = "ControlSet001"
USBSTOR_SUBPATH = r"Enum\USBSTOR"

OFFICE_VERSION_PATTERN = re.compile(r"\d+\.\d+")
OFFICE_MRU_KEY_NAMES = frozenset({"file mru", "place mru"})

# MRU ordering values, not entries
_MRU_ORDER_VALUES = frozenset({"mrulist", "mrulistex"})

# ROT13 of "UEME_": session counters and other UserAssist bookkeeping values
_USER_ASSIST_META_PREFIX = "HRZR_"

_TEXT_KINDS = (ValueKind.TEXT, ValueKind.MULTI_TEXT)


def _open_optional(source: RegistrySource, path: str) -> Any:
    """Open ``path`` or return None (logged) when the key is absent."""
    try:
        return source.open_key(path)
    except RegistryAccessError as exc:
        LOGGER.info("Skipping %s: %s", path, exc)
        return None


def _text_values(source: RegistrySource, key: Any, key_path: str) -> Dict[str, str]:
    """Decode the string values of ``key``; other value types are ignored."""
    texts: Dict[str, str] = {}
    for raw in source.enumerate_values(key):
        if raw.name.lower() in _MRU_ORDER_VALUES:
            continue
        try:
            decoded = decode_value(raw.type_tag, raw.data)
        except DecodeError as exc:
            LOGGER.debug("Skipping value %s\\%s: %s", key_path, raw.name, exc)
            continue
        if decoded.kind in _TEXT_KINDS:
            texts[raw.name] = decoded.as_text
    return texts


# =============================================================================
# Office MRU
# =============================================================================

def _find_office_mru_keys(source: RegistrySource, key_path: str) -> List[str]:
    """Recursively collect ``File MRU`` / ``Place MRU`` key paths below ``key_path``."""
    key = _open_optional(source, key_path)
    if key is None:
        return []

    found: List[str] = []
    for child in source.enumerate_children(key):
        child_path = join_key_path(key_path, child)
        if child.lower() in OFFICE_MRU_KEY_NAMES:
            found.append(child_path)
        found.extend(_find_office_mru_keys(source, child_path))
    return found


def collect_office_mru(source: RegistrySource) -> Iterator[ArtifactFinding]:
    """
    Collect recently used Office files and folders.

    Every version key under ``Software\\Microsoft\\Office`` (``16.0``,
    ``15.0``...) is searched for ``File MRU`` and ``Place MRU`` keys; their
    entries are normalized into a sorted, deduplicated filename list per version.
    """
    office = _open_optional(source, OFFICE_KEY)
    if office is None:
        return

    for child in source.enumerate_children(office):
        if not OFFICE_VERSION_PATTERN.search(child):
            continue

        version_path = join_key_path(OFFICE_KEY, child)
        LOGGER.debug("Found Office version %s", child)

        entries: List[str] = []
        for mru_path in _find_office_mru_keys(source, version_path):
            mru_key = _open_optional(source, mru_path)
            if mru_key is None:
                continue
            entries.extend(_text_values(source, mru_key, mru_path).values())

        for filename in normalize_mru_entries(entries):
            yield ArtifactFinding(
                artifact=ArtifactKind.OFFICE_MRU,
                value=filename,
                source=source.name,
                path=version_path,
                extra={"office_version": child},
            )


# =============================================================================
# Explorer MRU lists
# =============================================================================

def _recent_docs_entries(
    source: RegistrySource, key: Any, key_path: str, extension: str,
) -> Iterator[ArtifactFinding]:
    for raw in source.enumerate_values(key):
        if raw.name.lower() in _MRU_ORDER_VALUES:
            continue
        if raw.type_tag not in (RegistryValueType.REG_BINARY, RegistryValueType.REG_NONE):
            LOGGER.debug("Skipping non-binary RecentDocs value %s\\%s", key_path, raw.name)
            continue

        filename = decode_recent_docs_blob(raw.data)
        if not filename:
            continue

        yield ArtifactFinding(
            artifact=ArtifactKind.RECENT_DOCS,
            value=filename,
            source=source.name,
            path=f"{key_path}\\{raw.name}",
            extra={"extension": extension, "mru_slot": raw.name},
        )


def collect_recent_docs(source: RegistrySource) -> Iterator[ArtifactFinding]:
    """
    Collect Explorer RecentDocs filenames.

    The key's own values cover all file types; each subkey (``.docx``,
    ``Folder``...) lists the entries for one extension.
    """
    key = _open_optional(source, RECENT_DOCS_KEY)
    if key is None:
        return

    yield from _recent_docs_entries(source, key, RECENT_DOCS_KEY, "")

    for extension in source.enumerate_children(key):
        sub_path = join_key_path(RECENT_DOCS_KEY, extension)
        subkey = _open_optional(source, sub_path)
        if subkey is None:
            continue
        yield from _recent_docs_entries(source, subkey, sub_path, extension)


def _collect_text_key(
    source: RegistrySource, key_path: str, artifact: ArtifactKind,
) -> Iterator[ArtifactFinding]:
    key = _open_optional(source, key_path)
    if key is None:
        return

    for name, text in _text_values(source, key, key_path).items():
        yield ArtifactFinding(
            artifact=artifact,
            value=text,
            source=source.name,
            path=f"{key_path}\\{name}",
            extra={"value_name": name},
        )


def collect_run_mru(source: RegistrySource) -> Iterator[ArtifactFinding]:
    """Collect commands typed into the Run dialog (``MRUList`` is skipped)."""
    yield from _collect_text_key(source, RUN_MRU_KEY, ArtifactKind.RUN_MRU)


def collect_typed_paths(source: RegistrySource) -> Iterator[ArtifactFinding]:
    """Collect paths typed into the Explorer address bar."""
    yield from _collect_text_key(source, TYPED_PATHS_KEY, ArtifactKind.TYPED_PATHS)


# =============================================================================
# UserAssist
# =============================================================================

def collect_user_assist(
    source: RegistrySource,
    lookup: Callable[[str], str] = lookup_known_folder,
) -> Iterator[ArtifactFinding]:
    """
    Collect UserAssist program execution entries.

    Args:
        source: NTUSER.DAT registry source
        lookup: Known folder GUID resolver used to rewrite value names

    Yields:
        One finding per ``Count`` value, carrying run count, focus data and
        the last run time
    """
    root = _open_optional(source, USER_ASSIST_KEY)
    if root is None:
        return

    for guid in source.enumerate_children(root):
        guid_path = join_key_path(USER_ASSIST_KEY, guid)
        guid_key = _open_optional(source, guid_path)
        if guid_key is None:
            continue
        if not any(child.lower() == "count" for child in source.enumerate_children(guid_key)):
            LOGGER.debug("UserAssist key %s has no Count subkey", guid_path)
            continue

        count_path = join_key_path(guid_path, "Count")
        count_key = _open_optional(source, count_path)
        if count_key is None:
            continue

        for raw in source.enumerate_values(count_key):
            if not raw.name or raw.name.startswith(_USER_ASSIST_META_PREFIX):
                continue

            try:
                record = decode_user_assist_record(raw.data)
            except DecodeError as exc:
                LOGGER.warning("Skipping UserAssist value %s\\%s: %s", count_path, raw.name, exc)
                continue

            program = transform_key_name(raw.name, lookup)
            extra: Dict[str, Any] = {
                "guid": guid,
                "rot13_name": raw.name,
                "run_count": record.run_count,
                "layout": "legacy",
            }
            if isinstance(record, ModernUserAssistRecord):
                extra.update({
                    "layout": "modern",
                    "focus_count": record.focus_count,
                    "focus_duration": record.focus_duration,
                    "execution_count": record.execution_count,
                })

            yield ArtifactFinding(
                artifact=ArtifactKind.USER_ASSIST,
                value=program,
                source=source.name,
                path=f"{count_path}\\{raw.name}",
                timestamp=record.last_run,
                extra=extra,
            )


# =============================================================================
# USB storage (SYSTEM hive)
# =============================================================================

def resolve_current_control_set(source: RegistrySource) -> str:
    """
    Name of the control set that ``CurrentControlSet`` pointed to.

    Offline SYSTEM hives have no ``CurrentControlSet`` link; ``Select\\Current``
    holds its number. Falls back to ``ControlSet001``.
    """
    select = _open_optional(source, SELECT_KEY)
    if select is None:
        return DEFAULT_CONTROL_SET

    raw = source.read_value(select, "Current")
    if raw is None:
        return DEFAULT_CONTROL_SET
    try:
        decoded = decode_value(raw.type_tag, raw.data)
    except DecodeError as exc:
        LOGGER.warning("Unreadable Select\\Current value: %s", exc)
        return DEFAULT_CONTROL_SET
    if decoded.kind is not ValueKind.UINT32:
        return DEFAULT_CONTROL_SET
    return f"ControlSet{decoded.value:03d}"


def _optional_text(source: RegistrySource, key: Any, name: str) -> str:
    raw = source.read_value(key, name)
    if raw is None:
        return ""
    try:
        decoded = decode_value(raw.type_tag, raw.data)
    except DecodeError as exc:
        LOGGER.debug("Skipping USB value %s: %s", name, exc)
        return ""
    return decoded.as_text if decoded.kind in _TEXT_KINDS else ""


def collect_usb_storage(source: RegistrySource) -> Iterator[ArtifactFinding]:
    """
    Collect USB mass storage devices seen by the system.

    Walks ``<ControlSet>\\Enum\\USBSTOR\\<device>\\<instance>``; the serial
    number is the instance name up to the first ``&``.
    """
    usbstor_path = join_key_path(resolve_current_control_set(source), USBSTOR_SUBPATH)
    usbstor = _open_optional(source, usbstor_path)
    if usbstor is None:
        return

    for device in source.enumerate_children(usbstor):
        device_path = join_key_path(usbstor_path, device)
        device_key = _open_optional(source, device_path)
        if device_key is None:
            continue

        for instance in source.enumerate_children(device_key):
            instance_path = join_key_path(device_path, instance)
            instance_key = _open_optional(source, instance_path)
            if instance_key is None:
                continue

            friendly_name = _optional_text(source, instance_key, "FriendlyName")
            hardware_id = _optional_text(source, instance_key, "HardwareID")
            serial = instance.split("&", 1)[0]

            yield ArtifactFinding(
                artifact=ArtifactKind.USB_STORAGE,
                value=friendly_name or device,
                source=source.name,
                path=instance_path,
                timestamp=source.last_written(instance_key),
                extra={
                    "device": device,
                    "serial": serial,
                    "friendly_name": friendly_name,
                    "hardware_id": hardware_id,
                },
            )
