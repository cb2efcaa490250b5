"""
Core Enumerations

Centralized enum definitions for consistent typing across the codebase.
Using StrEnum (Python 3.11+) for string-based enums that serialize naturally.
"""

from enum import IntEnum, StrEnum


class ArtifactKind(StrEnum):
    """Artifact identifiers attached to every finding."""

    OFFICE_MRU = "office_mru"
    RECENT_DOCS = "recent_docs"
    RUN_MRU = "run_mru"
    TYPED_PATHS = "typed_paths"
    USER_ASSIST = "user_assist"
    USB_STORAGE = "usb_storage"
    RECENT_SHORTCUT = "recent_shortcut"
    INTERNET_SHORTCUT = "internet_shortcut"
    JUMP_LIST_APP = "jump_list_app"
    EDGE_FAVORITE = "edge_favorite"

    @property
    def label(self) -> str:
        """Human-readable section title for reports."""
        return _ARTIFACT_TITLES[self]


_ARTIFACT_TITLES = {
    ArtifactKind.OFFICE_MRU: "Office recent files",
    ArtifactKind.RECENT_DOCS: "Explorer RecentDocs",
    ArtifactKind.RUN_MRU: "Run dialog history",
    ArtifactKind.TYPED_PATHS: "Explorer typed paths",
    ArtifactKind.USER_ASSIST: "UserAssist programs",
    ArtifactKind.USB_STORAGE: "USB storage devices",
    ArtifactKind.RECENT_SHORTCUT: "Recent shortcuts",
    ArtifactKind.INTERNET_SHORTCUT: "Internet shortcuts",
    ArtifactKind.JUMP_LIST_APP: "Jump List applications",
    ArtifactKind.EDGE_FAVORITE: "Edge favorites",
}


class RegistryValueType(IntEnum):
    """Registry value type tags (winnt.h REG_* constants)."""

    REG_NONE = 0
    REG_SZ = 1
    REG_EXPAND_SZ = 2
    REG_BINARY = 3
    REG_DWORD = 4
    REG_DWORD_BIG_ENDIAN = 5
    REG_LINK = 6
    REG_MULTI_SZ = 7
    REG_RESOURCE_LIST = 8
    REG_QWORD = 11

    @classmethod
    def from_name(cls, name: str) -> "RegistryValueType":
        """Resolve a ``REG_*`` name; unknown names map to REG_NONE."""
        try:
            return cls[name.upper()]
        except KeyError:
            return cls.REG_NONE
