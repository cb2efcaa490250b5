"""
Windows activity artifact extractors.

Folder Structure:
- system/          Windows system artifacts (registry, shortcuts, jump_lists)
- browser/         Browser artifacts (Edge favorites)
- _shared/         Shared lookup tables (known folders, application IDs)
"""

from .exceptions import (
    ConfigurationError,
    DecodeError,
    ExtractorError,
    RegistryAccessError,
    ShortcutParseError,
    TruncatedValueError,
    UnsupportedTypeError,
)
from .findings import ArtifactFinding

__all__ = [
    "ArtifactFinding",
    "ConfigurationError",
    "DecodeError",
    "ExtractorError",
    "RegistryAccessError",
    "ShortcutParseError",
    "TruncatedValueError",
    "UnsupportedTypeError",
]
