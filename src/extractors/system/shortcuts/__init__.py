"""
Windows shortcut artifacts.

- lnk_parser: Shell Link (.lnk) target path, directory flag and hotkey
- url_parser: Internet shortcut (.url) target URL
- collector: Recent/Desktop/Office shortcut collection from a user profile
"""

from .collector import collect_internet_shortcuts, collect_recent_shortcuts
from .lnk_parser import ShortcutInfo, parse_shortcut, parse_shortcut_file, parse_shortcut_stream
from .url_parser import parse_url_shortcut

__all__ = [
    "ShortcutInfo",
    "collect_internet_shortcuts",
    "collect_recent_shortcuts",
    "parse_shortcut",
    "parse_shortcut_file",
    "parse_shortcut_stream",
    "parse_url_shortcut",
]
