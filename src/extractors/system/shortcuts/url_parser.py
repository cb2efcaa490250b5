"""
Internet shortcut (.url) parser.

Internet shortcuts are INI files; the target lives in the ``URL=`` line of the
``[InternetShortcut]`` section.
"""

from __future__ import annotations

from typing import Union

from extractors.exceptions import ShortcutParseError

URL_PREFIX = "url="


def parse_url_shortcut(data: Union[bytes, str], encoding: str = "cp1252") -> str:
    """
    Return the target URL of an internet shortcut.

    The first line starting with ``URL=`` (case-insensitive) wins.

    Raises:
        ShortcutParseError: If no ``URL=`` line is present
    """
    text = data.decode(encoding, errors="replace") if isinstance(data, (bytes, bytearray)) else data

    for line in text.splitlines():
        if line.lower().startswith(URL_PREFIX):
            return line[len(URL_PREFIX):].strip()

    raise ShortcutParseError("URL not found in the shortcut file")
