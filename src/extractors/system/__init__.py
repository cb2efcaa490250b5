"""
System extractors - Windows system artifact analysis.

This module provides decoders and collectors for Windows system artifacts:
- Registry: Offline registry values, RecentDocs, UserAssist, MRU lists, USB storage
- Shortcuts: Shell Link (.lnk) and internet shortcut (.url) files
- Jump Lists: Applications identified by AutomaticDestinations AppIDs
"""

from __future__ import annotations
