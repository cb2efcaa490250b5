"""
Microsoft Edge favorites.

Edge (Chromium) stores favorites in a JSON ``Bookmarks`` file with a nested
folder tree under ``roots``. Only the ``bookmark_bar`` and ``other`` roots are
read; synced mobile bookmarks are not local activity.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, Optional

from core.enums import ArtifactKind
from core.evidence_fs import EvidenceFS
from core.logging import get_logger
from core.timestamps import webkit_to_datetime
from extractors.findings import ArtifactFinding

LOGGER = get_logger("extractors.browser.bookmarks")

EDGE_BOOKMARKS_PATH = "AppData/Local/Microsoft/Edge/User Data/Default/Bookmarks"

# Root key -> display name
FAVORITE_ROOTS = {
    "bookmark_bar": "Favorites bar",
    "other": "Other favorites",
}


@dataclass(slots=True)
class EdgeFavorite:
    """A single favorite URL."""
    name: str
    url: str
    folder_path: str  # e.g., "Favorites bar/Tech/Dev"
    date_added: Optional[datetime] = None


def _parse_webkit_timestamp(value: Any) -> Optional[datetime]:
    # Stored as a decimal string in JSON
    if value is None:
        return None
    try:
        return webkit_to_datetime(int(value))
    except (ValueError, TypeError):
        return None


def _parse_node(node: Any, folder_path: str, is_root: bool = False) -> Iterator[EdgeFavorite]:
    """Recursively yield URL nodes below ``node``."""
    if not isinstance(node, dict):
        return

    children = node.get("children")
    if isinstance(children, list):
        name = node.get("name", "")
        # Root folders are already named by folder_path
        child_path = folder_path if is_root or not name else f"{folder_path}/{name}"
        for child in children:
            yield from _parse_node(child, child_path)
    elif node.get("type") == "url" and node.get("url"):
        yield EdgeFavorite(
            name=node.get("name", ""),
            url=node["url"],
            folder_path=folder_path,
            date_added=_parse_webkit_timestamp(node.get("date_added")),
        )


def parse_bookmarks_json(data: Dict[str, Any]) -> Iterator[EdgeFavorite]:
    """
    Parse an Edge Bookmarks JSON document.

    Args:
        data: Parsed JSON dict from the Bookmarks file

    Yields:
        EdgeFavorite records from the favorites bar and other favorites, in
        document order
    """
    roots = data.get("roots", {})
    if not isinstance(roots, dict):
        return

    for root_key, display_name in FAVORITE_ROOTS.items():
        root_node = roots.get(root_key)
        if root_node:
            yield from _parse_node(root_node, display_name, is_root=True)


def collect_edge_favorites(fs: EvidenceFS) -> Iterator[ArtifactFinding]:
    """Collect Edge favorites from the Default profile's Bookmarks file."""
    try:
        raw = fs.read_file(EDGE_BOOKMARKS_PATH)
    except FileNotFoundError:
        LOGGER.info("Edge Bookmarks file not found: %s", EDGE_BOOKMARKS_PATH)
        return

    try:
        data = json.loads(raw.decode("utf-8", errors="replace"))
    except json.JSONDecodeError as exc:
        LOGGER.warning("Edge Bookmarks file is not valid JSON: %s", exc)
        return
    if not isinstance(data, dict):
        LOGGER.warning("Edge Bookmarks file has unexpected top-level type %s", type(data).__name__)
        return

    count = 0
    for favorite in parse_bookmarks_json(data):
        count += 1
        yield ArtifactFinding(
            artifact=ArtifactKind.EDGE_FAVORITE,
            value=favorite.url,
            source=fs.source_name,
            path=EDGE_BOOKMARKS_PATH,
            timestamp=favorite.date_added,
            extra={"name": favorite.name, "folder": favorite.folder_path},
        )
    LOGGER.info("Collected %d Edge favorites", count)
