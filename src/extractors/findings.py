"""
Finding record emitted by every collector.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from core.enums import ArtifactKind


@dataclass(slots=True)
class ArtifactFinding:
    """One decoded artifact entry with its provenance."""

    artifact: ArtifactKind
    value: str
    source: str                     # Hive file or profile directory the entry came from
    path: str                       # Registry key path or file path within the source
    timestamp: Optional[datetime] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "artifact": str(self.artifact),
            "value": self.value,
            "source": self.source,
            "path": self.path,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "extra": {key: _jsonable(val) for key, val in self.extra.items()},
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if hasattr(value, "total_seconds"):
        return value.total_seconds()
    return value
