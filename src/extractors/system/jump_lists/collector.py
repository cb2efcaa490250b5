"""
Jump List application collector.

Each ``<AppID>.automaticDestinations-ms`` file in the AutomaticDestinations
folder belongs to one application; the file stem is its AppID.

Example filename: 5d696d521de238c3.automaticDestinations-ms
                 ^^^^^^^^^^^^^^^^^
                      AppID (Chrome in this case)
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Iterator, List, Optional

from core.enums import ArtifactKind
from core.evidence_fs import EvidenceFS
from core.logging import get_logger
from extractors._shared.appid_loader import UNKNOWN_APP, AppIdTable, load_appid_table
from extractors.findings import ArtifactFinding

LOGGER = get_logger("extractors.system.jump_lists.collector")

AUTOMATIC_DESTINATIONS_DIR = "AppData/Roaming/Microsoft/Windows/Recent/AutomaticDestinations"


def discover_appids(fs: EvidenceFS) -> List[str]:
    """Deduplicated AppIDs (file stems) found in AutomaticDestinations."""
    stems = {PurePosixPath(path).stem for path in fs.walk_directory(AUTOMATIC_DESTINATIONS_DIR)}
    return sorted(stem for stem in stems if stem)


def collect_jump_list_apps(
    fs: EvidenceFS,
    table: Optional[AppIdTable] = None,
) -> Iterator[ArtifactFinding]:
    """
    Collect applications that left automatic Jump Lists.

    Unresolved AppIDs are dropped; results are sorted by application name.
    """
    table = table if table is not None else load_appid_table()

    resolved = []
    unknown = 0
    for appid in discover_appids(fs):
        name = table.resolve(appid)
        if name == UNKNOWN_APP:
            unknown += 1
            continue
        resolved.append((name, appid))

    LOGGER.info("Resolved %d Jump List AppIDs (%d unknown)", len(resolved), unknown)

    for name, appid in sorted(resolved):
        yield ArtifactFinding(
            artifact=ArtifactKind.JUMP_LIST_APP,
            value=name,
            source=fs.source_name,
            path=f"{AUTOMATIC_DESTINATIONS_DIR}/{appid}",
            extra={"appid": appid},
        )
