"""
Console and JSON rendering of collected findings.

Usage:
    from reports.console import render_console_report, findings_to_json

    print(render_console_report(findings))
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader

from core.enums import ArtifactKind
from core.timestamps import format_datetime, format_duration, utc_now
from extractors.findings import ArtifactFinding

TEMPLATES_DIR = Path(__file__).parent / "templates"
CONSOLE_TEMPLATE = "console_report.txt.j2"


@dataclass
class ReportSection:
    """Findings of one artifact kind."""

    kind: ArtifactKind
    findings: List[ArtifactFinding] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.kind.label


def _build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=False,  # plain-text output
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["datetime"] = format_datetime
    env.filters["duration"] = format_duration
    return env


def group_findings(findings: Iterable[ArtifactFinding]) -> List[ReportSection]:
    """Group findings by artifact, in ``ArtifactKind`` declaration order."""
    sections: Dict[ArtifactKind, ReportSection] = {}
    for finding in findings:
        sections.setdefault(finding.artifact, ReportSection(finding.artifact)).findings.append(finding)
    return [sections[kind] for kind in ArtifactKind if kind in sections]


def render_console_report(
    findings: Iterable[ArtifactFinding],
    *,
    title: str = "Footprint activity report",
    generated_at: Optional[str] = None,
    sources: Optional[List[str]] = None,
) -> str:
    """
    Render findings as a plain-text report.

    Args:
        findings: Findings from any collectors
        title: Report heading
        generated_at: Timestamp shown in the header (defaults to now, UTC)
        sources: Inputs listed in the header

    Returns:
        Report text
    """
    sections = group_findings(findings)
    template = _build_environment().get_template(CONSOLE_TEMPLATE)
    return template.render(
        title=title,
        generated_at=generated_at or utc_now(),
        sources=sources or [],
        sections=sections,
        total=sum(len(section.findings) for section in sections),
    )


def findings_to_json(findings: Iterable[ArtifactFinding], indent: Optional[int] = 2) -> str:
    """Serialize findings as a JSON array."""
    data: List[Dict[str, Any]] = [finding.to_dict() for finding in findings]
    return json.dumps(data, indent=indent, sort_keys=True, ensure_ascii=False)
