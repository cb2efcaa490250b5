"""Reports module - rendering of collected findings.

This module provides:
- Plain-text console report rendered from a Jinja2 template (console.py)
- JSON serialization of findings
- Text templates in reports/templates/
"""

from .console import findings_to_json, group_findings, render_console_report

__all__ = ["findings_to_json", "group_findings", "render_console_report"]
