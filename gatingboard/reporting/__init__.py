"""Gating state reporting: YAML/JSON summaries and HTML pages."""

from gatingboard.reporting.html_reporter import generate_html_report, write_html_report
from gatingboard.reporting.reporter import GatingReporter

__all__ = [
    "GatingReporter",
    "generate_html_report",
    "write_html_report",
]
