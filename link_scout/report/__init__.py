# File: link_scout/report/__init__.py
"""link_scout.report: report rendering used by the CLI and tests."""

from link_scout.report.text_report import render_text

__all__ = ["render_text"]
