# File: site_scraper/report/__init__.py
"""site_scraper.report: JSON and HTML reports of crawl results, used by the CLI."""

from __future__ import annotations

from site_scraper.report.html_report import render_html
from site_scraper.report.json_report import render_json

__all__ = ["render_json", "render_html"]
