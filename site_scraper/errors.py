# site_scraper/errors.py
"""
Exception hierarchy for SiteScraper.

Every error raised by a crawl job derives from :class:`ScraperError`, so the
CLI and the HTTP service can report failures without catching bare
``Exception``.
"""
from __future__ import annotations

from typing import Optional

__all__ = ("ScraperError", "ConfigError", "FetchError")


class ScraperError(Exception):
    """Base class for crawl job failures."""


class ConfigError(ScraperError):
    """Invalid job: malformed seed URL, selector or follow pattern."""


class FetchError(ScraperError):
    """A page could not be downloaded or decoded; aborts the whole job."""

    def __init__(self, url: str, reason: Optional[str] = None) -> None:
        self.url = url
        self.reason = reason
        message = f"Failed to fetch {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
