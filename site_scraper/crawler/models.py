# site_scraper/crawler/models.py
"""
Data models for the SiteScraper crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Set

from bs4 import BeautifulSoup


@dataclass(slots=True)
class PageRecord:
    """A fetched page: its normalized URL and parsed document."""

    url: str
    document: BeautifulSoup


@dataclass(slots=True)
class CrawlState:
    """BFS bookkeeping private to one crawl."""

    frontier: Set[str] = field(default_factory=set)
    visited: Set[str] = field(default_factory=set)
    depth: int = 0
