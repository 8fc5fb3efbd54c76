# === FILE: site_scraper/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import re
import time
from typing import List, Optional, Protocol, Sequence, Set

from aiohttp import ClientSession, ClientTimeout
from bs4 import BeautifulSoup

from site_scraper.config import CrawlJob, ScraperSettings
from site_scraper.crawler.fetcher import Fetcher
from site_scraper.crawler.link_extractor import extract_links, normalize_url
from site_scraper.crawler.models import CrawlState, PageRecord
from site_scraper.errors import ConfigError, FetchError

__all__ = ("AsyncCrawler", "PageFetcher", "compile_follow_pattern", "parse_document")


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> str: ...


def compile_follow_pattern(pattern: Optional[str]) -> Optional[re.Pattern[str]]:
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ConfigError(f"Invalid follow pattern {pattern!r}: {exc}") from exc


def parse_document(markup: str) -> BeautifulSoup:
    # attribute values stay raw strings (no class/rel splitting)
    return BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)


class AsyncCrawler:
    """
    Breadth-first crawler with a fixed depth bound.

    Every depth level is fetched in batches of at most BATCH_SIZE concurrent
    requests. Links found on level N are only fetched on level N+1. A single
    failed fetch aborts the whole crawl.
    """
    BATCH_SIZE = 6

    def __init__(
        self,
        job: CrawlJob,
        settings: Optional[ScraperSettings] = None,
        fetcher: Optional[PageFetcher] = None,
    ) -> None:
        self.job = job
        self.settings = settings or ScraperSettings()
        self.fetcher = fetcher
        self.seed = normalize_url(job.url)
        if self.seed is None:
            raise ConfigError(f"Invalid seed URL: {job.url!r}")
        self.follow = compile_follow_pattern(job.follow_links)
        self.state = CrawlState(frontier={self.seed})
        self.pages: List[PageRecord] = []
        self.session: Optional[ClientSession] = None
        self.logger = logging.getLogger("SiteScraper")

    async def __aenter__(self) -> AsyncCrawler:
        if self.fetcher is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.settings.timeout),
                headers={"User-Agent": self.settings.user_agent},
            )
            self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> List[PageRecord]:
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized")
        self.logger.info("Crawl started: %s (max depth %d)", self.seed, self.job.max_depth)
        start = time.monotonic()
        state = self.state
        while state.frontier and state.depth <= self.job.max_depth:
            self.logger.debug("Depth %d: %d URL(s) to fetch", state.depth, len(state.frontier))
            discovered: Set[str] = set()
            pending = sorted(state.frontier)
            for i in range(0, len(pending), self.BATCH_SIZE):
                batch = pending[i:i + self.BATCH_SIZE]
                bodies = await self._fetch_batch(batch)
                for url, body in zip(batch, bodies):
                    document = parse_document(body)
                    state.visited.add(url)
                    discovered |= extract_links(document, url, self.follow, state.visited)
                    self.pages.append(PageRecord(url, document))
            state.frontier = discovered - state.visited
            state.depth += 1
        duration = time.monotonic() - start
        self.logger.info("Crawl finished: %d page(s) in %.2f s", len(self.pages), duration)
        return self.pages

    async def _fetch_batch(self, batch: Sequence[str]) -> List[str]:
        tasks = [asyncio.create_task(self.fetcher.fetch(url)) for url in batch]
        try:
            return await asyncio.gather(*tasks)
        except FetchError as exc:
            self.logger.warning("Crawl aborted: %s", exc)
            raise
        finally:
            for t in tasks:
                if not t.done():
                    t.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
