# File: site_scraper/engine.py
"""site_scraper.engine: the crawl entry point shared by the CLI and the HTTP service."""

from __future__ import annotations

from typing import Optional

from site_scraper.aggregator import ResultTable
from site_scraper.config import CrawlJob, ScraperSettings
from site_scraper.crawler.crawler import AsyncCrawler, PageFetcher
from site_scraper.logger import logger
from site_scraper.parser.selectors import compile_rules, resolve_selectors

__all__ = ["run_crawl"]


async def run_crawl(
    job: CrawlJob,
    settings: Optional[ScraperSettings] = None,
    *,
    fetcher: Optional[PageFetcher] = None,
) -> ResultTable:
    """Crawl *job* and return the extracted values.

    Selectors, seed URL and follow pattern are validated before any request
    is made (ConfigError). A failed fetch aborts the job with FetchError and
    no partial result. *fetcher* replaces the aiohttp-backed Fetcher.
    """
    rules = compile_rules(job.searches)
    table = ResultTable.from_rules(job.searches)

    async with AsyncCrawler(job, settings, fetcher=fetcher) as crawler:
        pages = await crawler.crawl()

    resolve_selectors(pages, rules, table)
    logger.info("Extracted values from %d page(s) for %d selector(s)", len(pages), len(table))
    return table
