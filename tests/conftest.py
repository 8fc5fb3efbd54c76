import asyncio
from typing import Dict, List, Optional

import pytest

from site_scraper.config import CrawlJob
from site_scraper.crawler.crawler import parse_document
from site_scraper.crawler.models import PageRecord
from site_scraper.errors import FetchError


class FakeFetcher:
    """
    In-memory fetcher: URL -> HTML body. Unknown URLs and URLs listed in
    *failing* raise FetchError. Records call order and peak concurrency.
    """

    def __init__(self, pages: Dict[str, str], failing: Optional[set] = None, delay: float = 0.0):
        self.pages = pages
        self.failing = failing or set()
        self.delay = delay
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if url in self.failing or url not in self.pages:
                raise FetchError(url, "connection refused")
            return self.pages[url]
        finally:
            self.in_flight -= 1


@pytest.fixture()
def fake_fetcher_factory():
    return FakeFetcher


@pytest.fixture()
def title_job() -> CrawlJob:
    """
    Seed-only job extracting the page title.
    """
    return CrawlJob.model_validate(
        {
            "url": "https://example.com",
            "searches": [{"selector": "title", "attributes": ["TextContent"]}],
        }
    )


@pytest.fixture()
def sample_page() -> PageRecord:
    """
    Provide a parsed page with a mix of links and extractable content.
    """
    html = (
        "<html><head><title>Example Domain</title></head><body>"
        '<div class="card main" id="c1"><h2>First</h2><p>Hello <b>world</b></p></div>'
        '<div class="card" id="c2"><h2>Second</h2><p>Bye</p></div>'
        '<a href="/about">About</a><a href="/about?ref=nav#top">About again</a>'
        '<a href="#section">Jump</a><a href="https://other.org/x?y=1">Other</a>'
        '<a href="mailto:info@example.com">Mail</a><a href="relative.html">Rel</a>'
        "</body></html>"
    )
    return PageRecord(url="https://example.com/", document=parse_document(html))
