# site_scraper/crawler/fetcher.py
"""
Fetcher module: one HTTP GET per call, body decoded to text.
"""
from __future__ import annotations

import asyncio
import logging

from aiohttp import ClientError, ClientSession

from site_scraper.errors import FetchError


class Fetcher:
    """Downloads pages through a shared aiohttp session. No retries."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session
        self.logger = logging.getLogger("SiteScraper")

    async def fetch(self, url: str) -> str:
        """
        Fetch *url* and return the decoded body.

        The status code is not inspected. Transport, timeout and decoding
        failures are raised as FetchError.
        """
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                self.logger.debug("GET %s -> HTTP %s", url, resp.status)
                return await resp.text()
        except asyncio.TimeoutError as exc:
            raise FetchError(url, "timed out") from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
        except UnicodeDecodeError as exc:
            raise FetchError(url, f"body is not decodable text ({exc.encoding})") from exc
        except LookupError as exc:
            raise FetchError(url, f"unknown charset: {exc}") from exc
