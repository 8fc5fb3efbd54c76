# File: site_scraper/server.py
"""site_scraper.server: HTTP front end for crawl jobs.

Routes
------
``GET /``         service name and version (plain text).
``POST /scrape``  JSON crawl job in, JSON result table out.

Failures never carry a partial result; the body is
``{"error": {"type": ..., "message": ...}}``.
"""
from __future__ import annotations

from typing import Optional

from aiohttp import web
from pydantic import ValidationError

from site_scraper import __version__
from site_scraper.config import CrawlJob, ScraperSettings
from site_scraper.engine import run_crawl
from site_scraper.errors import ConfigError, FetchError
from site_scraper.logger import logger

SETTINGS_KEY = web.AppKey("settings", ScraperSettings)


def _error(status: int, kind: str, message: str) -> web.Response:
    return web.json_response({"error": {"type": kind, "message": message}}, status=status)


async def handle_index(request: web.Request) -> web.Response:
    return web.Response(text=f"site_scraper v{__version__}")


async def handle_scrape(request: web.Request) -> web.Response:
    try:
        payload = await request.json()
    except ValueError as exc:  # JSONDecodeError and UnicodeDecodeError
        return _error(400, "ValidationError", f"Request body is not valid UTF-8 JSON: {exc}")
    try:
        job = CrawlJob.model_validate(payload)
    except ValidationError as exc:
        return _error(400, "ValidationError", str(exc))

    logger.info("Scrape request: %s", job.url)
    try:
        table = await run_crawl(job, request.app[SETTINGS_KEY])
    except ConfigError as exc:
        return _error(400, "ConfigError", str(exc))
    except FetchError as exc:
        return _error(502, "FetchError", str(exc))
    return web.json_response(table.to_dict())


def create_app(settings: Optional[ScraperSettings] = None) -> web.Application:
    app = web.Application()
    app[SETTINGS_KEY] = settings or ScraperSettings()
    app.router.add_get("/", handle_index)
    app.router.add_post("/scrape", handle_scrape)
    return app


def run_server(settings: ScraperSettings) -> None:
    logger.info("Serving on http://%s:%d", settings.host, settings.port)
    web.run_app(create_app(settings), host=settings.host, port=settings.port, print=None)


__all__ = ["create_app", "run_server", "handle_scrape", "handle_index"]
