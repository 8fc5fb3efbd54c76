"""Tests for the HTTP service (`site_scraper.server`) via aiohttp's TestServer/TestClient."""
from __future__ import annotations

import pytest
from aiohttp import test_utils

import site_scraper.server as server_module
from site_scraper import __version__
from site_scraper.aggregator import ResultTable
from site_scraper.config import SearchRule
from site_scraper.errors import ConfigError, FetchError
from site_scraper.server import create_app

JOB = {
    "url": "https://example.com",
    "searches": [{"selector": "title", "attributes": ["TextContent"]}],
}


@pytest.fixture()
def fake_run_crawl(monkeypatch):
    """Replace run_crawl; the returned dict controls the outcome."""
    outcome = {"error": None, "jobs": []}

    async def fake(job, settings=None):
        outcome["jobs"].append(job)
        if outcome["error"] is not None:
            raise outcome["error"]
        table = ResultTable.from_rules([SearchRule(selector="title", attributes=["TextContent"])])
        table.add("title", "TextContent", "Example Domain")
        return table

    monkeypatch.setattr(server_module, "run_crawl", fake)
    return outcome


@pytest.mark.asyncio()
async def test_index_reports_version():
    async with test_utils.TestClient(test_utils.TestServer(create_app())) as client:
        resp = await client.get("/")
        assert resp.status == 200
        assert await resp.text() == f"site_scraper v{__version__}"


@pytest.mark.asyncio()
async def test_scrape_returns_result_table(fake_run_crawl):
    async with test_utils.TestClient(test_utils.TestServer(create_app())) as client:
        resp = await client.post("/scrape", json={**JOB, "followLinks": "x", "maxDepth": 2})
        assert resp.status == 200
        assert await resp.json() == {"title": {"TextContent": ["Example Domain"]}}

    job = fake_run_crawl["jobs"][0]
    assert job.follow_links == "x"
    assert job.max_depth == 2


@pytest.mark.asyncio()
@pytest.mark.parametrize(
    "error,status,kind",
    [
        (ConfigError("Invalid seed URL: 'x'"), 400, "ConfigError"),
        (FetchError("https://example.com/", "connection refused"), 502, "FetchError"),
    ],
)
async def test_scrape_errors_have_no_partial_result(fake_run_crawl, error, status, kind):
    fake_run_crawl["error"] = error
    async with test_utils.TestClient(test_utils.TestServer(create_app())) as client:
        resp = await client.post("/scrape", json=JOB)
        assert resp.status == status
        body = await resp.json()
    assert set(body) == {"error"}
    assert body["error"]["type"] == kind
    assert str(error) in body["error"]["message"]


@pytest.mark.asyncio()
@pytest.mark.parametrize("data", ["{not json", '{"maxDepth": 1}', "[1, 2]", b"\xff\xfe{"])
async def test_scrape_rejects_malformed_payload(fake_run_crawl, data):
    async with test_utils.TestClient(test_utils.TestServer(create_app())) as client:
        resp = await client.post("/scrape", data=data, headers={"Content-Type": "application/json"})
        assert resp.status == 400
        body = await resp.json()
    assert body["error"]["type"] == "ValidationError"
    assert fake_run_crawl["jobs"] == []
