# === FILE: site_scraper/config.py ===
"""
Loading and validation of SiteScraper inputs.

Two schemas are described with Pydantic:

* :class:`CrawlJob` – one crawl request (seed, follow policy, depth, searches),
  as submitted to ``POST /scrape`` or read from a job file;
* :class:`ScraperSettings` – process-level settings (User-Agent, timeout,
  listen address) read from YAML/JSON.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchRule(BaseModel):
    """One selector plus the attribute specs to resolve on every match."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    selector: str = Field(..., description="CSS selector.")
    attributes: List[str] = Field(default_factory=list, description="Attribute names or pseudo-attributes.")


class CrawlJob(BaseModel):
    """A crawl request. Immutable for the lifetime of one crawl."""
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    url: str = Field(..., description="Seed URL.")
    follow_links: Optional[str] = Field(
        None, alias="followLinks", description="Regex a discovered link must match to be followed."
    )
    max_depth: int = Field(0, ge=0, alias="maxDepth", description="Deepest BFS level to fetch.")
    searches: List[SearchRule] = Field(default_factory=list)

    @field_validator("max_depth", mode="before")
    def _none_means_seed_only(cls, v: Any) -> Any:
        return 0 if v is None else v


class ScraperSettings(BaseModel):
    """Process-level settings shared by every crawl."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field("SiteScraper/0.2", min_length=1, description="User-Agent header.")
    timeout: float = Field(30.0, gt=0, description="Total timeout of a single request (seconds).")
    host: str = Field("127.0.0.1", min_length=1, description="HTTP service listen address.")
    port: int = Field(8787, ge=1, le=65535, description="HTTP service listen port.")


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def _read_mapping(path: Union[str, Path]) -> dict[str, Any]:
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported file format: {suffix}")


def load_config(path: Union[str, Path, None]) -> ScraperSettings:
    """
    Read YAML or JSON and return validated ScraperSettings.

    Without a path, ``configs/default.yaml`` is used when present, otherwise
    the built-in defaults. An explicit path that does not exist raises
    FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return ScraperSettings()
        path = _DEFAULT_CFG
    return ScraperSettings(**_read_mapping(path))


def load_job(path: Union[str, Path]) -> CrawlJob:
    """Read a crawl job (same payload as ``POST /scrape``) from YAML or JSON."""
    return CrawlJob.model_validate(_read_mapping(path))


__all__ = ["SearchRule", "CrawlJob", "ScraperSettings", "load_config", "load_job"]
