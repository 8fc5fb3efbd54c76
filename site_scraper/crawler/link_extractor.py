# site_scraper/crawler/link_extractor.py
"""
Link extraction and URL normalization utilities for SiteScraper.
"""
from __future__ import annotations

import ipaddress
import re
from typing import AbstractSet, Optional, Set
from urllib.parse import quote, unquote, urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup

_DEFAULT_PORTS = {"http": 80, "https": 443}
# code points a host may not contain once percent-escapes are decoded
_FORBIDDEN_HOST_CHARS = re.compile(r"[\x00-\x20#%/:<>?@\[\\\]^|\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_PATH_SAFE = "/%:@!$&'()*+,;=~"


def _normalize_host(host: str) -> Optional[str]:
    if ":" in host:
        try:
            return f"[{ipaddress.IPv6Address(host).compressed}]"
        except ValueError:
            return None
    if _BAD_ESCAPE.search(host):
        return None
    try:
        decoded = unquote(host, errors="strict")
    except UnicodeDecodeError:
        return None
    if not decoded or _FORBIDDEN_HOST_CHARS.search(decoded):
        return None
    try:
        decoded.encode("idna")
    except UnicodeError:
        return None
    return decoded.lower()


def normalize_url(url: str) -> Optional[str]:
    """
    Canonicalize an absolute URL into a dedup key.

    Keeps scheme, authority and path; drops query string and fragment.
    Scheme and host are lower-cased, default ports removed, the path
    percent-encoded and an empty path becomes ``/``. Returns None if the
    string has no scheme, or no valid host.
    """
    try:
        parts = urlsplit(url.strip())
        host = parts.hostname
        port = parts.port
    except (ValueError, AttributeError):
        return None
    scheme = parts.scheme.lower()
    if not scheme or not host:
        return None

    netloc = _normalize_host(host)
    if netloc is None:
        return None
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{netloc}:{port}"
    userinfo, sep, _ = parts.netloc.rpartition("@")
    if sep:
        netloc = f"{userinfo}@{netloc}"

    path = quote(parts.path or "/", safe=_PATH_SAFE)
    return urlunsplit((scheme, netloc, path, "", ""))


def extract_links(
    document: BeautifulSoup,
    source_url: str,
    follow: Optional[re.Pattern[str]],
    visited: AbstractSet[str],
) -> Set[str]:
    """
    Collect normalized outbound links of a page that should be crawled next.

    ``/``-prefixed hrefs are resolved against the page origin, fragment-only
    hrefs are ignored and everything else is taken as an absolute URL.
    Without a follow pattern nothing is followed.
    """
    if follow is None:
        return set()

    links: Set[str] = set()
    for tag in document.select("a[href]"):
        href = tag.get("href")
        if not isinstance(href, str) or not href:
            continue
        if href[0] == "#":
            continue
        candidate = urljoin(source_url, href) if href[0] == "/" else href
        normalized = normalize_url(candidate)
        if normalized is None or normalized in visited:
            continue
        if follow.search(normalized):
            links.add(normalized)
    return links
