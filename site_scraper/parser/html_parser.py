# === FILE: site_scraper/parser/html_parser.py ===
"""HTML to plain-text rendering for SiteScraper.

Used by the ``Html2Text`` pseudo-attribute. The rendering is layout-aware
but deliberately small:

* tags are stripped, their text kept;
* block-level elements and ``<br>`` start a new line;
* table cells on a row are separated by a space;
* ``<script>``, ``<style>``, comments and doctypes are dropped;
* whitespace runs collapse to one space and blank lines are removed.
"""
from __future__ import annotations

import re
from collections.abc import Sequence

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

__all__: Sequence[str] = ("html_to_text",)

BLOCK_TAGS = frozenset((
    "address", "article", "aside", "blockquote", "body", "caption", "dd", "details",
    "dialog", "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
    "h1", "h2", "h3", "h4", "h5", "h6", "header", "hgroup", "hr", "html", "legend", "li",
    "main", "nav", "ol", "p", "pre", "section", "summary", "table", "tbody", "tfoot",
    "thead", "title", "tr", "ul",
))
CELL_TAGS = frozenset(("td", "th"))
SKIP_TAGS = frozenset(("script", "style", "noscript", "template", "head"))
_WHITESPACE = re.compile(r"\s+")


def _render(node: Tag, out: list[str]) -> None:
    for child in node.children:
        if isinstance(child, NavigableString):
            # comments, CDATA and doctypes are PreformattedString subclasses
            if not isinstance(child, PreformattedString):
                out.append(_WHITESPACE.sub(" ", str(child)))
            continue
        if not isinstance(child, Tag) or child.name in SKIP_TAGS:
            continue
        if child.name == "br":
            out.append("\n")
        elif child.name in BLOCK_TAGS:
            out.append("\n")
            _render(child, out)
            out.append("\n")
        elif child.name in CELL_TAGS:
            _render(child, out)
            out.append(" ")
        else:
            _render(child, out)


def html_to_text(markup: str) -> str:
    """Render *markup* (a fragment or a document) as plain text."""
    soup = BeautifulSoup(markup, "html.parser")
    out: list[str] = []
    _render(soup, out)
    lines = (" ".join(line.split()) for line in "".join(out).split("\n"))
    return "\n".join(line for line in lines if line)
