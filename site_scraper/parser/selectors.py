# site_scraper/parser/selectors.py
"""
Selector engine: compiles search rules and resolves them against pages.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import soupsieve
from bs4.element import Tag

from site_scraper.aggregator import ResultTable
from site_scraper.config import SearchRule
from site_scraper.crawler.models import PageRecord
from site_scraper.errors import ConfigError
from site_scraper.parser.html_parser import html_to_text

__all__ = (
    "AttributeKind",
    "AttributeSpec",
    "CompiledRule",
    "compile_rules",
    "resolve_value",
    "resolve_selectors",
)


class AttributeKind(enum.Enum):
    TEXT_CONTENT = "TextContent"
    HTML_CONTENT = "HtmlContent"
    INNER_HTML = "InnerHtml"
    HTML2TEXT = "Html2Text"
    ATTRIBUTE = "attribute"


_PSEUDO = {kind.value: kind for kind in AttributeKind if kind is not AttributeKind.ATTRIBUTE}


@dataclass(frozen=True, slots=True)
class AttributeSpec:
    """An attribute spec string resolved to its extraction mode."""

    name: str
    kind: AttributeKind

    @classmethod
    def parse(cls, name: str) -> AttributeSpec:
        """``TextContent`` and ``#TextContent`` are both pseudo-attributes."""
        kind = _PSEUDO.get(name.removeprefix("#"), AttributeKind.ATTRIBUTE)
        return cls(name, kind)


@dataclass(frozen=True, slots=True)
class CompiledRule:
    selector: str
    matcher: soupsieve.SoupSieve
    specs: Tuple[AttributeSpec, ...]


def compile_rules(searches: Iterable[SearchRule]) -> List[CompiledRule]:
    """Compile every selector up front; a syntax error raises ConfigError."""
    rules: List[CompiledRule] = []
    for search in searches:
        try:
            matcher = soupsieve.compile(search.selector)
        except soupsieve.SelectorSyntaxError as exc:
            raise ConfigError(f"Invalid selector {search.selector!r}: {exc}") from exc
        specs = tuple(AttributeSpec.parse(a) for a in search.attributes)
        rules.append(CompiledRule(search.selector, matcher, specs))
    return rules


def resolve_value(element: Tag, spec: AttributeSpec) -> Optional[str]:
    """Value of *spec* on *element*, or None when the attribute is absent."""
    if spec.kind is AttributeKind.TEXT_CONTENT:
        return element.get_text()
    if spec.kind is AttributeKind.HTML_CONTENT:
        return str(element)
    if spec.kind is AttributeKind.INNER_HTML:
        return element.decode_contents()
    if spec.kind is AttributeKind.HTML2TEXT:
        return html_to_text(element.decode_contents())
    value = element.get(spec.name)
    if value is None:
        return None
    # multi-valued attributes come back as lists unless the page was parsed raw
    return value if isinstance(value, str) else " ".join(value)


def resolve_selectors(pages: Iterable[PageRecord], rules: List[CompiledRule], table: ResultTable) -> ResultTable:
    for page in pages:
        for rule in rules:
            for element in rule.matcher.select(page.document):
                for spec in rule.specs:
                    value = resolve_value(element, spec)
                    if value is not None:
                        table.add(rule.selector, spec.name, value)
    return table
