# File: site_scraper/aggregator.py
"""site_scraper.aggregator: accumulation of extracted values into the response shape."""

from __future__ import annotations

import json
from typing import Dict, Iterable, List, Set

from site_scraper.config import SearchRule

ResultPayload = Dict[str, Dict[str, List[str]]]


class ResultTable:
    """selector -> attribute spec -> set of extracted values.

    Every declared (selector, attribute) pair is present from the start, so
    the response shape does not depend on how many elements matched.
    """

    __slots__ = ("_buckets",)

    def __init__(self) -> None:
        self._buckets: Dict[str, Dict[str, Set[str]]] = {}

    @classmethod
    def from_rules(cls, searches: Iterable[SearchRule]) -> ResultTable:
        table = cls()
        for search in searches:
            group = table._buckets.setdefault(search.selector, {})
            for attribute in search.attributes:
                group.setdefault(attribute, set())
        return table

    def add(self, selector: str, attribute: str, value: str) -> None:
        self._buckets[selector][attribute].add(value)

    def get(self, selector: str, attribute: str) -> Set[str]:
        return self._buckets[selector][attribute]

    def __contains__(self, key: object) -> bool:
        return key in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)

    def to_dict(self) -> ResultPayload:
        """Plain-JSON view; values are sorted only to keep output stable."""
        return {
            selector: {attribute: sorted(values) for attribute, values in group.items()}
            for selector, group in self._buckets.items()
        }

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


__all__ = ["ResultTable", "ResultPayload"]
