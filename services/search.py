from __future__ import annotations

import logging
from dataclasses import dataclass

from services.aggregator import fetch_sources
from services.feed_registry import FeedRegistry
from services.normalizer import NewsItem, normalize_items
from services.rss_fetcher import RSSFetcherService

logger = logging.getLogger(__name__)


class InvalidQueryError(ValueError):
    """Raised when a search is requested without a query."""


@dataclass(frozen=True)
class SearchResponse:
    query: str
    items: tuple[NewsItem, ...]

    @property
    def total(self) -> int:
        return len(self.items)


def matches(item: NewsItem, query: str) -> bool:
    title = (item.title or "").lower()
    snippet = (item.content_snippet or "").lower()
    return query in title or query in snippet


class NewsSearchService:
    """Keyword search across every registered feed, always fetched fresh."""

    def __init__(self, fetcher: RSSFetcherService, registry: FeedRegistry) -> None:
        self._fetcher = fetcher
        self._registry = registry

    async def search(self, query: str | None) -> SearchResponse:
        needle = (query or "").lower()
        if not needle:
            raise InvalidQueryError("A search query is required.")

        outcomes = await fetch_sources(self._fetcher, self._registry.all())
        found: list[NewsItem] = []
        for outcome in outcomes:
            if not outcome.ok:
                logger.debug("Search skipped feed %s: %s", outcome.source.key, outcome.error)
                continue
            for item in normalize_items(outcome.items, outcome.source.name):
                if matches(item, needle):
                    found.append(item)

        return SearchResponse(query=needle, items=tuple(found))
