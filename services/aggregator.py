from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from services.cache import ResponseCache
from services.feed_registry import FeedRegistry, FeedSource
from services.normalizer import MAX_ITEMS_PER_SOURCE, NewsItem, normalize_items
from services.recency import filter_by_hours, parse_pub_date
from services.rss_fetcher import RawFeedItem, RSSFetcherService, RSSFetchError

logger = logging.getLogger(__name__)

AGGREGATE_SOURCE_NAME = "Tổng hợp"
AGGREGATE_CACHE_PREFIX = "all"


class AggregationError(RuntimeError):
    """Raised when a feed response cannot be built."""


@dataclass(frozen=True)
class FeedResponse:
    source: str
    items: tuple[NewsItem, ...]

    @property
    def total(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class FetchOutcome:
    source: FeedSource
    items: list[RawFeedItem] = field(default_factory=list)
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def fetch_sources(
    fetcher: RSSFetcherService,
    sources: Sequence[FeedSource],
) -> list[FetchOutcome]:
    """Fetch every source concurrently; outcomes keep the order of ``sources``."""
    results = await asyncio.gather(
        *(fetcher.fetch(source.url) for source in sources),
        return_exceptions=True,
    )
    outcomes: list[FetchOutcome] = []
    for source, result in zip(sources, results, strict=True):
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, BaseException):
            outcomes.append(FetchOutcome(source=source, error=result))
        else:
            outcomes.append(FetchOutcome(source=source, items=result))
    return outcomes


def _sort_key(item: NewsItem) -> tuple[bool, float]:
    published_at = parse_pub_date(item.pub_date)
    if published_at is None:
        return (False, 0.0)
    return (True, published_at.timestamp())


def cache_key(prefix: str, hours: int | None) -> str:
    return f"{prefix}_{'all' if hours is None else hours}"


class FeedAggregatorService:
    """Build per-source and combined feed listings, memoized in a response cache."""

    def __init__(
        self,
        fetcher: RSSFetcherService,
        cache: ResponseCache,
        registry: FeedRegistry,
        max_items_per_source: int = MAX_ITEMS_PER_SOURCE,
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._registry = registry
        self._max_items = max_items_per_source

    async def get_one(self, key: str, hours: int | None = None) -> FeedResponse:
        source = self._registry.resolve(key)
        ckey = cache_key(source.key, hours)
        cached = self._cache.get(ckey)
        if cached is not None:
            return cached

        try:
            raw_items = await self._fetcher.fetch(source.url)
        except RSSFetchError as exc:
            logger.exception("Failed to fetch RSS feed %s", source.url)
            raise AggregationError(f"Unable to load feed: {source.key}") from exc

        items = normalize_items(raw_items, source.name, limit=self._max_items)
        response = FeedResponse(source=source.name, items=tuple(filter_by_hours(items, hours)))
        self._cache.set(ckey, response)
        return response

    async def get_all(self, hours: int | None = None) -> FeedResponse:
        ckey = cache_key(AGGREGATE_CACHE_PREFIX, hours)
        cached = self._cache.get(ckey)
        if cached is not None:
            return cached

        outcomes = await fetch_sources(self._fetcher, self._registry.all())
        items: list[NewsItem] = []
        for outcome in outcomes:
            if not outcome.ok:
                logger.warning("Skipping feed %s: %s", outcome.source.key, outcome.error)
                continue
            items.extend(normalize_items(outcome.items, outcome.source.name, limit=self._max_items))

        recent = sorted(filter_by_hours(items, hours), key=_sort_key, reverse=True)
        response = FeedResponse(source=AGGREGATE_SOURCE_NAME, items=tuple(recent))
        self._cache.set(ckey, response)
        return response
