from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from services.rss_fetcher import RawFeedItem

MAX_ITEMS_PER_SOURCE = 50


@dataclass(frozen=True)
class NewsItem:
    title: str | None
    link: str | None
    pub_date: str | None
    content_snippet: str | None
    source: str


def normalize(raw: RawFeedItem, source_name: str) -> NewsItem:
    snippet = raw.content_snippet if raw.content_snippet is not None else raw.summary
    return NewsItem(
        title=raw.title,
        link=raw.link,
        pub_date=raw.pub_date,
        content_snippet=snippet,
        source=source_name,
    )


def normalize_items(
    raw_items: Sequence[RawFeedItem],
    source_name: str,
    limit: int | None = None,
) -> list[NewsItem]:
    """Normalize a feed listing, keeping only the first ``limit`` entries when given."""
    selected = raw_items if limit is None else raw_items[:limit]
    return [normalize(raw, source_name) for raw in selected]
