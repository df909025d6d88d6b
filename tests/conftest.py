from __future__ import annotations

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

import pytest

from services.cache import ResponseCache
from services.feed_registry import FeedRegistry, FeedSource
from services.rss_fetcher import RawFeedItem, RSSFetchError

SOURCES = (
    FeedSource(key="tuoitre", name="Tuổi Trẻ", url="https://feeds.test/tuoitre.rss"),
    FeedSource(key="vnexpress", name="VnExpress", url="https://feeds.test/vnexpress.rss"),
    FeedSource(key="zing", name="Zing News", url="https://feeds.test/zing.rss"),
)


def hours_ago(hours: float, now: datetime | None = None) -> str:
    reference = now or datetime.now(timezone.utc)
    return format_datetime(reference - timedelta(hours=hours))


def raw_item(
    title: str | None = "Tin",
    link: str | None = "https://example.vn/tin",
    pub_date: str | None = None,
    content_snippet: str | None = None,
    summary: str | None = None,
) -> RawFeedItem:
    return RawFeedItem(
        title=title,
        link=link,
        pub_date=pub_date,
        content_snippet=content_snippet,
        summary=summary,
    )


class FakeFetcher:
    """Serves canned raw items per URL and records every fetch."""

    def __init__(self, feeds: dict[str, list[RawFeedItem]], failing: set[str] | None = None) -> None:
        self.feeds = feeds
        self.failing = failing or set()
        self.calls: list[str] = []

    async def fetch(self, feed_url: str) -> list[RawFeedItem]:
        self.calls.append(feed_url)
        if feed_url in self.failing:
            raise RSSFetchError(f"Failed to fetch RSS feed: {feed_url}")
        return list(self.feeds.get(feed_url, []))


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def registry() -> FeedRegistry:
    return FeedRegistry(SOURCES)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock: FakeClock) -> ResponseCache:
    return ResponseCache(ttl_seconds=60, clock=clock)


@pytest.fixture()
def feeds() -> dict[str, list[RawFeedItem]]:
    return {
        "https://feeds.test/tuoitre.rss": [
            raw_item(title="Bão số 3 đổ bộ", link="https://tuoitre.vn/1", pub_date=hours_ago(1),
                     content_snippet="Mưa lớn kéo dài"),
            raw_item(title="Giá vàng tăng", link="https://tuoitre.vn/2", pub_date=hours_ago(30),
                     summary="Vàng SJC lập đỉnh"),
        ],
        "https://feeds.test/vnexpress.rss": [
            raw_item(title="Kinh tế quý III", link="https://vnexpress.net/1", pub_date=hours_ago(2),
                     content_snippet="GDP tăng trưởng"),
            raw_item(title="Không rõ thời gian", link="https://vnexpress.net/2", pub_date="not a date"),
        ],
        "https://feeds.test/zing.rss": [
            raw_item(title="Bóng đá Việt Nam", link="https://zingnews.vn/1", pub_date=hours_ago(0.5)),
        ],
    }


@pytest.fixture()
def fetcher(feeds: dict[str, list[RawFeedItem]]) -> FakeFetcher:
    return FakeFetcher(feeds)
