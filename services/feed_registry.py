from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


class UnknownSourceError(LookupError):
    """Raised when a feed key is not registered."""


@dataclass(frozen=True)
class FeedSource:
    key: str
    name: str
    url: str


DEFAULT_SOURCES: tuple[FeedSource, ...] = (
    FeedSource(key="tuoitre", name="Tuổi Trẻ", url="https://tuoitre.vn/rss/home.rss"),
    FeedSource(key="vnexpress", name="VnExpress", url="https://vnexpress.net/rss/tin-moi-nhat.rss"),
    FeedSource(key="zing", name="Zing News", url="https://zingnews.vn/rss/tin-moi.rss"),
    FeedSource(key="vietnamnet", name="VietNamNet", url="https://vietnamnet.vn/rss/home.rss"),
)


class FeedRegistry:
    """Read-only lookup of the feeds the service aggregates."""

    def __init__(self, sources: Iterable[FeedSource] = DEFAULT_SOURCES) -> None:
        self._sources: dict[str, FeedSource] = {}
        for source in sources:
            key = source.key.lower()
            if key in self._sources:
                raise ValueError(f"Duplicate feed key: {key}")
            self._sources[key] = source

    def resolve(self, key: str) -> FeedSource:
        try:
            return self._sources[key.lower()]
        except KeyError as exc:
            raise UnknownSourceError(f"Unknown feed source: {key}") from exc

    def all(self) -> tuple[FeedSource, ...]:
        return tuple(self._sources.values())

    def __len__(self) -> int:
        return len(self._sources)
