from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

import feedparser
import httpx
from lxml import html
from lxml.etree import ParserError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 7.0


class RSSFetchError(RuntimeError):
    """Raised when an RSS feed cannot be fetched or parsed."""


@dataclass(frozen=True)
class RawFeedItem:
    title: str | None
    link: str | None
    pub_date: str | None
    content_snippet: str | None
    summary: str | None


def _strip_html(value: str | None) -> str | None:
    if not value or not value.strip():
        return None
    try:
        text = html.fromstring(value).text_content()
    except (ParserError, ValueError):
        logger.debug("Unable to strip markup from feed text")
        text = value
    clean_text = re.sub(r"\s+", " ", text).strip()
    return clean_text or None


def _entry_content(entry: dict[str, Any]) -> str | None:
    contents = entry.get("content") or []
    for content in contents:
        value = content.get("value")
        if value:
            return value
    return None


def _to_raw_item(entry: dict[str, Any], is_atom: bool) -> RawFeedItem:
    # RSS: the preview is <description> (feedparser "summary"); content:encoded is the full body.
    # Atom: the preview is <content>, with <summary> as the secondary text.
    if is_atom:
        snippet = _entry_content(entry)
        summary = entry.get("summary")
    else:
        snippet = entry.get("summary")
        summary = None
    return RawFeedItem(
        title=entry.get("title"),
        link=entry.get("link"),
        pub_date=entry.get("published") or entry.get("updated"),
        content_snippet=_strip_html(snippet),
        summary=_strip_html(summary),
    )


class RSSFetcherService:
    """Download a feed and hand back its entries as raw items."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def fetch(self, feed_url: str) -> list[RawFeedItem]:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(feed_url)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RSSFetchError(f"Failed to fetch RSS feed: {feed_url}") from exc

        feed = feedparser.parse(response.content)
        if feed.bozo and not feed.entries:
            raise RSSFetchError(f"Invalid RSS feed: {feed_url}")

        is_atom = feed.get("version", "").startswith("atom")
        return [_to_raw_item(entry, is_atom) for entry in feed.entries]
