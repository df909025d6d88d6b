from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime

from services.normalizer import NewsItem

logger = logging.getLogger(__name__)


def parse_pub_date(value: str | None) -> datetime | None:
    """Parse an RSS (RFC 2822) or ISO 8601 timestamp; naive values are read as UTC."""
    if not value or not value.strip():
        return None
    text = value.strip()
    try:
        parsed = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Unable to parse published date: %s", value)
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def filter_by_hours(
    items: Sequence[NewsItem],
    hours: float | None,
    now: datetime | None = None,
) -> Sequence[NewsItem]:
    if hours is None:
        return items

    reference = now or datetime.now(timezone.utc)
    try:
        cutoff = reference - timedelta(hours=hours)
    except OverflowError:
        # window reaches past the representable range
        if hours < 0:
            return []
        cutoff = datetime.min.replace(tzinfo=timezone.utc)
    kept: list[NewsItem] = []
    for item in items:
        published_at = parse_pub_date(item.pub_date)
        if published_at is not None and published_at >= cutoff:
            kept.append(item)
    return kept
