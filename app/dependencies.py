from __future__ import annotations

from fastapi import Request

from services.aggregator import FeedAggregatorService
from services.feed_registry import FeedRegistry
from services.search import NewsSearchService


def get_feed_registry(request: Request) -> FeedRegistry:
    return request.app.state.feed_registry


def get_feed_aggregator(request: Request) -> FeedAggregatorService:
    return request.app.state.feed_aggregator


def get_news_search(request: Request) -> NewsSearchService:
    return request.app.state.news_search
