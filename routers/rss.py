from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from app.dependencies import get_feed_aggregator, get_news_search
from schemas.news import ErrorResponse, FeedListResponse, SearchResultResponse
from services.aggregator import FeedAggregatorService
from services.search import NewsSearchService

READINESS_MESSAGE = "API RSS tin tức sẵn sàng!"

router = APIRouter(tags=["rss"])


@router.get("/", response_class=PlainTextResponse)
async def readiness() -> str:
    return READINESS_MESSAGE


# Fixed paths must stay above /rss/{source}.
@router.get(
    "/rss/all",
    response_model=FeedListResponse,
    responses={500: {"model": ErrorResponse}},
)
async def get_all_feeds(
    hours: int | None = Query(default=None),
    aggregator: FeedAggregatorService = Depends(get_feed_aggregator),
) -> FeedListResponse:
    feed = await aggregator.get_all(hours)
    return FeedListResponse.from_feed(feed)


@router.get(
    "/rss/search",
    response_model=SearchResultResponse,
    responses={400: {"model": ErrorResponse}},
)
async def search_feeds(
    q: str | None = Query(default=None),
    search: NewsSearchService = Depends(get_news_search),
) -> SearchResultResponse:
    result = await search.search(q)
    return SearchResultResponse.from_search(result)


@router.get(
    "/rss/{source}",
    response_model=FeedListResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_feed(
    source: str,
    hours: int | None = Query(default=None),
    aggregator: FeedAggregatorService = Depends(get_feed_aggregator),
) -> FeedListResponse:
    feed = await aggregator.get_one(source, hours)
    return FeedListResponse.from_feed(feed)
