from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from services.aggregator import FeedResponse
from services.normalizer import NewsItem
from services.search import SearchResponse


class NewsItemResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    link: str | None = None
    pub_date: str | None = Field(default=None, serialization_alias="pubDate")
    content_snippet: str | None = Field(default=None, serialization_alias="contentSnippet")
    source: str

    @classmethod
    def from_item(cls, item: NewsItem) -> NewsItemResponse:
        return cls(
            title=item.title,
            link=item.link,
            pub_date=item.pub_date,
            content_snippet=item.content_snippet,
            source=item.source,
        )


class FeedListResponse(BaseModel):
    source: str
    total: int
    items: list[NewsItemResponse]

    @classmethod
    def from_feed(cls, feed: FeedResponse) -> FeedListResponse:
        return cls(
            source=feed.source,
            total=feed.total,
            items=[NewsItemResponse.from_item(item) for item in feed.items],
        )


class SearchResultResponse(BaseModel):
    query: str
    total: int
    items: list[NewsItemResponse]

    @classmethod
    def from_search(cls, result: SearchResponse) -> SearchResultResponse:
        return cls(
            query=result.query,
            total=result.total,
            items=[NewsItemResponse.from_item(item) for item in result.items],
        )


class ErrorResponse(BaseModel):
    error: str
