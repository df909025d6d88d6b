from __future__ import annotations

from fastapi import APIRouter, Depends

from app.dependencies import get_feed_registry
from schemas.sources import SourceListResponse, SourceResponse
from services.feed_registry import FeedRegistry

router = APIRouter(tags=["sources"])


@router.get("/rss/sources", response_model=SourceListResponse)
async def list_sources(registry: FeedRegistry = Depends(get_feed_registry)) -> SourceListResponse:
    sources = [
        SourceResponse(key=source.key, name=source.name, url=source.url)
        for source in registry.all()
    ]
    return SourceListResponse(total=len(sources), sources=sources)
