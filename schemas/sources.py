from __future__ import annotations

from pydantic import BaseModel, HttpUrl


class SourceResponse(BaseModel):
    key: str
    name: str
    url: HttpUrl


class SourceListResponse(BaseModel):
    total: int
    sources: list[SourceResponse]
