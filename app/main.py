from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.middleware.trustedhost import TrustedHostMiddleware
from starlette.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.logging_config import configure_logging
from routers import rss, sources
from services.aggregator import AggregationError, FeedAggregatorService
from services.cache import ResponseCache
from services.feed_registry import FeedRegistry, UnknownSourceError
from services.rss_fetcher import RSSFetcherService
from services.search import InvalidQueryError, NewsSearchService

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Không tìm thấy nguồn RSS"
BAD_REQUEST_MESSAGE = "Thiếu từ khóa tìm kiếm"
INVALID_PARAMS_MESSAGE = "Tham số không hợp lệ"
FETCH_FAILED_MESSAGE = "Không thể lấy RSS"

# helmet-style defaults for a JSON/text API
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Content-Security-Policy": "default-src 'none'",
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _install_services(app: FastAPI, settings: Settings) -> None:
    registry = FeedRegistry()
    fetcher = RSSFetcherService(timeout=settings.fetch_timeout_seconds)
    cache = ResponseCache(ttl_seconds=settings.cache_ttl_seconds)
    app.state.feed_registry = registry
    app.state.response_cache = cache
    app.state.feed_aggregator = FeedAggregatorService(
        fetcher=fetcher,
        cache=cache,
        registry=registry,
        max_items_per_source=settings.max_items_per_source,
    )
    app.state.news_search = NewsSearchService(fetcher=fetcher, registry=registry)


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(_: Request, exc: RateLimitExceeded) -> JSONResponse:
        return _error(429, str(exc))

    @app.exception_handler(UnknownSourceError)
    async def unknown_source_handler(_: Request, exc: UnknownSourceError) -> JSONResponse:
        return _error(404, NOT_FOUND_MESSAGE)

    @app.exception_handler(InvalidQueryError)
    async def invalid_query_handler(_: Request, exc: InvalidQueryError) -> JSONResponse:
        return _error(400, BAD_REQUEST_MESSAGE)

    @app.exception_handler(RequestValidationError)
    async def validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, INVALID_PARAMS_MESSAGE)

    @app.exception_handler(AggregationError)
    async def aggregation_handler(_: Request, exc: AggregationError) -> JSONResponse:
        return _error(500, FETCH_FAILED_MESSAGE)

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        return _error(500, FETCH_FAILED_MESSAGE)


def _install_middleware(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.allowed_hosts)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or ["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.state.limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
    app.add_middleware(SlowAPIMiddleware)

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):  # type: ignore[no-untyped-def]
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)
    app = FastAPI(title=settings.project_name)

    _install_middleware(app, settings)
    _install_services(app, settings)
    _install_error_handlers(app)
    app.include_router(sources.router)
    app.include_router(rss.router)
    return app
