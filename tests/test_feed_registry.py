import pytest

from services.feed_registry import DEFAULT_SOURCES, FeedRegistry, FeedSource, UnknownSourceError


def test_default_sources_keys_are_stable():
    registry = FeedRegistry()
    assert [source.key for source in registry.all()] == ["tuoitre", "vnexpress", "zing", "vietnamnet"]
    assert registry.resolve("tuoitre").name == "Tuổi Trẻ"
    assert registry.resolve("tuoitre").url == "https://tuoitre.vn/rss/home.rss"


def test_resolve_is_case_insensitive():
    registry = FeedRegistry()
    assert registry.resolve("TuoiTre") is registry.resolve("tuoitre")


def test_resolve_unknown_key():
    with pytest.raises(UnknownSourceError):
        FeedRegistry().resolve("unknownkey")


def test_duplicate_keys_rejected():
    source = DEFAULT_SOURCES[0]
    with pytest.raises(ValueError):
        FeedRegistry([source, FeedSource(key=source.key.upper(), name="x", url="https://x.test")])
