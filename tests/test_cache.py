"""Tests for wallpaper_proxy.cache (TTL memoization and upstream loaders)."""

import pytest
import requests

from tests.conftest import FakeClock, FakeSession, make_response
from wallpaper_proxy.cache import TimedCache, fetch_bing_feed, fetch_catalog
from wallpaper_proxy.errors import LoadError


class CountingFetch:
    def __init__(self, value=None, error=None):
        self.value = value if value is not None else ["item"]
        self.error = error
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.value


class TestTimedCache:
    def test_first_load_fetches(self):
        fetch = CountingFetch()
        cache = TimedCache(fetch, ttl=300, clock=FakeClock())
        assert cache.load() == ["item"]
        assert fetch.calls == 1

    def test_second_load_within_ttl_does_not_fetch(self):
        fetch, clock = CountingFetch(), FakeClock()
        cache = TimedCache(fetch, ttl=300, clock=clock)
        cache.load()
        clock.advance(299)
        cache.load()
        assert fetch.calls == 1

    def test_load_after_ttl_fetches_once(self):
        fetch, clock = CountingFetch(), FakeClock()
        cache = TimedCache(fetch, ttl=300, clock=clock)
        cache.load()
        clock.advance(300)
        cache.load()
        cache.load()
        assert fetch.calls == 2

    def test_empty_value_is_cached(self):
        fetch = CountingFetch(value=[])
        cache = TimedCache(fetch, ttl=300, clock=FakeClock())
        cache.get_or_refresh()
        cache.get_or_refresh()
        assert fetch.calls == 1

    def test_failed_refresh_discards_stale_value(self):
        """An expired value is never served when the refresh fails."""
        fetch, clock = CountingFetch(), FakeClock()
        cache = TimedCache(fetch, ttl=300, clock=clock)
        cache.load()

        clock.advance(301)
        fetch.error = LoadError("boom")
        with pytest.raises(LoadError):
            cache.load()

    def test_failed_first_load_is_not_cached(self):
        fetch = CountingFetch(error=LoadError("boom"))
        cache = TimedCache(fetch, ttl=300, clock=FakeClock())
        with pytest.raises(LoadError):
            cache.load()

        fetch.error = None
        assert cache.load() == ["item"]
        assert fetch.calls == 2


class TestFetchCatalog:
    def test_returns_list(self):
        session = FakeSession(make_response(json_body=[{"source": "Unsplash"}]))
        assert fetch_catalog(session, "https://cat.example.com/all.json", 5) == [{"source": "Unsplash"}]
        assert session.calls[0]["timeout"] == 5

    def test_non_2xx_raises(self):
        session = FakeSession(make_response(status=503))
        with pytest.raises(LoadError, match="503"):
            fetch_catalog(session, "https://cat.example.com/all.json", 5)

    def test_invalid_json_raises(self):
        session = FakeSession(make_response(content=b"<html>"))
        with pytest.raises(LoadError):
            fetch_catalog(session, "https://cat.example.com/all.json", 5)

    def test_wrong_shape_raises(self):
        session = FakeSession(make_response(json_body={"items": []}))
        with pytest.raises(LoadError):
            fetch_catalog(session, "https://cat.example.com/all.json", 5)

    def test_transport_error_raises(self):
        session = FakeSession(error=requests.ConnectionError("refused"))
        with pytest.raises(LoadError):
            fetch_catalog(session, "https://cat.example.com/all.json", 5)


class TestFetchBingFeed:
    def test_returns_images(self):
        session = FakeSession(make_response(json_body={"images": [{"url": "/th?id=1"}]}))
        assert fetch_bing_feed(session, "https://www.bing.com/feed", 5) == [{"url": "/th?id=1"}]

    def test_missing_images_raises(self):
        session = FakeSession(make_response(json_body={"tooltips": {}}))
        with pytest.raises(LoadError):
            fetch_bing_feed(session, "https://www.bing.com/feed", 5)
