"""Shared pytest fixtures for wallpaper proxy tests."""

import json

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from wallpaper_proxy import create_app
from wallpaper_proxy.cache import TimedCache
from wallpaper_proxy.stats import ProxyStats

ORIGIN = "https://img.example.com/findaphoto/"


def make_response(status=200, content=b"", headers=None, json_body=None):
    """Build a real ``requests.Response`` without touching the network."""
    resp = requests.Response()
    resp.status_code = status
    resp.reason = "OK" if status < 400 else "Error"
    if json_body is not None:
        content = json.dumps(json_body).encode("utf-8")
    resp._content = content
    resp.headers = CaseInsensitiveDict(headers or {})
    return resp


class FakeSession:
    """Stands in for ``requests.Session``; records every GET.

    ``response`` is returned for each call; set ``error`` to raise instead.
    """

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else make_response()
        self.error = error
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": dict(headers or {}), "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_catalog(count, source="Unsplash"):
    return [
        {
            "src": {"rawSrc": f"https://infinitypro-img.infinitynewtab.com/wallpaper/{i}.jpg"},
            "colors": ["#000000"],
            "rate": 0,
            "like": i,
            "_id": f"id-{i}",
            "imgId": f"img-{i}",
            "dimensions": "1920x1080",
            "source": source,
        }
        for i in range(count)
    ]


class StaticLoader:
    """Loader with the ``load()`` interface of TimedCache, backed by a list or error."""

    def __init__(self, data=None, error=None):
        self.data = data
        self.error = error
        self.calls = 0

    def load(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.data


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def stats() -> ProxyStats:
    return ProxyStats()


@pytest.fixture
def catalog():
    return StaticLoader(make_catalog(45))


@pytest.fixture
def app(fake_session, stats, catalog):
    app = create_app(
        session=fake_session,
        stats=stats,
        catalog_cache=catalog,
        bing_cache=TimedCache(lambda: [], ttl=3600),
        origin=ORIGIN,
    )
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
