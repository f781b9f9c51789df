import logging
import threading
import time

import requests

from .errors import LoadError

logger = logging.getLogger(__name__)


class TimedCache:
    """Memoizes the result of ``fetch`` for ``ttl`` seconds.

    An expired value is dropped, never served as a fallback when the
    refresh fails. The lock only guards the stored value; the fetch itself
    runs unlocked so a slow upstream doesn't serialize every request.
    """

    def __init__(self, fetch, ttl, clock=time.time):
        self._fetch = fetch
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._value = None
        self._fetched_at = 0.0

    def _fresh(self, now):
        return self._value is not None and (now - self._fetched_at) < self.ttl

    def get_or_refresh(self):
        now = self._clock()
        with self._lock:
            if self._fresh(now):
                return self._value

        value = self._fetch()

        with self._lock:
            self._value = value
            self._fetched_at = now
        return value

    load = get_or_refresh


def _get_json(session, url, timeout, what):
    try:
        resp = session.get(url, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("Request for %s failed: %s", url, e)
        raise LoadError(f"Failed to load {what}") from e

    if not 200 <= resp.status_code < 300:
        logger.warning("Upstream returned %d for %s", resp.status_code, url)
        raise LoadError(f"Failed to fetch {what}: {resp.status_code}")

    try:
        return resp.json()
    except ValueError as e:
        logger.warning("Invalid JSON from %s: %s", url, e)
        raise LoadError(f"Failed to load {what}") from e


def fetch_catalog(session, url, timeout):
    """Download the wallpaper catalog: a JSON array of wallpaper items."""
    data = _get_json(session, url, timeout, "wallpaper data")
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise LoadError("Failed to load wallpaper data: expected an array of objects")
    logger.info("Loaded %d wallpapers from %s", len(data), url)
    return data


def fetch_bing_feed(session, url, timeout):
    """Download the Bing image archive and return its ``images`` list."""
    data = _get_json(session, url, timeout, "bing wallpaper data")
    images = data.get("images") if isinstance(data, dict) else None
    if not isinstance(images, list) or not all(isinstance(image, dict) for image in images):
        raise LoadError("Failed to load bing wallpaper data: missing images")
    logger.info("Loaded %d bing wallpapers", len(images))
    return images
