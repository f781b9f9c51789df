import threading
from datetime import datetime, timezone


def _now_iso():
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ProxyStats:
    """In-memory request counters for the image proxy.

    One instance lives for the whole process and is shared by every request
    thread, so each mutation happens under ``_lock``.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._data = self._empty()

    @staticmethod
    def _empty():
        return {
            "totalRequests": 0,
            "successfulRequests": 0,
            "failedRequests": 0,
            "cacheHits": 0,
            "averageResponseTime": 0.0,
            "lastRequestTime": _now_iso(),
        }

    def update(self, success: bool, elapsed_ms: float, from_cache: bool = False):
        with self._lock:
            data = self._data
            data["totalRequests"] += 1
            data["lastRequestTime"] = _now_iso()

            if success:
                data["successfulRequests"] += 1
            else:
                data["failedRequests"] += 1

            if from_cache:
                data["cacheHits"] += 1

            n = data["totalRequests"]
            data["averageResponseTime"] = (data["averageResponseTime"] * (n - 1) + elapsed_ms) / n

    def read(self) -> dict:
        with self._lock:
            return dict(self._data)

    def reset(self):
        with self._lock:
            self._data = self._empty()


def format_rate(part: int, total: int) -> str:
    if total <= 0:
        return "0%"
    return f"{part / total * 100:.2f}%"
