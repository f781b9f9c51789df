import logging
from urllib.parse import urljoin

from . import config
from .errors import LoadError

logger = logging.getLogger(__name__)


def _result(url="", items=None, date=""):
    items = items or []
    return {"url": url, "list": items, "total": len(items), "date": date}


def get_bing_wallpaper(cache):
    """Recent Bing wallpapers, with the newest one's absolute image URL.

    An empty feed is not an upstream failure: it answers code 200 with an
    empty result.
    """
    try:
        images = cache.load()
    except LoadError as e:
        logger.error("Error loading bing wallpapers: %s", e)
        return {"code": 500, "data": _result(), "message": "Internal server error"}

    if not images:
        logger.warning("Bing feed returned no images")
        return {"code": 200, "data": _result(), "message": "No wallpapers available"}

    latest = images[0]
    return {
        "code": 200,
        "data": _result(
            url=urljoin(config.BING_HOST, latest.get("url", "")),
            items=images,
            date=latest.get("enddate", ""),
        ),
        "message": "Success",
    }
