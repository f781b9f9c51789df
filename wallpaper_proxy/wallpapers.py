"""
Paging and filtering over the remote wallpaper catalog.

The catalog is a JSON array of items shaped like::

    {"src": {"rawSrc": "..."}, "colors": [...], "rate": 0, "like": 0,
     "_id": "...", "imgId": "...", "dimensions": "1920x1080", "source": "Unsplash"}

Items are passed through untouched.
"""
import logging
import math
import re

from . import config
from .errors import LoadError

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_int(value, default=None):
    """Lenient integer parse: leading digits win, ``"2abc"`` -> 2.

    Returns ``default`` for None and for strings with no leading integer.
    """
    if value is None:
        return default
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    return int(match.group(1))


def _source(item):
    """The item's ``source`` when it is a string, else ``""``."""
    source = item.get("source")
    return source if isinstance(source, str) else ""


def _page(items=None, total=0, page=1, total_page=0):
    return {"list": items or [], "total": total, "page": page, "totalPage": total_page}


def get_wallpaper_list(cache, page=None, source=None, page_size=config.DEFAULT_PAGE_SIZE):
    """Return one page of the (optionally source-filtered) catalog.

    Args:
        cache: TimedCache holding the catalog.
        page: raw page query value, 1-based; defaults to 1.
        source: case-insensitive substring matched against ``item["source"]``.
        page_size: items per page.

    Returns:
        ``{"code", "data": {"list", "total", "page", "totalPage"}, "message"}``
        with code 200, 400 (bad page) or 500 (catalog unavailable).
    """
    try:
        all_data = cache.load()
    except LoadError as e:
        logger.error("Error in get_wallpaper_list: %s", e)
        return {"code": 500, "data": _page(), "message": "Internal server error"}

    filtered = all_data
    if source and source.strip():
        needle = source.lower()
        filtered = [item for item in all_data if needle in _source(item).lower()]

    current_page = parse_int("1" if page is None or page == "" else page)
    if current_page is None or current_page < 1:
        return {"code": 400, "data": _page(), "message": "Invalid page number"}

    total = len(filtered)
    start = (current_page - 1) * page_size
    return {
        "code": 200,
        "data": _page(
            items=filtered[start:start + page_size],
            total=total,
            page=current_page,
            total_page=math.ceil(total / page_size),
        ),
        "message": "Success",
    }


def get_available_sources(cache):
    """Sorted distinct ``source`` values; an empty list if the catalog fails."""
    try:
        all_data = cache.load()
    except LoadError as e:
        logger.error("Error getting available sources: %s", e)
        return []
    return sorted({_source(item) for item in all_data} - {""})
