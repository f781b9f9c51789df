from datetime import datetime, timezone

from flask import Blueprint, jsonify, request

from . import config
from .wallpapers import get_available_sources, get_wallpaper_list, parse_int

URL_PREFIX = "/api/v1"


def create_v1_blueprint(catalog_cache):
    bp = Blueprint("v1", __name__, url_prefix=URL_PREFIX)

    @bp.route("/getWallpaperList")
    def wallpaper_list():
        """
        Query params:
         - page: 1-based page number (default 1)
         - source: filter by source, case-insensitive substring
         - pageSize: items per page (default 20)
        """
        page_size = parse_int(request.args.get("pageSize"))
        if page_size is None or page_size < 1:
            page_size = config.DEFAULT_PAGE_SIZE

        data = get_wallpaper_list(
            catalog_cache,
            request.args.get("page"),
            request.args.get("source"),
            page_size,
        )
        status = data["code"] if data["code"] in (200, 400) else 500
        return jsonify(data), status

    @bp.route("/getSources")
    def sources():
        return jsonify({
            "code": 200,
            "data": get_available_sources(catalog_cache),
            "message": "Success",
        })

    @bp.route("/health")
    def health():
        return jsonify({
            "code": 200,
            "data": {
                "service": "Wallpaper API v1",
                "status": "healthy",
                "endpoints": [
                    f"GET {URL_PREFIX}/getWallpaperList?page=1&source=Unsplash",
                    f"GET {URL_PREFIX}/getSources",
                    f"GET {URL_PREFIX}/health",
                ],
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
            "message": "Service is running",
        })

    return bp
