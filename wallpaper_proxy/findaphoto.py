"""
Findaphoto image proxy.

Routes (mounted under ``/api/findaphoto``):
 - GET /stats               request counters and success / cache-hit rates
 - GET /health              static service descriptor
 - GET /<category>/<file>   proxied image, 304 passthrough for conditional GETs
 - OPTIONS /*               CORS preflight
"""
import time
from datetime import datetime, timezone

from flask import Blueprint, Response, current_app, jsonify, request

from . import config
from .errors import InvalidRequest, UpstreamError, WallpaperProxyError
from .proxy_utils import generate_image_metadata, validate_image_url
from .stats import format_rate

URL_PREFIX = "/api/findaphoto"


def make_upstream_headers():
    """Browser-like headers plus whichever conditional headers the client sent."""
    headers = dict(config.UPSTREAM_HEADERS)
    if_none_match = request.headers.get("If-None-Match")
    if_modified_since = request.headers.get("If-Modified-Since")
    if if_none_match:
        headers["If-None-Match"] = if_none_match
    if if_modified_since:
        headers["If-Modified-Since"] = if_modified_since
    return headers


def preflight_response():
    r = Response(status=200)
    r.headers.update(config.CORS_HEADERS)
    r.headers["Access-Control-Max-Age"] = config.PREFLIGHT_MAX_AGE
    return r


def create_findaphoto_blueprint(session, stats, origin=config.FINDAPHOTO_ORIGIN,
                                timeout=config.UPSTREAM_TIMEOUT):
    bp = Blueprint("findaphoto", __name__, url_prefix=URL_PREFIX)

    @bp.before_request
    def answer_preflight():
        if request.method == "OPTIONS":
            return preflight_response()
        return None

    @bp.route("/stats")
    def proxy_stats():
        snapshot = stats.read()
        total = snapshot["totalRequests"]
        return jsonify({
            "service": "Findaphoto Proxy Statistics",
            "stats": snapshot,
            "successRate": format_rate(snapshot["successfulRequests"], total),
            "cacheHitRate": format_rate(snapshot["cacheHits"], total),
        })

    @bp.route("/health")
    def health():
        return jsonify({
            "service": "Findaphoto Proxy Service",
            "status": "healthy",
            "usage": f"GET {URL_PREFIX}/{{category}}/{{filename}}",
            "example": f"GET {URL_PREFIX}/bigLink/17021.jpg",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    def fetch_image(img_path, started):
        img_path = img_path.lstrip("/")
        if not img_path:
            raise InvalidRequest("Path is required")

        original_url = f"{origin}{img_path}"
        validation = validate_image_url(original_url)
        if not validation["valid"]:
            raise InvalidRequest("Invalid image URL", reason=validation["reason"])

        resp = session.get(original_url, headers=make_upstream_headers(), timeout=timeout)

        if resp.status_code == 304:
            current_app.logger.info("Upstream 304 for %s", img_path)
            r = Response(status=304)
            r.headers["Cache-Control"] = config.IMMUTABLE_CACHE_CONTROL
            r.headers["X-Proxy-Source"] = config.PROXY_SOURCE
            r.headers["X-Cache-Status"] = "not-modified"
            return r, True

        if not 200 <= resp.status_code < 300:
            current_app.logger.warning("Failed to fetch image: %d %s (%s)",
                                       resp.status_code, resp.reason, original_url)
            raise UpstreamError("Image not found", resp.status_code, originalUrl=original_url)

        body = resp.content
        r = Response(body, status=200,
                     content_type=resp.headers.get("Content-Type") or "image/jpeg")
        r.headers["Cache-Control"] = config.IMMUTABLE_CACHE_CONTROL
        r.headers.update(config.CORS_HEADERS)
        passthrough = ["Last-Modified", "ETag"]
        # requests already decoded gzip/deflate; the origin length would be wrong
        if not resp.headers.get("Content-Encoding"):
            passthrough.append("Content-Length")
        for name in passthrough:
            value = resp.headers.get(name)
            if value:
                r.headers[name] = value

        r.headers["X-Proxy-Source"] = config.PROXY_SOURCE
        r.headers["X-Original-URL"] = original_url
        r.headers["X-Response-Time"] = f"{_elapsed_ms(started)}ms"
        r.headers["X-Cache-Status"] = "miss"

        metadata = generate_image_metadata(original_url)
        if metadata:
            r.headers["X-Image-Format"] = metadata["extension"]
            r.headers["X-Image-Filename"] = metadata["filename"]
        return r, False

    @bp.route("/", defaults={"img_path": ""})
    @bp.route("/<path:img_path>")
    def proxy_image(img_path):
        started = time.monotonic()
        try:
            r, from_cache = fetch_image(img_path, started)
        except WallpaperProxyError as e:
            stats.update(False, _elapsed_ms(started))
            return jsonify(e.to_dict()), e.status
        except Exception as e:
            current_app.logger.exception("Proxy error for %s", img_path)
            stats.update(False, _elapsed_ms(started))
            return jsonify({
                "error": "Internal server error",
                "message": str(e) or "Unknown error",
            }), 500

        stats.update(True, _elapsed_ms(started), from_cache)
        return r

    return bp


def _elapsed_ms(started):
    return int((time.monotonic() - started) * 1000)
