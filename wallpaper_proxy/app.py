import logging
from functools import partial

import requests
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from . import config
from .cache import TimedCache, fetch_bing_feed, fetch_catalog
from .findaphoto import create_findaphoto_blueprint
from .stats import ProxyStats
from .v1 import create_v1_blueprint


def create_app(session=None, stats=None, catalog_cache=None, bing_cache=None,
               origin=config.FINDAPHOTO_ORIGIN):
    """Build the Flask app with its process-wide state.

    Every shared object (HTTP session, stats, caches) can be injected; the
    defaults talk to the real upstreams.
    """
    app = Flask(__name__)
    app.logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

    session = session or requests.Session()
    stats = stats or ProxyStats()
    if catalog_cache is None:
        catalog_cache = TimedCache(
            partial(fetch_catalog, session, config.CATALOG_URL, config.UPSTREAM_TIMEOUT),
            config.CATALOG_CACHE_TTL,
        )
    if bing_cache is None:
        bing_cache = TimedCache(
            partial(fetch_bing_feed, session, config.BING_ARCHIVE_URL, config.UPSTREAM_TIMEOUT),
            config.BING_CACHE_TTL,
        )

    app.extensions["wallpaper_proxy"] = {
        "session": session,
        "stats": stats,
        "catalog_cache": catalog_cache,
        "bing_cache": bing_cache,
    }

    app.register_blueprint(create_findaphoto_blueprint(session, stats, origin=origin))
    app.register_blueprint(create_v1_blueprint(catalog_cache))

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({"error": e.description}), e.code

    return app
