#!/usr/bin/env python3
"""
Local development server for the wallpaper proxy.

Serves the same app Vercel runs from api/index.py:
 - /api/findaphoto/...   image proxy with conditional GET passthrough
 - /api/v1/...           paginated wallpaper catalog

Upstream locations and cache TTLs come from the environment, see
wallpaper_proxy/config.py.
"""
import argparse
import logging

from wallpaper_proxy import create_app
from wallpaper_proxy.config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)

app = create_app()

if __name__ == "__main__":
    p = argparse.ArgumentParser(description="Wallpaper proxy (local)")
    p.add_argument("--host", default="0.0.0.0")
    p.add_argument("--port", type=int, default=8080)
    p.add_argument("--cert", help="path to cert.pem for HTTPS (optional)")
    p.add_argument("--key", help="path to key.pem for HTTPS (optional)")
    p.add_argument("--debug", action="store_true", help="enable the Flask debugger and reloader")
    args = p.parse_args()

    ssl_context = None
    if args.cert and args.key:
        ssl_context = (args.cert, args.key)
        app.logger.info("Starting HTTPS server on %s:%d", args.host, args.port)
    else:
        app.logger.info("Starting HTTP server on %s:%d", args.host, args.port)

    app.run(host=args.host, port=args.port, debug=args.debug, ssl_context=ssl_context)
