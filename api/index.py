import logging

from werkzeug.middleware.proxy_fix import ProxyFix

from wallpaper_proxy import create_app
from wallpaper_proxy.config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)

app = create_app()
# Vercel sits in front of the function; trust its forwarded proto/host
app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)


# For Vercel
def handler(event, context):
    return app(event, context)
