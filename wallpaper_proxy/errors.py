class WallpaperProxyError(Exception):
    """Base error; ``status`` is the HTTP status the handler answers with."""

    status = 500

    def __init__(self, message, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self):
        body = {"error": self.message}
        body.update(self.context)
        return body


class InvalidRequest(WallpaperProxyError):
    status = 400


class UpstreamError(WallpaperProxyError):
    """Origin answered with a non-2xx status."""

    def __init__(self, message, upstream_status, **context):
        super().__init__(message, status=upstream_status, **context)
        # only error statuses are passed on to the client
        if 400 <= upstream_status < 600:
            self.status = upstream_status
        else:
            self.status = 404


class LoadError(WallpaperProxyError):
    """A cached remote resource could not be fetched or decoded."""
