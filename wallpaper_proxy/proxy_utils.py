"""
URL and image metadata helpers for the wallpaper proxy.

Everything here is a pure string/URL transform: no network access, and
malformed input yields ``None`` (or the input unchanged) instead of raising.
"""
import base64
import re
import time
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode, urlsplit

from . import config

# .bmp passes validation but is not reported as a supported format
VALID_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".gif", ".bmp")
SUPPORTED_FORMATS = ("jpg", "jpeg", "png", "webp", "gif")

MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
    "gif": "image/gif",
    "bmp": "image/bmp",
}


@dataclass(frozen=True)
class ProxyConfig:
    base_url: str
    original_domain: str
    proxy_path: str
    origin_path: str = "/wallpaper"


DEFAULT_PROXY_CONFIG = ProxyConfig(
    base_url=config.PROXY_URL_BASE,
    original_domain=config.PROXY_ORIGINAL_DOMAIN,
    proxy_path=config.PROXY_PATH,
)


def _parse_url(url):
    """Split an absolute URL, or return None when it can't be one."""
    if not isinstance(url, str):
        return None
    try:
        parts = urlsplit(url.strip())
        parts.port  # raises on a non-numeric port
    except ValueError:
        return None
    if not parts.scheme:
        return None
    if parts.scheme in ("http", "https") and not parts.netloc:
        return None
    return parts


def validate_image_url(url: str) -> dict:
    parts = _parse_url(url)
    if parts is None:
        return {"valid": False, "reason": "Invalid URL format"}

    if parts.scheme not in ("http", "https"):
        return {"valid": False, "reason": "Invalid protocol"}

    if not parts.path.lower().endswith(VALID_EXTENSIONS):
        return {"valid": False, "reason": "Invalid image extension"}

    return {"valid": True}


def get_mime_type(extension: str) -> str:
    return MIME_TYPES.get(extension.lower(), "image/jpeg")


def generate_image_metadata(url: str) -> Optional[dict]:
    parts = _parse_url(url)
    if parts is None:
        return None

    filename = parts.path.split("/")[-1] or "image"
    extension = filename.split(".")[-1].lower() or "jpg"
    return {
        "filename": filename,
        "extension": extension,
        "mimeType": get_mime_type(extension),
        "isSupported": extension in SUPPORTED_FORMATS,
    }


def build_cache_key(url: str) -> str:
    parts = _parse_url(url)
    if parts is None:
        return f"img_{int(time.time() * 1000)}"
    encoded = base64.b64encode((parts.path or "/").encode("utf-8")).decode("ascii")
    return f"img_{encoded[:32]}"


def convert_to_proxy_url(original_url: str, proxy_config: ProxyConfig = DEFAULT_PROXY_CONFIG) -> Optional[str]:
    """Map an origin image URL onto this deployment's proxy route.

    Returns None for hosts other than ``proxy_config.original_domain`` and
    for paths outside ``proxy_config.origin_path``.
    """
    parts = _parse_url(original_url)
    if parts is None or parts.hostname != proxy_config.original_domain.lower():
        return None

    match = re.search(re.escape(proxy_config.origin_path) + r"/(.+)", parts.path)
    if not match:
        return None
    return f"{proxy_config.base_url}{proxy_config.proxy_path}/{match.group(1)}"


def convert_to_original_url(proxy_url: str, proxy_config: ProxyConfig = DEFAULT_PROXY_CONFIG) -> Optional[str]:
    parts = _parse_url(proxy_url)
    if parts is None:
        return None

    match = re.search(re.escape(proxy_config.proxy_path) + r"/(.+)", parts.path)
    if not match:
        return None
    return f"https://{proxy_config.original_domain}{proxy_config.origin_path}/{match.group(1)}"


def batch_convert_urls(items, proxy_config: ProxyConfig = DEFAULT_PROXY_CONFIG):
    """Attach ``src.proxyUrl`` to every item whose ``src.rawSrc`` converts."""
    converted = []
    for item in items or []:
        src = item.get("src") if isinstance(item, dict) else None
        raw_src = src.get("rawSrc") if isinstance(src, dict) else None
        if not raw_src:
            converted.append(item)
            continue

        new_src = dict(src)
        proxy_url = convert_to_proxy_url(raw_src, proxy_config)
        if proxy_url:
            new_src["proxyUrl"] = proxy_url
        converted.append({**item, "src": new_src})
    return converted


def build_optimized_url(original_url: str, optimization: dict,
                        proxy_config: ProxyConfig = DEFAULT_PROXY_CONFIG) -> str:
    """Proxy URL with resize/quality/format hints, or the original URL."""
    proxy_url = convert_to_proxy_url(original_url, proxy_config)
    if not proxy_url:
        return original_url

    params = []
    for key, param in (("width", "w"), ("height", "h"), ("quality", "q"), ("format", "f")):
        value = (optimization or {}).get(key)
        if value:
            params.append((param, str(value)))

    if not params:
        return proxy_url
    return f"{proxy_url}?{urlencode(params)}"
