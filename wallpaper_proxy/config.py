import os

FINDAPHOTO_ORIGIN = os.getenv(
    "FINDAPHOTO_ORIGIN", "https://infinitypro-img.infinitynewtab.com/findaphoto/"
)
CATALOG_URL = os.getenv("CATALOG_URL", "https://wallpaper.xyu.fan/all.json")
BING_HOST = "https://www.bing.com"
BING_ARCHIVE_URL = os.getenv(
    "BING_ARCHIVE_URL",
    f"{BING_HOST}/HPImageArchive.aspx?format=js&idx=0&n=8&mkt=en-US",
)

CATALOG_CACHE_TTL = int(os.getenv("CATALOG_CACHE_TTL", "300"))  # 5 minutes
BING_CACHE_TTL = int(os.getenv("BING_CACHE_TTL", "3600"))  # 1 hour
UPSTREAM_TIMEOUT = float(os.getenv("UPSTREAM_TIMEOUT", "10"))
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

PROXY_SOURCE = "infinity-wallpaper-proxy"
IMMUTABLE_CACHE_CONTROL = "public, max-age=31536000, immutable"  # 1 year

BROWSER_UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
UPSTREAM_HEADERS = {
    "User-Agent": BROWSER_UA,
    "Accept": "image/webp,image/apng,image/*,*/*;q=0.8",
    "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
    "Referer": "https://infinitynewtab.com/",
}

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, HEAD, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
PREFLIGHT_MAX_AGE = "86400"

# url rewriting between the wallpaper origin and this deployment
PROXY_URL_BASE = os.getenv("PROXY_URL_BASE", "https://your-domain.vercel.app")
PROXY_ORIGINAL_DOMAIN = os.getenv(
    "PROXY_ORIGINAL_DOMAIN", "infinitypro-img.infinitynewtab.com"
)
PROXY_PATH = os.getenv("PROXY_PATH", "/api/wallpaper")
