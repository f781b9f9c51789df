"""Wallpaper image proxy and catalog API for Vercel's Python runtime."""

from .app import create_app

__all__ = ["create_app"]
__version__ = "1.0.0"
