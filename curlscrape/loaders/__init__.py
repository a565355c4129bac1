"""
Page loaders

    http    - aiohttp GET (default)
    browser - Playwright/Chromium rendering
"""

from .base import PageLoader
from .http_loader import HttpPageLoader
from ..exceptions import ConfigurationError

LOADERS = ("http", "browser")


def create_page_loader(name: str = "http") -> PageLoader:
    """Create a page loader by name"""
    name = (name or "http").lower()
    if name == "http":
        return HttpPageLoader()
    if name == "browser":
        # Playwright is only imported when a browser is requested
        from .browser_loader import BrowserPageLoader
        return BrowserPageLoader()
    raise ConfigurationError(
        f"Unknown page loader '{name}'. Available loaders: {', '.join(LOADERS)}"
    )


__all__ = ['PageLoader', 'HttpPageLoader', 'create_page_loader', 'LOADERS']
