"""
Browser page loader - renders pages in headless Chromium via Playwright

Only used to obtain the post-JavaScript DOM. The page is never driven
(no clicks, no form filling).
"""

from typing import Any, Dict, Optional

from playwright.async_api import Error as PlaywrightError, async_playwright

from ..config import config
from ..diagnostics import get_logger
from ..dom import Document
from ..exceptions import FetchError

logger = get_logger(__name__)


class BrowserPageLoader:
    """
    Options:
        headers: Extra HTTP headers
        timeout: Navigation timeout in seconds
        wait_until: 'load', 'domcontentloaded' or 'networkidle'
        wait_for: CSS selector to wait for before reading the DOM
        parser: BeautifulSoup parser name
    """

    def __init__(self, headless: Optional[bool] = None, timeout: Optional[float] = None):
        self.headless = config.headless if headless is None else headless
        self.timeout = timeout if timeout is not None else config.timeout

    async def load(self, url: str, options: Optional[Dict[str, Any]] = None) -> Document:
        options = options or {}
        timeout_ms = float(options.get("timeout") or self.timeout) * 1000

        logger.debug(f"Rendering {url}")
        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=self.headless)
                try:
                    context = await browser.new_context(
                        user_agent=config.user_agent,
                        extra_http_headers=options.get("headers") or {},
                    )
                    page = await context.new_page()
                    response = await page.goto(
                        url,
                        timeout=timeout_ms,
                        wait_until=options.get("wait_until") or config.wait_until,
                    )
                    if response is not None and response.status >= 400:
                        raise FetchError(url, f"HTTP {response.status}")
                    if options.get("wait_for"):
                        await page.wait_for_selector(options["wait_for"], timeout=timeout_ms)
                    html = await page.content()
                    final_url = page.url
                finally:
                    await browser.close()
        except PlaywrightError as e:
            raise FetchError(url, str(e)) from e

        return Document.from_html(html, url=final_url, parser=options.get("parser"))
