#!/usr/bin/env python3
import asyncio
import aiohttp
from typing import Any, Dict, Optional

from ..config import config
from ..diagnostics import get_logger
from ..dom import Document
from ..exceptions import FetchError

logger = get_logger(__name__)


class HttpPageLoader:
    """Plain HTTP GET via aiohttp, no JavaScript execution

    Options:
        headers: Extra request headers
        cookies: Cookies sent with the request
        timeout: Total timeout in seconds
        parser: BeautifulSoup parser name
    """

    def __init__(self, timeout: Optional[float] = None, user_agent: Optional[str] = None):
        self.timeout = timeout if timeout is not None else config.timeout
        self.user_agent = user_agent or config.user_agent

    async def load(self, url: str, options: Optional[Dict[str, Any]] = None) -> Document:
        options = options or {}
        headers = {
            "User-Agent": self.user_agent,
            **(options.get("headers") or {}),
        }
        timeout_obj = aiohttp.ClientTimeout(total=float(options.get("timeout") or self.timeout))

        logger.debug(f"GET {url}")
        try:
            async with aiohttp.ClientSession(timeout=timeout_obj, cookies=options.get("cookies")) as session:
                async with session.get(url, headers=headers, allow_redirects=True) as resp:
                    if resp.status >= 400:
                        raise FetchError(url, f"HTTP {resp.status}")
                    html = await resp.read()
                    charset = resp.charset
                    final_url = str(resp.url)
        except aiohttp.ClientError as e:
            raise FetchError(url, str(e)) from e
        except asyncio.TimeoutError as e:
            raise FetchError(url, "timeout") from e

        return Document.from_html(html, url=final_url, parser=options.get("parser"), encoding=charset)
