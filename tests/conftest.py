"""
Shared fixtures: an in-memory page loader and sample pages
"""

import asyncio

import pytest

from curlscrape.dom import Document
from curlscrape.exceptions import FetchError


PRODUCTS_HTML = """
<html>
  <head><title>Shop</title></head>
  <body>
    <ul id="products">
      <li class="product" data-sku="A-1">
        <h2>Fish &amp; Chips</h2>
        <span class="price">$1,234.56 USD</span>
        <a href="/p/1">details</a>
        <span class="tag">hot</span>
        <span class="tag">fried</span>
      </li>
      <li class="product" data-sku="B-2">
        <h2>Soup</h2>
        <span class="price">$3.50</span>
        <a href="/p/2">details</a>
      </li>
      <li class="product" data-sku="C-3">
        <h2>Salad</h2>
        <span class="price">$7</span>
        <a href="/p/3">details</a>
      </li>
    </ul>
  </body>
</html>
"""


class StaticPageLoader:
    """Serves pages from a dict; URLs listed in `failing` raise FetchError"""

    def __init__(self, pages, failing=(), delays=None):
        self.pages = pages
        self.failing = set(failing)
        self.delays = delays or {}
        self.calls = []
        self.completed = []

    async def load(self, url, options=None):
        self.calls.append((url, options))
        if url in self.delays:
            await asyncio.sleep(self.delays[url])
        if url in self.failing:
            raise FetchError(url, "HTTP 500")
        self.completed.append(url)
        return Document.from_html(self.pages[url], url=url)


@pytest.fixture
def products_html():
    return PRODUCTS_HTML


@pytest.fixture
def products_doc():
    return Document.from_html(PRODUCTS_HTML, url="https://shop.test/")
