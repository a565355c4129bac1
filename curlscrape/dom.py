"""
DOM access - thin layer over BeautifulSoup used by the extraction engine

Usage:
    from curlscrape.dom import Document

    doc = Document.from_html(html, url="https://example.com")
    for node in doc.select(".product"):
        ...
"""

from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag

from .config import config

Node = Union[BeautifulSoup, Tag]


def select(node: Node, selector: str) -> List[Tag]:
    """Return descendants of node matching a CSS selector, in document order"""
    return list(node.select(selector))


class Document:
    """A parsed page together with the URL it was loaded from"""

    def __init__(self, soup: BeautifulSoup, url: Optional[str] = None):
        self.soup = soup
        self.url = url

    @classmethod
    def from_html(
        cls,
        html: Union[str, bytes],
        url: Optional[str] = None,
        parser: Optional[str] = None,
        encoding: Optional[str] = None,
    ) -> "Document":
        """
        Parse markup into a Document.

        Bytes are decoded by BeautifulSoup; `encoding` (e.g. the HTTP charset)
        is tried first and undecodable input falls back to detection.
        """
        if isinstance(html, str):
            return cls(BeautifulSoup(html, parser or config.html_parser), url=url)
        return cls(BeautifulSoup(html, parser or config.html_parser, from_encoding=encoding), url=url)

    @property
    def root(self) -> Node:
        """Implicit scope for ungrouped collections: <body>, or the whole tree for fragments"""
        return self.soup.body or self.soup

    def select(self, selector: str) -> List[Tag]:
        return select(self.soup, selector)

    def __repr__(self) -> str:
        return f"Document(url={self.url!r})"
