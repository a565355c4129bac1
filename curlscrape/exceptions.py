"""
curlscrape exceptions
"""


class ScraperError(Exception):
    """Base exception for curlscrape"""
    pass


class ConfigurationError(ScraperError):
    """Invalid extraction configuration or data that violates it"""

    def __init__(self, message: str, key: str = None):
        self.key = key
        super().__init__(message)


class FetchError(ScraperError):
    """Page loader failed to deliver a document for a URL"""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to load {url}: {message}")
