"""
curlscrape - configuration-driven web scraping

Fetches pages, runs CSS selector queries described by an extraction
config, post-processes every value and assembles nested records.

Usage:
    from curlscrape import scrape, export

    records = await scrape(urls, config)
    export("products.csv", records)
"""
from .config import Config, config
from .config_loader import load_extraction_config, load_config_file
from .dom import Document
from .exceptions import ScraperError, ConfigurationError, FetchError
from .models import (
    Literal,
    Computed,
    ElementSpec,
    CollectionSpec,
    ExtractionConfig,
    UrlTarget,
    ScrapedRecord,
)
from .scraper import Scraper, scrape
from .urls import collect_urls, permutate_urls
from .data_export import DataExporter, export, build_exporter_registry
from .loaders import HttpPageLoader, create_page_loader

__all__ = [
    # Core
    "scrape",
    "Scraper",
    "Document",
    "Config",
    "config",
    # Models
    "Literal",
    "Computed",
    "ElementSpec",
    "CollectionSpec",
    "ExtractionConfig",
    "UrlTarget",
    "ScrapedRecord",
    # Config
    "load_extraction_config",
    "load_config_file",
    # URLs
    "collect_urls",
    "permutate_urls",
    # Export
    "DataExporter",
    "export",
    "build_exporter_registry",
    # Loaders
    "HttpPageLoader",
    "create_page_loader",
    # Errors
    "ScraperError",
    "ConfigurationError",
    "FetchError",
]

__version__ = '0.1.0'
