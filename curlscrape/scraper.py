"""
Scraper - runs an extraction config against loaded pages

Usage:
    from curlscrape import scrape

    records = await scrape("https://example.com/list?page=:page", {
        "params": {"page": [1, 2]},
        "collections": [
            {"name": "items", "group": "li.item", "elements": {"title": {"query": "a"}}},
        ],
    })
"""

import asyncio
from typing import Any, Dict, List, Mapping, Optional, Union

from .config import config as settings
from .config_loader import load_extraction_config
from .diagnostics import get_logger
from .dom import Document
from .exceptions import ConfigurationError
from .extraction.assembler import assemble_collection
from .loaders import PageLoader, create_page_loader
from .models import CollectionSpec, ExtractionConfig, ScrapedRecord, UrlTarget
from .urls.permutations import Source, collect_urls

logger = get_logger(__name__)


class Scraper:
    """Extracts every configured collection from a single document"""

    def __init__(
        self,
        document: Document,
        config: ExtractionConfig,
        request_parameters: Optional[Dict[str, Any]] = None,
    ):
        self.document = document
        self.config = config
        self.request_parameters = request_parameters
        self.scraped: Dict[str, List[Dict[str, Any]]] = {}

    def parse(self, collection: CollectionSpec) -> Optional[List[Dict[str, Any]]]:
        data = assemble_collection(self.document, collection, self.request_parameters)
        if data is not None:
            self.scraped[collection.name] = data
        return data

    def run(self) -> Dict[str, List[Dict[str, Any]]]:
        for collection in self.config.collections:
            self.parse(collection)
        return self.scraped


async def scrape_target(
    target: UrlTarget,
    config: ExtractionConfig,
    loader: PageLoader,
) -> ScrapedRecord:
    """Load one URL and extract all collections from it"""
    document = await loader.load(target.url, dict(config.options))
    scraper = Scraper(document, config, target.request_parameters)
    return ScrapedRecord(
        url=target.url,
        collections=scraper.run(),
        request_parameters=target.request_parameters,
    )


async def scrape(
    source: Optional[Source],
    config: Union[ExtractionConfig, Mapping[str, Any]],
    loader: Optional[PageLoader] = None,
) -> List[ScrapedRecord]:
    """
    Scrape every URL produced by source and config.params concurrently.

    Args:
        source: URL, list of URLs or {url, requestParameters} entries
                (None uses config.urls)
        config: ExtractionConfig or a plain mapping
        loader: Page loader (default from CURLSCRAPE_LOADER)

    Returns:
        One ScrapedRecord per target, in target order

    Raises:
        FetchError: any page failed to load; the whole batch fails
    """
    config = load_extraction_config(config)
    if source is None:
        source = list(config.urls)
    if not source:
        raise ConfigurationError("Nothing to scrape: no source URLs given")
    targets = collect_urls(source, config.params)
    if not targets:
        logger.warning("Request parameters produced no URL permutations")
        return []

    loader = loader or create_page_loader(settings.loader)
    logger.debug(f"Scraping {len(targets)} target(s)")

    tasks = [asyncio.ensure_future(scrape_target(target, config, loader)) for target in targets]
    try:
        records = await asyncio.gather(*tasks)
    except Exception as e:
        # Cancel and drain the remaining loads before propagating
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.error(f"Scrape batch failed: {e!r}")
        raise

    logger.info(f"Scraped {len(records)} page(s)")
    return list(records)
