"""Tests for the scrape() fan-out and the Scraper class."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from curlscrape import scrape
from curlscrape.dom import Document
from curlscrape.exceptions import ConfigurationError, FetchError
from curlscrape.models import ScrapedRecord
from curlscrape.scraper import Scraper
from curlscrape.config_loader import load_extraction_config

from conftest import StaticPageLoader


CONFIG = {
    "collections": [
        {
            "name": "products",
            "group": ".product",
            "elements": {
                "name": {"query": "h2"},
                "price": {"query": ".price", "format": "number"},
            },
        },
        {
            "name": "links",
            "elements": {"href": {"query": "a", "attr": "href"}},
        },
        {
            "name": "missing",
            "group": ".does-not-exist",
            "elements": {"name": {"query": "h2"}},
        },
    ],
}


def _page(title):
    return f"<html><body><h1>{title}</h1></body></html>"


TITLE_CONFIG = {"collections": [{"name": "page", "elements": {"title": "h1"}}]}


class TestScrape:

    @pytest.mark.asyncio
    async def test_single_url(self, products_html):
        loader = StaticPageLoader({"https://shop.test/": products_html})

        records = await scrape("https://shop.test/", CONFIG, loader=loader)

        assert len(records) == 1
        record = records[0]
        assert isinstance(record, ScrapedRecord)
        assert record.url == "https://shop.test/"
        assert record.collections["products"][0] == {"name": "Fish & Chips", "price": 1234.56}
        assert [item["href"] for item in record.collections["links"]] == ["/p/1", "/p/2", "/p/3"]
        assert record.request_parameters is None

    @pytest.mark.asyncio
    async def test_empty_collection_is_absent(self, products_html):
        loader = StaticPageLoader({"https://shop.test/": products_html})

        records = await scrape("https://shop.test/", CONFIG, loader=loader)

        assert "missing" not in records[0].collections
        assert "requestParameters" not in records[0].to_dict()

    @pytest.mark.asyncio
    async def test_params_tag_records(self):
        loader = StaticPageLoader({
            "https://a.test/1": _page("one"),
            "https://a.test/2": _page("two"),
        })
        config = dict(TITLE_CONFIG, params={"n": [1, 2]})

        records = await scrape("https://a.test/:n", config, loader=loader)

        assert [r.to_dict() for r in records] == [
            {"url": "https://a.test/2", "collections": {"page": [{"title": "two"}]}, "requestParameters": {"n": 2}},
            {"url": "https://a.test/1", "collections": {"page": [{"title": "one"}]}, "requestParameters": {"n": 1}},
        ]

    @pytest.mark.asyncio
    async def test_results_keep_url_order(self):
        urls = ["https://a.test/", "https://b.test/", "https://c.test/"]
        loader = StaticPageLoader(
            {url: _page(url) for url in urls},
            delays={"https://a.test/": 0.05, "https://b.test/": 0.02},
        )

        records = await scrape(urls, TITLE_CONFIG, loader=loader)

        assert [r.url for r in records] == urls

    @pytest.mark.asyncio
    async def test_one_failure_rejects_batch(self):
        urls = ["https://a.test/", "https://b.test/", "https://c.test/"]
        loader = StaticPageLoader(
            {url: _page(url) for url in urls},
            failing=["https://b.test/"],
            delays={"https://a.test/": 0.05, "https://c.test/": 0.05},
        )

        with pytest.raises(FetchError) as exc:
            await scrape(urls, TITLE_CONFIG, loader=loader)
        assert exc.value.url == "https://b.test/"

        # Slower siblings were cancelled, not left running
        await asyncio.sleep(0.1)
        assert loader.completed == []

    @pytest.mark.asyncio
    async def test_each_receives_request_parameters(self):
        loader = StaticPageLoader({"https://a.test/en": _page("hello")})
        config = {
            "params": {"lang": "en"},
            "collections": [{
                "name": "page",
                "elements": {"title": "h1"},
                "each": {
                    "lang": lambda record, collection, params: params["lang"],
                    "site": "a",
                },
            }],
        }

        records = await scrape("https://a.test/:lang", config, loader=loader)

        assert records[0].collections["page"] == [{"title": "hello", "lang": "en", "site": "a"}]

    @pytest.mark.asyncio
    async def test_options_reach_loader(self):
        loader = StaticPageLoader({"https://a.test/": _page("x")})
        config = dict(TITLE_CONFIG, options={"headers": {"X-Test": "1"}})

        await scrape("https://a.test/", config, loader=loader)

        assert loader.calls == [("https://a.test/", {"headers": {"X-Test": "1"}})]

    @pytest.mark.asyncio
    async def test_config_urls_used_when_source_missing(self):
        loader = StaticPageLoader({"https://a.test/": _page("x")})
        config = dict(TITLE_CONFIG, urls=["https://a.test/"])

        records = await scrape(None, config, loader=loader)

        assert records[0].url == "https://a.test/"

    @pytest.mark.asyncio
    async def test_no_source(self):
        with pytest.raises(ConfigurationError):
            await scrape([], TITLE_CONFIG, loader=StaticPageLoader({}))

    @pytest.mark.asyncio
    async def test_empty_parameter_list_scrapes_nothing(self):
        loader = StaticPageLoader({})
        config = dict(TITLE_CONFIG, params={"n": []})

        assert await scrape("https://a.test/:n", config, loader=loader) == []
        assert loader.calls == []


class TestScraper:

    def test_run_collects_non_empty_collections(self, products_doc):
        scraper = Scraper(products_doc, load_extraction_config(CONFIG))

        scraped = scraper.run()

        assert list(scraped) == ["products", "links"]
        assert scraper.scraped is scraped

    @pytest.mark.asyncio
    async def test_run_with_mocked_loader(self):
        loader = AsyncMock()
        loader.load.return_value = Document.from_html(_page("mocked"))

        records = await scrape("https://m.test/", TITLE_CONFIG, loader=loader)

        loader.load.assert_awaited_once_with("https://m.test/", {})
        assert records[0].collections == {"page": [{"title": "mocked"}]}
