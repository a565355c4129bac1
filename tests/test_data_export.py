"""Tests for data export."""

import csv
import io
import json
from datetime import datetime

import pytest

from curlscrape.data_export import DataExporter, build_exporter_registry, export
from curlscrape.exceptions import ConfigurationError
from curlscrape.extraction.pipeline import apply_format
from curlscrape.models import Literal, ScrapedRecord


RECORDS = [
    ScrapedRecord(
        url="https://a.test/1",
        collections={"products": [{"name": "Fish & Chips", "meta": {"price": 1.5}}]},
        request_parameters={"page": 1},
    ),
    ScrapedRecord(url="https://a.test/2", collections={}),
]


class TestDataExporter:

    def test_json_contains_plain_records(self):
        data = json.loads(DataExporter(RECORDS).to_json())
        assert data[0]["requestParameters"] == {"page": 1}
        assert data[0]["collections"]["products"][0]["meta"]["price"] == 1.5
        assert "requestParameters" not in data[1]

    def test_json_metadata_wrapper(self):
        data = json.loads(DataExporter(RECORDS).to_json(include_metadata=True))
        assert data["metadata"]["count"] == 2
        assert len(data["data"]) == 2

    def test_json_writes_nan_as_null(self):
        price = apply_format("n/a", Literal("number"))
        record = ScrapedRecord(url="https://a.test/", collections={"products": [{"price": price}]})

        text = DataExporter([record]).to_json()

        data = json.loads(text, parse_constant=pytest.fail)
        assert data[0]["collections"]["products"] == [{"price": None}]

    def test_json_serializes_dates(self):
        text = DataExporter([{"when": datetime(2024, 3, 1)}]).to_json()
        assert json.loads(text) == [{"when": "2024-03-01T00:00:00"}]

    def test_csv_flattens_nested_columns(self):
        rows = list(csv.DictReader(io.StringIO(DataExporter(RECORDS).to_csv())))
        assert rows[0]["url"] == "https://a.test/1"
        assert rows[0]["collections.products[0].name"] == "Fish & Chips"
        assert rows[0]["collections.products[0].meta.price"] == "1.5"
        assert rows[1]["collections.products[0].name"] == ""

    def test_xml_nests_and_escapes(self):
        xml = DataExporter(RECORDS).to_xml()
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert "<name>Fish &amp; Chips</name>" in xml
        assert "<products>" in xml
        assert "<page>1</page>" in xml


class TestExport:

    @pytest.mark.parametrize("suffix", ["json", "csv", "xml"])
    def test_suffix_selects_strategy(self, tmp_path, suffix):
        path = tmp_path / "out" / f"records.{suffix}"
        content = export(path, RECORDS)
        assert path.read_text(encoding="utf-8") == content

    def test_unsupported_suffix(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc:
            export(tmp_path / "records.yaml", RECORDS)
        assert "csv, json, xml" in str(exc.value)

    def test_missing_suffix(self, tmp_path):
        with pytest.raises(ConfigurationError):
            export(tmp_path / "records", RECORDS)

    def test_custom_registry(self, tmp_path):
        written = []

        def export_lines(data, file_path):
            written.append(file_path)
            return "ok"

        registry = build_exporter_registry()
        registry["txt"] = export_lines

        assert export(tmp_path / "a.txt", RECORDS, registry) == "ok"
        assert written == [tmp_path / "a.txt"]
