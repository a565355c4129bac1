import csv
import io
import json
import math
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from xml.sax.saxutils import escape

from ..extraction.nesting import flatten_record
from ..models import ScrapedRecord

_INVALID_TAG_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def _plain(value: Any) -> Any:
    """Turn ScrapedRecord instances (also inside lists) into plain dicts"""
    if isinstance(value, ScrapedRecord):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _finite(value: Any) -> Any:
    """Replace NaN and infinities with None, recursively (they have no JSON form)"""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(item) for item in value]
    return value


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _tag(name: Any) -> str:
    tag = _INVALID_TAG_CHARS.sub("_", str(name)) or "_"
    if not (tag[0].isalpha() or tag[0] == "_"):
        tag = f"_{tag}"
    return tag


class DataExporter:
    """
    Multi-format data exporter

    Usage:
        exporter = DataExporter(records)
        exporter.to_json("output.json")
        exporter.to_csv("output.csv")
        exporter.to_xml("output.xml")
    """

    def __init__(self, data: Union[List[Any], Dict, ScrapedRecord], metadata: Optional[Dict] = None):
        """
        Initialize exporter

        Args:
            data: Data to export (list of dicts/ScrapedRecords or a single one)
            metadata: Optional metadata to include
        """
        data = _plain(data)
        self.data = data if isinstance(data, list) else [data]
        self.metadata = dict(metadata or {})
        self.metadata.setdefault("exported_at", datetime.now().isoformat())
        self.metadata.setdefault("count", len(self.data))

    def to_json(
        self,
        file_path: Optional[Union[str, Path]] = None,
        pretty: bool = True,
        include_metadata: bool = False
    ) -> str:
        """
        Export to JSON

        Args:
            file_path: Optional path to save file
            pretty: Pretty print with indentation
            include_metadata: Wrap as {"data": ..., "metadata": ...}

        Returns:
            JSON string
        """
        output: Any = self.data
        if include_metadata:
            output = {"data": self.data, "metadata": self.metadata}

        json_str = json.dumps(
            _finite(output),
            indent=2 if pretty else None,
            ensure_ascii=False,
            default=_scalar_text,
            allow_nan=False,
        )

        if file_path:
            Path(file_path).write_text(json_str, encoding='utf-8')

        return json_str

    def rows(self) -> List[Dict[str, Any]]:
        """Flatten every item into a single-level row with dotted column names"""
        return [flatten_record(item) if isinstance(item, dict) else {"value": item} for item in self.data]

    def to_csv(
        self,
        file_path: Optional[Union[str, Path]] = None,
        delimiter: str = ',',
        include_headers: bool = True,
        columns: Optional[List[str]] = None
    ) -> str:
        """
        Export to CSV

        Nested items are flattened ("collections.products[0].name").

        Args:
            file_path: Optional path to save file
            delimiter: Field delimiter
            include_headers: Include header row
            columns: Optional list of columns to include (in order)

        Returns:
            CSV string
        """
        rows = self.rows()

        # Union of keys in first-seen order
        if columns is None:
            columns = []
            for row in rows:
                for key in row:
                    if key not in columns:
                        columns.append(key)

        output = io.StringIO()
        writer = csv.DictWriter(
            output,
            fieldnames=columns,
            delimiter=delimiter,
            extrasaction='ignore'
        )

        if include_headers and columns:
            writer.writeheader()

        for row in rows:
            writer.writerow({key: _scalar_text(value) for key, value in row.items()})

        csv_str = output.getvalue()

        if file_path:
            Path(file_path).write_text(csv_str, encoding='utf-8')

        return csv_str

    def to_xml(
        self,
        file_path: Optional[Union[str, Path]] = None,
        root_tag: str = "data",
        item_tag: str = "item"
    ) -> str:
        """
        Export to XML

        Args:
            file_path: Optional path to save file
            root_tag: Root element tag
            item_tag: Tag used for list entries

        Returns:
            XML string
        """
        lines = ['<?xml version="1.0" encoding="UTF-8"?>']
        lines.append(f'<{root_tag}>')

        for item in self.data:
            self._xml_element(lines, item_tag, item, 1, item_tag)

        lines.append(f'</{root_tag}>')

        xml_str = '\n'.join(lines)

        if file_path:
            Path(file_path).write_text(xml_str, encoding='utf-8')

        return xml_str

    def _xml_element(self, lines: List[str], tag: str, value: Any, depth: int, item_tag: str) -> None:
        indent = "  " * depth
        if isinstance(value, dict):
            lines.append(f'{indent}<{tag}>')
            for key, child in value.items():
                self._xml_element(lines, _tag(key), child, depth + 1, item_tag)
            lines.append(f'{indent}</{tag}>')
        elif isinstance(value, list):
            lines.append(f'{indent}<{tag}>')
            for child in value:
                self._xml_element(lines, item_tag, child, depth + 1, item_tag)
            lines.append(f'{indent}</{tag}>')
        else:
            lines.append(f'{indent}<{tag}>{escape(_scalar_text(value))}</{tag}>')
