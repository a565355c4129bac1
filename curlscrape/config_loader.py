"""
Extraction config loading from plain mappings, YAML or JSON files

YAML Format:
    params:
      page: [1, 2, 3]
    options:
      headers: {Accept-Language: en}
    urls:
      - "https://example.com/list?page=:page"
    collections:
      - name: products
        group: ".product"
        elements:
          name: {query: "h2"}
          price: {query: ".price", format: number}
          link: {query: "a", attr: href}
        each:
          source: example
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

from .exceptions import ConfigurationError
from .models import (
    CollectionSpec,
    Computed,
    ElementSpec,
    ExtractionConfig,
    as_config_value,
)

ELEMENT_KEYS = {"query", "attr", "filter", "process", "format"}


def load_element(name: str, data: Any) -> ElementSpec:
    if isinstance(data, ElementSpec):
        return data
    if isinstance(data, str):
        return ElementSpec(query=data)
    if not isinstance(data, Mapping) or not data.get("query"):
        raise ConfigurationError(f"Element '{name}' needs a 'query' selector", key=name)

    unknown = set(data) - ELEMENT_KEYS - {"name"}
    if unknown:
        raise ConfigurationError(
            f"Element '{name}' has unknown keys: {', '.join(sorted(unknown))}", key=name
        )

    process = data.get("process")
    if process is not None and not callable(process):
        raise ConfigurationError(f"Element '{name}': 'process' must be a function", key=name)

    return ElementSpec(
        query=data["query"],
        attr=data.get("attr") or "text",
        filter=as_config_value(data.get("filter")),
        process=Computed(process) if process is not None else None,
        format=as_config_value(data.get("format")),
    )


def _load_elements(collection_name: str, data: Any) -> Dict[str, ElementSpec]:
    if isinstance(data, Mapping):
        return {name: load_element(name, spec) for name, spec in data.items()}
    if isinstance(data, list):
        elements = {}
        for spec in data:
            if not isinstance(spec, Mapping) or not spec.get("name"):
                raise ConfigurationError(
                    f"Collection '{collection_name}': list elements need a 'name'", key=collection_name
                )
            elements[spec["name"]] = load_element(spec["name"], spec)
        return elements
    raise ConfigurationError(f"Collection '{collection_name}' has no elements", key=collection_name)


def load_collection(data: Any, name: str = None) -> CollectionSpec:
    if isinstance(data, CollectionSpec):
        return data
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Invalid collection definition: {data!r}")

    name = data.get("name") or name
    if not name:
        raise ConfigurationError("Every collection needs a 'name'")

    return CollectionSpec(
        name=name,
        elements=_load_elements(name, data.get("elements")),
        group=data.get("group") or None,
        each={key: as_config_value(value) for key, value in (data.get("each") or {}).items()},
    )


def load_extraction_config(data: Union[ExtractionConfig, Mapping[str, Any]]) -> ExtractionConfig:
    """
    Build an ExtractionConfig from a plain mapping.

    Functions may be given directly for filter/process/format/each
    entries when the mapping is built in Python.
    """
    if isinstance(data, ExtractionConfig):
        return data
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Extraction config must be a mapping, got {type(data).__name__}")

    raw_collections = data.get("collections") or []
    if isinstance(raw_collections, Mapping):
        collections = tuple(load_collection(spec, name) for name, spec in raw_collections.items())
    else:
        collections = tuple(load_collection(spec) for spec in raw_collections)

    urls = data.get("urls") or ()
    if isinstance(urls, str):
        urls = (urls,)

    return ExtractionConfig(
        collections=collections,
        params=dict(data["params"]) if data.get("params") else None,
        options=dict(data.get("options") or {}),
        urls=tuple(urls),
    )


def load_config_file(path: Union[str, Path]) -> ExtractionConfig:
    """Load an extraction config from a .yaml/.yml or .json file"""
    path = Path(path)
    try:
        content = path.read_text(encoding='utf-8')
    except FileNotFoundError:
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}")

    return load_extraction_config(data or {})
