"""Extraction configuration and result dataclasses"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class Literal:
    """Static configuration value (regex pattern, format name, constant)"""
    value: Any


@dataclass(frozen=True)
class Computed:
    """Configuration value produced by calling a function.

    Call contract per field kind:
        filter(value) -> value
        process(value) -> value
        format(value) -> value
        each(record, collection, request_parameters) -> value
    """
    func: Callable[..., Any]

    def __call__(self, *args: Any) -> Any:
        return self.func(*args)


ConfigValue = Union[Literal, Computed]


def as_config_value(value: Any) -> Optional[ConfigValue]:
    """Wrap a raw configuration value into its tagged variant"""
    if value is None or isinstance(value, (Literal, Computed)):
        return value
    if callable(value):
        return Computed(value)
    return Literal(value)


@dataclass(frozen=True)
class ElementSpec:
    """One field of a collection: a selector plus its value pipeline"""
    query: str
    attr: str = "text"
    filter: Optional[ConfigValue] = None
    process: Optional[Computed] = None
    format: Optional[ConfigValue] = None


@dataclass(frozen=True)
class CollectionSpec:
    """A named extraction unit, optionally scoped to group nodes"""
    name: str
    elements: Dict[str, ElementSpec] = field(default_factory=dict)
    group: Optional[str] = None
    each: Dict[str, ConfigValue] = field(default_factory=dict)


@dataclass(frozen=True)
class ExtractionConfig:
    collections: Tuple[CollectionSpec, ...] = ()
    params: Optional[Dict[str, Any]] = None
    options: Dict[str, Any] = field(default_factory=dict)
    # Default sources when scrape() is called without any
    urls: Tuple[str, ...] = ()


@dataclass(frozen=True)
class UrlTarget:
    """One concrete request: a URL and the parameters that produced it"""
    url: str
    request_parameters: Optional[Dict[str, Any]] = None


@dataclass
class ScrapedRecord:
    """Scraped data for one source URL"""
    url: str
    collections: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)
    request_parameters: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "url": self.url,
            "collections": self.collections,
        }
        if self.request_parameters is not None:
            data["requestParameters"] = self.request_parameters
        return data
