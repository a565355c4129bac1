"""Group parsing: run every element query of a collection inside one scope node"""

from typing import Any, Dict, Mapping, Optional

from ..dom import Node, select
from ..models import ElementSpec
from .extractor import extract
from .pipeline import has_value, run_pipeline


def parse_element(scope: Node, key: str, spec: ElementSpec, record: Dict[str, Any]) -> None:
    """
    Extract one field into record.

    One match stores a scalar, several matches store a list in document
    order. Values the pipeline drops (None or empty) are skipped.
    """
    nodes = select(scope, spec.query)
    if not nodes:
        return

    if len(nodes) == 1:
        value = run_pipeline(extract(nodes[0], spec.attr), spec)
        if has_value(value):
            record[key] = value
        return

    values = []
    for node in nodes:
        value = run_pipeline(extract(node, spec.attr), spec)
        if has_value(value):
            values.append(value)
    if values:
        record[key] = values


def parse_group(scope: Node, elements: Mapping[str, ElementSpec]) -> Optional[Dict[str, Any]]:
    """Return the flat record for a scope node, or None if no field matched"""
    record: Dict[str, Any] = {}
    for key, spec in elements.items():
        parse_element(scope, key, spec, record)
    return record or None
