"""
Collection assembly

Grouped collections (with a `group` selector) produce one record per
group node. Ungrouped collections are parsed against the whole document
and their parallel per-field lists are zipped into records by
make_collection().
"""

from typing import Any, Dict, List, Optional

from ..diagnostics import get_logger
from ..dom import Document
from ..exceptions import ConfigurationError
from ..models import CollectionSpec, Computed, Literal
from .group_parser import parse_group
from .nesting import resolve_nesting

logger = get_logger(__name__)


def make_collection(group_data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Zip parallel field values into a list of records.

    Scalars count as one-element lists. Every field must yield exactly as
    many values as the first one.

    Raises:
        ConfigurationError: naming the first field whose length differs
    """
    collection: List[Dict[str, Any]] = []
    length = None

    for key, values in group_data.items():
        if not isinstance(values, list):
            values = [values]

        if length is None:
            length = len(values)

        if len(values) != length:
            raise ConfigurationError(
                "Illegal format. Each entry in a collection must yield exactly the same "
                f"number of results. Error encountered on key: {key}",
                key=key,
            )

        for index, value in enumerate(values):
            if index == len(collection):
                collection.append({})
            collection[index][key] = value

    return [resolve_nesting(record) for record in collection]


def apply_each(
    collection: CollectionSpec,
    records: List[Dict[str, Any]],
    request_parameters: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """Set static or computed fields on every assembled record"""
    for record in records:
        for key, value in collection.each.items():
            if isinstance(value, Computed):
                record[key] = value(record, collection, request_parameters)
            elif isinstance(value, Literal):
                record[key] = value.value
            else:
                record[key] = value
    return records


def assemble_collection(
    document: Document,
    collection: CollectionSpec,
    request_parameters: Optional[Dict[str, Any]] = None,
) -> Optional[List[Dict[str, Any]]]:
    """
    Build the data for one collection.

    Args:
        document: Loaded page
        collection: Collection configuration
        request_parameters: Parameters that produced the page URL, handed to `each` functions

    Returns:
        List of nested records, or None when nothing matched
    """
    if collection.group:
        scopes = document.select(collection.group)
    else:
        scopes = [document.root]

    groups = []
    for scope in scopes:
        group_data = parse_group(scope, collection.elements)
        if group_data is not None:
            groups.append(group_data)

    if not groups:
        logger.debug(f"Collection '{collection.name}' matched nothing")
        return None

    if collection.group:
        records = [resolve_nesting(group_data) for group_data in groups]
    else:
        records = make_collection(groups[0])

    if collection.each:
        records = apply_each(collection, records, request_parameters)

    logger.debug(f"Collection '{collection.name}': {len(records)} record(s)")
    return records
