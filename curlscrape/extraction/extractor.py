"""Raw value extraction from a single matched node"""

from typing import Any, Optional

from bs4 import Tag


def extract(node: Tag, attr: Optional[str] = None) -> Any:
    """
    Extract the raw value of a node.

    Args:
        node: Matched element
        attr: 'text' (default), 'html' or the name of an attribute

    Returns:
        Text content, inner markup, or the attribute value (None if absent)
    """
    attr = attr or "text"

    # Inner markup, tags included
    if attr == "html":
        return node.decode_contents()

    # Entities resolved to literal text
    if attr == "text":
        return node.get_text()

    value = node.get(attr)
    # bs4 hands back multi-valued attributes (class, rel) as lists
    if isinstance(value, list):
        return " ".join(value)
    return value
