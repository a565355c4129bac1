"""
Value pipeline: trim -> filter -> process -> format

Every raw value extracted from a node passes through these steps in
this order. Each step is a plain function so it can be reused on its own.
"""

import math
import re
from typing import Any, Optional

from dateutil import parser as date_parser

from ..diagnostics import get_logger
from ..models import Computed, ElementSpec, Literal

logger = get_logger(__name__)

_CONTROL_CHARS = re.compile(r"[\r\n\t]")
_NON_NUMERIC = re.compile(r"[^\d.]")


def has_value(value: Any) -> bool:
    """None and the empty string count as 'no value'"""
    return value is not None and value != ""


def trim(value: Any) -> Any:
    """Drop \\r, \\n and \\t and surrounding whitespace from strings"""
    if not isinstance(value, str):
        return value
    return _CONTROL_CHARS.sub("", value).strip()


def apply_filter(value: Any, filter_spec: Any) -> Any:
    """
    Narrow a string with a regex or replace it with a function result.

    A pattern with capture groups yields group 1, a pattern without groups
    yields the whole match, and no match yields None.
    """
    if not has_value(value) or filter_spec is None or not isinstance(value, str):
        return value

    if isinstance(filter_spec, Computed):
        return filter_spec(value)

    pattern = filter_spec.value if isinstance(filter_spec, Literal) else filter_spec
    match = re.search(pattern, value)
    if not match:
        return None
    if match.re.groups == 0:
        return match.group(0)
    return match.group(1)


def apply_process(value: Any, process: Optional[Computed]) -> Any:
    if not has_value(value) or process is None:
        return value
    return process(value)


def to_number(value: str) -> Any:
    """'$1,234.56 USD' -> 1234.56; NaN when nothing numeric remains"""
    cleaned = _NON_NUMERIC.sub("", value)
    try:
        if "." in cleaned:
            return float(cleaned)
        return int(cleaned)
    except ValueError:
        return math.nan


def to_date(value: str) -> Any:
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError):
        logger.debug(f"Unparseable date value: {value!r}")
        return None


NAMED_FORMATS = {
    "number": to_number,
    "date": to_date,
}


def apply_format(value: Any, format_spec: Any) -> Any:
    """
    Coerce a value with a named format ('number', 'date') or a function.

    Named formats only touch strings; unknown names pass the value through.
    Function formats are called for any non-empty value.
    """
    if not has_value(value) or format_spec is None:
        return value

    if isinstance(format_spec, Computed):
        return format_spec(value)

    if not isinstance(value, str):
        return value

    name = format_spec.value if isinstance(format_spec, Literal) else format_spec
    formatter = NAMED_FORMATS.get(name)
    if formatter is None:
        return value
    return formatter(value)


def run_pipeline(raw: Any, spec: ElementSpec) -> Any:
    """Run the full pipeline for one extracted value"""
    value = trim(raw)
    value = apply_filter(value, spec.filter)
    value = apply_process(value, spec.process)
    value = apply_format(value, spec.format)
    return value
