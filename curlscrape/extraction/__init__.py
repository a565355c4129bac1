"""
Extraction engine: element extraction, value pipeline, group parsing,
collection assembly and key nesting
"""

from .extractor import extract
from .pipeline import run_pipeline, trim, apply_filter, apply_process, apply_format
from .group_parser import parse_group, parse_element
from .assembler import assemble_collection, make_collection, apply_each
from .nesting import resolve_nesting, flatten_record

__all__ = [
    'extract',
    'run_pipeline',
    'trim',
    'apply_filter',
    'apply_process',
    'apply_format',
    'parse_group',
    'parse_element',
    'assemble_collection',
    'make_collection',
    'apply_each',
    'resolve_nesting',
    'flatten_record',
]
