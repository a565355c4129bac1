"""
Path nesting for record keys

    resolve_nesting({"a.b.c": 1, "a.b.d": 2, "e[0].f": 3})
        -> {"a": {"b": {"c": 1, "d": 2}}, "e": [{"f": 3}]}

flatten_record() is the inverse and is used where a flat row is needed
(CSV export).
"""

import re
from typing import Any, Dict, List, Optional, Union

from ..exceptions import ConfigurationError

_PATH = re.compile(r"[^.\[\]]+(?:\.[^.\[\]]+|\[\d+\])*")
_TOKEN = re.compile(r"([^.\[\]]+)|\[(\d+)\]")

Token = Union[str, int]


def split_path(key: str) -> Optional[List[Token]]:
    """Split 'a.b[0].c' into ['a', 'b', 0, 'c']; None when key is not a path"""
    if "." not in key and "[" not in key:
        return None
    if not _PATH.fullmatch(key):
        return None
    return [name if name else int(index) for name, index in _TOKEN.findall(key)]


def _merge(existing: Any, value: Any, key: str) -> Any:
    if existing is None:
        return value
    if isinstance(existing, dict) and isinstance(value, dict):
        for sub_key, sub_value in value.items():
            existing[sub_key] = _merge(existing.get(sub_key), sub_value, key)
        return existing
    if isinstance(existing, list) and isinstance(value, list):
        for index, item in enumerate(value):
            if index < len(existing):
                existing[index] = _merge(existing[index], item, key)
            else:
                existing.append(item)
        return existing
    raise ConfigurationError(
        f"Conflicting values for nested key '{key}'. A path cannot be both a value and a container.",
        key=key,
    )


def _get_slot(container: Union[Dict, List], token: Token) -> Any:
    if isinstance(container, dict):
        return container.get(token)
    if token < len(container):
        return container[token]
    return None


def _set_slot(container: Union[Dict, List], token: Token, value: Any) -> None:
    if isinstance(container, dict):
        container[token] = value
        return
    while len(container) <= token:
        container.append(None)
    container[token] = value


def _assign(target: Dict[str, Any], tokens: List[Token], value: Any, key: str) -> None:
    container: Union[Dict, List] = target
    for position, token in enumerate(tokens[:-1]):
        following = tokens[position + 1]
        child = _get_slot(container, token)
        if child is None:
            child = [] if isinstance(following, int) else {}
            _set_slot(container, token, child)
        elif isinstance(following, int) and not isinstance(child, list) or \
                isinstance(following, str) and not isinstance(child, dict):
            raise ConfigurationError(
                f"Conflicting values for nested key '{key}'. A path cannot be both a value and a container.",
                key=key,
            )
        container = child
    last = tokens[-1]
    _set_slot(container, last, _merge(_get_slot(container, last), value, key))


def _resolve_value(value: Any) -> Any:
    if isinstance(value, dict):
        return resolve_nesting(value)
    if isinstance(value, list):
        return [_resolve_value(item) for item in value]
    return value


def resolve_nesting(record: Dict[str, Any]) -> Dict[str, Any]:
    """Expand dotted/bracketed keys into nested dicts and lists (idempotent)"""
    nested: Dict[str, Any] = {}
    for key, value in record.items():
        value = _resolve_value(value)
        tokens = split_path(key) if isinstance(key, str) else None
        if tokens is None:
            nested[key] = _merge(nested.get(key), value, key)
        else:
            _assign(nested, tokens, value, key)
    return nested


def flatten_record(record: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Inverse of resolve_nesting: {"a": {"b": [1]}} -> {"a.b[0]": 1}"""
    flat: Dict[str, Any] = {}
    if not record:
        return flat

    def walk(value: Any, path: str) -> None:
        if isinstance(value, dict) and value:
            for key, item in value.items():
                walk(item, f"{path}.{key}" if path else str(key))
        elif isinstance(value, list) and value:
            for index, item in enumerate(value):
                walk(item, f"{path}[{index}]")
        else:
            flat[path] = value

    walk(record, prefix)
    return flat
