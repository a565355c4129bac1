"""
URL permutations over request parameters

    permutate_urls(["/:id/:type"], {"id": [1, 2], "type": "x"})
        -> [UrlTarget("/2/x", {"id": 2, "type": "x"}),
            UrlTarget("/1/x", {"id": 1, "type": "x"})]
"""

import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..diagnostics import get_logger
from ..exceptions import ConfigurationError
from ..models import UrlTarget

logger = get_logger(__name__)

Source = Union[str, UrlTarget, Mapping[str, Any], Sequence[Union[str, UrlTarget, Mapping[str, Any]]]]


def extract_params(params: Mapping[str, Any]) -> Tuple[List[str], List[List[Any]]]:
    """Split params into names and value lists; scalars become one-element lists"""
    keys = []
    values = []
    for key, value in params.items():
        keys.append(key)
        values.append(list(value) if isinstance(value, (list, tuple)) else [value])
    return keys, values


def permutations(value_lists: Sequence[Sequence[Any]]) -> List[List[Any]]:
    """
    Cartesian product of value lists.

    Recurses through the lists in order and walks each list from its last
    value to its first:

        permutations([[1, 2], [3], [5, 6]])
            -> [[2, 3, 6], [2, 3, 5], [1, 3, 6], [1, 3, 5]]
    """
    result: List[List[Any]] = []
    if not value_lists:
        return result
    last = len(value_lists) - 1

    def recurse(prefix: List[Any], depth: int) -> None:
        for index in range(len(value_lists[depth]) - 1, -1, -1):
            current = prefix + [value_lists[depth][index]]
            if depth < last:
                recurse(current, depth + 1)
            else:
                result.append(current)

    recurse([], 0)
    return result


def substitute(url: str, key: str, value: Any) -> str:
    """Replace every ':key' token (not a prefix of a longer name) with value"""
    pattern = re.compile(":" + re.escape(key) + r"(?![A-Za-z0-9_])")
    return pattern.sub(lambda _: str(value), url)


def permutate_urls(urls: Iterable[str], params: Mapping[str, Any]) -> List[UrlTarget]:
    keys, values = extract_params(params)
    combos = permutations(values)

    targets = []
    for url in urls:
        for combo in combos:
            resolved = url
            request_parameters: Dict[str, Any] = {}
            for key, value in zip(keys, combo):
                resolved = substitute(resolved, key, value)
                request_parameters[key] = value
            targets.append(UrlTarget(url=resolved, request_parameters=request_parameters))
    return targets


def _to_target(item: Any) -> UrlTarget:
    if isinstance(item, UrlTarget):
        return item
    if isinstance(item, str):
        return UrlTarget(url=item)
    if isinstance(item, Mapping) and "url" in item:
        request_parameters = item.get("requestParameters", item.get("request_parameters"))
        return UrlTarget(url=item["url"], request_parameters=request_parameters)
    raise ConfigurationError(f"Invalid scrape source entry: {item!r}")


def collect_urls(source: Source, params: Optional[Mapping[str, Any]] = None) -> List[UrlTarget]:
    """
    Normalize a scrape source into concrete request targets.

    Args:
        source: URL, list of URLs, or {url, requestParameters} entries
        params: Optional parameter map expanded over every URL template

    Returns:
        Targets in declaration order (URL first, then permutation)
    """
    if isinstance(source, (str, UrlTarget, Mapping)):
        items = [source]
    else:
        items = list(source)
    targets = [_to_target(item) for item in items]

    if not params:
        return targets

    expanded = []
    for target in targets:
        for permutation in permutate_urls([target.url], params):
            if target.request_parameters:
                permutation = UrlTarget(
                    url=permutation.url,
                    request_parameters={**target.request_parameters, **permutation.request_parameters},
                )
            expanded.append(permutation)
    logger.debug(f"Expanded {len(targets)} URL(s) into {len(expanded)} target(s)")
    return expanded
