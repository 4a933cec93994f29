"""
Tree Walker - Path-addressed traversal of nested JSON documents.

Paths join object keys with "." and append "[i]" for array indices,
e.g. ``items[2].label``. The same path resolves identically against any
tree that shares the source document's shape.
"""

import re
from typing import Any, Iterator

_INDEX_PATTERN = re.compile(r"\[(\d+)\]")


def child_path(prefix: str, key: str) -> str:
    """Path of an object member below ``prefix``."""
    return f"{prefix}.{key}" if prefix else key


def index_path(prefix: str, index: int) -> str:
    """Path of an array element below ``prefix``."""
    return f"{prefix}[{index}]"


def member_of(node: Any, key: str) -> Any | None:
    """``node[key]`` when ``node`` is an object holding ``key``, else None."""
    return node.get(key) if isinstance(node, dict) else None


def element_of(node: Any, index: int) -> Any | None:
    """``node[index]`` when ``node`` is an array long enough, else None."""
    return node[index] if isinstance(node, list) and index < len(node) else None


def collect_leaves(node: Any, path_prefix: str = "") -> Iterator[tuple[str, str]]:
    """
    Yield ``(path, text)`` for every string leaf in ``node``.

    Non-string scalars (numbers, booleans, null) are skipped, as are empty
    containers.
    """
    for path, text, _ in collect_leaf_pairs(node, None, path_prefix):
        yield path, text


def collect_leaf_pairs(
    node: Any,
    counterpart: Any,
    path_prefix: str = "",
) -> Iterator[tuple[str, str, Any | None]]:
    """
    Yield ``(path, text, other)`` for every string leaf in ``node``.

    ``other`` is whatever ``counterpart`` holds at the same position, found
    by descending both trees together, so object keys containing "." or "[" still line up.
    """
    if isinstance(node, str):
        yield path_prefix, node, counterpart
    elif isinstance(node, dict):
        for key, value in node.items():
            yield from collect_leaf_pairs(
                value, member_of(counterpart, key), child_path(path_prefix, str(key))
            )
    elif isinstance(node, list):
        for index, value in enumerate(node):
            yield from collect_leaf_pairs(
                value, element_of(counterpart, index), index_path(path_prefix, index)
            )


def split_path(path: str) -> list[str | int]:
    """
    Split a path into object keys (str) and array indices (int).

    >>> split_path("items[2].label")
    ['items', 2, 'label']
    """
    steps: list[str | int] = []
    if not path:
        return steps

    for segment in path.split("."):
        first_bracket = segment.find("[")
        name = segment if first_bracket == -1 else segment[:first_bracket]
        if name:
            steps.append(name)
        if first_bracket != -1:
            steps.extend(int(i) for i in _INDEX_PATTERN.findall(segment[first_bracket:]))
    return steps


def get_at_path(tree: Any, path: str) -> Any | None:
    """Resolve ``path`` against ``tree``; None when any step is missing."""
    current = tree
    for step in split_path(path):
        if isinstance(step, int):
            if not isinstance(current, list) or step >= len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict) or step not in current:
                return None
            current = current[step]
    return current
