"""
Diff Selector - Decide which source strings still need translation.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from services.tree_walker import collect_leaf_pairs

logger = logging.getLogger(__name__)

DEFAULT_MARKETING_PREFIXES = (
    "seo.",
    "marketing.",
    "carousel.",
    "description",
    "welcomeDesc",
    "features.",
    "blog.",
)

_ALPHA_PATTERN = re.compile(r"[^\W\d_]")

# Single tokens such as colors, versions, URLs and e-mail addresses
_CODE_LIKE_PATTERN = re.compile(r"^(#[0-9a-fA-F]{3,8}|\S*\d\S*|\S+://\S+|\S+@\S+\.\S+)$")

MIN_TEXT_LENGTH = 2


class SizeClass(str, Enum):
    """Routing class of a work item."""
    SHORT = "short"
    LONG = "long"


@dataclass(frozen=True)
class WorkItem:
    """A source string selected for translation in this run."""
    path: str
    text: str
    size_class: SizeClass


def is_translatable(text: str) -> bool:
    """Only prose-like strings with at least one letter are worth a provider call."""
    stripped = text.strip()
    if len(stripped) < MIN_TEXT_LENGTH:
        return False
    if _ALPHA_PATTERN.search(stripped) is None:
        return False
    return _CODE_LIKE_PATTERN.match(stripped) is None


def is_marketing_path(path: str, prefixes: Iterable[str]) -> bool:
    """
    True when the path, or any dotted tail of it, starts with a marketing prefix.

    ``description`` and ``home.welcomeDesc`` both match; ``descr`` does not.
    """
    segments = path.split(".")
    tails = (".".join(segments[i:]) for i in range(len(segments)))
    return any(tail.startswith(prefix) for tail in tails for prefix in prefixes)


def classify(
    path: str,
    text: str,
    long_text_threshold: int = 50,
    marketing_prefixes: Iterable[str] = DEFAULT_MARKETING_PREFIXES,
) -> SizeClass:
    if len(text) > long_text_threshold or is_marketing_path(path, marketing_prefixes):
        return SizeClass.LONG
    return SizeClass.SHORT


def select_work(
    source: Any,
    existing: Any = None,
    long_text_threshold: int = 50,
    marketing_prefixes: Iterable[str] = DEFAULT_MARKETING_PREFIXES,
) -> list[WorkItem]:
    """
    Build the work list for one run.

    A leaf is selected when it is translatable and ``existing`` has no
    string at the same position, or has one identical to the source (copied,
    never translated). Paths with a genuine translation are never
    re-submitted, so repeated runs converge.

    Keys such as ``"a.b"`` next to ``{"a": {"b": ...}}`` render the same
    path; only the first such leaf is selected.
    """
    prefixes = tuple(marketing_prefixes)
    items = []
    selected_paths = set()

    for path, text, current in collect_leaf_pairs(source, existing):
        if not is_translatable(text):
            continue
        if isinstance(current, str) and current and current != text:
            continue
        if path in selected_paths:
            logger.warning("Skipping %r: another leaf already uses this path", path)
            continue

        selected_paths.add(path)
        items.append(WorkItem(
            path=path,
            text=text,
            size_class=classify(path, text, long_text_threshold, prefixes),
        ))

    return items


def split_by_size(items: list[WorkItem]) -> tuple[list[WorkItem], list[WorkItem]]:
    """Return ``(short_items, long_items)`` preserving document order."""
    short_items = [item for item in items if item.size_class is SizeClass.SHORT]
    long_items = [item for item in items if item.size_class is SizeClass.LONG]
    return short_items, long_items
