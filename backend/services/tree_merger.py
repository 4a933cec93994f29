"""
Tree Merger - Rebuild the source document with the best-known translations.
"""

from typing import Any, Mapping, Optional

from services.tree_walker import child_path, element_of, index_path, member_of


def _new_translation(translations: Mapping[str, str], path: str, text: str) -> Optional[str]:
    if path not in translations:
        return None
    # Colliding keys share a path; the translation belongs to the leaf it was made from
    sources = getattr(translations, "sources", None)
    if sources is not None and sources.get(path, text) != text:
        return None
    return translations[path]


def merge(
    source: Any,
    existing: Any = None,
    translations: Optional[Mapping[str, str]] = None,
    path: str = "",
) -> Any:
    """
    Return a document shaped exactly like ``source``.

    Each string leaf becomes the new translation for its path, else the
    existing translation (non-empty strings only), else the source text. Non-string
    leaves are copied unchanged. ``existing`` is descended together with
    ``source``, so keys containing "." resolve like any other key.
    """
    translations = translations if translations is not None else {}

    if isinstance(source, str):
        translated = _new_translation(translations, path, source)
        if translated is not None:
            return translated
        return existing if isinstance(existing, str) and existing else source

    if isinstance(source, dict):
        return {
            key: merge(value, member_of(existing, key), translations, child_path(path, str(key)))
            for key, value in source.items()
        }

    if isinstance(source, list):
        return [
            merge(value, element_of(existing, index), translations, index_path(path, index))
            for index, value in enumerate(source)
        ]

    return source
