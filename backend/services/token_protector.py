"""
Token Protector - Mask brand terms and {variables} before text leaves the process.

Providers only ever see sentinels such as ``___TERM0___`` and
``___VAR0___``; both are swapped back after the provider answers.
Variables are numbered by position so any identifier round-trips.
"""

import re
from collections import defaultdict
from typing import Iterable, Optional

# Longer entries first: a whole-word regex has no precedence rule of its own.
DEFAULT_PROTECTED_TERMS = (
    "Duxa Platform",
    "DUXA",
    "SaaS",
    "POS",
    "KDS",
    "QR",
    "API",
    "URL",
    "SEO",
)

_VARIABLE_PATTERN = re.compile(r"\{(\w+)\}")
_VARIABLE_SENTINEL_PATTERN = re.compile(r"___VAR(\d+)___")
_TERM_SENTINEL_PATTERN = re.compile(r"___TERM(\d+)___")


class ProtectedText(str):
    """
    A masked string that remembers what each sentinel stood for.

    Matching is case-insensitive, so ``"duxa"`` and ``"DUXA"`` share one
    sentinel; ``originals`` lets :meth:`TokenProtector.unprotect` put the
    exact spelling back. ``variables`` holds the placeholder names in order.
    """

    originals: dict[int, list[str]]
    variables: list[str]

    def __new__(
        cls,
        value: str,
        originals: Optional[dict[int, list[str]]] = None,
        variables: Optional[list[str]] = None,
    ):
        instance = super().__new__(cls, value)
        instance.originals = originals or {}
        instance.variables = variables or []
        return instance


class TokenProtector:
    """Reversible masking for a fixed, injected list of protected terms."""

    def __init__(self, terms: Iterable[str] = DEFAULT_PROTECTED_TERMS):
        self.terms = tuple(term for term in terms if term)
        self._patterns = [
            re.compile(rf"(?<!\w){re.escape(term)}(?!\w)", re.IGNORECASE)
            for term in self.terms
        ]

    def protect(self, text: str) -> ProtectedText:
        """Replace {variables} and protected terms with sentinels."""
        variables: list[str] = []

        def _mask_variable(match: re.Match) -> str:
            variables.append(match.group(1))
            return f"___VAR{len(variables) - 1}___"

        masked = _VARIABLE_PATTERN.sub(_mask_variable, text)
        originals: dict[int, list[str]] = defaultdict(list)

        for index, pattern in enumerate(self._patterns):
            def _mask(match: re.Match, index: int = index) -> str:
                originals[index].append(match.group(0))
                return f"___TERM{index}___"

            masked = pattern.sub(_mask, masked)

        return ProtectedText(masked, dict(originals), variables)

    def unprotect(self, text: str, protected: Optional[ProtectedText] = None) -> str:
        """
        Restore sentinels in ``text``.

        ``protected`` is the masked text that was sent; it defaults to
        ``text`` itself when that is a ProtectedText. Provider output is a
        plain str, so adapters pass the sent value. Without it, terms come
        back in their canonical spelling and variable sentinels are left
        as they are.
        """
        if protected is None:
            protected = text if isinstance(text, ProtectedText) else ProtectedText("")
        remaining = {index: list(spellings) for index, spellings in protected.originals.items()}

        def _restore_term(match: re.Match) -> str:
            index = int(match.group(1))
            if index >= len(self.terms):
                return match.group(0)
            spellings = remaining.get(index)
            if spellings:
                return spellings.pop(0)
            return self.terms[index]

        def _restore_variable(match: re.Match) -> str:
            index = int(match.group(1))
            if index >= len(protected.variables):
                return match.group(0)
            return "{" + protected.variables[index] + "}"

        restored = _TERM_SENTINEL_PATTERN.sub(_restore_term, str(text))
        return _VARIABLE_SENTINEL_PATTERN.sub(_restore_variable, restored)

    def prompt_rules(self) -> str:
        """Comma-separated term list for LLM instructions."""
        return ", ".join(self.terms)
