"""
LLM prompt providers - Shared prompt construction and response parsing.
"""

import re
from abc import abstractmethod
from typing import Optional

from services.languages import language_name
from services.providers.base import ProviderResponseError, TranslationProvider

_ENUMERATION_PATTERN = re.compile(r"^\s*(\d+)[.)](?:\s+|$)")

# Keeps one input per prompt line; restored after parsing.
NEWLINE_MARKER = "<br/>"


def generate_prompt(
    texts: list[str],
    target_language: str,
    protected_terms: str,
    source_language: str = "en",
) -> str:
    """Generate a batch translation prompt, one numbered input per line."""
    numbered = "\n".join(
        f"{i}. {text.replace(chr(10), NEWLINE_MARKER)}"
        for i, text in enumerate(texts, start=1)
    )

    return f"""# UI and Marketing Copy Translation Task

## Instructions
Translate each numbered line below from {language_name(source_language)} into {language_name(target_language)}.
The content belongs to a restaurant management platform (menus, ordering, billing, staff).

## Rules
1. Return exactly {len(texts)} lines, one translation per input line, in the same order
2. Do NOT number the lines and do NOT add explanations or commentary
3. NEVER translate these brand names and terms: {protected_terms}
4. NEVER translate or change placeholders in curly braces such as {{businessName}}
5. Keep tokens like ___TERM0___ and ___VAR0___ exactly as they are
6. Keep {NEWLINE_MARKER} markers where they appear

## Source Lines
{numbered}

## Translation ({language_name(target_language)}):"""


def clean_response(text: str) -> str:
    """Clean LLM response by removing markdown blocks and meta text."""
    text = text.strip()
    # Remove markdown code blocks if present
    if text.startswith("```"):
        lines = text.split("\n")
        # Remove first and last lines if they're code fences
        if lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        text = "\n".join(lines)

    return text.strip()


def parse_lines(response_text: str, sources: list[str]) -> list[str]:
    """
    Split a model response into one translation per source text.

    When every non-blank line keeps its enumeration ("3. "), lines are
    placed by that number, so a blank answer for one item cannot shift the
    rest. Otherwise lines are taken in order: blank lines count only when
    the response has exactly one line per source. Missing entries fall back
    to their source text and surplus lines are dropped, so the result is
    always aligned with ``sources``.
    """
    lines = clean_response(response_text).split("\n")
    matches = [_ENUMERATION_PATTERN.match(line) for line in lines]
    numbered = [(m, line) for m, line in zip(matches, lines) if line.strip()]

    if numbered and all(m is not None for m, _ in numbered):
        results = list(sources)
        for match, line in numbered:
            index = int(match.group(1)) - 1
            if 0 <= index < len(sources):
                results[index] = line[match.end():].strip().replace(NEWLINE_MARKER, "\n")
        return results

    stripped = [_ENUMERATION_PATTERN.sub("", line, count=1).strip() for line in lines]
    if len(stripped) != len(sources):
        stripped = [line for line in stripped if line]
    stripped = [line.replace(NEWLINE_MARKER, "\n") for line in stripped]

    results = stripped[:len(sources)]
    results.extend(sources[len(results):])
    return results


class LLMPromptProvider(TranslationProvider):
    """One completion call per batch; subclasses only implement ``complete``."""

    def __init__(self, protector, source_language: str = "en", model: str = "", temperature: float = 0.3):
        super().__init__(protector, source_language)
        self.model = model
        self.temperature = temperature

    @abstractmethod
    async def complete(self, prompt: str, api_key: str) -> str:
        """Send the prompt and return the raw response text."""

    async def translate(
        self,
        texts: list[str],
        target_language: str,
        credential: Optional[str] = None,
    ) -> list[str]:
        api_key = self.require_credential(credential)
        if not texts:
            return []

        protected = [self.protector.protect(text) for text in texts]
        prompt = generate_prompt(
            [str(p) for p in protected],
            target_language,
            self.protector.prompt_rules(),
            self.source_language,
        )

        response_text = await self.complete(prompt, api_key)
        if not response_text or not response_text.strip():
            raise ProviderResponseError(f"{self.name} returned an empty response")

        translated = parse_lines(response_text, [str(p) for p in protected])
        return [
            self.protector.unprotect(line, p) or text
            for line, p, text in zip(translated, protected, texts)
        ]
