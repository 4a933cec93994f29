"""
Language catalog - Supported codes, display names and provider locale tables.
"""

# Internal code -> English name (used in LLM prompts and /api/i18n/languages)
LANGUAGE_NAMES: dict[str, str] = {
    "bg": "Bulgarian",
    "bs": "Bosnian",
    "de": "German",
    "el": "Greek",
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "hr": "Croatian",
    "it": "Italian",
    "lb": "Luxembourgish",
    "me": "Montenegrin",
    "mt": "Maltese",
    "nl": "Dutch",
    "pl": "Polish",
    "ro": "Romanian",
    "ru": "Russian",
    "sq": "Albanian",
    "sr": "Serbian",
    "tr": "Turkish",
    "uk": "Ukrainian",
}

# Montenegrin has no locale of its own at most vendors; Serbian (Latin) is closest.
MYMEMORY_LOCALES: dict[str, str] = {
    "me": "sr-Latn",
    "sr": "sr-Latn",
}

AZURE_LOCALES: dict[str, str] = {
    "me": "sr-Latn",
    "sr": "sr-Latn",
}

DEEPL_LOCALES: dict[str, str] = {
    "en": "EN-GB",
}

# Catalog codes with no DeepL target language
DEEPL_UNSUPPORTED: frozenset[str] = frozenset({"bs", "lb", "me", "mt", "sq", "sr"})


def is_supported(code: str) -> bool:
    return code in LANGUAGE_NAMES


def language_name(code: str) -> str:
    """English name for prompts; unknown codes fall back to the upper-cased code."""
    return LANGUAGE_NAMES.get(code, code.upper())


def provider_locale(code: str, table: dict[str, str], upper: bool = False) -> str:
    """Map an internal code to a provider locale, passing unknown codes through."""
    locale = table.get(code, code)
    return locale.upper() if upper else locale
