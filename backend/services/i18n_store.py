"""
Language file store - <code>.json documents in the i18n directory.
"""

import json
from pathlib import Path
from typing import Any

from services.languages import is_supported


class LanguageFileNotFound(Exception):
    """No language file exists for the requested code."""


class I18nStore:
    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    def path_for(self, code: str) -> Path:
        # Only catalog codes map to files
        if not is_supported(code):
            raise ValueError(f"Invalid language code: {code}")
        return self.base_dir / f"{code}.json"

    def available_codes(self) -> list[str]:
        if not self.base_dir.is_dir():
            return []
        return sorted(
            file.stem for file in self.base_dir.glob("*.json") if is_supported(file.stem)
        )

    def load(self, code: str) -> Any:
        file_path = self.path_for(code)
        if not file_path.is_file():
            raise LanguageFileNotFound(f"Translation file for {code} not found")
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def save(self, code: str, content: Any) -> Path:
        file_path = self.path_for(code)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(content, f, ensure_ascii=False, indent=2)
            f.write("\n")
        return file_path
