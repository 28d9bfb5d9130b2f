"""
Post-processing for translated values and translation metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass
class ResponseFormatter:
    """Cleans up model output before it is merged into a response."""

    trim: bool = False
    capitalize_first: bool = False

    def format_value(self, value: Any) -> Any:
        if not isinstance(value, str):
            return value

        result = value
        if self.trim:
            result = result.strip()
        if self.capitalize_first and result:
            result = result[0].upper() + result[1:]
        return result

    def build_metadata(
        self,
        source_language: str | None,
        target_language: str,
        translated_fields: list[str],
    ) -> dict[str, Any]:
        """Metadata block describing what was translated."""
        return {
            "sourceLanguage": source_language or "auto",
            "targetLanguage": target_language,
            "translatedFields": translated_fields,
            "translatedAt": datetime.now(timezone.utc).isoformat(),
        }
