"""Reports the language and encoding from $LANG."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .util import ModuleError


@dataclass
class LocaleInfo:
    language: str = "Unknown"
    encoding: str = "Unknown"

    def replace_placeholders(self, text: str) -> str:
        return text.replace("{language}", self.language).replace(
            "{encoding}", self.encoding
        )


def parse_locale(raw: str) -> LocaleInfo:
    """Split a locale such as ``en_GB.UTF-8`` into language and encoding."""
    parts = raw.split(".")
    info = LocaleInfo(language=parts[0])
    if len(parts) > 1:
        info.encoding = parts[1]
    return info


def get_locale() -> LocaleInfo:
    """Locale of the current environment."""
    raw = os.environ.get("LANG")
    if raw is None:
        raise ModuleError("Locale", "Could not parse $LANG env variable: not present")
    return parse_locale(raw)