"""Free-text cleanup helpers."""

import re
import unicodedata
from typing import Any

_WHITESPACE = re.compile(r"\s+")


def clean_description(value: Any) -> str:
    """Strip control characters and collapse whitespace."""
    if value is None:
        return ""
    text = "".join(
        " " if unicodedata.category(ch).startswith("C") else ch for ch in str(value)
    )
    return _WHITESPACE.sub(" ", text).strip()


def fold(text: str) -> str:
    """Lowercase and drop accents, for keyword matching."""
    decomposed = unicodedata.normalize("NFKD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))
