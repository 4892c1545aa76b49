"""
Text normalization utilities for brand matching.

Titles and brand names are folded to lowercase ASCII-like form (accents
stripped) before the rule checks run.
"""

import re
import unicodedata
from functools import lru_cache
from typing import List

_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")


def normalize_brand_name(value: str) -> str:
    """Lowercase and strip combining diacritics ("Ñandú" -> "nandu")."""
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFD", value.lower())
    return _COMBINING_MARKS.sub("", decomposed)


def split_related_brands(value: str) -> List[str]:
    """Split a ';'-separated brand field into trimmed lowercase tokens."""
    if not value:
        return []
    return [token.strip().lower() for token in value.split(";")]


@lru_cache(maxsize=4096)
def _word_pattern(brand: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(brand)}\b", re.IGNORECASE)


def is_separate_term(text: str, brand: str) -> bool:
    """Check that brand occurs in text as a standalone term, not inside a word."""
    if not brand or not text:
        return False

    text_lower = text.lower()
    brand_lower = brand.lower()

    if text_lower == brand_lower:
        return True
    if text_lower.startswith(f"{brand_lower} ") or text_lower.endswith(f" {brand_lower}"):
        return True
    if f" {brand_lower} " in text_lower:
        return True

    return _word_pattern(brand_lower).search(text_lower) is not None
