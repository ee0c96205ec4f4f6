"""
Text utilities for handling Portuguese text with accents.

Used for plate, driver name, and lane (origin/destination) comparison.
"""

import unicodedata
from typing import Optional


def normalize_key(text: Optional[str]) -> str:
    """
    Normalize free text into a comparison key.

    Handles Portuguese accents and casing:
    - "São Paulo" → "SAO PAULO"
    - "  joão da silva " → "JOAO DA SILVA"
    - "rlj7b45" → "RLJ7B45"

    Only for matching and grouping. Display keeps the original text.

    Args:
        text: Original text (may have accents, mixed case)

    Returns:
        Uppercase string without combining diacritical marks,
        or "" if input is empty
    """
    if not text:
        return ""

    upper = text.strip().upper()

    # NFD decomposition separates base chars from accents (U+0300–U+036F)
    decomposed = unicodedata.normalize('NFD', upper)

    stripped = ''.join(
        c for c in decomposed
        if not '\u0300' <= c <= '\u036f'
    )

    # Marks at the edges can hide surrounding whitespace from the first strip
    return stripped.strip()


def is_blank(text: Optional[str]) -> bool:
    """True for None, empty, or whitespace-only strings."""
    return not text or not text.strip()
