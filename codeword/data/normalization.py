"""Word normalization shared by the corpus and puzzle loaders."""

from __future__ import annotations

import re
import unicodedata

WORD_RE = re.compile(r"[^a-z]")


def clean_word(text: str) -> str:
    """Return a lowercase ASCII representation of ``text``.

    Accents are folded to their base letter; anything that is not a letter
    (spaces, hyphens, apostrophes, digits) is dropped.
    """

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return WORD_RE.sub("", stripped.lower())


def clean_letter(text: str) -> str:
    """Normalize a single given letter; returns ``""`` when it is not exactly one letter."""

    cleaned = clean_word(text)
    if len(cleaned) != 1:
        return ""
    return cleaned


__all__ = ["clean_letter", "clean_word"]
