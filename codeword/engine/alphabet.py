"""Initial alphabet construction from the puzzle's given letters."""

from __future__ import annotations

from typing import Dict, Mapping

from ..core.constants import ALPHABET_SET, CODES, is_valid_code
from ..core.exceptions import ConfigurationError
from ..core.models import AlphabetState, Candidates, CodeKnowledge, Resolved
from ..data.normalization import clean_letter


def normalize_givens(givens: Mapping[int, str]) -> Dict[int, str]:
    """Validate givens and return them with lowercase letters.

    Raises :class:`ConfigurationError` when a code is out of range, a given is
    not a single letter, or two codes share a letter.
    """

    normalized: Dict[int, str] = {}
    owners: Dict[str, int] = {}
    for code, raw_letter in givens.items():
        if not is_valid_code(code):
            raise ConfigurationError(f"Given code {code!r} is outside 1-26")
        letter = clean_letter(raw_letter) if isinstance(raw_letter, str) else ""
        if not letter:
            raise ConfigurationError(f"Given for code {code} is not a single letter: {raw_letter!r}")
        if letter in owners:
            raise ConfigurationError(
                f"Codes {owners[letter]} and {code} are both given the letter {letter!r}"
            )
        owners[letter] = code
        normalized[code] = letter
    return normalized


def build_alphabet(givens: Mapping[int, str]) -> AlphabetState:
    """Resolve every given code and leave the others open to the unused letters."""

    normalized = normalize_givens(givens)
    open_letters = ALPHABET_SET - set(normalized.values())
    entries = []
    for code in CODES:
        knowledge: CodeKnowledge
        if code in normalized:
            knowledge = Resolved(normalized[code])
        else:
            knowledge = Candidates(open_letters)
        entries.append(knowledge)
    return AlphabetState(tuple(entries))


__all__ = ["build_alphabet", "normalize_givens"]
