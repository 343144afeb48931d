"""Puzzle definition loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

from ..core.exceptions import PuzzleLoadError
from ..core.models import StartingPuzzle
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def _parse_code(value: Any, origin: str) -> int:
    if isinstance(value, bool):
        raise PuzzleLoadError(f"{origin}: {value!r} is not a code")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise PuzzleLoadError(f"{origin}: {value!r} is not a code") from exc
    raise PuzzleLoadError(f"{origin}: {value!r} is not a code")


def parse_puzzle(payload: Any) -> StartingPuzzle:
    """Build a :class:`StartingPuzzle` from a parsed JSON document.

    Expected shape::

        {"words": [[1, 2, 3], [3, 4]], "givens": {"1": "c"}}

    Only the structure is checked here. Code ranges and letter clashes are
    reported by puzzle assembly as configuration errors.
    """

    if not isinstance(payload, dict):
        raise PuzzleLoadError("Puzzle JSON must be an object")

    raw_words = payload.get("words")
    if not isinstance(raw_words, list):
        raise PuzzleLoadError("Puzzle JSON needs a 'words' list")

    words: List[Tuple[int, ...]] = []
    for index, raw_codes in enumerate(raw_words):
        if not isinstance(raw_codes, list):
            raise PuzzleLoadError(f"words[{index}] must be a list of codes")
        words.append(tuple(_parse_code(value, f"words[{index}]") for value in raw_codes))

    raw_givens = payload.get("givens") or {}
    if not isinstance(raw_givens, dict):
        raise PuzzleLoadError("Puzzle 'givens' must map codes to letters")

    givens: Dict[int, str] = {}
    for key, letter in raw_givens.items():
        if not isinstance(letter, str):
            raise PuzzleLoadError(f"givens[{key!r}] must be a letter")
        givens[_parse_code(key, "givens")] = letter

    return StartingPuzzle(words=tuple(words), givens=givens)


def load_puzzle(path: Path | str) -> StartingPuzzle:
    """Read a puzzle definition from a JSON file."""

    location = Path(path)
    try:
        payload = json.loads(location.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise PuzzleLoadError(f"Cannot read puzzle file {location}: {exc}") from exc

    puzzle = parse_puzzle(payload)
    LOGGER.info("Loaded puzzle %s: %d slots, %d givens", location.name, len(puzzle.words), len(puzzle.givens))
    return puzzle


__all__ = ["load_puzzle", "parse_puzzle"]
