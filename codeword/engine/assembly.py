"""Build the initial puzzle snapshot from a definition and a corpus."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from ..core.constants import is_valid_code
from ..core.exceptions import ConfigurationError
from ..core.models import PuzzleState, SlotState, StartingPuzzle
from ..data.corpus import CorpusProvider
from ..data.normalization import clean_word
from ..utils.logger import get_logger
from .alphabet import build_alphabet


LOGGER = get_logger(__name__)


def _fitting_words(words: Iterable[str], length: int) -> Tuple[Tuple[str, ...], int]:
    """Normalize provider words and keep those matching the slot length."""

    kept = []
    skipped = 0
    for raw in words:
        word = clean_word(raw)
        if len(word) == length:
            kept.append(word)
        else:
            skipped += 1
    return tuple(kept), skipped


def build_slots(puzzle: StartingPuzzle, corpus: CorpusProvider) -> List[SlotState]:
    slots: List[SlotState] = []
    for index, codes in enumerate(puzzle.words):
        if not codes:
            raise ConfigurationError(f"Slot {index} has no codes")
        invalid = [code for code in codes if not is_valid_code(code)]
        if invalid:
            raise ConfigurationError(f"Slot {index} uses codes outside 1-26: {invalid}")
        options, skipped = _fitting_words(corpus.lookup(len(codes)), len(codes))
        if skipped:
            LOGGER.warning(
                "Skipped %d corpus words that are not %d letters long for slot %d",
                skipped,
                len(codes),
                index,
            )
        if not options:
            LOGGER.warning("Corpus has no words of length %d for slot %d", len(codes), index)
        slots.append(SlotState(codes=codes, options=options))
    return slots


def build_puzzle_state(puzzle: StartingPuzzle, corpus: CorpusProvider) -> PuzzleState:
    """Combine givens and per-length corpus words into the first snapshot.

    Configuration problems raise :class:`ConfigurationError` here, before the
    propagation loop runs a single iteration.
    """

    alphabet = build_alphabet(puzzle.givens)
    slots = build_slots(puzzle, corpus)
    state = PuzzleState(slots=tuple(slots), alphabet=alphabet)
    LOGGER.debug(
        "Assembled puzzle: %d slots, %d codes in use, %d candidate words",
        len(state.slots),
        len(state.codes_in_use()),
        state.option_count(),
    )
    return state


__all__ = ["build_puzzle_state", "build_slots"]
