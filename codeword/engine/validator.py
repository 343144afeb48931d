"""Deterministic checks over a solved puzzle snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..core.exceptions import ValidationError
from ..core.models import Candidates, PuzzleState, StartingPuzzle
from ..data.corpus import CorpusProvider
from ..utils.logger import get_logger
from .alphabet import normalize_givens


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class SolutionValidator:
    """Confirms a final snapshot against its puzzle definition and corpus."""

    def __init__(self, corpus: CorpusProvider) -> None:
        self.corpus = corpus

    def validate(self, puzzle: StartingPuzzle, state: PuzzleState) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_slot_codes(puzzle, state)
            self._check_bijection(state)
            self._check_givens(puzzle, state)
            self._check_resolved(state)
            self._check_spelling(state)
            self._check_corpus_membership(state)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_slot_codes(self, puzzle: StartingPuzzle, state: PuzzleState) -> None:
        expected = list(puzzle.words)
        actual = [slot.codes for slot in state.slots]
        if expected != actual:
            raise ValidationError("Snapshot slots do not match the puzzle definition")

    def _check_bijection(self, state: PuzzleState) -> None:
        owners = {}
        for code, letter in state.alphabet.resolved().items():
            if letter in owners:
                raise ValidationError(
                    f"Codes {owners[letter]} and {code} both resolve to {letter!r}"
                )
            owners[letter] = code
        for code, knowledge in state.alphabet.items():
            if isinstance(knowledge, Candidates):
                clash = knowledge.letters & set(owners)
                if clash:
                    raise ValidationError(
                        f"Code {code} still lists resolved letters {sorted(clash)}"
                    )

    def _check_givens(self, puzzle: StartingPuzzle, state: PuzzleState) -> None:
        for code, letter in normalize_givens(puzzle.givens).items():
            if state.alphabet.letter_for(code) != letter:
                raise ValidationError(f"Given {code}={letter!r} was not kept")

    def _check_resolved(self, state: PuzzleState) -> None:
        for index, slot in enumerate(state.slots):
            if not slot.is_resolved:
                raise ValidationError(
                    f"Slot {index} still has {len(slot.options)} candidate words"
                )
        for code in state.codes_in_use():
            if state.alphabet.letter_for(code) is None:
                raise ValidationError(f"Code {code} has no resolved letter")

    def _check_spelling(self, state: PuzzleState) -> None:
        for index, slot in enumerate(state.slots):
            spelled = "".join(state.alphabet.letter_for(code) or "?" for code in slot.codes)
            if spelled != slot.word:
                raise ValidationError(
                    f"Slot {index} spells {spelled!r} but holds {slot.word!r}"
                )

    def _check_corpus_membership(self, state: PuzzleState) -> None:
        for index, slot in enumerate(state.slots):
            if slot.word not in self.corpus.lookup(slot.length):
                raise ValidationError(f"Slot {index} word {slot.word!r} is not in the corpus")
