"""Immutable data models shared by the narrowing passes and the solver loop.

Every model is a frozen dataclass built from tuples and frozensets, so a
``PuzzleState`` snapshot never changes once produced. Transforms return new
snapshots and reuse the unchanged parts of the old one.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Tuple, Union

from .constants import ALPHABET_SET, CODES, MAX_CODE


@dataclass(frozen=True)
class Resolved:
    """A code proven to stand for exactly one letter."""

    letter: str

    @property
    def is_resolved(self) -> bool:
        return True

    @property
    def letters(self) -> FrozenSet[str]:
        return frozenset((self.letter,))

    def allows(self, letter: str) -> bool:
        return letter == self.letter


@dataclass(frozen=True)
class Candidates:
    """A code that may still stand for any letter of ``letters``."""

    letters: FrozenSet[str]

    def __post_init__(self) -> None:
        if not isinstance(self.letters, frozenset):
            object.__setattr__(self, "letters", frozenset(self.letters))
        if not self.letters:
            raise ValueError("Candidate letter set cannot be empty")

    @property
    def is_resolved(self) -> bool:
        return False

    def allows(self, letter: str) -> bool:
        return letter in self.letters


CodeKnowledge = Union[Resolved, Candidates]


@dataclass(frozen=True)
class AlphabetState:
    """Knowledge for every code, stored in a 26-entry tuple indexed by ``code - 1``."""

    entries: Tuple[CodeKnowledge, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.entries, tuple):
            object.__setattr__(self, "entries", tuple(self.entries))
        if len(self.entries) != MAX_CODE:
            raise ValueError(f"Alphabet state needs {MAX_CODE} entries, got {len(self.entries)}")

    @classmethod
    def unconstrained(cls) -> "AlphabetState":
        return cls(tuple(Candidates(ALPHABET_SET) for _ in CODES))

    def __getitem__(self, code: int) -> CodeKnowledge:
        return self.entries[code - 1]

    def items(self) -> Iterator[Tuple[int, CodeKnowledge]]:
        return zip(CODES, self.entries)

    def updated(self, changes: Mapping[int, CodeKnowledge]) -> "AlphabetState":
        """Return a copy with the knowledge of the given codes replaced."""

        if not changes:
            return self
        entries = list(self.entries)
        for code, knowledge in changes.items():
            entries[code - 1] = knowledge
        return AlphabetState(tuple(entries))

    def letter_for(self, code: int) -> Optional[str]:
        knowledge = self[code]
        return knowledge.letter if isinstance(knowledge, Resolved) else None

    def resolved(self) -> Dict[int, str]:
        return {
            code: knowledge.letter
            for code, knowledge in self.items()
            if isinstance(knowledge, Resolved)
        }

    def candidate_count(self, codes: Optional[Iterable[int]] = None) -> int:
        """Number of (code, letter) pairs still possible."""

        selected = CODES if codes is None else codes
        return sum(len(self[code].letters) for code in selected)

    def is_consistent(self) -> bool:
        """Check the bijection invariant over resolved letters."""

        resolved = self.resolved()
        letters = set(resolved.values())
        if len(letters) != len(resolved):
            return False
        for code, knowledge in self.items():
            if isinstance(knowledge, Candidates) and knowledge.letters & letters:
                return False
        return True


@dataclass(frozen=True)
class SlotState:
    """One word of the puzzle: its codes and the words it may still be."""

    codes: Tuple[int, ...]
    options: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.codes, tuple):
            object.__setattr__(self, "codes", tuple(self.codes))
        if not isinstance(self.options, tuple):
            object.__setattr__(self, "options", tuple(self.options))

    @property
    def length(self) -> int:
        return len(self.codes)

    @property
    def is_resolved(self) -> bool:
        return len(self.options) == 1

    @property
    def is_contradictory(self) -> bool:
        return not self.options

    @property
    def word(self) -> Optional[str]:
        return self.options[0] if self.is_resolved else None

    def positions(self, code: int) -> Tuple[int, ...]:
        return tuple(index for index, value in enumerate(self.codes) if value == code)

    def with_options(self, options: Iterable[str]) -> "SlotState":
        return replace(self, options=tuple(options))


@dataclass(frozen=True)
class PuzzleState:
    """A full snapshot: every slot plus the alphabet they share."""

    slots: Tuple[SlotState, ...]
    alphabet: AlphabetState = field(default_factory=AlphabetState.unconstrained)

    def __post_init__(self) -> None:
        if not isinstance(self.slots, tuple):
            object.__setattr__(self, "slots", tuple(self.slots))

    @property
    def is_solved(self) -> bool:
        """Every slot holds one word, spelled by the resolved letters of its codes."""

        for slot in self.slots:
            if not slot.is_resolved:
                return False
            spelled = "".join(self.alphabet.letter_for(code) or "?" for code in slot.codes)
            if spelled != slot.word:
                return False
        return True

    @property
    def has_contradiction(self) -> bool:
        return any(slot.is_contradictory for slot in self.slots)

    def codes_in_use(self) -> Tuple[int, ...]:
        return tuple(sorted({code for slot in self.slots for code in slot.codes}))

    def option_count(self) -> int:
        return sum(len(slot.options) for slot in self.slots)

    def with_slots(self, slots: Iterable[SlotState]) -> "PuzzleState":
        return replace(self, slots=tuple(slots))

    def with_alphabet(self, alphabet: AlphabetState) -> "PuzzleState":
        return replace(self, alphabet=alphabet)


@dataclass(frozen=True)
class StartingPuzzle:
    """Puzzle definition as handed over by a loader: slot codes plus givens."""

    words: Tuple[Tuple[int, ...], ...]
    givens: Mapping[int, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "words", tuple(tuple(codes) for codes in self.words))
        object.__setattr__(self, "givens", dict(self.givens))
