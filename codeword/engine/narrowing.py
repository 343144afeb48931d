"""The two narrowing passes of the propagation loop.

``narrow_words`` prunes every slot's candidate words against the alphabet;
``narrow_letters`` prunes every open code's letters against the surviving
words and then pushes each newly resolved letter out of all other codes.
Both return a new :class:`PuzzleState` (or the input itself when nothing
changed) and raise :class:`ContradictionError` when a domain empties.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, FrozenSet, Mapping, Sequence, Tuple

from ..core.exceptions import ContradictionError
from ..core.models import AlphabetState, Candidates, CodeKnowledge, PuzzleState, Resolved, SlotState


# ----------------------------------------------------------------------
# Word-option narrowing
# ----------------------------------------------------------------------
def word_fits(word: str, codes: Sequence[int], alphabet: AlphabetState) -> bool:
    """True when every letter of ``word`` is allowed for the code at its position.

    A code repeated within the slot is checked at each of its positions, and
    a word of any other length never fits.
    """

    if len(word) != len(codes):
        return False
    for letter, code in zip(word, codes):
        if not alphabet[code].allows(letter):
            return False
    return True


def narrow_slot(slot: SlotState, alphabet: AlphabetState) -> SlotState:
    options = tuple(word for word in slot.options if word_fits(word, slot.codes, alphabet))
    if len(options) == len(slot.options):
        return slot
    return slot.with_options(options)


def narrow_words(state: PuzzleState) -> PuzzleState:
    """Filter the candidate words of every slot in a single pass."""

    slots = tuple(narrow_slot(slot, state.alphabet) for slot in state.slots)
    changed = any(new is not old for new, old in zip(slots, state.slots))
    narrowed = state.with_slots(slots) if changed else state

    for index, slot in enumerate(narrowed.slots):
        if slot.is_contradictory:
            raise ContradictionError(
                f"Slot {index} {list(slot.codes)} has no candidate words left",
                narrowed,
                slot_index=index,
            )
    return narrowed


# ----------------------------------------------------------------------
# Letter-option narrowing
# ----------------------------------------------------------------------
def letters_at(slot: SlotState, position: int) -> FrozenSet[str]:
    return frozenset(word[position] for word in slot.options)


def derive_letters(state: PuzzleState) -> Dict[int, FrozenSet[str]]:
    """Letters each code can take according to every slot position it occupies."""

    derived: Dict[int, FrozenSet[str]] = {}
    for slot in state.slots:
        for position, code in enumerate(slot.codes):
            letters = letters_at(slot, position)
            derived[code] = derived[code] & letters if code in derived else letters
    return derived


def _propagate_exclusivity(
    working: Dict[int, CodeKnowledge],
    queue: Deque[Tuple[int, str]],
    state: PuzzleState,
) -> None:
    # Each resolved code removes its letter from every other code; a code that
    # collapses to one letter joins the queue.
    while queue:
        code, letter = queue.popleft()
        for other, other_knowledge in working.items():
            if other == code:
                continue
            if isinstance(other_knowledge, Resolved):
                if other_knowledge.letter == letter:
                    raise ContradictionError(
                        f"Codes {other} and {code} both resolve to {letter!r}",
                        state,
                        code=code,
                    )
                continue
            if letter not in other_knowledge.letters:
                continue
            remaining = other_knowledge.letters - {letter}
            if not remaining:
                raise ContradictionError(
                    f"Code {other} has no letters left once {letter!r} is taken by code {code}",
                    state,
                    code=other,
                )
            if len(remaining) == 1:
                only = next(iter(remaining))
                working[other] = Resolved(only)
                queue.append((other, only))
            else:
                working[other] = Candidates(remaining)


def narrow_letters(state: PuzzleState) -> PuzzleState:
    """Shrink open codes to the letters their slots still allow.

    Codes that appear in no slot are only touched by exclusivity.
    """

    alphabet = state.alphabet
    working: Dict[int, CodeKnowledge] = dict(alphabet.items())
    queue: Deque[Tuple[int, str]] = deque()

    for code, letters in sorted(derive_letters(state).items()):
        knowledge = working[code]
        if isinstance(knowledge, Resolved):
            continue
        remaining = knowledge.letters & letters
        if not remaining:
            raise ContradictionError(
                f"Code {code} has no letter that fits every slot containing it",
                state,
                code=code,
            )
        if len(remaining) == 1:
            only = next(iter(remaining))
            working[code] = Resolved(only)
            queue.append((code, only))
        elif remaining != knowledge.letters:
            working[code] = Candidates(remaining)

    _propagate_exclusivity(working, queue, state)

    changes: Mapping[int, CodeKnowledge] = {
        code: knowledge
        for code, knowledge in working.items()
        if knowledge != alphabet[code]
    }
    if not changes:
        return state
    return state.with_alphabet(alphabet.updated(changes))


__all__ = [
    "derive_letters",
    "letters_at",
    "narrow_letters",
    "narrow_slot",
    "narrow_words",
    "word_fits",
]
