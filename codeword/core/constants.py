"""Shared constants and enumerations for the codeword solver."""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Tuple

ALPHABET: Tuple[str, ...] = tuple("abcdefghijklmnopqrstuvwxyz")
ALPHABET_SET: FrozenSet[str] = frozenset(ALPHABET)

MIN_CODE = 1
MAX_CODE = 26
CODES: Tuple[int, ...] = tuple(range(MIN_CODE, MAX_CODE + 1))

DEFAULT_MAX_ITERATIONS = 100


class LoopState(str, Enum):
    """States of the propagation loop."""

    RUNNING = "RUNNING"
    SOLVED = "SOLVED"
    STUCK = "STUCK"
    CONTRADICTION = "CONTRADICTION"
    ITERATION_LIMIT_EXCEEDED = "ITERATION_LIMIT_EXCEEDED"

    @property
    def is_terminal(self) -> bool:
        return self is not LoopState.RUNNING


def is_valid_code(code: object) -> bool:
    return isinstance(code, int) and not isinstance(code, bool) and MIN_CODE <= code <= MAX_CODE
