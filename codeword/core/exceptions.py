"""Custom exception hierarchy for the codeword solver."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import PuzzleState


class CodewordError(Exception):
    """Base exception for solver failures."""


class ConfigurationError(CodewordError):
    """Raised when givens or slot codes are inconsistent or out of range."""


class CorpusLoadError(CodewordError):
    """Raised when the word corpus cannot be read or parsed."""


class PuzzleLoadError(CodewordError):
    """Raised when a puzzle definition cannot be read or parsed."""


class ValidationError(CodewordError):
    """Raised when a solved state fails the integrity checks."""


class ContradictionError(CodewordError):
    """Raised when a slot loses every word or a code loses every letter.

    ``state`` is the snapshot at the point the contradiction was found so the
    propagation loop can hand it back for diagnosis.
    """

    def __init__(
        self,
        message: str,
        state: Optional["PuzzleState"] = None,
        *,
        slot_index: Optional[int] = None,
        code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.state = state
        self.slot_index = slot_index
        self.code = code
