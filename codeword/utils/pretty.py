"""Pretty-print helpers for puzzle snapshots and solve results."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List

from ..core.models import Resolved

if TYPE_CHECKING:
    from ..core.models import AlphabetState, PuzzleState, SlotState
    from ..engine.solver import PropagationStep, SolveResult


UNKNOWN = "?"


def format_slot(slot: SlotState, alphabet: AlphabetState, *, max_options: int = 5) -> str:
    pattern = "".join(alphabet.letter_for(code) or UNKNOWN for code in slot.codes)
    codes = " ".join(f"{code:>2}" for code in slot.codes)
    count = len(slot.options)
    if count == 1:
        detail = slot.options[0]
    elif count == 0:
        detail = "no candidates"
    else:
        shown = ", ".join(slot.options[:max_options])
        more = f", +{count - max_options}" if count > max_options else ""
        detail = f"{count} candidates: {shown}{more}"
    return f"{pattern:<12} [{codes}]  {detail}"


def format_alphabet(alphabet: AlphabetState, codes=None) -> str:
    selected = codes if codes is not None else [code for code, _ in alphabet.items()]
    parts: List[str] = []
    for code in selected:
        knowledge = alphabet[code]
        if isinstance(knowledge, Resolved):
            parts.append(f"{code}={knowledge.letter}")
        else:
            parts.append(f"{code}={{{len(knowledge.letters)}}}")
    return " ".join(parts)


def format_state(state: PuzzleState) -> str:
    lines = [format_slot(slot, state.alphabet) for slot in state.slots]
    lines.append("Key: " + format_alphabet(state.alphabet, state.codes_in_use()))
    return "\n".join(lines)


def print_step(step: PropagationStep, *, stream=None) -> None:
    """Print one loop snapshot for progress reporting."""

    stream = stream or sys.stdout
    print(f"--- Iteration {step.iteration} ({step.loop_state.value}) ---", file=stream)
    print(format_state(step.state), file=stream)


def print_result(result: SolveResult, *, stream=None) -> None:
    """Print the final snapshot plus a short summary of the run."""

    stream = stream or sys.stdout
    state = result.state
    print(format_state(state), file=stream)

    resolved_slots = sum(1 for slot in state.slots if slot.is_resolved)
    codes = state.codes_in_use()
    print(file=stream)
    print("--- Result ---", file=stream)
    print(f"  Outcome:       {result.outcome.value}", file=stream)
    print(f"  Iterations:    {result.iterations}", file=stream)
    print(f"  Slots:         {resolved_slots}/{len(state.slots)} resolved", file=stream)
    print(f"  Codes:         {len(result.mapping())}/{len(codes)} resolved", file=stream)
    if result.message:
        print(f"  Detail:        {result.message}", file=stream)
    if result.solved:
        print(file=stream)
        print(" ".join(word or "" for word in result.words()), file=stream)
