"""Convenience entrypoint for stepping through a propagation run by hand.

Usage in a Python console (Jupyter-style)::

    import debug_main
    state = debug_main.prepare_state()
    debug_main.step(state)        # one word pass + one letter pass
    debug_main.step(state)
    debug_main.rewind(state)      # back to the previous snapshot
    result = debug_main.finish(state)

Snapshots are immutable, so every entry of ``state["history"]`` stays valid
and rewinding is just dropping the tail of the list.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from codeword.core.exceptions import ContradictionError
from codeword.core.models import StartingPuzzle
from codeword.data.corpus import WordCorpus
from codeword.engine.assembly import build_puzzle_state
from codeword.engine.solver import PropagationSolver, SolveResult, SolverConfig, propagate_once
from codeword.utils.logger import configure_logging
from codeword.utils.pretty import format_state, print_result

DEFAULT_DEBUG_ARGS: Dict[str, Any] = {
    "words": [[1, 2, 3], [4, 2, 5], [3, 6, 5]],
    "givens": {1: "c"},
    "corpus": ["cat", "car", "can", "bat", "rat", "bag", "tag", "ton", "tan", "tin"],
    "max_iterations": 100,
}

LOGGER = logging.getLogger(__name__)


def prepare_state(**overrides: Any) -> Dict[str, Any]:
    """Return a mutable state dictionary used by the step helpers."""

    args = {**DEFAULT_DEBUG_ARGS, **overrides}
    configure_logging(logging.DEBUG)
    corpus = WordCorpus.from_words(args["corpus"])
    puzzle = StartingPuzzle(words=args["words"], givens=args["givens"])
    initial = build_puzzle_state(puzzle, corpus)
    LOGGER.info("Prepared %d slots from a %d word corpus", len(initial.slots), len(corpus))
    return {
        "args": args,
        "corpus": corpus,
        "puzzle": puzzle,
        "history": [initial],
    }


def step(state: Dict[str, Any]) -> bool:
    """Apply one propagation pass; returns ``False`` once nothing changes."""

    current = state["history"][-1]
    try:
        narrowed = propagate_once(current)
    except ContradictionError as exc:
        LOGGER.warning("Contradiction: %s", exc)
        return False
    if narrowed == current:
        LOGGER.info("No change after %d passes", len(state["history"]) - 1)
        return False
    state["history"].append(narrowed)
    print(format_state(narrowed))
    return True


def rewind(state: Dict[str, Any]) -> None:
    if len(state["history"]) > 1:
        state["history"].pop()
    print(format_state(state["history"][-1]))


def finish(state: Dict[str, Any]) -> SolveResult:
    solver = PropagationSolver(SolverConfig(max_iterations=int(state["args"]["max_iterations"])))
    result = solver.solve(state["history"][-1])
    print_result(result)
    return result


def run_debug(**overrides: Any) -> SolveResult:
    """Prepare and solve in one call."""

    return finish(prepare_state(**overrides))


if __name__ == "__main__":  # pragma: no cover
    run_debug()
