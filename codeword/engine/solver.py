"""Constraint-propagation loop driving the two narrowing passes to a fixpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional

from ..core.constants import DEFAULT_MAX_ITERATIONS, LoopState
from ..core.exceptions import ContradictionError
from ..core.models import PuzzleState, StartingPuzzle
from ..data.corpus import CorpusProvider
from ..utils.logger import get_logger
from .assembly import build_puzzle_state
from .narrowing import narrow_letters, narrow_words

LOGGER = get_logger(__name__)


@dataclass
class SolverConfig:
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    keep_history: bool = False

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")


@dataclass(frozen=True)
class PropagationStep:
    """One snapshot emitted by the loop; ``loop_state`` is terminal on the last one."""

    iteration: int
    state: PuzzleState
    loop_state: LoopState
    message: str = ""


@dataclass
class SolveResult:
    state: PuzzleState
    outcome: LoopState
    iterations: int
    message: str = ""
    history: List[PuzzleState] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.outcome == LoopState.SOLVED

    def mapping(self) -> Dict[int, str]:
        """Resolved letters for the codes the puzzle uses."""

        resolved = self.state.alphabet.resolved()
        return {code: resolved[code] for code in self.state.codes_in_use() if code in resolved}

    def words(self) -> List[Optional[str]]:
        return [slot.word for slot in self.state.slots]


def propagate_once(state: PuzzleState) -> PuzzleState:
    """Narrow every slot's words, then every code's letters."""

    return narrow_letters(narrow_words(state))


class PropagationSolver:
    """Runs word and letter narrowing until the puzzle is solved or stops moving.

    The loop never guesses: when neither pass removes anything the run ends
    as ``STUCK``. Contradictions and the iteration bound end the run as
    well, and every ending is reported as a :class:`SolveResult` carrying
    the last snapshot.
    """

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config or SolverConfig()

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def solve_puzzle(self, puzzle: StartingPuzzle, corpus: CorpusProvider) -> SolveResult:
        """Assemble the first snapshot and solve it.

        Raises :class:`ConfigurationError` before any iteration when the
        givens or slot codes are invalid.
        """

        return self.solve(build_puzzle_state(puzzle, corpus))

    def solve(
        self,
        initial: PuzzleState,
        on_step: Optional[Callable[[PropagationStep], None]] = None,
    ) -> SolveResult:
        """Run the loop to a terminal state; ``on_step`` sees every snapshot."""

        history: List[PuzzleState] = [initial] if self.config.keep_history else []
        last = PropagationStep(0, initial, LoopState.RUNNING)
        for step in self.iter_steps(initial):
            if self.config.keep_history and step.state is not history[-1]:
                history.append(step.state)
            if on_step is not None:
                on_step(step)
            last = step

        result = SolveResult(
            state=last.state,
            outcome=last.loop_state,
            iterations=last.iteration,
            message=last.message,
            history=history,
        )
        LOGGER.info(
            "Propagation finished: %s after %d iterations (%d/%d slots resolved)",
            result.outcome.value,
            result.iterations,
            sum(1 for slot in result.state.slots if slot.is_resolved),
            len(result.state.slots),
        )
        return result

    def iter_steps(self, initial: PuzzleState) -> Iterator[PropagationStep]:
        """Yield every snapshot of the run, ending with a terminal step."""

        state = initial
        iteration = 0
        if state.is_solved:
            yield PropagationStep(iteration, state, LoopState.SOLVED, "All slots resolved")
            return

        while True:
            if iteration >= self.config.max_iterations:
                message = f"Exceeded max iterations: {self.config.max_iterations}"
                LOGGER.error(
                    "%s; each productive pass removes a candidate, so this should not happen "
                    "(%d candidate words, %d candidate letters left)",
                    message,
                    state.option_count(),
                    state.alphabet.candidate_count(state.codes_in_use()),
                )
                yield PropagationStep(iteration, state, LoopState.ITERATION_LIMIT_EXCEEDED, message)
                return

            iteration += 1
            try:
                narrowed = propagate_once(state)
            except ContradictionError as exc:
                LOGGER.warning("Contradiction at iteration %d: %s", iteration, exc)
                snapshot = exc.state if exc.state is not None else state
                yield PropagationStep(iteration, snapshot, LoopState.CONTRADICTION, str(exc))
                return

            LOGGER.debug(
                "Iteration %d: %d -> %d candidate words, %d -> %d candidate letters",
                iteration,
                state.option_count(),
                narrowed.option_count(),
                state.alphabet.candidate_count(),
                narrowed.alphabet.candidate_count(),
            )

            if narrowed == state:
                LOGGER.warning("Propagation stuck after %d iterations", iteration)
                yield PropagationStep(
                    iteration,
                    state,
                    LoopState.STUCK,
                    "No further narrowing possible without guessing",
                )
                return

            state = narrowed
            if state.is_solved:
                yield PropagationStep(iteration, state, LoopState.SOLVED, "All slots resolved")
                return
            yield PropagationStep(iteration, state, LoopState.RUNNING)


def solve_puzzle(
    puzzle: StartingPuzzle,
    corpus: CorpusProvider,
    config: Optional[SolverConfig] = None,
) -> SolveResult:
    return PropagationSolver(config).solve_puzzle(puzzle, corpus)


__all__ = [
    "PropagationSolver",
    "PropagationStep",
    "SolveResult",
    "SolverConfig",
    "propagate_once",
    "solve_puzzle",
]
