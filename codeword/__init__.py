"""Constraint-propagation solver for number-substitution word puzzles.

This package exposes the public API surface via:

- ``codeword.engine.solver.PropagationSolver``: drives narrowing to a fixpoint.
- ``codeword.engine.assembly.build_puzzle_state``: builds the first snapshot.
- ``codeword.data.corpus.WordCorpus``: per-length candidate word lookup.
- ``codeword.data.puzzle.load_puzzle``: reads a puzzle definition.
"""

from .core.constants import LoopState
from .core.models import PuzzleState, StartingPuzzle
from .data.corpus import CorpusConfig, WordCorpus, load_corpus
from .data.puzzle import load_puzzle
from .engine.assembly import build_puzzle_state
from .engine.solver import PropagationSolver, SolveResult, SolverConfig, solve_puzzle

__all__ = [
    "CorpusConfig",
    "LoopState",
    "PropagationSolver",
    "PuzzleState",
    "SolveResult",
    "SolverConfig",
    "StartingPuzzle",
    "WordCorpus",
    "build_puzzle_state",
    "load_corpus",
    "load_puzzle",
    "solve_puzzle",
]

__version__ = "0.1.0"
