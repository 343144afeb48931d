"""CLI entrypoint for the codeword solver."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from codeword.core.constants import DEFAULT_MAX_ITERATIONS
from codeword.core.exceptions import CodewordError
from codeword.data.corpus import CorpusConfig, load_corpus
from codeword.data.puzzle import load_puzzle
from codeword.engine.assembly import build_puzzle_state
from codeword.engine.solver import PropagationSolver, SolveResult, SolverConfig
from codeword.engine.validator import SolutionValidator
from codeword.utils.logger import configure_logging
from codeword.utils.pretty import print_result, print_step


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve number-substitution word puzzles by constraint propagation",
    )
    parser.add_argument(
        "--puzzle",
        type=Path,
        required=True,
        help="Puzzle JSON with 'words' (lists of codes) and optional 'givens'",
    )
    parser.add_argument(
        "--corpus",
        type=Path,
        default=Path("words.json"),
        help="Corpus JSON keyed by word length, or a directory of per-length JSON files",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=DEFAULT_MAX_ITERATIONS,
        help="Safety bound on propagation passes",
    )
    parser.add_argument(
        "--show-steps",
        action="store_true",
        help="Print every intermediate snapshot",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def result_payload(result: SolveResult, validation_messages: List[str]) -> Dict[str, Any]:
    state = result.state
    return {
        "outcome": result.outcome.value,
        "iterations": result.iterations,
        "message": result.message,
        "mapping": {str(code): letter for code, letter in result.mapping().items()},
        "slots": [
            {
                "codes": list(slot.codes),
                "word": slot.word,
                "candidates": list(slot.options),
            }
            for slot in state.slots
        ],
        "validation": validation_messages,
    }


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.max_iterations < 1:
        parser.error("--max-iterations must be at least 1")

    try:
        corpus = load_corpus(CorpusConfig(path=args.corpus))
        puzzle = load_puzzle(args.puzzle)
        initial = build_puzzle_state(puzzle, corpus)
    except CodewordError as exc:
        logging.getLogger("codeword").error("%s", exc)
        return 2

    solver = PropagationSolver(SolverConfig(max_iterations=args.max_iterations))
    result = solver.solve(initial, on_step=print_step if args.show_steps else None)

    validation_messages: List[str] = []
    if result.solved:
        validation = SolutionValidator(corpus).validate(puzzle, result.state)
        validation_messages = validation.messages

    print_result(result)

    if args.output:
        output_text = json.dumps(result_payload(result, validation_messages), indent=2)
        args.output.write_text(output_text, encoding="utf-8")

    return 0 if result.solved and not validation_messages else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
