"""Logging utilities for the codeword solver."""

from __future__ import annotations

import logging
from typing import Optional, Union


LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def parse_level(level: Union[int, str, None]) -> int:
    """Turn ``"debug"``/``"INFO"``/``10`` style values into a logging level.

    Unknown names fall back to INFO so a mistyped ``--log-level`` still
    produces output.
    """

    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Install the single stream handler shared by the loaders and the solver.

    Corpus and puzzle loading log one INFO line per file. The propagation loop
    logs candidate word and candidate letter counts before and after
    every pass at DEBUG and
    one summary line per run at INFO, so ``--log-level DEBUG`` is the way to
    watch a puzzle narrow. Calling this again replaces the previous handler.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(parse_level(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``codeword`` namespace, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "codeword")
