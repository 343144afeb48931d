"""Word corpus loading, assembly and per-length lookup."""

from __future__ import annotations

import argparse
import json
import re
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple

from ..core.exceptions import CorpusLoadError
from ..utils.logger import get_logger
from .normalization import clean_word


LOGGER = get_logger(__name__)

_LENGTH_KEY_RE = re.compile(r"(\d+)")


class CorpusProvider(Protocol):
    """Anything the solver can ask for the words of a given length."""

    def lookup(self, length: int) -> Sequence[str]:
        ...


@dataclass
class CorpusConfig:
    """Configuration for corpus loading."""

    path: Path | str
    min_length: int = 1
    max_length: Optional[int] = None
    deduplicate: bool = True


class WordCorpus:
    """Ordered candidate words grouped by length."""

    def __init__(
        self,
        words_by_length: Mapping[int, Iterable[str]],
        deduplicate: bool = True,
    ) -> None:
        self._words_by_length: Dict[int, Tuple[str, ...]] = {}
        skipped = 0
        for length, words in sorted(words_by_length.items()):
            kept: List[str] = []
            seen = set()
            for raw in words:
                word = clean_word(raw)
                if len(word) != length:
                    skipped += 1
                    continue
                if deduplicate:
                    if word in seen:
                        continue
                    seen.add(word)
                kept.append(word)
            if kept:
                self._words_by_length[length] = tuple(kept)
        if skipped:
            LOGGER.warning("Skipped %d corpus words whose length did not match their group", skipped)

    @classmethod
    def from_words(cls, words: Iterable[str], deduplicate: bool = True) -> "WordCorpus":
        """Group a flat word list by cleaned length."""

        grouped: Dict[int, List[str]] = defaultdict(list)
        for raw in words:
            word = clean_word(raw)
            if word:
                grouped[len(word)].append(word)
        return cls(grouped, deduplicate=deduplicate)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def lookup(self, length: int) -> Tuple[str, ...]:
        return self._words_by_length.get(length, ())

    def lengths(self) -> Tuple[int, ...]:
        return tuple(self._words_by_length)

    def contains(self, word: str) -> bool:
        cleaned = clean_word(word)
        return cleaned in self._words_by_length.get(len(cleaned), ())

    def __len__(self) -> int:
        return sum(len(words) for words in self._words_by_length.values())

    def restricted(self, min_length: int = 1, max_length: Optional[int] = None) -> "WordCorpus":
        """Return a corpus keeping only lengths within the inclusive bounds."""

        kept = {
            length: words
            for length, words in self._words_by_length.items()
            if length >= min_length and (max_length is None or length <= max_length)
        }
        return WordCorpus(kept, deduplicate=False)


# ----------------------------------------------------------------------
# Loading
# ----------------------------------------------------------------------
def parse_length_key(key: str) -> int:
    match = _LENGTH_KEY_RE.search(str(key))
    if match is None:
        raise CorpusLoadError(f"Corpus key {key!r} does not name a word length")
    return int(match.group(1))


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CorpusLoadError(f"Cannot read corpus file {path}: {exc}") from exc


def _word_list(value: Any, origin: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise CorpusLoadError(f"Corpus entry {origin} must be a list of strings")
    return value


def corpus_from_payload(payload: Any, deduplicate: bool = True) -> WordCorpus:
    """Build a corpus from parsed JSON: a length-keyed mapping or a flat list."""

    if isinstance(payload, list):
        return WordCorpus.from_words(_word_list(payload, "<root>"), deduplicate=deduplicate)
    if not isinstance(payload, dict):
        raise CorpusLoadError("Corpus JSON must be an object keyed by length or a list of words")

    grouped: Dict[int, List[str]] = defaultdict(list)
    for key, value in payload.items():
        grouped[parse_length_key(key)].extend(_word_list(value, repr(key)))
    return WordCorpus(grouped, deduplicate=deduplicate)


def read_source_directory(source_dir: Path | str) -> Dict[str, List[str]]:
    """Read every ``*.json`` file of a directory into a mapping keyed by file stem."""

    directory = Path(source_dir)
    if not directory.is_dir():
        raise CorpusLoadError(f"Missing corpus source directory: {directory}")

    mapping: Dict[str, List[str]] = {}
    for source in sorted(directory.glob("*.json")):
        mapping[source.stem] = _word_list(_read_json(source), source.name)
    if not mapping:
        raise CorpusLoadError(f"No JSON word lists found in {directory}")
    return mapping


def load_corpus(config: CorpusConfig) -> WordCorpus:
    """Load a corpus from a JSON file or a directory of per-length JSON files."""

    source = Path(config.path)
    if source.is_dir():
        payload: Any = read_source_directory(source)
    elif source.exists():
        payload = _read_json(source)
    else:
        raise CorpusLoadError(f"Missing corpus: {source}")

    corpus = corpus_from_payload(payload, deduplicate=config.deduplicate)
    if config.min_length > 1 or config.max_length is not None:
        corpus = corpus.restricted(config.min_length, config.max_length)
    LOGGER.info("Loaded %d corpus words across %d lengths from %s", len(corpus), len(corpus.lengths()), source)
    return corpus


def assemble_corpus(
    source_dir: Path | str,
    destination: Path | str | None = None,
) -> Dict[str, List[str]]:
    """Merge per-length source files into one mapping, optionally written as JSON."""

    mapping = read_source_directory(source_dir)
    if destination is not None:
        target = Path(destination)
        target.write_text(json.dumps(mapping), encoding="utf-8")
        LOGGER.info("Assembled %d word lists into %s", len(mapping), target)
    return mapping


def _cli() -> None:
    parser = argparse.ArgumentParser(description="Merge per-length word lists into a single corpus JSON")
    parser.add_argument(
        "--source",
        type=Path,
        default=Path("words_source_files"),
        help="Directory holding one JSON word list per length",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("words.json"),
        help="Destination for the merged corpus",
    )
    args = parser.parse_args()

    mapping = assemble_corpus(args.source, args.output)
    total = sum(len(words) for words in mapping.values())
    print(f"Assembled {total:,} words from {len(mapping)} files -> {args.output}")


__all__ = [
    "CorpusConfig",
    "CorpusProvider",
    "WordCorpus",
    "assemble_corpus",
    "corpus_from_payload",
    "load_corpus",
    "parse_length_key",
    "read_source_directory",
]


if __name__ == "__main__":  # pragma: no cover - convenience CLI
    _cli()
