import json
import tempfile
import unittest
from pathlib import Path

from codeword.core.exceptions import PuzzleLoadError
from codeword.data.puzzle import load_puzzle, parse_puzzle


class PuzzleParsingTests(unittest.TestCase):
    def test_parse_words_and_givens(self) -> None:
        puzzle = parse_puzzle({"words": [[1, 2, 3], [3, 4]], "givens": {"1": "c"}})
        self.assertEqual(puzzle.words, ((1, 2, 3), (3, 4)))
        self.assertEqual(puzzle.givens, {1: "c"})

    def test_givens_optional_and_string_codes_accepted(self) -> None:
        puzzle = parse_puzzle({"words": [["7", 8]]})
        self.assertEqual(puzzle.words, ((7, 8),))
        self.assertEqual(puzzle.givens, {})

    def test_range_checks_are_left_to_assembly(self) -> None:
        puzzle = parse_puzzle({"words": [[30]]})
        self.assertEqual(puzzle.words, ((30,),))

    def test_structural_errors(self) -> None:
        bad_payloads = [
            [],
            {},
            {"words": "1 2 3"},
            {"words": [1, 2]},
            {"words": [[1, "x"]]},
            {"words": [[True]]},
            {"words": [["--5"]]},
            {"words": [["²"]]},
            {"words": [[1.5]]},
            {"words": [[1]], "givens": ["c"]},
            {"words": [[1]], "givens": {"1": 3}},
            {"words": [[1]], "givens": {"one": "c"}},
        ]
        for payload in bad_payloads:
            with self.subTest(payload=payload):
                with self.assertRaises(PuzzleLoadError):
                    parse_puzzle(payload)


class PuzzleFileTests(unittest.TestCase):
    def test_load_puzzle_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "puzzle.json"
            path.write_text(json.dumps({"words": [[1, 2]], "givens": {"2": "o"}}), encoding="utf-8")
            puzzle = load_puzzle(path)
            self.assertEqual(puzzle.givens, {2: "o"})

    def test_unreadable_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(PuzzleLoadError):
                load_puzzle(Path(tmpdir) / "missing.json")
            broken = Path(tmpdir) / "broken.json"
            broken.write_text("[", encoding="utf-8")
            with self.assertRaises(PuzzleLoadError):
                load_puzzle(broken)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
