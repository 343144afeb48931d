import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

import main


class MainCliTests(unittest.TestCase):
    def _write_inputs(self, tmpdir: str, puzzle: dict) -> tuple:
        corpus_path = Path(tmpdir) / "words.json"
        corpus_path.write_text(
            json.dumps({"3": ["cat", "car", "can", "dog"], "2": ["to", "at", "no", "go"]}),
            encoding="utf-8",
        )
        puzzle_path = Path(tmpdir) / "puzzle.json"
        puzzle_path.write_text(json.dumps(puzzle), encoding="utf-8")
        return corpus_path, puzzle_path

    def test_solved_run_writes_output(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            corpus_path, puzzle_path = self._write_inputs(
                tmpdir, {"words": [[1, 2, 3], [3, 4], [2, 3]]}
            )
            output_path = Path(tmpdir) / "result.json"
            stdout = io.StringIO()
            with contextlib.redirect_stdout(stdout):
                status = main.main([
                    "--puzzle", str(puzzle_path),
                    "--corpus", str(corpus_path),
                    "--output", str(output_path),
                    "--show-steps",
                    "--log-level", "ERROR",
                ])
            self.assertEqual(status, 0)
            self.assertIn("--- Iteration 1 (RUNNING) ---", stdout.getvalue())
            payload = json.loads(output_path.read_text(encoding="utf-8"))
            self.assertEqual(payload["outcome"], "SOLVED")
            self.assertEqual([slot["word"] for slot in payload["slots"]], ["cat", "to", "at"])
            self.assertEqual(payload["mapping"], {"1": "c", "2": "a", "3": "t", "4": "o"})
            self.assertEqual(payload["validation"], [])

    def test_stuck_run_exits_nonzero(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            corpus_path, puzzle_path = self._write_inputs(
                tmpdir, {"words": [[1, 2, 3]], "givens": {"1": "c"}}
            )
            with contextlib.redirect_stdout(io.StringIO()):
                status = main.main([
                    "--puzzle", str(puzzle_path),
                    "--corpus", str(corpus_path),
                    "--log-level", "ERROR",
                ])
            self.assertEqual(status, 1)

    def test_configuration_error_exits_with_two(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            corpus_path, puzzle_path = self._write_inputs(
                tmpdir, {"words": [[1, 2]], "givens": {"1": "a", "2": "a"}}
            )
            status = main.main([
                "--puzzle", str(puzzle_path),
                "--corpus", str(corpus_path),
                "--log-level", "CRITICAL",
            ])
            self.assertEqual(status, 2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
