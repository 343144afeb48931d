import unittest

from codeword.core.constants import ALPHABET_SET
from codeword.core.exceptions import ContradictionError
from codeword.core.models import AlphabetState, Candidates, PuzzleState, Resolved, SlotState
from codeword.engine.narrowing import derive_letters, narrow_letters, narrow_words, word_fits


def make_state(*slots, changes=None) -> PuzzleState:
    alphabet = AlphabetState.unconstrained().updated(changes or {})
    return PuzzleState(slots=tuple(SlotState(codes, options) for codes, options in slots), alphabet=alphabet)


class WordNarrowingTests(unittest.TestCase):
    def test_word_fits_checks_every_position_of_a_repeated_code(self) -> None:
        alphabet = AlphabetState.unconstrained().updated({1: Resolved("e")})
        self.assertTrue(word_fits("eye", (1, 2, 1), alphabet))
        self.assertFalse(word_fits("ewt", (1, 2, 1), alphabet))

    def test_word_of_another_length_never_fits(self) -> None:
        alphabet = AlphabetState.unconstrained()
        self.assertFalse(word_fits("ca", (1, 2, 3), alphabet))
        self.assertFalse(word_fits("cats", (1, 2, 3), alphabet))
        state = make_state(((1, 2, 3), ("cat", "ca", "cats")))
        self.assertEqual(narrow_words(state).slots[0].options, ("cat",))

    def test_all_slots_narrowed_in_one_pass(self) -> None:
        state = make_state(
            ((1, 2, 3), ("cat", "bat", "hat")),
            ((4, 1), ("oc", "ob")),
            changes={1: Resolved("c")},
        )
        narrowed = narrow_words(state)
        self.assertEqual(narrowed.slots[0].options, ("cat",))
        self.assertEqual(narrowed.slots[1].options, ("oc",))
        self.assertEqual(state.slots[0].options, ("cat", "bat", "hat"))

    def test_candidate_sets_filter_words(self) -> None:
        state = make_state(
            ((1, 2), ("to", "no", "go")),
            changes={1: Candidates({"t", "g"})},
        )
        self.assertEqual(narrow_words(state).slots[0].options, ("to", "go"))

    def test_unchanged_state_returned_as_is(self) -> None:
        state = make_state(((1, 2), ("to", "no")))
        self.assertIs(narrow_words(state), state)

    def test_untouched_slots_keep_identity(self) -> None:
        state = make_state(
            ((1, 2), ("to", "no")),
            ((3, 4), ("at", "an")),
            changes={1: Resolved("t")},
        )
        narrowed = narrow_words(state)
        self.assertIsNot(narrowed.slots[0], state.slots[0])
        self.assertIs(narrowed.slots[1], state.slots[1])

    def test_empty_slot_is_a_contradiction(self) -> None:
        state = make_state(
            ((1, 2, 3), ("cat", "car")),
            changes={1: Resolved("d")},
        )
        with self.assertRaises(ContradictionError) as ctx:
            narrow_words(state)
        self.assertEqual(ctx.exception.slot_index, 0)
        self.assertIsNotNone(ctx.exception.state)
        self.assertEqual(ctx.exception.state.slots[0].options, ())


class LetterNarrowingTests(unittest.TestCase):
    def test_derive_letters_intersects_across_slots(self) -> None:
        state = make_state(
            ((1, 2, 3), ("cat", "cot")),
            ((2, 4), ("at", "it")),
        )
        derived = derive_letters(state)
        self.assertEqual(derived[1], frozenset({"c"}))
        self.assertEqual(derived[2], frozenset({"a"}))
        self.assertEqual(derived[4], frozenset({"t"}))

    def test_single_letter_resolves_and_is_excluded_elsewhere(self) -> None:
        state = make_state(((1, 2, 3), ("cat", "car", "can")))
        narrowed = narrow_letters(state)
        self.assertEqual(narrowed.alphabet[1], Resolved("c"))
        self.assertEqual(narrowed.alphabet[2], Resolved("a"))
        self.assertEqual(narrowed.alphabet[3], Candidates({"t", "r", "n"}))
        self.assertNotIn("a", narrowed.alphabet[20].letters)
        self.assertNotIn("c", narrowed.alphabet[20].letters)
        self.assertTrue(narrowed.alphabet.is_consistent())

    def test_exclusivity_cascades_to_a_local_fixpoint(self) -> None:
        state = make_state(
            ((1,), ("a",)),
            ((2,), ("a", "b")),
            ((3,), ("b", "c")),
        )
        narrowed = narrow_letters(state)
        self.assertEqual(narrowed.alphabet[1], Resolved("a"))
        self.assertEqual(narrowed.alphabet[2], Resolved("b"))
        self.assertEqual(narrowed.alphabet[3], Resolved("c"))
        self.assertEqual(narrowed.alphabet[4].letters, ALPHABET_SET - {"a", "b", "c"})

    def test_resolved_codes_are_not_rederived(self) -> None:
        state = make_state(
            ((1, 2), ("to", "go")),
            changes={1: Resolved("t")},
        )
        narrowed = narrow_letters(state)
        self.assertEqual(narrowed.alphabet[1], Resolved("t"))
        self.assertEqual(narrowed.alphabet[2], Resolved("o"))

    def test_no_common_letter_is_a_contradiction(self) -> None:
        state = make_state(
            ((1, 2), ("ab",)),
            ((2, 1), ("ab",)),
        )
        with self.assertRaises(ContradictionError) as ctx:
            narrow_letters(state)
        self.assertEqual(ctx.exception.code, 1)
        self.assertIs(ctx.exception.state, state)

    def test_two_codes_claiming_one_letter_is_a_contradiction(self) -> None:
        state = make_state(((1,), ("a",)), ((2,), ("a",)))
        with self.assertRaises(ContradictionError):
            narrow_letters(state)

    def test_unchanged_alphabet_returns_input(self) -> None:
        state = make_state(
            ((1, 2), ("to", "no")),
            changes={1: Candidates({"t", "n"}), 2: Resolved("o")},
        )
        self.assertIs(narrow_letters(state), state)

    def test_input_snapshot_not_mutated(self) -> None:
        state = make_state(((1, 2, 3), ("cat", "car")))
        before = state.alphabet
        narrow_letters(state)
        self.assertIs(state.alphabet, before)
        self.assertEqual(state.alphabet[2].letters, ALPHABET_SET)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
