import unittest

from rubik_search.core.types import ALL_MOVES, Move, all_moves, inverse_of
from rubik_search.logic.moves import (
    conjugate,
    format_sequence,
    invert_sequence,
    normalize_token,
    parse_sequence,
)
from rubik_search.logic.scramble import generate_scramble


class TestMoveModel(unittest.TestCase):
    def test_enumeration_order(self):
        self.assertEqual(
            [m.value for m in all_moves()],
            ["F", "Fi", "R", "Ri", "U", "Ui", "B", "Bi", "L", "Li", "D", "Di"],
        )

    def test_inverse_is_involution(self):
        for move in ALL_MOVES:
            inv = inverse_of(move)
            self.assertIn(inv, ALL_MOVES)
            self.assertNotEqual(inv, move)
            self.assertEqual(inverse_of(inv), move)


class TestNotation(unittest.TestCase):
    def test_normalize(self):
        self.assertEqual(normalize_token("F"), "F")
        self.assertEqual(normalize_token(" Ri "), "Ri")
        self.assertEqual(normalize_token("U'"), "Ui")
        self.assertEqual(normalize_token("U’"), "Ui")
        self.assertEqual(normalize_token(""), "")

    def test_invalid_tokens(self):
        for tok in ("X", "F2", "f", "Fii"):
            with self.assertRaises(ValueError):
                normalize_token(tok)

    def test_parse_sequence(self):
        self.assertEqual(parse_sequence("F R, Ui  D'"), [Move.F, Move.R, Move.UI, Move.DI])
        self.assertEqual(parse_sequence("   "), [])
        with self.assertRaises(ValueError):
            parse_sequence("F Q")

    def test_format_sequence(self):
        self.assertEqual(format_sequence([Move.F, Move.RI]), "F Ri")

    def test_invert_sequence(self):
        self.assertEqual(invert_sequence([Move.F, Move.R, Move.UI]), [Move.U, Move.RI, Move.FI])

    def test_conjugate(self):
        self.assertEqual(conjugate([Move.R, Move.U], Move.F), [Move.F, Move.R, Move.U, Move.FI])


class TestScramble(unittest.TestCase):
    def test_length_and_no_immediate_inverse(self):
        seq = generate_scramble(200, seed=4)
        self.assertEqual(len(seq), 200)
        for a, b in zip(seq, seq[1:]):
            self.assertNotEqual(b, inverse_of(a))

    def test_seed_is_reproducible(self):
        self.assertEqual(generate_scramble(30, seed=42), generate_scramble(30, seed=42))

    def test_invalid_length(self):
        with self.assertRaises(ValueError):
            generate_scramble(0)


if __name__ == "__main__":
    unittest.main()
