import unittest

from rubik_search.core import DegenerateMapError, MOVE_PERMUTATIONS, Move, Permutation, compose, invert, prune
from rubik_search.core.cube_state import solved_cube
from rubik_search.core.permutation import IDENTITY, permutation_of
from rubik_search.core.types import ALL_MOVES, inverse_of


class TestPermutation(unittest.TestCase):
    def test_generators_touch_four_corners_and_edges(self):
        for move in ALL_MOVES:
            p = MOVE_PERMUTATIONS[move]
            self.assertEqual(len(p.corners), 4, move)
            self.assertEqual(len(p.edges), 4, move)

    def test_compose_with_inverse_is_identity(self):
        for move in ALL_MOVES:
            p = MOVE_PERMUTATIONS[move]
            self.assertTrue(compose(p, invert(p)).is_identity(), move)
            self.assertTrue(compose(invert(p), p).is_identity(), move)

    def test_inverse_table_matches_inverted_permutation(self):
        for move in ALL_MOVES:
            self.assertEqual(MOVE_PERMUTATIONS[inverse_of(move)], invert(MOVE_PERMUTATIONS[move]))

    def test_double_inverse(self):
        for move in ALL_MOVES:
            p = MOVE_PERMUTATIONS[move]
            self.assertEqual(p.invert().invert(), p)

    def test_four_quarter_turns_are_identity(self):
        for move in ALL_MOVES:
            self.assertTrue(permutation_of([move] * 4).is_identity(), move)
            self.assertFalse(permutation_of([move] * 2).is_identity(), move)

    def test_compose_equals_sequential_application(self):
        pairs = [(Move.F, Move.R), (Move.U, Move.LI), (Move.B, Move.D), (Move.R, Move.R)]
        for a, b in pairs:
            c1 = solved_cube()
            c1.apply(a)
            c1.apply(b)
            c2 = solved_cube()
            c2.apply(compose(MOVE_PERMUTATIONS[a], MOVE_PERMUTATIONS[b]))
            self.assertEqual(c1.hash(), c2.hash(), (a, b))

    def test_compose_is_associative(self):
        f, r, u = MOVE_PERMUTATIONS[Move.F], MOVE_PERMUTATIONS[Move.R], MOVE_PERMUTATIONS[Move.U]
        self.assertEqual(compose(compose(f, r), u), compose(f, compose(r, u)))

    def test_disjoint_compose_keeps_both(self):
        # U y D no comparten slots
        u, d = MOVE_PERMUTATIONS[Move.U], MOVE_PERMUTATIONS[Move.D]
        ud = compose(u, d)
        self.assertEqual(len(ud.corners), 8)
        self.assertEqual(len(ud.edges), 8)
        self.assertEqual(ud, compose(d, u))

    def test_identity_entries_are_pruned(self):
        p = Permutation([(0, (0, 0)), (1, (2, 1)), (2, (1, 2))], [(3, (3, 0)), (4, (4, 1))])
        self.assertEqual(dict(p.corners), {1: (2, 1), 2: (1, 2)})
        self.assertEqual(dict(p.edges), {4: (4, 1)})
        self.assertEqual(prune(p), p)

    def test_rotation_is_reduced(self):
        p = Permutation([(0, (1, 4)), (1, (0, 3))], [(0, (1, 3)), (1, (0, 2))])
        self.assertEqual(dict(p.corners), {0: (1, 1), 1: (0, 0)})
        self.assertEqual(dict(p.edges), {0: (1, 1), 1: (0, 0)})

    def test_invert_negates_rotation(self):
        p = Permutation([(0, (1, 1)), (1, (0, 0))], [(5, (6, 1)), (6, (5, 1))])
        inv = p.invert()
        self.assertEqual(dict(inv.corners), {1: (0, 2), 0: (1, 0)})
        self.assertEqual(dict(inv.edges), {6: (5, 1), 5: (6, 1)})

    def test_invert_degenerate_map(self):
        p = Permutation([(0, (2, 0)), (1, (2, 1))])
        with self.assertRaises(DegenerateMapError):
            p.invert()
        q = Permutation(edges=[(0, (5, 0)), (3, (5, 1))])
        with self.assertRaises(DegenerateMapError):
            invert(q)

    def test_permutation_is_immutable(self):
        p = MOVE_PERMUTATIONS[Move.F]
        with self.assertRaises(TypeError):
            p.corners[0] = (0, 0)  # type: ignore[index]
        with self.assertRaises(AttributeError):
            p.extra = 1  # type: ignore[attr-defined]

    def test_empty_sequence_is_identity(self):
        self.assertEqual(permutation_of([]), IDENTITY)
        self.assertTrue(IDENTITY.is_identity())


if __name__ == "__main__":
    unittest.main()
