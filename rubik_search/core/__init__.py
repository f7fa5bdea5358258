from rubik_search.core.cube_state import SOLVED_CUBE, CubeState, solved_cube
from rubik_search.core.errors import DegenerateMapError, InvalidStateError, RubikError
from rubik_search.core.permutation import MOVE_PERMUTATIONS, Permutation, compose, invert, prune
from rubik_search.core.types import ALL_MOVES, Color, Face, Move, all_moves, inverse_of

__all__ = (
    "ALL_MOVES",
    "Color",
    "CubeState",
    "DegenerateMapError",
    "Face",
    "InvalidStateError",
    "MOVE_PERMUTATIONS",
    "Move",
    "Permutation",
    "RubikError",
    "SOLVED_CUBE",
    "all_moves",
    "compose",
    "inverse_of",
    "invert",
    "prune",
    "solved_cube",
)
