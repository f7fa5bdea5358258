# rubik_search/core/types.py
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple


class Color(str, Enum):
    """Color de un sticker (facelet). El valor es la letra usada en hash y render."""

    RED = "R"
    YELLOW = "Y"
    ORANGE = "O"
    WHITE = "W"
    BLUE = "B"
    GREEN = "G"

    @property
    def char(self) -> str:
        return self.value


COLORS: List[Color] = list(Color)


class Face(int, Enum):
    """Caras del cubo. El valor es el índice del centro en `CubeState.faces`."""

    FRONT = 0
    TOP = 1
    BACK = 2
    BOTTOM = 3
    LEFT = 4
    RIGHT = 5


FACES: List[Face] = list(Face)


class Move(str, Enum):
    """Los 12 generadores (giros de un cuarto).

    `X` es el giro horario de la cara X y `Xi` su inverso. El orden de
    declaración es el orden de ramificación de la búsqueda.
    """

    F = "F"
    FI = "Fi"
    R = "R"
    RI = "Ri"
    U = "U"
    UI = "Ui"
    B = "B"
    BI = "Bi"
    L = "L"
    LI = "Li"
    D = "D"
    DI = "Di"

    def __str__(self) -> str:
        return self.value


ALL_MOVES: Tuple[Move, ...] = tuple(Move)

INVERSES: Dict[Move, Move] = {
    Move.F: Move.FI, Move.FI: Move.F,
    Move.R: Move.RI, Move.RI: Move.R,
    Move.U: Move.UI, Move.UI: Move.U,
    Move.B: Move.BI, Move.BI: Move.B,
    Move.L: Move.LI, Move.LI: Move.L,
    Move.D: Move.DI, Move.DI: Move.D,
}


def all_moves() -> Tuple[Move, ...]:
    """Devuelve los 12 generadores en el orden fijo de enumeración."""
    return ALL_MOVES


def inverse_of(move: Move) -> Move:
    """Devuelve el movimiento inverso de un generador.

    Ejemplos:
        - F  -> Fi
        - Fi -> F

    Args:
        move: Uno de los 12 generadores.

    Returns:
        El generador que deshace `move`.
    """
    return INVERSES[move]
