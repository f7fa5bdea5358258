# rubik_search/logic/scramble.py
from __future__ import annotations

import random
from typing import List, Optional

from rubik_search.core.types import ALL_MOVES, Move, inverse_of


def generate_scramble(n: int, seed: Optional[int] = None) -> List[Move]:
    """Genera una secuencia de mezcla (scramble) aleatoria para el cubo.

    La secuencia evita aplicar el inverso del movimiento anterior (por ejemplo,
    "F Fi" seguidos), que no cambiaría el cubo.

    Args:
        n: Cantidad de movimientos a generar.
        seed: Semilla opcional para obtener resultados reproducibles. Si es None,
            el scramble será distinto en cada ejecución.

    Returns:
        Lista de movimientos, por ejemplo: [Move.R, Move.UI, Move.F, ...]

    Raises:
        ValueError: Si `n` es menor o igual a 0.
    """
    if n <= 0:
        raise ValueError("n debe ser mayor que 0.")

    rng = random.Random(seed)

    seq: List[Move] = []
    last: Optional[Move] = None

    for _ in range(n):
        candidates = [m for m in ALL_MOVES if last is None or m != inverse_of(last)]
        move = rng.choice(candidates)
        seq.append(move)
        last = move

    return seq
