# rubik_search/logic/moves.py
from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Set

from rubik_search.core.types import Move, inverse_of

VALID_FACES: Set[str] = {"F", "R", "U", "B", "L", "D"}
VALID_SUFFIX: Set[str] = {"", "i", "'"}


def normalize_token(tok: str) -> str:
    """Normaliza un token de movimiento a la notación del paquete.

    Reglas principales:
    - Elimina espacios y convierte comilla tipográfica (’ o ‘) a comilla simple (').
    - Acepta una cara con sufijo opcional:
        - ""  (ej: "R")
        - "i" (ej: "Ri")
        - "'" (ej: "R'"), equivalente a "i"

    Args:
        tok: Token de movimiento (por ejemplo: "R", "Ui", "F'").

    Returns:
        Token normalizado (por ejemplo: "F'" -> "Fi"). Vacío si `tok` es vacío.

    Raises:
        ValueError: Si la cara no es válida o si el sufijo no es válido.
    """
    tok = tok.strip().replace("’", "'").replace("‘", "'")
    if not tok:
        return ""

    base = tok[0]
    suf = tok[1:]

    if base not in VALID_FACES:
        raise ValueError(f"Movimiento inválido: {tok}")

    if suf not in VALID_SUFFIX:
        raise ValueError(f"Sufijo inválido en: {tok}")

    return base + ("i" if suf else "")


def parse_move(tok: str) -> Move:
    """Convierte un token en `Move`.

    Raises:
        ValueError: Si el token es vacío o inválido.
    """
    norm = normalize_token(tok)
    if not norm:
        raise ValueError("Movimiento vacío")
    return Move(norm)


def parse_sequence(text: str) -> List[Move]:
    """Convierte una secuencia escrita como texto en una lista de movimientos.

    Los movimientos se separan con espacios o comas. Por ejemplo:
        "R U Ri Ui" -> [Move.R, Move.U, Move.RI, Move.UI]

    Args:
        text: Secuencia de movimientos escrita como string.

    Returns:
        Lista de movimientos, en el mismo orden.

    Raises:
        ValueError: Si algún token es inválido.
    """
    tokens = [t for t in re.split(r"[\s,]+", text.strip()) if t]
    return [parse_move(t) for t in tokens]


def format_sequence(moves: Iterable[Move]) -> str:
    return " ".join(m.value for m in moves)


def invert_sequence(moves: Sequence[Move]) -> List[Move]:
    """Devuelve la secuencia que deshace `moves` (inversos en orden inverso)."""
    return [inverse_of(m) for m in reversed(moves)]


def conjugate(seq: Sequence[Move], move: Move) -> List[Move]:
    """Conjuga una secuencia: `move`, luego `seq`, luego el inverso de `move`."""
    return [move, *seq, inverse_of(move)]
