# rubik_search/logic/predicates.py
from __future__ import annotations

from typing import Callable, List, Tuple

from rubik_search.core.cube_state import SOLVED_CUBE, CubeState
from rubik_search.core.types import FACES, Color, Face

Predicate = Callable[[CubeState], bool]
EdgeRef = Tuple[int, int]  # (slot de arista, faceta con el color de la cara)


def _build_cross_tables() -> Tuple[List[List[EdgeRef]], List[List[Color]]]:
    """Para cada cara: qué aristas llevan su color en el cubo resuelto y el color vecino.

    Returns:
        (edges, neighbors) indexados por `Face`; las listas internas van en orden de slot.
    """
    edges: List[List[EdgeRef]] = []
    neighbors: List[List[Color]] = []
    for face in FACES:
        color = SOLVED_CUBE.faces[face]
        refs: List[EdgeRef] = []
        others: List[Color] = []
        for slot, edge in enumerate(SOLVED_CUBE.edges):
            if color in edge:
                fidx = edge.index(color)
                refs.append((slot, fidx))
                others.append(edge[1 - fidx])
        edges.append(refs)
        neighbors.append(others)
    return edges, neighbors


CROSS_EDGES, CROSS_NEIGHBORS = _build_cross_tables()


def has_cross(cube: CubeState, face: Face) -> bool:
    """Indica si las 4 aristas de `face` están en su lugar y bien orientadas."""
    color = SOLVED_CUBE.faces[face]
    for (slot, fidx), other in zip(CROSS_EDGES[face], CROSS_NEIGHBORS[face]):
        edge = cube.edges[slot]
        if edge[fidx] != color or edge[1 - fidx] != other:
            return False
    return True


def any_cross(cube: CubeState) -> bool:
    return any(has_cross(cube, face) for face in FACES)


def red_cross(cube: CubeState) -> bool:
    # Rojo es el centro de Front
    return has_cross(cube, Face.FRONT)


def front_cross(cube: CubeState) -> bool:
    """Cruz roja en Front, comparando stickers proyectados y el color vecino de cada arista."""
    face = cube.project_face(Face.FRONT)
    return (
        all(face[i] == Color.RED for i in (1, 3, 4, 5, 7))
        and cube.edges[0][1] == Color.YELLOW
        and cube.edges[1][1] == Color.GREEN
        and cube.edges[2][1] == Color.WHITE
        and cube.edges[3][1] == Color.BLUE
    )


def lower_hamming_distance(d: int, other: CubeState) -> Predicate:
    """Crea un predicado: distancia de Hamming a `other` menor que `d`."""

    def predicate(cube: CubeState) -> bool:
        return cube.hamming_distance(other) < d

    return predicate


def equality(other: CubeState) -> Predicate:
    """Crea un predicado: el cubo es idéntico a `other` (distancia 0)."""

    def predicate(cube: CubeState) -> bool:
        return cube.hamming_distance(other) == 0

    return predicate


def always_true(cube: CubeState) -> bool:
    return True


def always_false(cube: CubeState) -> bool:
    return False


# Predicados sin parámetros, por nombre (CLI y config)
NAMED_PREDICATES = {
    "any_cross": any_cross,
    "red_cross": red_cross,
    "front_cross": front_cross,
    "solved": CubeState.is_solved,
    "always_true": always_true,
    "always_false": always_false,
}


def get_predicate(name: str) -> Predicate:
    """Busca un predicado por nombre.

    Raises:
        ValueError: Si el nombre no existe.
    """
    try:
        return NAMED_PREDICATES[name]
    except KeyError:
        raise ValueError(
            f"Predicado desconocido: {name} (disponibles: {', '.join(sorted(NAMED_PREDICATES))})"
        ) from None
