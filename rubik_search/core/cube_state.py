# rubik_search/core/cube_state.py
from __future__ import annotations

import random
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from rubik_search.core.errors import InvalidStateError
from rubik_search.core.permutation import MOVE_PERMUTATIONS, Permutation
from rubik_search.core.types import ALL_MOVES, COLORS, FACES, Color, Face, Move, inverse_of

Corner = Tuple[Color, Color, Color]
Edge = Tuple[Color, Color]
NineColors = Tuple[Color, Color, Color, Color, Color, Color, Color, Color, Color]
FaceletRef = Tuple[int, int]  # (slot, índice de faceta)

DEFAULT_HISTORY_SIZE = 1000

# Para cada cara, de dónde sale cada uno de sus 9 stickers (orden fila-columna).
# ("c", slot, faceta) = esquina, ("e", slot, faceta) = arista, ("f", cara, 0) = centro.
FACE_LAYOUT: Dict[Face, Tuple[Tuple[str, int, int], ...]] = {
    Face.FRONT: (
        ("c", 0, 0), ("e", 0, 0), ("c", 3, 1),
        ("e", 3, 0), ("f", 0, 0), ("e", 1, 0),
        ("c", 4, 1), ("e", 2, 0), ("c", 7, 0),
    ),
    Face.TOP: (
        ("c", 1, 2), ("e", 8, 0), ("c", 2, 2),
        ("e", 4, 1), ("f", 1, 0), ("e", 5, 0),
        ("c", 0, 2), ("e", 0, 1), ("c", 3, 2),
    ),
    Face.BACK: (
        ("c", 5, 0), ("e", 10, 1), ("c", 6, 1),
        ("e", 11, 1), ("f", 2, 0), ("e", 9, 1),
        ("c", 1, 1), ("e", 8, 1), ("c", 2, 0),
    ),
    Face.BOTTOM: (
        ("c", 4, 2), ("e", 2, 1), ("c", 7, 2),
        ("e", 7, 0), ("f", 3, 0), ("e", 6, 1),
        ("c", 5, 2), ("e", 10, 0), ("c", 6, 2),
    ),
    Face.LEFT: (
        ("c", 1, 0), ("e", 4, 0), ("c", 0, 1),
        ("e", 11, 0), ("f", 4, 0), ("e", 3, 1),
        ("c", 5, 1), ("e", 7, 1), ("c", 4, 0),
    ),
    Face.RIGHT: (
        ("c", 3, 0), ("e", 5, 1), ("c", 2, 1),
        ("e", 1, 1), ("f", 5, 0), ("e", 9, 0),
        ("c", 7, 1), ("e", 6, 0), ("c", 6, 0),
    ),
}


def rotate_corner(corner: Corner, rotation: int) -> Corner:
    """Rota cíclicamente las 3 facetas de una esquina.

    Args:
        corner: Tripla de colores.
        rotation: Cantidad de rotación (se toma mod 3).

    Returns:
        La tripla rotada: 1 -> (c2, c0, c1), 2 -> (c1, c2, c0).
    """
    r = rotation % 3
    if r == 1:
        return (corner[2], corner[0], corner[1])
    if r == 2:
        return (corner[1], corner[2], corner[0])
    return corner


def flip_edge(edge: Edge) -> Edge:
    """Intercambia las 2 facetas de una arista."""
    return (edge[1], edge[0])


class CubeState:
    """Estado del cubo 3x3 como permutación de cubelets.

    Representación:
        - `faces`: los 6 centros (índice = `Face`); nunca se mueven.
        - `corners`: 8 triplas de colores, indexadas por slot de esquina.
        - `edges`: 12 pares de colores, indexados por slot de arista.
        - `move_history`: ventana acotada de movimientos aplicados, usada sólo para deshacer.

    Invariante:
        Cada color aparece exactamente 9 veces entre los 54 stickers.
    """

    def __init__(
        self,
        faces: Sequence[Color],
        corners: Sequence[Sequence[Color]],
        edges: Sequence[Sequence[Color]],
        track_history: bool = True,
        history_size: int = DEFAULT_HISTORY_SIZE,
    ) -> None:
        """Construye y valida un estado.

        Args:
            faces: 6 colores de centro (Front, Top, Back, Bottom, Left, Right).
            corners: 8 triplas de colores.
            edges: 12 pares de colores.
            track_history: Si False, `push_move` no registra historial.
            history_size: Capacidad de la ventana de historial.

        Raises:
            InvalidStateError: Si la forma es incorrecta o algún color no aparece 9 veces.
        """
        if len(faces) != 6 or len(corners) != 8 or len(edges) != 12:
            raise InvalidStateError(
                f"Forma inválida: {len(faces)} centros, {len(corners)} esquinas, {len(edges)} aristas"
            )
        if any(len(c) != 3 for c in corners) or any(len(e) != 2 for e in edges):
            raise InvalidStateError("Cada esquina necesita 3 colores y cada arista 2")

        try:
            self.faces: Tuple[Color, ...] = tuple(Color(f) for f in faces)
            self.corners: List[Corner] = [tuple(Color(x) for x in c) for c in corners]  # type: ignore[misc]
            self.edges: List[Edge] = [tuple(Color(x) for x in e) for e in edges]  # type: ignore[misc]
        except ValueError as exc:
            raise InvalidStateError(f"Color desconocido: {exc}") from exc

        self.track_history: bool = track_history
        self.history_size: int = history_size
        self.move_history: Deque[Move] = deque(maxlen=history_size)

        if not self.validate():
            raise InvalidStateError(f"Estado inicial inválido, conteo de colores: {self.count_colors()}")

    # --------------------------
    # Invariantes
    # --------------------------
    def count_colors(self) -> Dict[Color, int]:
        """Cuenta cuántos stickers hay de cada color (centros incluidos)."""
        counts: Dict[Color, int] = {c: 0 for c in COLORS}
        for color in self.faces:
            counts[color] += 1
        for corner in self.corners:
            for color in corner:
                counts[color] += 1
        for edge in self.edges:
            for color in edge:
                counts[color] += 1
        return counts

    def validate(self) -> bool:
        return all(n == 9 for n in self.count_colors().values())

    # --------------------------
    # Movimientos
    # --------------------------
    def apply(self, move: Union[Move, Permutation]) -> None:
        """Aplica un movimiento (o una permutación arbitraria) sin tocar el historial.

        Todas las lecturas se hacen sobre una foto del estado previo, porque
        varios slots se reescriben a partir de orígenes que se solapan.

        Args:
            move: Generador o `Permutation` a aplicar.
        """
        perm = move if isinstance(move, Permutation) else MOVE_PERMUTATIONS[move]

        pre_corners = list(self.corners)
        pre_edges = list(self.edges)

        for src, (dst, rotation) in perm.corners.items():
            self.corners[dst] = rotate_corner(pre_corners[src], rotation)

        for src, (dst, swap) in perm.edges.items():
            edge = pre_edges[src]
            self.edges[dst] = flip_edge(edge) if swap else edge

    def push_move(self, move: Move) -> None:
        """Registra el movimiento en el historial (si está activo) y lo aplica."""
        if self.track_history:
            # deque(maxlen) descarta la entrada más vieja
            self.move_history.append(move)
        self.apply(move)

    def push_moves(self, moves: Iterable[Move]) -> None:
        for move in moves:
            self.push_move(move)

    def pop_move(self) -> Optional[Move]:
        """Deshace el último movimiento registrado.

        Returns:
            El movimiento deshecho, o None si el historial está vacío.
        """
        if not self.move_history:
            return None
        move = self.move_history.pop()
        self.apply(inverse_of(move))
        return move

    def pop_moves(self, n: int) -> List[Move]:
        undone: List[Move] = []
        for _ in range(n):
            move = self.pop_move()
            if move is None:
                break
            undone.append(move)
        return undone

    def random_move(self, rng: Optional[random.Random] = None) -> Move:
        """Elige un generador uniformemente al azar y lo aplica con `push_move`.

        Args:
            rng: Generador aleatorio opcional (para reproducibilidad).

        Returns:
            El movimiento aplicado.
        """
        move = (rng or random).choice(ALL_MOVES)
        self.push_move(move)
        return move

    def shuffle(self, n: int, rng: Optional[random.Random] = None) -> List[Move]:
        """Aplica `n` movimientos aleatorios y los devuelve en orden."""
        return [self.random_move(rng) for _ in range(n)]

    # --------------------------
    # Lectura
    # --------------------------
    def project_face(self, face: Face) -> NineColors:
        """Reconstruye los 9 stickers visibles de una cara.

        Args:
            face: Cara a proyectar.

        Returns:
            Tupla de 9 colores en orden fila-columna (el índice 4 es el centro).
        """
        out: List[Color] = []
        for kind, idx, facet in FACE_LAYOUT[Face(face)]:
            if kind == "c":
                out.append(self.corners[idx][facet])
            elif kind == "e":
                out.append(self.edges[idx][facet])
            else:
                out.append(self.faces[idx])
        return tuple(out)  # type: ignore[return-value]

    def is_solved(self) -> bool:
        """Indica si cada cara muestra un solo color."""
        for face in FACES:
            stickers = self.project_face(face)
            if any(s != stickers[4] for s in stickers):
                return False
        return True

    def hash(self) -> str:
        """Huella del contenido: facetas de esquinas y luego de aristas, en orden de slot.

        Los centros no participan porque los giros nunca los mueven.
        """
        return "".join(c.value for corner in self.corners for c in corner) + "".join(
            c.value for edge in self.edges for c in edge
        )

    def hamming_distance(self, other: CubeState) -> int:
        """Cuenta cubelets (esquinas y aristas completas) distintos respecto de `other`.

        Un cubelet cuenta si cualquiera de sus facetas difiere. Rango: 0..20.
        """
        d = sum(1 for a, b in zip(self.corners, other.corners) if a != b)
        d += sum(1 for a, b in zip(self.edges, other.edges) if a != b)
        return d

    def find_edges(self, color: Color) -> List[FaceletRef]:
        """Devuelve los pares (slot, faceta) de aristas que muestran `color`."""
        return [
            (idx, fidx)
            for idx, edge in enumerate(self.edges)
            for fidx, c in enumerate(edge)
            if c == color
        ]

    def find_corners(self, color: Color) -> List[FaceletRef]:
        """Devuelve los pares (slot, faceta) de esquinas que muestran `color`."""
        return [
            (idx, fidx)
            for idx, corner in enumerate(self.corners)
            for fidx, c in enumerate(corner)
            if c == color
        ]

    def copy(self, with_history: bool = False) -> CubeState:
        """Copia por valor, con estado mutable independiente.

        Args:
            with_history: Si True, también copia el historial de movimientos.
        """
        c = CubeState(
            self.faces,
            self.corners,
            self.edges,
            track_history=self.track_history,
            history_size=self.history_size,
        )
        if with_history:
            c.move_history.extend(self.move_history)
        return c

    def to_block_string(self) -> str:
        """Render de texto de las 6 caras: 3 filas de 6 segmentos de 3 letras.

        Orden de caras: Front, Top, Back, Bottom, Left, Right.
        """
        rendered = ["".join(c.value for c in self.project_face(face)) for face in FACES]
        return "\n".join(
            " ".join(face[row:row + 3] for face in rendered) for row in (0, 3, 6)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CubeState):
            return NotImplemented
        return self.faces == other.faces and self.corners == other.corners and self.edges == other.edges

    def __hash__(self) -> int:
        # Depende del estado actual: no mutar un cubo mientras esté en un set o como clave
        return hash((tuple(self.faces), self.hash()))

    def __repr__(self) -> str:
        return "CubeState(%s)" % self.hash()

    def __str__(self) -> str:
        return self.to_block_string()


# --------------------------
# Estado resuelto
# --------------------------
R, Y, O, W, B, G = Color.RED, Color.YELLOW, Color.ORANGE, Color.WHITE, Color.BLUE, Color.GREEN

SOLVED_FACES: Tuple[Color, ...] = (R, Y, O, W, B, G)

SOLVED_CORNERS: Tuple[Corner, ...] = (
    (R, B, Y),  # 0
    (B, O, Y),  # 1
    (O, G, Y),  # 2
    (G, R, Y),  # 3
    (B, R, W),  # 4
    (O, B, W),  # 5
    (G, O, W),  # 6
    (R, G, W),  # 7
)

SOLVED_EDGES: Tuple[Edge, ...] = (
    (R, Y), (R, G), (R, W), (R, B),
    (B, Y), (Y, G), (G, W), (W, B),
    (Y, O), (G, O), (W, O), (B, O),
)


def solved_cube(track_history: bool = True, history_size: int = DEFAULT_HISTORY_SIZE) -> CubeState:
    """Crea un cubo nuevo en estado resuelto."""
    return CubeState(
        SOLVED_FACES,
        SOLVED_CORNERS,
        SOLVED_EDGES,
        track_history=track_history,
        history_size=history_size,
    )


# Referencia de sólo lectura; para mutar usar `SOLVED_CUBE.copy()` o `solved_cube()`.
SOLVED_CUBE: CubeState = solved_cube()
