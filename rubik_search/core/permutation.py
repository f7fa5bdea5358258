# rubik_search/core/permutation.py
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from rubik_search.core.errors import DegenerateMapError
from rubik_search.core.types import Move

Slot = int
Target = Tuple[Slot, int]  # (slot destino, rotación)
SlotMap = Mapping[Slot, Target]

CORNER_MOD = 3
EDGE_MOD = 2


class Permutation:
    """Efecto de un movimiento sobre los slots del cubo.

    Representación:
        - `corners`: slot de esquina -> (slot destino, rotación mod 3).
        - `edges`: slot de arista -> (slot destino, flip mod 2).

    Ambos mapeos son parciales: un slot ausente equivale a la identidad. Las
    entradas identidad (slot -> (mismo slot, 0)) se eliminan al construir, y
    la instancia no se modifica después; `compose`, `invert` y `prune`
    devuelven siempre una permutación nueva.
    """

    __slots__ = ("_corners", "_edges")

    def __init__(
        self,
        corners: Optional[Iterable[Tuple[Slot, Target]]] = None,
        edges: Optional[Iterable[Tuple[Slot, Target]]] = None,
    ) -> None:
        c = _normalize(dict(corners or ()), CORNER_MOD)
        e = _normalize(dict(edges or ()), EDGE_MOD)
        self._corners: SlotMap = MappingProxyType(c)
        self._edges: SlotMap = MappingProxyType(e)

    @property
    def corners(self) -> SlotMap:
        return self._corners

    @property
    def edges(self) -> SlotMap:
        return self._edges

    # --------------------------
    # Álgebra
    # --------------------------
    def compose(self, other: Permutation) -> Permutation:
        """Compone `self` seguido de `other`.

        Args:
            other: Permutación que se aplica después de `self`.

        Returns:
            Una permutación equivalente a aplicar `self` y luego `other`.
        """
        return Permutation(
            _compose_map(self._corners, other._corners, CORNER_MOD).items(),
            _compose_map(self._edges, other._edges, EDGE_MOD).items(),
        )

    def invert(self) -> Permutation:
        """Devuelve la permutación inversa.

        Raises:
            DegenerateMapError: Si dos slots de origen van al mismo destino.
        """
        return Permutation(
            _invert_map(self._corners, CORNER_MOD).items(),
            _invert_map(self._edges, EDGE_MOD).items(),
        )

    def prune(self) -> Permutation:
        """Devuelve la permutación sin entradas identidad.

        Como el constructor ya poda, esto equivale a una copia.
        """
        return Permutation(self._corners.items(), self._edges.items())

    def is_identity(self) -> bool:
        return not self._corners and not self._edges

    # --------------------------
    # Helpers de valor
    # --------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return dict(self._corners) == dict(other._corners) and dict(self._edges) == dict(other._edges)

    def __hash__(self) -> int:
        return hash((frozenset(self._corners.items()), frozenset(self._edges.items())))

    def __repr__(self) -> str:
        return "Permutation(corners=%r, edges=%r)" % (dict(self._corners), dict(self._edges))


def _normalize(m: Dict[Slot, Target], mod: int) -> Dict[Slot, Target]:
    """Reduce rotaciones mod `mod` y elimina entradas identidad."""
    out: Dict[Slot, Target] = {}
    for src, (dst, rot) in m.items():
        rot %= mod
        if src == dst and rot == 0:
            continue
        out[src] = (dst, rot)
    return out


def _compose_map(first: SlotMap, second: SlotMap, mod: int) -> Dict[Slot, Target]:
    # destino en `first` -> (origen, rotación)
    landed: Dict[Slot, Target] = {dst: (src, rot) for src, (dst, rot) in first.items()}

    result: Dict[Slot, Target] = dict(first)
    for src2, (dst2, rot2) in second.items():
        if src2 in landed:
            src1, rot1 = landed[src2]
            result[src1] = (dst2, (rot1 + rot2) % mod)
        else:
            result[src2] = (dst2, rot2)
    return result


def _invert_map(m: SlotMap, mod: int) -> Dict[Slot, Target]:
    dest: Dict[Slot, Target] = {}
    for src, (dst, rot) in m.items():
        existing = dest.get(dst)
        if existing is not None:
            raise DegenerateMapError(
                f"No se puede invertir un mapeo degenerado: {existing[0]} y {src} van a {dst}"
            )
        dest[dst] = (src, (mod - rot) % mod)
    return dest


def compose(a: Permutation, b: Permutation) -> Permutation:
    """Forma funcional de `Permutation.compose`."""
    return a.compose(b)


def invert(p: Permutation) -> Permutation:
    """Forma funcional de `Permutation.invert`."""
    return p.invert()


def prune(p: Permutation) -> Permutation:
    """Forma funcional de `Permutation.prune`."""
    return p.prune()


IDENTITY = Permutation()


# --------------------------
# Generadores
# --------------------------
# Slots de esquina: 0 ULF, 1 ULB, 2 URB, 3 URF, 4 DLF, 5 DLB, 6 DRB, 7 DRF.
# Slots de arista: 0-3 frente (arriba, derecha, abajo, izquierda),
# 4-7 medio, 8-11 atrás.
def _build_move_permutations() -> Dict[Move, Permutation]:
    base: Dict[Move, Permutation] = {
        Move.F: Permutation(
            [(0, (3, 1)), (3, (7, 2)), (7, (4, 1)), (4, (0, 2))],
            [(0, (1, 0)), (1, (2, 0)), (2, (3, 0)), (3, (0, 0))],
        ),
        Move.R: Permutation(
            [(3, (2, 1)), (2, (6, 2)), (6, (7, 1)), (7, (3, 2))],
            [(1, (5, 0)), (5, (9, 1)), (9, (6, 0)), (6, (1, 1))],
        ),
        Move.U: Permutation(
            [(0, (1, 0)), (1, (2, 0)), (2, (3, 0)), (3, (0, 0))],
            [(0, (4, 0)), (4, (8, 1)), (8, (5, 0)), (5, (0, 1))],
        ),
        Move.B: Permutation(
            [(2, (1, 1)), (1, (5, 2)), (5, (6, 1)), (6, (2, 2))],
            [(11, (10, 0)), (10, (9, 0)), (9, (8, 0)), (8, (11, 0))],
        ),
        Move.L: Permutation(
            [(1, (0, 1)), (0, (4, 2)), (4, (5, 1)), (5, (1, 2))],
            [(3, (7, 0)), (7, (11, 1)), (11, (4, 0)), (4, (3, 1))],
        ),
        Move.D: Permutation(
            [(7, (6, 0)), (6, (5, 0)), (5, (4, 0)), (4, (7, 0))],
            [(6, (10, 1)), (10, (7, 0)), (7, (2, 1)), (2, (6, 0))],
        ),
    }
    perms: Dict[Move, Permutation] = {}
    for move in Move:
        if move in base:
            perms[move] = base[move]
        else:
            # "Xi" es el inverso de "X"
            perms[move] = base[Move(move.value[0])].invert()
    return perms


MOVE_PERMUTATIONS: Mapping[Move, Permutation] = MappingProxyType(_build_move_permutations())


def permutation_of(moves: Iterable[Move]) -> Permutation:
    """Compone una secuencia de movimientos en una sola permutación.

    Args:
        moves: Movimientos en orden de aplicación.

    Returns:
        La permutación equivalente (identidad si la secuencia es vacía).
    """
    result = IDENTITY
    for move in moves:
        result = result.compose(MOVE_PERMUTATIONS[move])
    return result
