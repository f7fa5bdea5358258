# rubik_search/solve/solver.py
from __future__ import annotations

import logging
import random
import time
from dataclasses import asdict, dataclass, field
from typing import Callable, Dict, Generator, Iterator, List, NamedTuple, Optional, Tuple

from rubik_search.core.cube_state import CubeState
from rubik_search.core.types import ALL_MOVES, Move, inverse_of

log = logging.getLogger("rubik.solver")

Predicate = Callable[[CubeState], bool]
MovePath = Tuple[Move, ...]


class Observation(NamedTuple):
    """Lo que produce la búsqueda en cada nodo visitado.

    `state` es una referencia al cubo compartido del solver: sólo es válida
    hasta pedir la siguiente observación. Para conservarlo, usar `state.copy()`.
    """

    state: CubeState
    path: MovePath
    result: bool


@dataclass
class SolverStats:
    """Estadísticas de diagnóstico de una búsqueda. No afectan el resultado."""

    ticks: int = 0
    hash_size: int = 0
    update_count: int = 0
    skip_count: int = 0
    skip_depth_count: Dict[int, int] = field(default_factory=dict)
    solution_count: int = 0
    elapsed_time: float = 0.0

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


class Solver:
    """Búsqueda por fuerza bruta, en profundidad y memoizada, sobre el árbol de movimientos.

    El solver es dueño del cubo que recibe y lo muta en el lugar: aplica un
    movimiento con `push_move` antes de bajar y lo deshace con `pop_move` al
    volver. Una tabla hash -> profundidad restante ya explorada evita
    re-explorar subárboles de estados alcanzados por caminos distintos.

    No es seguro compartir un `Solver` (ni su cubo) entre búsquedas concurrentes;
    cada búsqueda independiente necesita su propia copia del cubo y su propio solver.
    """

    def __init__(
        self,
        cube_state: CubeState,
        max_depth: int,
        predicate: Predicate,
        stop_when_true: bool = False,
        track_stats: bool = False,
    ) -> None:
        """Crea el solver.

        Args:
            cube_state: Cubo inicial; pasa a ser propiedad del solver.
            max_depth: Profundidad máxima de búsqueda (entero positivo).
            predicate: Condición de éxito evaluada en cada nodo.
            stop_when_true: Si True, la búsqueda termina en la primera coincidencia.
            track_stats: Si True, se acumulan estadísticas en `stats`.

        Raises:
            ValueError: Si `max_depth` no es positivo o el historial del cubo no alcanza.
        """
        self.cube_state: CubeState = cube_state
        self.max_depth: int = max_depth
        self.predicate: Predicate = predicate
        self.stop_when_true: bool = stop_when_true
        self.track_stats: bool = track_stats
        self._check_depth(max_depth)

        self.checked_depth: Dict[str, int] = {}
        self.solutions: List[MovePath] = []
        self.stats: SolverStats = SolverStats()
        self.initialize()

    def initialize(self) -> None:
        """Reinicia la tabla de profundidades, las soluciones y las estadísticas."""
        self.checked_depth = {}
        self.solutions = []
        self.stats = SolverStats()

    def _check_depth(self, depth: int) -> None:
        if depth < 1:
            raise ValueError(f"La profundidad debe ser positiva: {depth}")
        if not self.cube_state.track_history or self.cube_state.history_size < depth:
            raise ValueError(
                f"El historial del cubo debe estar activo y admitir al menos {depth} movimientos"
            )

    # --------------------------
    # Tabla de profundidades
    # --------------------------
    def has_seen_at_depth(self, depth: int) -> bool:
        """Indica si el estado actual ya fue explorado con al menos `depth` niveles restantes."""
        return self.checked_depth.get(self.cube_state.hash(), 0) >= depth

    def set_seen_depth(self, depth: int) -> None:
        """Registra que el estado actual fue explorado con `depth` niveles restantes.

        Sólo actualiza si el hash es nuevo o si mejora una profundidad menor.
        """
        h = self.cube_state.hash()
        val = self.checked_depth.get(h)
        if val is None:
            if self.track_stats:
                self.stats.hash_size += 1
            self.checked_depth[h] = depth
        elif val < depth:
            if self.track_stats:
                self.stats.update_count += 1
            self.checked_depth[h] = depth

    def _record_solution(self, path: MovePath) -> None:
        self.solutions.append(path)
        if self.track_stats:
            self.stats.solution_count += 1

    def _record_skip(self, depth: int) -> None:
        if self.track_stats:
            self.stats.skip_count += 1
            self.stats.skip_depth_count[depth] = self.stats.skip_depth_count.get(depth, 0) + 1

    def _tick(self) -> None:
        if self.track_stats:
            self.stats.ticks += 1

    # --------------------------
    # Búsquedas
    # --------------------------
    def brute_force_memoized(
        self,
        predicate: Optional[Predicate] = None,
        stop_when_true: Optional[bool] = None,
        depth: Optional[int] = None,
        branch: MovePath = (),
    ) -> Iterator[Observation]:
        """Recorre el árbol de movimientos en profundidad, con poda por transposición.

        Para cada uno de los 12 generadores, en orden fijo: aplica el movimiento,
        evalúa el predicado y emite la observación. Si el predicado se cumple se
        registra la solución (y se termina todo si `stop_when_true`); si no, y
        queda profundidad, se baja un nivel salvo que el estado ya se haya
        explorado con igual o mayor profundidad restante. Siempre se deshace el
        movimiento antes del siguiente hermano.

        Cada llamada empieza una búsqueda nueva (tabla y estadísticas vacías).
        Si se abandona la iteración a mitad, cerrar el generador con `close()`
        para que el cubo vuelva a su estado inicial.

        Args:
            predicate: Condición de éxito (por defecto la del solver).
            stop_when_true: Terminar en la primera coincidencia (por defecto la del solver).
            depth: Profundidad máxima (por defecto `max_depth`).
            branch: Prefijo de camino con el que se etiquetan las observaciones.

        Yields:
            `Observation(state, path, result)` por cada nodo visitado.
        """
        predicate = self.predicate if predicate is None else predicate
        stop_when_true = self.stop_when_true if stop_when_true is None else stop_when_true
        depth = self.max_depth if depth is None else depth
        self._check_depth(depth)

        self.initialize()
        start = time.monotonic()
        try:
            yield from self._memoized(predicate, stop_when_true, depth, tuple(branch))
        finally:
            if self.track_stats:
                self.stats.elapsed_time = time.monotonic() - start

    def _memoized(
        self,
        predicate: Predicate,
        stop_when_true: bool,
        depth: int,
        branch: MovePath,
    ) -> Generator[Observation, None, bool]:
        # Devuelve True si la búsqueda debe terminar (primera coincidencia)
        cube = self.cube_state
        for move in ALL_MOVES:
            path = branch + (move,)
            cube.push_move(move)
            try:
                result = bool(predicate(cube))
                self._tick()
                yield Observation(cube, path, result)

                if result:
                    self._record_solution(path)
                    if stop_when_true:
                        return True
                elif depth > 1:
                    if self.has_seen_at_depth(depth - 1):
                        self._record_skip(depth)
                    else:
                        stopped = yield from self._memoized(predicate, stop_when_true, depth - 1, path)
                        if stopped:
                            return True
                        self.set_seen_depth(depth - 1)
            finally:
                cube.pop_move()
        return False

    def brute_force_randomized(
        self,
        predicate: Optional[Predicate] = None,
        stop_when_true: Optional[bool] = None,
        depth: Optional[int] = None,
        branch: MovePath = (),
        rng: Optional[random.Random] = None,
    ) -> Iterator[Observation]:
        """Variante para muestreo aleatorio: sin memoización.

        En cada nodo baraja el orden de los 12 generadores y descarta el inverso
        del último movimiento del camino. Mismas observaciones y misma
        terminación temprana que `brute_force_memoized`.

        Args:
            predicate: Condición de éxito (por defecto la del solver).
            stop_when_true: Terminar en la primera coincidencia (por defecto la del solver).
            depth: Profundidad máxima (por defecto `max_depth`).
            branch: Prefijo de camino; su último movimiento también se poda.
            rng: Generador aleatorio opcional (para reproducibilidad).

        Yields:
            `Observation(state, path, result)` por cada nodo visitado.
        """
        predicate = self.predicate if predicate is None else predicate
        stop_when_true = self.stop_when_true if stop_when_true is None else stop_when_true
        depth = self.max_depth if depth is None else depth
        self._check_depth(depth)

        self.initialize()
        start = time.monotonic()
        try:
            yield from self._randomized(predicate, stop_when_true, depth, tuple(branch), rng or random.Random())
        finally:
            if self.track_stats:
                self.stats.elapsed_time = time.monotonic() - start

    def _randomized(
        self,
        predicate: Predicate,
        stop_when_true: bool,
        depth: int,
        branch: MovePath,
        rng: random.Random,
    ) -> Generator[Observation, None, bool]:
        cube = self.cube_state
        moves = list(ALL_MOVES)
        rng.shuffle(moves)
        banned = inverse_of(branch[-1]) if branch else None

        for move in moves:
            if move == banned:
                continue
            path = branch + (move,)
            cube.push_move(move)
            try:
                result = bool(predicate(cube))
                self._tick()
                yield Observation(cube, path, result)

                if result:
                    self._record_solution(path)
                    if stop_when_true:
                        return True
                if depth > 1:
                    stopped = yield from self._randomized(predicate, stop_when_true, depth - 1, path, rng)
                    if stopped:
                        return True
            finally:
                cube.pop_move()
        return False

    # --------------------------
    # Ejecución completa
    # --------------------------
    def run(
        self,
        shuffle_n: int = 0,
        print_interval: int = 0,
        rng: Optional[random.Random] = None,
    ) -> SolverStats:
        """Mezcla el cubo (opcional) y agota la búsqueda memoizada.

        Args:
            shuffle_n: Movimientos aleatorios a aplicar antes de buscar.
            print_interval: Cada cuántas observaciones loguear estadísticas (0 = nunca).
            rng: Generador aleatorio opcional para la mezcla.

        Returns:
            Las estadísticas de la búsqueda; las soluciones quedan en `solutions`.
        """
        if shuffle_n > 0:
            self.cube_state.shuffle(shuffle_n, rng)

        ticks = 0
        for _ in self.brute_force_memoized():
            ticks += 1
            if print_interval and ticks % print_interval == 0:
                log.info("tick %d: %s", ticks, self.stats.as_dict())

        # ticks se cuenta siempre, aunque track_stats esté apagado
        self.stats.ticks = ticks
        log.info(
            "Búsqueda terminada (profundidad %d): %d observaciones, %d soluciones",
            self.max_depth, ticks, len(self.solutions),
        )
        if self.track_stats:
            log.debug("Estadísticas: %s", self.stats.as_dict())
        return self.stats

    def __repr__(self) -> str:
        return "Solver(depth=%d, states=%d)" % (self.max_depth, len(self.checked_depth))
