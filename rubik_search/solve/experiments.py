# rubik_search/solve/experiments.py
from __future__ import annotations

import logging
import random
from typing import Dict, List, NamedTuple, Optional, Tuple

from rubik_search.core.cube_state import SOLVED_CUBE, solved_cube
from rubik_search.core.types import Move
from rubik_search.logic import predicates
from rubik_search.solve.solver import Predicate, Solver, SolverStats

log = logging.getLogger("rubik.experiments")

# Cantidad de estados alcanzables del cubo 3x3
CUBE_STATES = 43252003274489856000


class BatchResult(NamedTuple):
    runs: List[SolverStats]
    solved_runs: int


class HillclimbResult(NamedTuple):
    start_distance: int
    best_distance: int
    best_path: Tuple[Move, ...]
    ticks: int


def brute_force_batch(
    test_count: int,
    depth: int,
    predicate: Predicate = predicates.any_cross,
    shuffle_n: int = 30,
    stop_when_true: bool = True,
    seed: Optional[int] = None,
) -> BatchResult:
    """Repite búsquedas memoizadas sobre cubos mezclados al azar.

    Args:
        test_count: Cantidad de búsquedas.
        depth: Profundidad de cada búsqueda.
        predicate: Condición de éxito.
        shuffle_n: Movimientos aleatorios antes de cada búsqueda.
        stop_when_true: Terminar cada búsqueda en la primera coincidencia.
        seed: Semilla opcional.

    Returns:
        Estadísticas de cada corrida y cuántas encontraron al menos una solución.
    """
    rng = random.Random(seed)
    solver = Solver(solved_cube(), depth, predicate, stop_when_true=stop_when_true, track_stats=True)

    runs: List[SolverStats] = []
    solved_runs = 0
    log.info("params: test_count=%d, shuffle_n=%d, depth=%d", test_count, shuffle_n, depth)
    for i in range(test_count):
        stats = solver.run(shuffle_n=shuffle_n, rng=rng)
        runs.append(stats)
        if stats.solution_count > 0:
            solved_runs += 1
        log.info("run %d: %.2fs, %d soluciones, %d estados", i, stats.elapsed_time, stats.solution_count, stats.hash_size)

    if runs:
        avg = sum(r.elapsed_time for r in runs) / len(runs)
        log.info("%d corridas, %.2fs promedio; con solución: %d", len(runs), avg, solved_runs)
    return BatchResult(runs, solved_runs)


def hillclimb(depth: int, shuffle_n: int = 50, seed: Optional[int] = None) -> HillclimbResult:
    """Busca, desde un cubo mezclado, el camino que más acerca al cubo resuelto.

    La cercanía se mide con la distancia de Hamming; la búsqueda es exhaustiva
    hasta `depth` (sin predicado de corte).

    Args:
        depth: Profundidad de búsqueda.
        shuffle_n: Movimientos aleatorios de la mezcla inicial.
        seed: Semilla opcional.

    Returns:
        Distancia inicial, mejor distancia encontrada, su camino y observaciones totales.
    """
    rng = random.Random(seed)
    cube = solved_cube()
    cube.shuffle(shuffle_n, rng)

    start = cube.hamming_distance(SOLVED_CUBE)
    best = start
    best_path: Tuple[Move, ...] = ()
    ticks = 0

    solver = Solver(cube, depth, predicates.always_false)
    for obs in solver.brute_force_memoized():
        ticks += 1
        d = obs.state.hamming_distance(SOLVED_CUBE)
        if d < best:
            best = d
            best_path = obs.path

    log.info("hillclimb: distancia %d -> %d en %d observaciones", start, best, ticks)
    return HillclimbResult(start, best, best_path, ticks)


def hamming_histogram(test_count: int, shuffle_n: int = 20, seed: Optional[int] = None) -> Dict[int, float]:
    """Distribución (en %) de la distancia de Hamming al resuelto tras `shuffle_n` movimientos.

    Returns:
        Distancia (0..20) -> porcentaje de cubos con esa distancia.
    """
    if test_count <= 0:
        raise ValueError("test_count debe ser mayor que 0.")

    rng = random.Random(seed)
    hist: Dict[int, int] = {d: 0 for d in range(21)}
    for _ in range(test_count):
        cube = solved_cube(track_history=False)
        cube.shuffle(shuffle_n, rng)
        hist[cube.hamming_distance(SOLVED_CUBE)] += 1

    return {d: n * 100.0 / test_count for d, n in hist.items()}


def cross_frequency(test_count: int, shuffle_n: int = 30, seed: Optional[int] = None) -> Dict[str, float]:
    """Estima por muestreo cuántos estados tienen alguna cruz o la cruz roja.

    Returns:
        Conteos, fracciones y la estimación sobre el total de estados del cubo.
    """
    if test_count <= 0:
        raise ValueError("test_count debe ser mayor que 0.")

    rng = random.Random(seed)
    cube = solved_cube(track_history=False)
    count_any = 0
    count_red = 0
    for _ in range(test_count):
        cube.shuffle(shuffle_n, rng)
        if predicates.any_cross(cube):
            count_any += 1
        if predicates.red_cross(cube):
            count_red += 1

    return {
        "test_count": test_count,
        "count_any": count_any,
        "count_red": count_red,
        "estimate_any": count_any / test_count * CUBE_STATES,
        "estimate_red": count_red / test_count * CUBE_STATES,
    }


class HammingTrend(NamedTuple):
    increase: float
    decrease: float
    no_change: float
    lowest: int


def hamming_trend(
    test_count: int,
    shuffle_n: int = 10,
    walk: bool = False,
    warmup: int = 100,
    seed: Optional[int] = None,
) -> HammingTrend:
    """Mide si un movimiento al azar acerca o aleja al cubo del resuelto.

    Parte de un cubo mezclado con `warmup` movimientos. En cada prueba compara la
    distancia de Hamming al resuelto antes y después de un movimiento aleatorio.

    Args:
        test_count: Cantidad de pruebas.
        shuffle_n: Movimientos de mezcla antes de cada prueba (ignorado si `walk`).
        walk: Si es True, las pruebas forman una sola caminata aleatoria y cada
            paso se compara con el anterior.
        warmup: Movimientos de mezcla iniciales.
        seed: Semilla opcional.

    Returns:
        Fracciones de pruebas con aumento, disminución o sin cambio, y la menor
        distancia vista.

    Raises:
        ValueError: Si `test_count <= 0`.
    """
    if test_count <= 0:
        raise ValueError("test_count debe ser mayor que 0.")

    rng = random.Random(seed)
    cube = solved_cube(track_history=False)
    cube.shuffle(warmup, rng)
    d = cube.hamming_distance(SOLVED_CUBE)
    lowest = d
    increase = decrease = no_change = 0

    for _ in range(test_count):
        if not walk:
            cube.shuffle(shuffle_n, rng)
            d = cube.hamming_distance(SOLVED_CUBE)
        cube.random_move(rng)
        after = cube.hamming_distance(SOLVED_CUBE)
        if after < d:
            decrease += 1
        elif after > d:
            increase += 1
        else:
            no_change += 1
        if after < lowest:
            lowest = after
            log.debug("nueva distancia mínima %d", lowest)
        d = after

    return HammingTrend(increase / test_count, decrease / test_count, no_change / test_count, lowest)
