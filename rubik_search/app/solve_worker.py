# rubik_search/app/solve_worker.py
from __future__ import annotations

import traceback
from typing import Callable, List, Optional, Sequence

from PySide6.QtCore import QCoreApplication, QThread, Signal

from rubik_search.core.cube_state import CubeState
from rubik_search.solve.solver import MovePath, Predicate, Solver, SolverStats

PROGRESS_INTERVAL = 1000

_app: Optional[QCoreApplication] = None


def _ensure_app() -> QCoreApplication:
    """Devuelve la aplicación Qt del proceso, creándola si hace falta (QThread la necesita)."""
    global _app
    app = QCoreApplication.instance()
    if app is None:
        _app = app = QCoreApplication([])
    return app


class SolveWorker(QThread):
    """Hilo de trabajo que corre una búsqueda memoizada sin bloquear a quien la lanza.

    La búsqueda muta su cubo en el lugar, así que el worker trabaja siempre
    sobre una copia propia (con su propio `Solver` y su propia tabla).

    Signals:
        progress(int): Cantidad de observaciones, cada `PROGRESS_INTERVAL`.
        finished_solution(object): Primer camino solución (tuple[Move, ...]) o None.
        finished_stats(object): `SolverStats` al terminar.
        error(str): Se emite si ocurre una excepción durante la búsqueda.
    """

    progress = Signal(int)
    finished_solution = Signal(object)
    finished_stats = Signal(object)
    error = Signal(str)

    def __init__(
        self,
        cube: CubeState,
        max_depth: int,
        predicate: Predicate,
        stop_when_true: bool = True,
        track_stats: bool = True,
    ) -> None:
        """Crea el worker y clona el cubo para trabajo en segundo plano.

        Args:
            cube: Cubo cuyo estado se quiere explorar (no se modifica).
            max_depth: Profundidad máxima de la búsqueda.
            predicate: Condición de éxito.
            stop_when_true: Terminar en la primera coincidencia.
            track_stats: Acumular estadísticas.
        """
        super().__init__()
        self.solver: Solver = Solver(
            cube.copy(),
            max_depth,
            predicate,
            stop_when_true=stop_when_true,
            track_stats=track_stats,
        )
        self.solutions: List[MovePath] = []
        self.stats: Optional[SolverStats] = None
        self.error_message: Optional[str] = None
        self.cancelled: bool = False

    def run(self) -> None:
        """Punto de entrada del hilo.

        La cancelación (`requestInterruption`) se revisa en cada observación.
        """
        try:
            ticks = 0
            search = self.solver.brute_force_memoized()
            try:
                for _ in search:
                    ticks += 1
                    if ticks % PROGRESS_INTERVAL == 0:
                        self.progress.emit(ticks)
                    if self.isInterruptionRequested():
                        self.cancelled = True
                        break
            finally:
                # Restaura el cubo si se cortó a mitad
                search.close()

            self.solutions = list(self.solver.solutions)
            self.stats = self.solver.stats
            self.finished_stats.emit(self.stats)
            self.finished_solution.emit(self.solutions[0] if self.solutions else None)
        except Exception:
            self.error_message = traceback.format_exc()
            self.error.emit(self.error_message)


def run_parallel(
    cubes: Sequence[CubeState],
    max_depth: int,
    predicate: Predicate,
    stop_when_true: bool = True,
    on_finished: Optional[Callable[[SolveWorker], None]] = None,
) -> List[SolveWorker]:
    """Lanza una búsqueda independiente por cubo, cada una en su hilo, y espera a todas.

    Args:
        cubes: Cubos de partida (se copian; no se modifican).
        max_depth: Profundidad máxima de cada búsqueda.
        predicate: Condición de éxito (debe ser segura de llamar desde varios hilos).
        stop_when_true: Terminar cada búsqueda en la primera coincidencia.
        on_finished: Callback opcional, llamado por cada worker ya terminado.

    Returns:
        Los workers, en el mismo orden que `cubes`, con `solutions` y `stats` completos.
    """
    _ensure_app()

    workers = [SolveWorker(c, max_depth, predicate, stop_when_true=stop_when_true) for c in cubes]
    for w in workers:
        w.start()
    for w in workers:
        w.wait()
        if on_finished is not None:
            on_finished(w)
    return workers
