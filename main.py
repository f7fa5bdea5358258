# main.py
from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import List, NoReturn, Optional

from rubik_search.conf import Config
from rubik_search.core.cube_state import CubeState, solved_cube
from rubik_search.logic.moves import format_sequence, parse_sequence
from rubik_search.logic.predicates import NAMED_PREDICATES, get_predicate
from rubik_search.logic.scramble import generate_scramble
from rubik_search.solve import experiments
from rubik_search.solve.solver import Solver

log = logging.getLogger("rubik")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Búsqueda por fuerza bruta memoizada sobre el cubo Rubik 3x3")
    parser.add_argument("-i", "--ini", help="Archivo .ini con la configuración de la corrida")
    parser.add_argument("-d", "--depth", type=int, help="Profundidad máxima de búsqueda")
    parser.add_argument("-p", "--predicate", choices=sorted(NAMED_PREDICATES), help="Predicado de éxito")
    parser.add_argument("--seed", type=int, help="Semilla; sin ella, cada corrida es distinta")
    parser.add_argument("--shuffle", type=int, help="Movimientos aleatorios de mezcla")
    parser.add_argument("--stop", default=None, action="store_true", help="Terminar en la primera coincidencia")
    parser.add_argument("-v", "--verbose", default=False, action="store_true", help="Log en nivel DEBUG")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("search", help="Búsqueda memoizada desde un cubo mezclado")
    p.add_argument("--moves", help="Secuencia a aplicar en lugar de una mezcla aleatoria, ej: \"F R Ui\"")
    p.add_argument("--randomized", default=False, action="store_true",
                   help="Usar la variante aleatoria sin memoización")

    sub.add_parser("batch", help="Varias búsquedas sobre cubos mezclados")

    p = sub.add_parser("parallel", help="Varias búsquedas en hilos, cada una con su copia del cubo")
    p.add_argument("-n", "--count", type=int, default=4, help="Cantidad de cubos, default=4")

    sub.add_parser("hillclimb", help="Camino que más reduce la distancia de Hamming al resuelto")

    p = sub.add_parser("hamming", help="Histograma de distancia de Hamming tras una mezcla")
    p.add_argument("-n", "--count", type=int, default=10000, help="Cantidad de cubos, default=10000")

    p = sub.add_parser("trend", help="Fracción de movimientos que acercan o alejan del resuelto")
    p.add_argument("-n", "--count", type=int, default=10000, help="Cantidad de pruebas, default=10000")
    p.add_argument("--walk", default=False, action="store_true", help="Caminata aleatoria en lugar de mezclas independientes")

    p = sub.add_parser("cross", help="Frecuencia de cruces en cubos aleatorios")
    p.add_argument("-n", "--count", type=int, default=10000, help="Cantidad de cubos, default=10000")

    p = sub.add_parser("show", help="Muestra el cubo tras aplicar una secuencia")
    p.add_argument("moves", nargs="?", default="", help="Secuencia, ej: \"F R Ui\"")
    return parser


def _scrambled(config: Config, shuffle_n: int, seed: Optional[int]) -> CubeState:
    cube = solved_cube(track_history=config.cube_track_history, history_size=config.cube_history_size)
    if shuffle_n > 0:
        cube.push_moves(generate_scramble(shuffle_n, seed=seed))
    return cube


def resolve_seed(flag: Optional[int], config: Config) -> Optional[int]:
    """Semilla efectiva: el flag si se indicó (0 incluido), si no la del .ini."""
    return flag if flag is not None else config.run_seed


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """Punto de entrada de la línea de comandos.

    Los flags tienen prioridad sobre el archivo .ini, que a su vez tiene
    prioridad sobre los valores por defecto de `Config`.

    Returns:
        No retorna (finaliza el proceso con `sys.exit`).
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(format="%(asctime)-15s %(levelname)s %(message)s",
                        level=logging.DEBUG if args.verbose else logging.INFO)

    config = Config(args.ini)
    depth = args.depth if args.depth is not None else config.search_depth
    predicate_name = args.predicate or config.search_predicate
    predicate = get_predicate(predicate_name)
    stop = args.stop if args.stop is not None else config.search_stop_when_true
    shuffle_n = args.shuffle if args.shuffle is not None else config.run_shuffle
    seed = resolve_seed(args.seed, config)

    if args.command == "show":
        cube = solved_cube()
        cube.push_moves(parse_sequence(args.moves))
        print(cube.to_block_string())

    elif args.command == "search":
        if args.moves:
            cube = solved_cube(track_history=config.cube_track_history, history_size=config.cube_history_size)
            cube.push_moves(parse_sequence(args.moves))
        else:
            cube = _scrambled(config, shuffle_n, seed)
        print(cube.to_block_string())
        solver = Solver(cube, depth, predicate, stop_when_true=stop, track_stats=config.search_track_stats)
        log.info("Buscando con predicado %s, profundidad %d", predicate_name, depth)
        if args.randomized:
            ticks = sum(1 for _ in solver.brute_force_randomized(rng=random.Random(seed)))
            log.info("%d observaciones", ticks)
        else:
            solver.run(print_interval=config.search_print_interval)
        log.info("Estadísticas: %s", solver.stats.as_dict())
        for path in solver.solutions[:10]:
            print(format_sequence(path))
        if len(solver.solutions) > 10:
            print(f"... {len(solver.solutions) - 10} soluciones más")

    elif args.command == "batch":
        res = experiments.brute_force_batch(
            config.run_count, depth, predicate, shuffle_n=shuffle_n, stop_when_true=stop, seed=seed
        )
        print(f"{res.solved_runs}/{len(res.runs)} corridas con solución")

    elif args.command == "parallel":
        from rubik_search.app.solve_worker import run_parallel

        rng = random.Random(seed)
        cubes = [_scrambled(config, shuffle_n, rng.randrange(1 << 30)) for _ in range(args.count)]
        for idx, w in enumerate(run_parallel(cubes, depth, predicate, stop_when_true=stop)):
            if w.error_message:
                log.error("cubo %d: %s", idx, w.error_message)
            elif w.solutions:
                print(f"cubo {idx}: {format_sequence(w.solutions[0])}")
            else:
                print(f"cubo {idx}: sin solución")

    elif args.command == "hillclimb":
        res = experiments.hillclimb(depth, shuffle_n=shuffle_n, seed=seed)
        print(f"distancia {res.start_distance} -> {res.best_distance}: {format_sequence(res.best_path)}")

    elif args.command == "hamming":
        hist = experiments.hamming_histogram(args.count, shuffle_n=shuffle_n, seed=seed)
        for d, pct in hist.items():
            print(f"{d:2d} {pct:6.2f}%")

    elif args.command == "trend":
        trend = experiments.hamming_trend(args.count, shuffle_n=shuffle_n, walk=args.walk, seed=seed)
        print(f"aumenta {trend.increase:.3f}, disminuye {trend.decrease:.3f}, igual {trend.no_change:.3f}; mínima {trend.lowest}")

    elif args.command == "cross":
        res = experiments.cross_frequency(args.count, shuffle_n=shuffle_n, seed=seed)
        for key, value in res.items():
            print(f"{key}: {value}")

    sys.exit(0)


if __name__ == "__main__":
    main()
