# rubik_search/conf.py
from __future__ import annotations

import configparser
from typing import Optional

from rubik_search.core.cube_state import DEFAULT_HISTORY_SIZE


class Config:
    """Configuración de corridas leída de un archivo .ini.

    Secciones y claves (todas opcionales):
        [cube]    history_size, track_history
        [search]  depth, stop_when_true, track_stats, predicate, print_interval
        [run]     shuffle, seed, runs
    """

    def __init__(self, file_name: Optional[str] = None) -> None:
        """Lee el archivo si se indica; si no, sólo quedan los valores por defecto.

        Raises:
            FileNotFoundError: Si `file_name` no se puede leer.
        """
        self.data = configparser.ConfigParser()
        if file_name is not None and not self.data.read(file_name, encoding="utf-8"):
            raise FileNotFoundError(f"No se pudo leer la configuración: {file_name}")
        for section in ("cube", "search", "run"):
            if not self.data.has_section(section):
                self.data.add_section(section)
        self.sect_cube = self.data["cube"]
        self.sect_search = self.data["search"]
        self.sect_run = self.data["run"]

    # [cube]
    @property
    def cube_history_size(self) -> int:
        return self.sect_cube.getint("history_size", DEFAULT_HISTORY_SIZE)

    @property
    def cube_track_history(self) -> bool:
        return self.sect_cube.getboolean("track_history", True)

    # [search]
    @property
    def search_depth(self) -> int:
        return self.sect_search.getint("depth", 4)

    @property
    def search_stop_when_true(self) -> bool:
        return self.sect_search.getboolean("stop_when_true", False)

    @property
    def search_track_stats(self) -> bool:
        return self.sect_search.getboolean("track_stats", True)

    @property
    def search_predicate(self) -> str:
        return self.sect_search.get("predicate", "any_cross")

    @property
    def search_print_interval(self) -> int:
        return self.sect_search.getint("print_interval", 0)

    # [run]
    @property
    def run_shuffle(self) -> int:
        return self.sect_run.getint("shuffle", 30)

    @property
    def run_seed(self) -> Optional[int]:
        """Semilla de la corrida; None (sin semilla) si la clave no está o está vacía."""
        if not self.sect_run.get("seed", "").strip():
            return None
        return self.sect_run.getint("seed")

    @property
    def run_count(self) -> int:
        return self.sect_run.getint("runs", 10)
