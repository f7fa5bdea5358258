"""Modelo de estado del cubo Rubik 3x3 y búsqueda por fuerza bruta memoizada."""

__version__ = "0.1.0"
