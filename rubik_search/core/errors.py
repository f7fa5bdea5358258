# rubik_search/core/errors.py
from __future__ import annotations


class RubikError(Exception):
    """Error base del paquete."""


class InvalidStateError(RubikError, ValueError):
    """El estado no cumple el invariante de colores (cada color exactamente 9 veces)."""


class DegenerateMapError(RubikError):
    """Una permutación no es biyectiva: dos slots de origen van al mismo destino."""
