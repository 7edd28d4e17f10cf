# quantiform.core.dimensions

from __future__ import annotations
from typing import Iterable, Union, Tuple, TypeAlias, Any

# --- Public typing -----------------------------------------------------------
Dim: TypeAlias = "Dimension"
DimTuple = Tuple[int, int, int, int, int, int, int]
DimLike = Union["Dimension", DimTuple, Iterable[int]]

# --- Core object -------------------------------------------------------------

class Dimension(tuple):
    """
    Immutable 7-length vector of integer exponents for SI base dimensions.

    Only used to check that the cross-kind combination table is consistent:
    a quantity kind carries its dimension, and ``Mass * Acceleration -> Force``
    is accepted only if the exponents add up.
    """

    __slots__ = ()

    def __new__(cls, data: DimLike = (0, 0, 0, 0, 0, 0, 0)) -> "Dimension":
        if isinstance(data, Dimension):
            return tuple.__new__(cls, data)

        t = tuple(int(x) for x in data)
        if len(t) != 7:
            raise ValueError("Dimension must have length 7 (L, M, T, I, Θ, N, J).")
        return tuple.__new__(cls, t)

    # --- Algebra (operator overloads) ---
    def __mul__(self, other: DimLike) -> "Dimension": # type: ignore[override]
        o = Dimension(other)
        return Dimension(x + y for x, y in zip(self, o, strict=True))

    def __truediv__(self, other: DimLike) -> "Dimension":
        o = Dimension(other)
        return Dimension(x - y for x, y in zip(self, o, strict=True))

    def __pow__(self, n: int, modulo: Any | None = None) -> "Dimension":
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for Dimension.")
        if not isinstance(n, int):
            raise TypeError(f"Exponent must be int, got {type(n).__name__}")
        return Dimension(e * n for e in self)

    def __rmul__(self, other: Any) -> "Dimension":
        """Prevent (int * Dimension) from falling back to tuple repetition."""
        return NotImplemented

    def __add__(self, other: Any) -> "Dimension":
        """Block tuple concatenation (e.g., LENGTH + MASS)."""
        return NotImplemented

    def __radd__(self, other: Any) -> "Dimension":
        return NotImplemented

    # --- Helpers ---
    @property
    def is_dimensionless(self) -> bool:
        return all(x == 0 for x in self)

    def __repr__(self) -> str:
        names = ("L", "M", "T", "I", "Θ", "N", "J")
        return "".join(f"[{n}^{v}]" for n, v in zip(names, self, strict=True) if v != 0)


# --- Public constants --------------------------------------------------------

DIM_0: Dim       = Dimension((0, 0, 0, 0, 0, 0, 0))
LENGTH: Dim      = Dimension((1, 0, 0, 0, 0, 0, 0))
MASS: Dim        = Dimension((0, 1, 0, 0, 0, 0, 0))
TIME: Dim        = Dimension((0, 0, 1, 0, 0, 0, 0))
CURRENT: Dim     = Dimension((0, 0, 0, 1, 0, 0, 0))
TEMPERATURE: Dim = Dimension((0, 0, 0, 0, 1, 0, 0))
AMOUNT: Dim      = Dimension((0, 0, 0, 0, 0, 1, 0))
LUMINOUS: Dim    = Dimension((0, 0, 0, 0, 0, 0, 1))
