# quantiform/units/utils.py
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterable, List

if TYPE_CHECKING:
    from quantiform.units.symbol_reader import SymbolAndPower

SUPERSCRIPT_DIGITS = "⁰¹²³⁴⁵⁶⁷⁸⁹"
SUPERSCRIPT_PLUS = "⁺"
SUPERSCRIPT_MINUS = "⁻"

_SUPERSCRIPTS = str.maketrans("0123456789-+", SUPERSCRIPT_DIGITS + SUPERSCRIPT_MINUS + SUPERSCRIPT_PLUS)

# Multiplication glyphs accepted between factors. The first one is what we emit.
MULTIPLY_SUPERSCRIPT = "⋅"
MULTIPLY_HAT = "*"
MULTIPLY_OPERATORS = frozenset("⋅·*")


class SymbolFormat(Enum):
    """How a composite unit symbol is written out."""

    SIGNED_HAT_POWERS = "signed_hat_powers"          # kg*m^-1*s^-2
    SIGNED_SUPERSCRIPT = "signed_superscript"        # kg⋅m⁻¹⋅s⁻²
    FRACTION_HAT_POWERS = "fraction_hat_powers"      # kg/(m*s^2)
    FRACTION_SUPERSCRIPT = "fraction_superscript"    # kg/(m⋅s²)

    @property
    def uses_superscript(self) -> bool:
        return self in (SymbolFormat.SIGNED_SUPERSCRIPT, SymbolFormat.FRACTION_SUPERSCRIPT)

    @property
    def is_fraction(self) -> bool:
        return self in (SymbolFormat.FRACTION_HAT_POWERS, SymbolFormat.FRACTION_SUPERSCRIPT)


def superscript_value(ch: str) -> int | None:
    """Digit value of a superscript glyph, or None."""
    i = SUPERSCRIPT_DIGITS.find(ch)
    return i if i >= 0 else None


def _sup(n: int) -> str:
    return "" if n == 1 else str(n).translate(_SUPERSCRIPTS)


def _hat(n: int) -> str:
    return "" if n == 1 else f"^{n}"


def format_symbol(parts: Iterable["SymbolAndPower"], style: SymbolFormat) -> str:
    """
    Render ``(symbol, power)`` factors in the requested style.

    Factor order is kept as given. Fraction styles put positive powers over
    negative ones and wrap a denominator of several factors in parentheses,
    e.g. 'kg/(m⋅s²)'.
    """
    power = _sup if style.uses_superscript else _hat
    sep = MULTIPLY_SUPERSCRIPT if style.uses_superscript else MULTIPLY_HAT
    items = list(parts)

    if not style.is_fraction:
        return sep.join(p.symbol + power(p.power) for p in items)

    num: List[str] = [p.symbol + power(p.power) for p in items if p.power > 0]
    den: List[str] = [p.symbol + power(-p.power) for p in items if p.power < 0]

    numerator = sep.join(num) if num else "1"
    if not den:
        return numerator
    denominator = sep.join(den)
    if len(den) > 1:
        denominator = f"({denominator})"
    return f"{numerator}/{denominator}"


__all__ = [
    "SymbolFormat",
    "format_symbol",
    "superscript_value",
    "SUPERSCRIPT_DIGITS",
    "SUPERSCRIPT_PLUS",
    "SUPERSCRIPT_MINUS",
    "MULTIPLY_OPERATORS",
]
