"""
quantiform.units.symbol_reader
==============================

Lexer for a single ``symbol[power]`` token such as ``m``, ``s^-2`` or ``m³``.

Both power notations allow exactly one digit: ``m^12`` and ``m¹²`` are
rejected on purpose, as are doubled signs (``m^--2``, ``m⁻⁻2``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from quantiform.errors import UnitFormatError
from quantiform.units.utils import (
    SUPERSCRIPT_DIGITS,
    SUPERSCRIPT_MINUS,
    SUPERSCRIPT_PLUS,
    superscript_value,
)

logger = logging.getLogger(__name__)

_ASCII_DIGITS = "0123456789"
_SUPERSCRIPT_SIGNS = SUPERSCRIPT_PLUS + SUPERSCRIPT_MINUS
# Characters that end a symbol run.
_NOT_SYMBOL = frozenset(_ASCII_DIGITS + SUPERSCRIPT_DIGITS + _SUPERSCRIPT_SIGNS + "+-^*⋅·/()")


@dataclass(frozen=True, slots=True)
class SymbolAndPower:
    """One factor of a composite unit, e.g. ``s`` with power ``-2``."""

    symbol: str
    power: int

    def __post_init__(self) -> None:
        if not self.symbol or any(ch.isspace() for ch in self.symbol):
            raise ValueError(f"Invalid unit symbol {self.symbol!r}")
        if self.power == 0 or not -9 <= self.power <= 9:
            raise ValueError(f"Power must be a nonzero single digit, got {self.power}")

    def __str__(self) -> str:
        return self.symbol if self.power == 1 else f"{self.symbol}^{self.power}"


def is_symbol_char(ch: str) -> bool:
    return ch not in _NOT_SYMBOL and not ch.isspace()


def skip_whitespace(text: str, pos: int) -> int:
    n = len(text)
    while pos < n and text[pos].isspace():
        pos += 1
    return pos


def _fail(message: str, text: str, pos: int) -> UnitFormatError:
    return UnitFormatError(message, text, pos)


def _read_hat_power(text: str, pos: int) -> Tuple[int, int]:
    """Read ``^[sign]digit`` starting at the caret. Returns (power, end)."""
    n = len(text)
    i = skip_whitespace(text, pos + 1)
    sign = 1
    if i < n and text[i] in "+-":
        sign = -1 if text[i] == "-" else 1
        i += 1
    if i >= n or text[i] not in _ASCII_DIGITS:
        raise _fail("Expected a digit after '^'", text, i)
    power = sign * int(text[i])
    i += 1
    if i < n and text[i] in _ASCII_DIGITS:
        raise _fail("Power must be a single digit", text, i)
    return power, i


def _read_superscript_power(text: str, pos: int) -> Tuple[int, int]:
    n = len(text)
    i = pos
    sign = 1
    if text[i] in _SUPERSCRIPT_SIGNS:
        sign = -1 if text[i] == SUPERSCRIPT_MINUS else 1
        i += 1
    digit = superscript_value(text[i]) if i < n else None
    if digit is None:
        raise _fail("Expected a superscript digit", text, i)
    i += 1
    if i < n and (text[i] in _SUPERSCRIPT_SIGNS or superscript_value(text[i]) is not None):
        raise _fail("Power must be a single superscript digit", text, i)
    return sign * digit, i


def read(text: str, pos: int = 0) -> Tuple[SymbolAndPower, int]:
    """
    Read one symbol and its optional power starting at ``pos``.

    Leading whitespace is skipped; whitespace after the token is left for the
    caller. Returns the token and the offset just past it.

    Raises
    ------
    UnitFormatError
        If no well-formed token starts at ``pos``.
    """
    n = len(text)
    if pos < 0 or pos > n:
        raise _fail("Position out of range", text, pos)

    i = skip_whitespace(text, pos)
    start = i
    while i < n and is_symbol_char(text[i]):
        i += 1
    if i == start:
        raise _fail("Expected a unit symbol", text, start)
    symbol = text[start:i]

    power, end = 1, i
    after = skip_whitespace(text, i)
    if after < n and text[after] == "^":
        power, end = _read_hat_power(text, after)
    elif i < n and (text[i] in _SUPERSCRIPT_SIGNS or superscript_value(text[i]) is not None):
        power, end = _read_superscript_power(text, i)

    if power == 0:
        raise _fail("Power must not be zero", text, end - 1)
    return SymbolAndPower(symbol, power), end


def try_read(text: str, pos: int = 0) -> Tuple[Optional[SymbolAndPower], int]:
    """Like `read` but returns ``(None, pos)`` instead of raising."""
    try:
        return read(text, pos)
    except UnitFormatError as e:
        logger.debug("try_read failed: %s", e)
        return None, pos


__all__ = ["SymbolAndPower", "read", "try_read", "skip_whitespace", "is_symbol_char"]
