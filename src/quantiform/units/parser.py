from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Dict, FrozenSet, Optional, Tuple

from quantiform.errors import UnitFormatError
from quantiform.units.symbol_reader import SymbolAndPower, read, skip_whitespace
from quantiform.units.utils import MULTIPLY_OPERATORS

if TYPE_CHECKING:
    from quantiform.core.unit import Unit
    from quantiform.units.registry import UnitKind

logger = logging.getLogger(__name__)

# A plan is the ordered factors as written, powers already signed.
Plan = Tuple[SymbolAndPower, ...]
# A pattern is the order-free, merged form used for lookups.
Pattern = FrozenSet[Tuple[str, int]]


# ---------------- Parser that builds a PLAN (no registry lookups!) ----------------
class _UnitExprParser:
    """
    Grammar (no numbers except the single-digit powers and a leading '1'):
      unit    := ['1' '/'] factor (sep factor)*
      sep     := MUL | WS | '/' | '/' '(' factor (MUL | WS factor)* ')'
      MUL     := '⋅' | '·' | '*'
      factor  := SYMBOL ['^' ['+'|'-'] DIGIT | [⁺|⁻] SUPERDIGIT]

    '/' negates the factors after it, including those joined by whitespace,
    until the next MUL. A parenthesized group after '/' is negated as a
    whole and ends the division.
    """
    def __init__(self, text: str):
        self.s = text
        self.n = len(text)
        self.i = 0
        self.out: list[SymbolAndPower] = []
        self.sign = 1

    def parse(self) -> Plan:
        self._skip_ws()
        if self.i == self.n:
            raise UnitFormatError("Expected a unit symbol", self.s, self.i)

        if self._at_unity_numerator():
            self._read_divisor()
        else:
            self._read_factor(1)

        while True:
            j = skip_whitespace(self.s, self.i)
            if j == self.n:
                self.i = j
                break
            ch = self.s[j]
            if ch in MULTIPLY_OPERATORS:
                self.i = j + 1
                self.sign = 1
                self._read_factor(1)
            elif ch == "/":
                self.i = j
                self._read_divisor()
            elif j > self.i:
                # whitespace multiplies and keeps the current sign
                self.i = j
                self._read_factor(self.sign)
            else:
                raise UnitFormatError(f"Unexpected character {ch!r}", self.s, j)
        return tuple(self.out)

    # ---- token helpers ----
    def _at_unity_numerator(self) -> bool:
        if self.s[self.i] != "1":
            return False
        j = skip_whitespace(self.s, self.i + 1)
        if j < self.n and self.s[j] == "/":
            self.i = j
            return True
        return False

    def _read_factor(self, sign: int) -> None:
        sap, self.i = read(self.s, self.i)
        self.out.append(sap if sign == 1 else SymbolAndPower(sap.symbol, -sap.power))

    def _read_divisor(self) -> None:
        """At '/': read the negated factor, or a negated '( ... )' group."""
        self.i += 1
        j = skip_whitespace(self.s, self.i)
        if j >= self.n or self.s[j] != "(":
            self._read_factor(-1)
            self.sign = -1
            return

        self.i = j + 1
        self._read_factor(-1)
        while True:
            j = skip_whitespace(self.s, self.i)
            if j >= self.n:
                raise UnitFormatError("Expected ')'", self.s, j)
            ch = self.s[j]
            if ch == ")":
                self.i = j + 1
                self.sign = 1
                return
            if ch in MULTIPLY_OPERATORS:
                self.i = j + 1
            elif j == self.i:
                raise UnitFormatError(f"Unexpected character {ch!r} in group", self.s, j)
            self._read_factor(-1)

    def _skip_ws(self) -> None:
        self.i = skip_whitespace(self.s, self.i)


# ---------------- Public API with caching-safe compilation ----------------
# Cache the *compiled plan* only. Safe across kinds because there's no bound objects inside.
@lru_cache(maxsize=4096)
def _compile_unit_expr(expr: str) -> Plan:
    return _UnitExprParser(expr).parse()


def tokenize_unit(text: str) -> Plan:
    """Split a unit symbol such as ``'kg⋅m/s²'`` into signed factors, in order."""
    if not isinstance(text, str):
        raise TypeError(f"Unit text must be str, got {type(text).__name__}")
    return _compile_unit_expr(text)


def fold(plan: Plan) -> Pattern:
    """Merge repeated symbols and drop those whose powers cancel."""
    powers: Dict[str, int] = {}
    for sap in plan:
        powers[sap.symbol] = powers.get(sap.symbol, 0) + sap.power
    return frozenset((s, p) for s, p in powers.items() if p != 0)


def unit_pattern(text: str) -> Pattern:
    return fold(tokenize_unit(text))


def parse_unit(text: str, kind: "UnitKind") -> "Unit":
    """
    Resolve a unit expression like ``'m/s²'``, ``'s⁻²⋅m'`` or ``'m*s^-2'``
    against the units registered for ``kind``.

    The factors, in any order, must combine to exactly one registered unit.

    Raises:
      UnitFormatError if the text is malformed, uses a symbol the kind does
      not know, or combines known symbols into an unregistered unit.
    """
    return kind.resolve(unit_pattern(text), text)


def try_parse_unit(text: str, kind: "UnitKind") -> Optional["Unit"]:
    try:
        return parse_unit(text, kind)
    except UnitFormatError as e:
        logger.debug("try_parse_unit failed: %s", e)
        return None


__all__ = ["tokenize_unit", "fold", "unit_pattern", "parse_unit", "try_parse_unit", "Plan", "Pattern"]
