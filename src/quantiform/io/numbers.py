"""
quantiform.io.numbers
=====================

Locale-aware reading and writing of floating-point literals, built on Babel.

`read_double` scans a literal starting at a cursor position, honouring the
locale's decimal and group separators and a set of `NumberStyle` flags.
`format_double` renders a value with a numeric sub-format:

- no format, ``R`` or ``G``: the shortest literal that reads back to the
  same float (``repr`` without a trailing ``.0``)
- ``Gn``: ``n`` significant digits
- ``Fn``, ``Nn``, ``En``, ``Pn``: fixed, grouped, scientific, percent
- a custom pattern over ``0 # . ,`` (optionally ``E+0``), passed to Babel
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Flag, auto
from functools import lru_cache
from typing import Optional, Tuple

from babel import Locale
from babel.numbers import (
    NumberFormatError,
    format_decimal,
    format_percent,
    format_scientific,
    get_decimal_symbol,
    get_group_symbol,
    get_minus_sign_symbol,
    get_plus_sign_symbol,
    parse_decimal,
)

from quantiform.config import resolve_locale
from quantiform.errors import UnitFormatError


class NumberStyle(Flag):
    """Which parts of a numeric literal are accepted."""

    NONE = 0
    ALLOW_LEADING_WHITE = auto()
    ALLOW_TRAILING_WHITE = auto()
    ALLOW_LEADING_SIGN = auto()
    ALLOW_DECIMAL_POINT = auto()
    ALLOW_THOUSANDS = auto()
    ALLOW_EXPONENT = auto()

    INTEGER = ALLOW_LEADING_WHITE | ALLOW_TRAILING_WHITE | ALLOW_LEADING_SIGN
    FLOAT = INTEGER | ALLOW_DECIMAL_POINT | ALLOW_EXPONENT
    NUMBER = INTEGER | ALLOW_DECIMAL_POINT | ALLOW_THOUSANDS
    ANY = FLOAT | ALLOW_THOUSANDS


_DIGITS = "0123456789"
_INFINITY = "∞"
_NAN = "NaN"

_STANDARD_FORMAT_RE = re.compile(r"[FfEeNnGgRrPp]\d{0,2}")
_CUSTOM_FORMAT_RE = re.compile(r"[#0,]*[#0](?:\.[#0]*)?(?:[Ee][+-]?0+)?%?")


@dataclass(frozen=True, slots=True)
class _Symbols:
    decimal: str
    group: str
    plus: frozenset[str]
    minus: frozenset[str]
    minus_out: str


@lru_cache(maxsize=128)
def _symbols(locale: Locale) -> _Symbols:
    minus = get_minus_sign_symbol(locale)
    return _Symbols(
        decimal=get_decimal_symbol(locale),
        group=get_group_symbol(locale),
        plus=frozenset({"+", get_plus_sign_symbol(locale)}),
        # U+2212 is what several locales (sv, fi, nb) print; '-' always reads.
        minus=frozenset({"-", "−", minus}),
        minus_out=minus,
    )


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------
def _skip_ws(text: str, i: int) -> int:
    n = len(text)
    while i < n and text[i].isspace():
        i += 1
    return i


def _scan_digits(text: str, i: int, group: Optional[str]) -> Tuple[str, int]:
    """Digits starting at ``i``; group separators are dropped when allowed."""
    n = len(text)
    out = []
    while i < n:
        ch = text[i]
        if ch in _DIGITS:
            out.append(ch)
            i += 1
        elif group and ch == group and out and i + 1 < n and text[i + 1] in _DIGITS:
            i += 1
        else:
            break
    return "".join(out), i


def read_double(
    text: str,
    pos: int = 0,
    style: NumberStyle = NumberStyle.FLOAT,
    locale: "Locale | str | None" = None,
) -> Tuple[float, int]:
    """
    Read a floating-point literal at ``pos``; returns ``(value, end)``.

    Trailing whitespace is never consumed; the caller decides what may follow.

    Raises
    ------
    UnitFormatError
        If no literal allowed by ``style`` starts at ``pos``.
    """
    loc = resolve_locale(locale)
    sym = _symbols(loc)
    n = len(text)
    i = pos
    if NumberStyle.ALLOW_LEADING_WHITE in style:
        i = _skip_ws(text, i)

    negative = False
    if NumberStyle.ALLOW_LEADING_SIGN in style and i < n and (text[i] in sym.plus or text[i] in sym.minus):
        negative = text[i] in sym.minus
        i += 1

    if text.startswith(_INFINITY, i):
        return (-math.inf if negative else math.inf), i + len(_INFINITY)
    if text.startswith(_NAN, i):
        return math.nan, i + len(_NAN)

    group = sym.group if NumberStyle.ALLOW_THOUSANDS in style else None
    whole, i = _scan_digits(text, i, group)
    frac = ""
    if (
        NumberStyle.ALLOW_DECIMAL_POINT in style
        and text.startswith(sym.decimal, i)
        and (whole or (i + len(sym.decimal) < n and text[i + len(sym.decimal)] in _DIGITS))
    ):
        frac, i = _scan_digits(text, i + len(sym.decimal), None)
    if not whole and not frac:
        raise UnitFormatError("Expected a number", text, pos)

    exponent = 0
    if NumberStyle.ALLOW_EXPONENT in style and i < n and text[i] in "eE":
        j = i + 1
        exp_negative = False
        if j < n and (text[j] in sym.plus or text[j] in sym.minus):
            exp_negative = text[j] in sym.minus
            j += 1
        digits, j = _scan_digits(text, j, None)
        if digits:
            exponent = -int(digits) if exp_negative else int(digits)
            i = j

    literal = whole or "0"
    if frac:
        literal = f"{literal}{sym.decimal}{frac}"
    try:
        mantissa = parse_decimal(literal, locale=loc)
    except NumberFormatError:
        raise UnitFormatError("Expected a number", text, pos) from None

    value = float(mantissa.scaleb(exponent))
    return (-value if negative else value), i


def try_read_double(
    text: str,
    pos: int = 0,
    style: NumberStyle = NumberStyle.FLOAT,
    locale: "Locale | str | None" = None,
) -> Tuple[Optional[float], int]:
    try:
        return read_double(text, pos, style, locale)
    except UnitFormatError:
        return None, pos


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------
def is_value_format(fmt: str) -> bool:
    """True if ``fmt`` is a numeric sub-format `format_double` understands."""
    return bool(_STANDARD_FORMAT_RE.fullmatch(fmt) or _CUSTOM_FORMAT_RE.fullmatch(fmt))


def _localize(text: str, sym: _Symbols) -> str:
    if sym.decimal != ".":
        text = text.replace(".", sym.decimal)
    if sym.minus_out != "-":
        text = text.replace("-", sym.minus_out)
    return text


def _round_trip(value: float, sym: _Symbols) -> str:
    if math.isnan(value):
        return _NAN
    if math.isinf(value):
        return _INFINITY if value > 0 else sym.minus_out + _INFINITY
    r = repr(float(value))
    if r.endswith(".0"):
        r = r[:-2]
    return _localize(r.replace("e", "E"), sym)


def format_double(value: float, fmt: Optional[str] = None, locale: "Locale | str | None" = None) -> str:
    """Render ``value`` with a numeric sub-format and locale.

    Raises ``UnitFormatError`` for a format that is neither a standard code
    nor a custom pattern.
    """
    loc = resolve_locale(locale)
    sym = _symbols(loc)
    if not fmt or fmt in ("R", "r", "G", "g"):
        return _round_trip(value, sym)
    if not math.isfinite(value):
        return _round_trip(value, sym)

    if _STANDARD_FORMAT_RE.fullmatch(fmt):
        code = fmt[0].upper()
        digits = int(fmt[1:]) if len(fmt) > 1 else None
        if code == "R" or (code == "G" and not digits):
            return _round_trip(value, sym)
        if code == "G":
            return _localize(f"{value:.{digits}G}", sym)
        if code == "F":
            d = 2 if digits is None else digits
            return format_decimal(value, format="0." + "0" * d if d else "0", locale=loc)
        if code == "N":
            d = 2 if digits is None else digits
            return format_decimal(value, format="#,##0." + "0" * d if d else "#,##0", locale=loc)
        if code == "E":
            d = 6 if digits is None else digits
            pattern = ("0." + "0" * d if d else "0") + "E+000"
            return format_scientific(value, format=pattern, locale=loc)
        d = 2 if digits is None else digits
        return format_percent(value, format="#,##0." + "0" * d + "%" if d else "#,##0%", locale=loc)

    if _CUSTOM_FORMAT_RE.fullmatch(fmt):
        if "E" in fmt or "e" in fmt:
            return format_scientific(value, format=fmt.replace("e", "E"), locale=loc)
        if fmt.endswith("%"):
            return format_percent(value, format=fmt, locale=loc)
        return format_decimal(value, format=fmt, locale=loc)

    raise UnitFormatError("Invalid numeric format", fmt)


__all__ = [
    "NumberStyle",
    "read_double",
    "try_read_double",
    "format_double",
    "is_value_format",
]
