"""
quantiform.io.quantity_parser
=============================

Reads ``"<number> <unit>"`` text, e.g. ``"1.2 m/s²"`` or ``" -5e3 kg⋅m⁻¹⋅s⁻² "``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional, TypeVar

from quantiform.errors import UnitFormatError
from quantiform.io.numbers import NumberStyle, read_double
from quantiform.units.parser import parse_unit
from quantiform.units.symbol_reader import skip_whitespace

if TYPE_CHECKING:
    from babel import Locale

    from quantiform.core.unit import Unit
    from quantiform.units.registry import UnitKind

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_quantity(
    text: str,
    factory: Callable[[float, "Unit"], T],
    kind: "UnitKind",
    style: NumberStyle = NumberStyle.FLOAT,
    locale: "Locale | str | None" = None,
) -> T:
    """
    Read a numeric literal followed by a unit of ``kind`` and hand both to
    ``factory``.

    Whitespace may surround the number and the unit; nothing else may
    follow the unit.

    Raises
    ------
    UnitFormatError
        If there is no number, the unit cannot be read, or text remains.
    TypeError
        If ``text`` is not a string.
    """
    if not isinstance(text, str):
        raise TypeError(f"Quantity text must be str, got {type(text).__name__}")

    pos = skip_whitespace(text, 0)
    value, pos = read_double(text, pos, style, locale)
    start = skip_whitespace(text, pos)
    if start == len(text):
        raise UnitFormatError("Expected a unit symbol", text, start)

    try:
        unit = parse_unit(text[start:], kind)
    except UnitFormatError as e:
        # report against the whole input, not the unit slice
        position = None if e.position is None else start + e.position
        raise UnitFormatError(e.message, text, position) from e
    return factory(value, unit)


def try_parse_quantity(
    text: str,
    factory: Callable[[float, "Unit"], T],
    kind: "UnitKind",
    style: NumberStyle = NumberStyle.FLOAT,
    locale: "Locale | str | None" = None,
) -> Optional[T]:
    try:
        return parse_quantity(text, factory, kind, style, locale)
    except UnitFormatError as e:
        logger.debug("try_parse_quantity failed: %s", e)
        return None


__all__ = ["parse_quantity", "try_parse_quantity"]
