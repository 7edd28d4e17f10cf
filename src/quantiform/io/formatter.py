"""
quantiform.io.formatter
=======================

Pure rendering of an SI value through an immutable `QuantityFormat`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from quantiform.io.format_cache import UNIT_FORMAT_CACHE, VALUE_ERROR_TEXT, QuantityFormat
from quantiform.io.numbers import format_double

if TYPE_CHECKING:
    from babel import Locale

    from quantiform.core.unit import Unit
    from quantiform.units.utils import SymbolFormat


def render(si_value: float, fmt: QuantityFormat, locale: "Locale | str | None" = None) -> str:
    """
    Write ``si_value`` in ``fmt.unit`` with the format's numeric sub-format,
    symbol and padding.

    >>> render(1.2, FORMAT_CACHE.get_or_create("F2 m/s²", Acceleration))
    '1.20 m/s²'
    """
    if fmt.value_error:
        value = VALUE_ERROR_TEXT
    else:
        value = format_double(fmt.unit.from_si(si_value), fmt.value_format, locale)
    return "".join((fmt.pre_padding, value, fmt.padding, fmt.symbol_text, fmt.post_padding))


def render_unit(unit: "Unit", symbol_style: "Optional[SymbolFormat]" = None) -> str:
    """The symbol of ``unit``, as declared or re-rendered in ``symbol_style``."""
    return UNIT_FORMAT_CACHE.for_unit(unit, symbol_style).render()


__all__ = ["render", "render_unit"]
