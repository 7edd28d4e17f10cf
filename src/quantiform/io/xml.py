"""
quantiform.io.xml
=================

The persisted form of a quantity: its SI value in a ``Value`` attribute,
written with the invariant culture (``.`` decimal point, no grouping) and
the shortest literal that reads back to the same float.

    <Length Value="1.2" />
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING

from quantiform.errors import MissingAttributeError, UnitFormatError
from quantiform.io.numbers import NumberStyle, format_double, read_double
from quantiform.units.symbol_reader import skip_whitespace

if TYPE_CHECKING:
    from quantiform.core.quantity import KindLike, Quantity

VALUE_ATTRIBUTE = "Value"
INVARIANT_LOCALE = "en"


def format_si(quantity: "Quantity") -> str:
    return format_double(quantity.si_value, None, INVARIANT_LOCALE)


def parse_si(text: str) -> float:
    value, end = read_double(text, 0, NumberStyle.FLOAT, INVARIANT_LOCALE)
    end = skip_whitespace(text, end)
    if end != len(text):
        raise UnitFormatError("Unexpected text after the value", text, end)
    return value


def write_xml(quantity: "Quantity", element: ET.Element) -> ET.Element:
    """Store ``quantity`` on ``element`` as ``Value="<si value>"``."""
    element.set(VALUE_ATTRIBUTE, format_si(quantity))
    return element


def read_xml(element: ET.Element, kind: "KindLike") -> "Quantity":
    """
    Read a quantity of ``kind`` from the ``Value`` attribute of ``element``.

    Raises
    ------
    MissingAttributeError
        If ``element`` has no ``Value`` attribute.
    UnitFormatError
        If the attribute is not a number.
    """
    from quantiform.core.quantity import Quantity

    text = element.get(VALUE_ATTRIBUTE)
    if text is None:
        raise MissingAttributeError(VALUE_ATTRIBUTE)
    return Quantity.from_si(parse_si(text), kind)


def to_attribute(quantity: "Quantity") -> str:
    """``Value="1.2"``"""
    return f'{VALUE_ATTRIBUTE}="{format_si(quantity)}"'


def from_attribute(fragment: str, kind: "KindLike") -> "Quantity":
    """Read the attribute text produced by `to_attribute`."""
    try:
        element = ET.fromstring(f"<q {fragment} />")
    except ET.ParseError as e:
        raise UnitFormatError(f"Could not read attributes: {e}", fragment) from None
    return read_xml(element, kind)


__all__ = [
    "VALUE_ATTRIBUTE",
    "write_xml",
    "read_xml",
    "to_attribute",
    "from_attribute",
]
