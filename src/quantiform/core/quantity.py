"""
quantiform.core.quantity
========================

Defines the generic `Quantity` value type.

A quantity is one float in the SI unit of its `UnitKind` (Length, Speed,
...). Units only matter at the edges: when a quantity is built from a value
in some unit, read from text, or written back out.

The module provides:
- construction from a value and a unit (``Quantity(1.2, Speed.get("km/h"))``
  or ``1.2 * Speed.get("km/h")``) or directly from an SI value
- `parse` / `try_parse` for ``"<number> <unit>"`` text
- `to_string` with composite formats (``"F2 km/h"``), separate value and
  symbol formats, or an explicit unit and symbol style
- comparison and arithmetic within a kind, scalar scaling, and the products
  and quotients declared in the kind registry (``Mass * Acceleration``)
"""

from __future__ import annotations

from math import isclose
from typing import TYPE_CHECKING, Optional, Tuple, Union

from quantiform.core.unit import Unit

if TYPE_CHECKING:
    from babel import Locale

    from quantiform.io.numbers import NumberStyle
    from quantiform.units.registry import UnitKind
    from quantiform.units.utils import SymbolFormat

Number = Union[int, float]
KindLike = Union["UnitKind", str]


def _resolve_kind(kind: KindLike) -> "UnitKind":
    from quantiform.units.registry import DEFAULT_REGISTRY, UnitKind

    if isinstance(kind, UnitKind):
        return kind
    if isinstance(kind, str):
        return DEFAULT_REGISTRY.get(kind)
    raise TypeError(f"Expected a UnitKind or kind name, got {type(kind).__name__}")


class Quantity:
    """
    A physical quantity of one kind, stored as its SI value.

    Attributes
    ----------
    _si : float
        The magnitude in the kind's SI unit; the only state that is persisted.
    kind : UnitKind
        The quantity kind (Length, Force, ...).
    """
    __slots__ = ("_si", "kind")

    def __init__(self, value: Number, unit: Unit):
        if not isinstance(unit, Unit):
            raise TypeError(f"Expected a unit, got {type(unit).__name__}")
        self.kind: "UnitKind" = unit.kind  # type: ignore[attr-defined]
        self._si = float(unit.to_si(float(value)))

    @classmethod
    def from_si(cls, si_value: Number, kind: KindLike) -> "Quantity":
        q = cls.__new__(cls)
        q.kind = _resolve_kind(kind)
        q._si = float(si_value)
        return q

    @property
    def si_value(self) -> float:
        return self._si

    @property
    def si_unit(self) -> Unit:
        return self.kind.si_unit

    def _unit(self, unit: "Unit | str") -> Unit:
        if isinstance(unit, str):
            return self.kind.parse_unit(unit)
        if unit.kind_name != self.kind.name:
            raise TypeError(f"Unit '{unit.symbol}' is a {unit.kind_name} unit, not {self.kind.name}")
        return unit

    def value_in(self, unit: "Unit | str") -> float:
        """The magnitude expressed in ``unit`` (a unit of this kind or its symbol)."""
        return self._unit(unit).from_si(self._si)

    # ------------------------------ parsing ---------------------------------
    @classmethod
    def parse(
        cls,
        text: str,
        kind: KindLike,
        style: "Optional[NumberStyle]" = None,
        locale: "Locale | str | None" = None,
    ) -> "Quantity":
        """
        Read ``"<number> <unit>"`` as a quantity of ``kind``.

        >>> Quantity.parse("36 km/h", "Speed").value_in("m/s")
        10.0

        Raises
        ------
        UnitFormatError
            If the text is not a number followed by a unit of this kind.
        """
        from quantiform.io.numbers import NumberStyle
        from quantiform.io.quantity_parser import parse_quantity

        return parse_quantity(text, cls, _resolve_kind(kind), style or NumberStyle.FLOAT, locale)

    @classmethod
    def try_parse(
        cls,
        text: str,
        kind: KindLike,
        style: "Optional[NumberStyle]" = None,
        locale: "Locale | str | None" = None,
    ) -> Tuple[bool, Optional["Quantity"]]:
        from quantiform.io.numbers import NumberStyle
        from quantiform.io.quantity_parser import try_parse_quantity

        q = try_parse_quantity(text, cls, _resolve_kind(kind), style or NumberStyle.FLOAT, locale)
        return q is not None, q

    # ----------------------------- formatting -------------------------------
    def to_string(
        self,
        format: Optional[str] = None,
        locale: "Locale | str | None" = None,
        *,
        value_format: Optional[str] = None,
        symbol_format: Optional[str] = None,
        unit: "Unit | str | None" = None,
        symbol_style: "Optional[SymbolFormat]" = None,
    ) -> str:
        """
        Render the quantity.

        - ``format``: a composite format such as ``"F2 km/h"``, ``"km/h"`` or
          ``"F2"``; the spacing inside it is reproduced exactly
        - ``value_format`` / ``symbol_format``: the two halves given separately
        - ``unit`` / ``symbol_style``: write in ``unit`` with its symbol
          rendered in ``symbol_style`` (``value_format`` still applies)

        Without any of these the SI unit and the configured symbol style are
        used, and the number is the shortest literal that reads back exactly.
        Formats that cannot be understood are rendered as ``{value: ??}`` /
        ``{unit: ??}`` rather than raising.
        """
        from quantiform.config import get_settings
        from quantiform.io.format_cache import FORMAT_CACHE
        from quantiform.io.formatter import render

        if unit is not None or symbol_style is not None:
            if format is not None:
                raise TypeError("Pass value_format= together with unit= or symbol_style=")
            target = self.kind.si_unit if unit is None else self._unit(unit)
            fmt = FORMAT_CACHE.for_unit(value_format, target, self.kind, symbol_style)
        elif value_format is not None or symbol_format is not None:
            if format is not None:
                raise TypeError("Pass either format or value_format/symbol_format, not both")
            fmt = FORMAT_CACHE.for_parts(value_format, symbol_format, self.kind)
        elif format is None and get_settings().symbol_style is not None:
            fmt = FORMAT_CACHE.for_unit(None, self.kind.si_unit, self.kind, get_settings().symbol_style)
        else:
            fmt = FORMAT_CACHE.get_or_create(format, self.kind)
        return render(self._si, fmt, locale)

    def __str__(self) -> str:
        return self.to_string()

    def __format__(self, spec: str) -> str:
        """``f"{q:F2 km/h}"`` is ``q.to_string("F2 km/h")``."""
        return self.to_string(spec or None)

    def __repr__(self) -> str:
        return f"{self.kind.name}({self.to_string(locale='en_US')!r})"

    # ----------------------------- comparison -------------------------------
    def _check_same_kind(self, other: object) -> "Quantity":
        if not isinstance(other, Quantity):
            raise TypeError(f"Cannot compare Quantity with type {type(other)}")
        if other.kind is not self.kind:
            raise TypeError(
                f"Cannot compare quantities of different kinds: "
                f"'{self.kind.name}' and '{other.kind.name}'"
            )
        return other

    def _is_close(self, other_si: float) -> bool:
        return isclose(self._si, other_si, rel_tol=1e-12, abs_tol=0.0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return other.kind is self.kind and self._is_close(other._si)

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return other.kind is not self.kind or not self._is_close(other._si)

    def __lt__(self, other: "Quantity") -> bool:
        o = self._check_same_kind(other)
        return self._si < o._si and not self._is_close(o._si)

    def __le__(self, other: "Quantity") -> bool:
        o = self._check_same_kind(other)
        return self._si < o._si or self._is_close(o._si)

    def __gt__(self, other: "Quantity") -> bool:
        o = self._check_same_kind(other)
        return self._si > o._si and not self._is_close(o._si)

    def __ge__(self, other: "Quantity") -> bool:
        o = self._check_same_kind(other)
        return self._si > o._si or self._is_close(o._si)

    def equals(self, other: "Quantity", tolerance: float) -> bool:
        """True if the SI values differ by at most ``tolerance`` (absolute, SI)."""
        o = self._check_same_kind(other)
        return abs(self._si - o._si) <= tolerance

    def as_key(self, precision: int = 12) -> tuple:
        """
        A hashable key with the SI magnitude rounded to ``precision`` places.

        `__hash__` is not defined because `__eq__` is tolerant.
        """
        rounded = round(self._si, precision)
        if rounded == 0.0:
            rounded = 0.0
        return (self.kind.name, rounded)

    # ----------------------------- arithmetic -------------------------------
    def __add__(self, other: "Quantity") -> "Quantity":
        if not isinstance(other, Quantity):
            return NotImplemented
        if other.kind is not self.kind:
            raise TypeError(f"Cannot add {other.kind.name} to {self.kind.name}")
        return Quantity.from_si(self._si + other._si, self.kind)

    def __sub__(self, other: "Quantity") -> "Quantity":
        if not isinstance(other, Quantity):
            return NotImplemented
        if other.kind is not self.kind:
            raise TypeError(f"Cannot subtract {other.kind.name} from {self.kind.name}")
        return Quantity.from_si(self._si - other._si, self.kind)

    def __neg__(self) -> "Quantity":
        return Quantity.from_si(-self._si, self.kind)

    def __abs__(self) -> "Quantity":
        return Quantity.from_si(abs(self._si), self.kind)

    def __mul__(self, other: "Quantity | Number") -> "Quantity":
        from quantiform.units.registry import DEFAULT_REGISTRY

        # quantity × scalar
        if isinstance(other, (int, float)):
            return Quantity.from_si(self._si * float(other), self.kind)
        if not isinstance(other, Quantity):
            return NotImplemented

        kind = DEFAULT_REGISTRY.product_kind(self.kind, other.kind)
        if kind is None:
            raise TypeError(f"No quantity kind is defined for {self.kind.name} * {other.kind.name}")
        return Quantity.from_si(self._si * other._si, kind)

    def __rmul__(self, other: Number) -> "Quantity":
        # allows 3 * (2 m) -> 6 m
        if not isinstance(other, (int, float)):
            return NotImplemented
        return Quantity.from_si(float(other) * self._si, self.kind)

    def __truediv__(self, other: "Quantity | Number") -> "Quantity | float":
        from quantiform.units.registry import DEFAULT_REGISTRY

        # quantity / scalar
        if isinstance(other, (int, float)):
            return Quantity.from_si(self._si / float(other), self.kind)
        if not isinstance(other, Quantity):
            return NotImplemented

        # same kind: a plain ratio
        if other.kind is self.kind:
            return self._si / other._si

        kind = DEFAULT_REGISTRY.quotient_kind(self.kind, other.kind)
        if kind is None:
            raise TypeError(f"No quantity kind is defined for {self.kind.name} / {other.kind.name}")
        return Quantity.from_si(self._si / other._si, kind)


__all__ = ["Quantity"]
