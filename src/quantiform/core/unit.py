from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from math import isfinite
from typing import TYPE_CHECKING, Optional, Protocol, Union, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from quantiform.core.quantity import Quantity
    from quantiform.units.registry import UnitKind
    from quantiform.units.utils import SymbolFormat

Scale = Union[int, float, str, Fraction]


def _as_fraction(value: Scale) -> Fraction:
    # str keeps decimal literals such as "0.3048" exact
    f = Fraction(value)
    if f <= 0:
        raise ValueError("scale_to_si must be a positive, finite number")
    return f


@runtime_checkable
class Unit(Protocol):
    symbol: str
    kind_name: str

    # Value in this unit -> value in the kind's SI unit
    def to_si(self, x: float) -> float: ...

    # Value in the kind's SI unit -> value in this unit
    def from_si(self, x: float) -> float: ...


class _UnitMixin:
    """Behaviour shared by the concrete unit classes."""

    symbol: str
    kind_name: str

    @property
    def kind(self) -> "UnitKind":
        from quantiform.units.registry import DEFAULT_REGISTRY

        return DEFAULT_REGISTRY.get(self.kind_name)

    def __rmul__(self, value: float) -> "Quantity":
        from quantiform.core.quantity import Quantity

        if not isinstance(value, (int, float)):
            return NotImplemented
        return Quantity(value, self)  # type: ignore[arg-type]

    def to_string(self, format: Optional[str] = None, symbol_style: "Optional[SymbolFormat]" = None) -> str:
        """
        Render the symbol of this unit.

        With ``format`` the text is echoed back, padding included, when it
        names this unit; otherwise the format is returned unchanged.
        """
        from quantiform.io.format_cache import UNIT_FORMAT_CACHE
        from quantiform.io.formatter import render_unit

        if format is None:
            return render_unit(self, symbol_style)  # type: ignore[arg-type]

        padded, unit = UNIT_FORMAT_CACHE.get_or_create(format, self.kind)
        if unit != self:
            return format
        return padded.render()

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True, slots=True)
class LinearUnit(_UnitMixin):
    """A unit that is a fixed multiple of its kind's SI unit."""

    symbol: str
    scale_to_si: Fraction
    kind_name: str = field(default="", compare=True)

    def __post_init__(self) -> None:
        if not self.symbol:
            raise ValueError("symbol must be a non-empty string")
        object.__setattr__(self, "scale_to_si", _as_fraction(self.scale_to_si))

    @property
    def is_si(self) -> bool:
        return self.scale_to_si == 1

    def to_si(self, x: float) -> float:
        if self.scale_to_si == 1 or not isfinite(x):
            return float(x * float(self.scale_to_si))
        return float(Fraction(x) * self.scale_to_si)

    def from_si(self, x: float) -> float:
        if self.scale_to_si == 1 or not isfinite(x):
            return float(x / float(self.scale_to_si))
        return float(Fraction(x) / self.scale_to_si)


@dataclass(frozen=True, slots=True)
class AffineUnit(_UnitMixin):
    """A unit with a scale and a zero offset: ``si = (x + offset) * scale``."""

    symbol: str
    scale_to_si: Fraction
    offset: Fraction
    kind_name: str = ""

    def __post_init__(self) -> None:
        if not self.symbol:
            raise ValueError("symbol must be a non-empty string")
        object.__setattr__(self, "scale_to_si", _as_fraction(self.scale_to_si))
        object.__setattr__(self, "offset", Fraction(self.offset))

    @property
    def is_si(self) -> bool:
        return False

    def to_si(self, x: float) -> float:
        if not isfinite(x):
            return float((x + float(self.offset)) * float(self.scale_to_si))
        return float((Fraction(x) + self.offset) * self.scale_to_si)

    def from_si(self, x: float) -> float:
        if not isfinite(x):
            return float(x / float(self.scale_to_si) - float(self.offset))
        return float(Fraction(x) / self.scale_to_si - self.offset)


__all__ = ["Unit", "LinearUnit", "AffineUnit"]
