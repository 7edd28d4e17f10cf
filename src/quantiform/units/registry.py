"""
quantiform.units.registry
=========================

Quantity kinds and the fixed vocabulary of unit symbols each one accepts.

- `UnitKind` owns the units registered for one kind of quantity (Length,
  Speed, ...) and resolves a parsed symbol pattern to exactly one of them.
- `UnitKindRegistry` is a thread-safe, process-wide table of kinds.
- The default registry is bootstrapped with a catalog of common SI and
  customary units, plus a table of cross-kind products and quotients
  (``Mass * Acceleration -> Force``) that is validated against the kinds'
  dimensions while the catalog is built.

Symbol lookup is case-sensitive and never ambiguous within a kind: two units
whose symbols reduce to the same factors cannot both be registered.
"""
from __future__ import annotations

import math
import threading
from fractions import Fraction
from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from quantiform.core.dimensions import (
    AMOUNT,
    DIM_0,
    LENGTH,
    MASS,
    TEMPERATURE,
    TIME,
    Dim,
)
from quantiform.core.unit import AffineUnit, LinearUnit, Scale
from quantiform.errors import UnitFormatError
from quantiform.units.parser import Pattern, parse_unit, tokenize_unit, try_parse_unit, unit_pattern
from quantiform.units.symbol_reader import SymbolAndPower

if TYPE_CHECKING:
    from quantiform.core.quantity import Quantity

AnyUnit = Union[LinearUnit, AffineUnit]


# ---------------------------------------------------------------------------
# Quantity kinds
# ---------------------------------------------------------------------------
class UnitKind:
    """The units one kind of quantity can be written in.

    The first registered unit must be the SI unit (scale 1, no offset); it is
    what quantities of this kind are stored in.
    """

    def __init__(self, name: str, dim: Dim) -> None:
        self.name = name
        self.dim = dim
        self._lock = threading.RLock()
        self._units: List[AnyUnit] = []
        self._by_symbol: Dict[str, AnyUnit] = {}
        self._by_pattern: Dict[Pattern, AnyUnit] = {}
        self._parts: Dict[str, Tuple[SymbolAndPower, ...]] = {}
        self._atoms: set[str] = set()

    def __repr__(self) -> str:
        return f"UnitKind({self.name!r})"

    def __contains__(self, symbol: str) -> bool:
        return self.try_parse_unit(symbol) is not None

    def __iter__(self):
        return iter(self.units)

    # -------------------------- registration -------------------------------
    def add(self, symbol: str, scale_to_si: Scale = 1, offset: Optional[Scale] = None) -> AnyUnit:
        """Create and register a unit of this kind."""
        unit: AnyUnit
        if offset is None:
            unit = LinearUnit(symbol, scale_to_si, self.name)  # type: ignore[arg-type]
        else:
            unit = AffineUnit(symbol, scale_to_si, offset, self.name)  # type: ignore[arg-type]
        self.register(unit)
        return unit

    def register(self, unit: AnyUnit) -> None:
        if unit.kind_name != self.name:
            raise ValueError(f"Unit '{unit.symbol}' belongs to '{unit.kind_name}', not '{self.name}'")

        parts = tokenize_unit(unit.symbol)
        pattern = unit_pattern(unit.symbol)

        with self._lock:
            if not self._units and not unit.is_si:
                raise ValueError(f"The first unit of '{self.name}' must be its SI unit")
            if unit.symbol in self._by_symbol:
                raise ValueError(
                    f"Cannot register unit '{unit.symbol}': a unit with this symbol already exists."
                )
            clash = self._by_pattern.get(pattern)
            if clash is not None:
                raise ValueError(
                    f"Cannot register unit '{unit.symbol}': it reads the same as '{clash.symbol}'."
                )
            self._units.append(unit)
            self._by_symbol[unit.symbol] = unit
            self._by_pattern[pattern] = unit
            self._parts[unit.symbol] = parts
            self._atoms.update(sap.symbol for sap in parts)

    # ----------------------------- lookup ----------------------------------
    @property
    def si_unit(self) -> AnyUnit:
        return self._units[0]

    @property
    def units(self) -> Tuple[AnyUnit, ...]:
        with self._lock:
            return tuple(self._units)

    def parts(self, unit: AnyUnit) -> Tuple[SymbolAndPower, ...]:
        """The factors of a registered unit's symbol, in written order."""
        return self._parts[unit.symbol]

    def get(self, symbol: str) -> AnyUnit:
        """Exact symbol lookup (no parsing)."""
        try:
            return self._by_symbol[symbol]
        except KeyError:
            raise UnitFormatError(f"Unknown {self.name} unit symbol", symbol) from None

    def resolve(self, pattern: Pattern, text: str) -> AnyUnit:
        unit = self._by_pattern.get(pattern)
        if unit is not None:
            return unit
        unknown = sorted(s for s, _ in pattern if s not in self._atoms)
        if unknown:
            raise UnitFormatError(f"Unknown unit symbol '{unknown[0]}' for {self.name}", text)
        raise UnitFormatError(f"No {self.name} unit is registered for this combination", text)

    def parse_unit(self, text: str) -> AnyUnit:
        return parse_unit(text, self)  # type: ignore[return-value]

    def try_parse_unit(self, text: str) -> Optional[AnyUnit]:
        return try_parse_unit(text, self)  # type: ignore[return-value]

    def quantity(self, value: float, unit: "AnyUnit | str | None" = None) -> "Quantity":
        """A quantity of this kind from ``value`` in ``unit`` (the SI unit by default)."""
        from quantiform.core.quantity import Quantity

        if unit is None:
            unit = self.si_unit
        elif isinstance(unit, str):
            unit = self.parse_unit(unit)
        elif unit.kind_name != self.name:
            raise TypeError(f"Unit '{unit.symbol}' is not a {self.name} unit")
        return Quantity(value, unit)


# ---------------------------------------------------------------------------
# Registry of kinds
# ---------------------------------------------------------------------------
class UnitKindRegistry:
    """Thread-safe table of `UnitKind` objects and their combination rules."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._kinds: Dict[str, UnitKind] = {}
        self._products: Dict[Tuple[str, str], str] = {}
        self._quotients: Dict[Tuple[str, str], str] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._kinds

    def __getattr__(self, name: str) -> UnitKind:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._kinds[name]
        except KeyError:
            raise AttributeError(name) from None

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._kinds))

    def register(self, kind: UnitKind, replace: bool = False) -> UnitKind:
        with self._lock:
            if not replace and kind.name in self._kinds:
                raise ValueError(f"Cannot register kind '{kind.name}': it already exists.")
            self._kinds[kind.name] = kind
        return kind

    def get(self, name: str) -> UnitKind:
        try:
            return self._kinds[name]
        except KeyError:
            raise ValueError(f"Unknown quantity kind: {name}") from None

    def all(self) -> Mapping[str, UnitKind]:
        with self._lock:
            return dict(self._kinds)

    # ------------------------- combinations --------------------------------
    def register_product(self, left: str, right: str, result: str) -> None:
        """Declare ``left * right -> result`` (and the commuted product).

        Also declares the two quotients ``result / left -> right`` and
        ``result / right -> left``. Dimensions must agree.
        """
        a, b, r = self.get(left), self.get(right), self.get(result)
        if a.dim * b.dim != r.dim:
            raise ValueError(
                f"{left} * {right} has dimension {a.dim * b.dim!r}, not {result} {r.dim!r}"
            )
        with self._lock:
            self._products[(left, right)] = result
            self._products[(right, left)] = result
            self._quotients[(result, left)] = right
            self._quotients[(result, right)] = left

    def product_kind(self, left: UnitKind, right: UnitKind) -> Optional[UnitKind]:
        name = self._products.get((left.name, right.name))
        return self._kinds[name] if name else None

    def quotient_kind(self, left: UnitKind, right: UnitKind) -> Optional[UnitKind]:
        name = self._quotients.get((left.name, right.name))
        return self._kinds[name] if name else None


# ---------------------------------------------------------------------------
# Bootstrap a default registry with a unit catalog
# ---------------------------------------------------------------------------
_KindSpec = Tuple[str, Dim, Iterable[Tuple[str, Scale]]]

_DEGREE = Fraction(math.pi) / 180


def _bootstrap_default_registry() -> UnitKindRegistry:
    reg = UnitKindRegistry()

    # --- Helpful composite dimensions (readable + reuse) ---
    AREA         = LENGTH ** 2
    VOLUME       = LENGTH ** 3
    SPEED        = LENGTH / TIME
    ACCELERATION = SPEED / TIME
    JERK         = ACCELERATION / TIME
    FREQUENCY    = TIME ** -1
    FORCE        = MASS * ACCELERATION
    PRESSURE     = FORCE / AREA
    ENERGY       = FORCE * LENGTH
    POWER        = ENERGY / TIME
    DENSITY      = MASS / VOLUME
    MOMENTUM     = MASS * SPEED
    WAVENUMBER   = LENGTH ** -1
    AREA_DENSITY = MASS / AREA
    SPECIFIC_E   = ENERGY / MASS
    CATALYTIC    = AMOUNT / TIME

    kinds: Tuple[_KindSpec, ...] = (
        ("Length", LENGTH, (
            ("m", 1), ("mm", "0.001"), ("µm", "1e-6"), ("nm", "1e-9"), ("cm", "0.01"),
            ("dm", "0.1"), ("km", 1000), ("in", "0.0254"), ("ft", "0.3048"),
            ("yd", "0.9144"), ("mi", "1609.344"),
        )),
        ("Time", TIME, (
            ("s", 1), ("ms", "0.001"), ("µs", "1e-6"), ("ns", "1e-9"),
            ("min", 60), ("h", 3600), ("d", 86400),
        )),
        ("Mass", MASS, (
            ("kg", 1), ("g", "0.001"), ("mg", "1e-6"), ("µg", "1e-9"), ("t", 1000),
        )),
        ("Area", AREA, (
            ("m²", 1), ("ha", 10000), ("mm²", "1e-6"), ("cm²", "1e-4"), ("dm²", "0.01"),
            ("km²", 1000000), ("mi²", "2589988.110336"), ("yd²", "0.83612736"),
            ("in²", "0.00064516"), ("ft²", "0.09290304"),
        )),
        ("Volume", VOLUME, (
            ("m³", 1), ("L", "0.001"), ("ml", "1e-6"), ("cl", "1e-5"), ("dl", "1e-4"),
            ("cm³", "1e-6"), ("mm³", "1e-9"), ("in³", "1.6387064e-5"), ("dm³", "0.001"),
            ("ft³", "0.028316846592"),
        )),
        ("Speed", SPEED, (
            ("m/s", 1), ("km/h", Fraction(1000, 3600)), ("mm/s", "0.001"), ("cm/s", "0.01"),
            ("km/s", 1000), ("m/min", Fraction(1, 60)), ("m/h", Fraction(1, 3600)),
            ("mm/min", Fraction(1, 60000)), ("mi/h", Fraction("1609.344") / 3600),
        )),
        ("Acceleration", ACCELERATION, (
            ("m/s²", 1), ("cm/s²", "0.01"), ("mm/s²", "0.001"),
            ("mm/h²", Fraction(1, 12960000000)), ("cm/h²", Fraction(1, 1296000000)),
            ("m/h²", Fraction(1, 12960000)), ("m/min²", Fraction(1, 3600)),
            ("mm/min²", Fraction(1, 3600000)),
        )),
        ("Jerk", JERK, (
            ("m/s³", 1), ("mm/s³", "0.001"), ("cm/s³", "0.01"),
            ("mm/h³", Fraction(1, 1000 * 3600 ** 3)), ("mm/min³", Fraction(1, 1000 * 60 ** 3)),
            ("m/h³", Fraction(1, 3600 ** 3)), ("m/min³", Fraction(1, 60 ** 3)),
        )),
        ("Frequency", FREQUENCY, (
            ("Hz", 1), ("1/s", 1), ("mHz", "0.001"), ("kHz", 1000), ("MHz", 1000000),
            ("GHz", 1000000000),
        )),
        ("Force", FORCE, (
            ("N", 1), ("kg⋅m⋅s⁻²", 1), ("kN", 1000), ("MN", 1000000), ("GN", 1000000000), ("µN", "1e-6"),
            ("mN", "0.001"), ("dN", "0.1"),
        )),
        ("Pressure", PRESSURE, (
            ("Pa", 1), ("kPa", 1000), ("MPa", 1000000), ("GPa", 1000000000),
            ("bar", 100000), ("mbar", 100), ("N/mm²", 1000000), ("N/m²", 1),
            ("kg⋅m⁻¹⋅s⁻²", 1),
        )),
        ("Energy", ENERGY, (
            ("J", 1), ("kJ", 1000), ("MJ", 1000000), ("GJ", 1000000000), ("mJ", "0.001"),
            ("Wh", 3600), ("kWh", 3600000), ("N⋅m", 1), ("kg⋅m²⋅s⁻²", 1),
        )),
        ("Power", POWER, (
            ("W", 1), ("kW", 1000), ("MW", 1000000), ("GW", 1000000000), ("mW", "0.001"), ("J/s", 1),
        )),
        ("Density", DENSITY, (
            ("kg/m³", 1), ("g/cm³", 1000), ("g/mm³", 1000000),
        )),
        ("Momentum", MOMENTUM, (
            ("kg⋅m/s", 1), ("N⋅s", 1),
        )),
        ("Wavenumber", WAVENUMBER, (
            ("m⁻¹", 1), ("cm⁻¹", 100),
        )),
        ("AreaDensity", AREA_DENSITY, (
            ("kg/m²", 1), ("g/m²", "0.001"),
        )),
        ("SpecificEnergy", SPECIFIC_E, (
            ("J/kg", 1), ("kJ/kg", 1000),
        )),
        ("AmountOfSubstance", AMOUNT, (
            ("mol", 1), ("mmol", "0.001"), ("kmol", 1000),
        )),
        ("CatalyticActivity", CATALYTIC, (
            ("kat", 1), ("mol/s", 1),
        )),
        ("Angle", DIM_0, (
            ("rad", 1), ("°", _DEGREE),
        )),
    )

    for name, dim, units in kinds:
        kind = reg.register(UnitKind(name, dim))
        for sym, scale in units:
            kind.add(sym, scale)

    temperature = reg.register(UnitKind("Temperature", TEMPERATURE))
    temperature.add("K")
    temperature.add("°C", 1, "273.15")
    temperature.add("°F", Fraction(5, 9), "459.67")
    temperature.add("°R", Fraction(5, 9))

    # Cross-kind products; each also yields the matching quotients.
    for left, right, result in (
        ("Length", "Length", "Area"),
        ("Area", "Length", "Volume"),
        ("Speed", "Time", "Length"),
        ("Acceleration", "Time", "Speed"),
        ("Jerk", "Time", "Acceleration"),
        ("Mass", "Acceleration", "Force"),
        ("Force", "Length", "Energy"),
        ("Pressure", "Area", "Force"),
        ("Power", "Time", "Energy"),
        ("Force", "Speed", "Power"),
        ("Density", "Volume", "Mass"),
        ("Mass", "Speed", "Momentum"),
        ("Momentum", "Acceleration", "Power"),
        ("AreaDensity", "Area", "Mass"),
        ("AreaDensity", "Acceleration", "Pressure"),
        ("SpecificEnergy", "Mass", "Energy"),
        ("Acceleration", "Length", "SpecificEnergy"),
        ("Speed", "Frequency", "Acceleration"),
        ("Acceleration", "Frequency", "Jerk"),
        ("CatalyticActivity", "Time", "AmountOfSubstance"),
    ):
        reg.register_product(left, right, result)

    return reg


# Public, shared default registry
DEFAULT_REGISTRY: UnitKindRegistry = _bootstrap_default_registry()


__all__ = [
    "UnitKind",
    "UnitKindRegistry",
    "DEFAULT_REGISTRY",
]
