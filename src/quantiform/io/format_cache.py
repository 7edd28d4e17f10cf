"""
quantiform.io.format_cache
==========================

Parsed, immutable format descriptors, memoized for the life of the process.

A composite format such as ``" F2  m/s² "`` is split once into leading
padding, numeric sub-format, inner padding, unit symbol and trailing padding.
The pieces are kept verbatim so output reproduces the caller's spacing and
spelling byte for byte.

Formats are never rejected. A numeric sub-format or symbol that cannot be
understood renders as ``{value: ??}`` / ``{unit: ??}`` in the output; for
units, a format naming a different unit (or none) is echoed back unchanged.

The caches are plain dicts filled with ``setdefault``: two threads may build
the same descriptor concurrently, one copy wins and the other is dropped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Hashable, Optional, Tuple

from quantiform.core.unit import Unit
from quantiform.io.numbers import is_value_format
from quantiform.units.registry import UnitKind
from quantiform.units.utils import SymbolFormat, format_symbol

logger = logging.getLogger(__name__)

VALUE_ERROR_TEXT = "{value: ??}"
UNIT_ERROR_TEXT = "{unit: ??}"

# numeric code glued to a symbol, e.g. 'F2m/s'
_GLUED_VALUE_RE = re.compile(r"[FfEeNnGgRrPp]\d{1,2}|[#0,]*[#0]\.[#0]+")
# value format, whitespace, symbol
_HEAD_RE = re.compile(r"(\S+)(\s+)(\S.*)", re.S)


@dataclass(frozen=True, slots=True)
class QuantityFormat:
    """How to write a quantity: ``pre_padding value padding symbol post_padding``."""

    pre_padding: str
    value_format: Optional[str]
    padding: str
    symbol_text: str
    post_padding: str
    unit: Unit
    symbol_style: Optional[SymbolFormat] = None
    value_error: bool = False
    error_text: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.error_text is None


@dataclass(frozen=True, slots=True)
class PaddedFormat:
    """A unit symbol with the whitespace that surrounded it."""

    pre_padding: str
    format: str
    post_padding: str

    def render(self) -> str:
        return f"{self.pre_padding}{self.format}{self.post_padding}"


def split_padding(text: str) -> Tuple[str, str, str]:
    """``'  m/s '`` -> ``('  ', 'm/s', ' ')``."""
    body = text.strip()
    if not body:
        return text, "", ""
    start = text.index(body)
    return text[:start], body, text[start + len(body):]


def _symbol_for(unit: Unit, kind: UnitKind, style: Optional[SymbolFormat]) -> str:
    if style is None:
        return unit.symbol
    return format_symbol(kind.parts(unit), style)  # type: ignore[arg-type]


class _Memo:
    def __init__(self) -> None:
        self._cache: Dict[Hashable, object] = {}

    def _get(self, key: Hashable, build) -> object:
        hit = self._cache.get(key)
        if hit is not None:
            return hit
        value = build()
        logger.debug("Created format descriptor for %r", key)
        return self._cache.setdefault(key, value)

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        self._cache.clear()


class FormatCache(_Memo):
    """Quantity format descriptors keyed by the raw format and the kind."""

    def get_or_create(self, format: Optional[str], kind: UnitKind) -> QuantityFormat:
        return self._get(("format", format, kind.name), lambda: self._parse(format, kind))  # type: ignore[return-value]

    def for_unit(
        self,
        value_format: Optional[str],
        unit: Unit,
        kind: UnitKind,
        symbol_style: Optional[SymbolFormat] = None,
    ) -> QuantityFormat:
        key = ("unit", value_format, kind.name, unit.symbol, symbol_style)
        return self._get(key, lambda: self._from_unit(value_format, unit, kind, symbol_style))  # type: ignore[return-value]

    def for_parts(self, value_format: Optional[str], symbol_format: Optional[str], kind: UnitKind) -> QuantityFormat:
        key = ("parts", value_format, symbol_format, kind.name)
        return self._get(key, lambda: self._from_parts(value_format, symbol_format, kind))  # type: ignore[return-value]

    # ------------------------- builders ------------------------------------
    @staticmethod
    def _from_unit(
        value_format: Optional[str],
        unit: Unit,
        kind: UnitKind,
        style: Optional[SymbolFormat],
    ) -> QuantityFormat:
        bad_value = bool(value_format) and not is_value_format(value_format)  # type: ignore[arg-type]
        return QuantityFormat(
            pre_padding="",
            value_format=value_format or None,
            padding=" ",
            symbol_text=_symbol_for(unit, kind, style),
            post_padding="",
            unit=unit,
            symbol_style=style,
            value_error=bad_value,
            error_text=f"Invalid numeric format {value_format!r}" if bad_value else None,
        )

    @staticmethod
    def _from_parts(value_format: Optional[str], symbol_format: Optional[str], kind: UnitKind) -> QuantityFormat:
        bad_value = bool(value_format) and not is_value_format(value_format)  # type: ignore[arg-type]
        padding, symbol, post = split_padding(symbol_format or "")
        error = f"Invalid numeric format {value_format!r}" if bad_value else None
        if not symbol:
            unit: Optional[Unit] = kind.si_unit
            text = kind.si_unit.symbol
        else:
            unit = kind.try_parse_unit(symbol)
            text = symbol if unit is not None else UNIT_ERROR_TEXT
            if unit is None:
                error = f"Unknown {kind.name} unit {symbol!r}"
        return QuantityFormat(
            pre_padding="",
            value_format=value_format or None,
            padding=padding or " ",
            symbol_text=text,
            post_padding=post,
            unit=unit or kind.si_unit,
            value_error=bad_value,
            error_text=error,
        )

    @staticmethod
    def _parse(format: Optional[str], kind: UnitKind) -> QuantityFormat:
        pre, body, post = split_padding(format or "")
        if not body:
            return QuantityFormat(pre, None, " ", kind.si_unit.symbol, post, kind.si_unit)

        m = _HEAD_RE.fullmatch(body)
        head, padding, symbol = m.groups() if m else (body, "", "")

        # A lone token that names a unit is a symbol, even if it looks like 'N' or 'E'.
        if not symbol:
            unit = kind.try_parse_unit(head)
            if unit is not None:
                return QuantityFormat(pre, None, " ", head, post, unit)
            if is_value_format(head):
                return QuantityFormat(pre, head, " ", kind.si_unit.symbol, post, kind.si_unit)
            glued = _GLUED_VALUE_RE.match(head)
            if glued and glued.end() < len(head):
                unit = kind.try_parse_unit(head[glued.end():])
                if unit is not None:
                    return QuantityFormat(pre, glued.group(), "", head[glued.end():], post, unit)
            return QuantityFormat(
                pre, None, "", UNIT_ERROR_TEXT, post, kind.si_unit,
                error_text=f"Could not read {body!r} as a {kind.name} format",
            )

        if is_value_format(head):
            unit = kind.try_parse_unit(symbol)
            if unit is not None:
                return QuantityFormat(pre, head, padding, symbol, post, unit)
            return QuantityFormat(
                pre, head, padding, UNIT_ERROR_TEXT, post, kind.si_unit,
                error_text=f"Unknown {kind.name} unit {symbol!r}",
            )

        unit = kind.try_parse_unit(body)
        if unit is not None:
            return QuantityFormat(pre, None, " ", body, post, unit)

        unit = kind.try_parse_unit(symbol)
        if unit is not None:
            return QuantityFormat(
                pre, head, padding, symbol, post, unit,
                value_error=True, error_text=f"Invalid numeric format {head!r}",
            )
        return QuantityFormat(
            pre, head, padding, UNIT_ERROR_TEXT, post, kind.si_unit,
            value_error=True, error_text=f"Could not read {body!r} as a {kind.name} format",
        )


class UnitFormatCache(_Memo):
    """Unit symbol formats keyed by the raw format and the kind."""

    def get_or_create(self, format: str, kind: UnitKind) -> Tuple[PaddedFormat, Optional[Unit]]:
        return self._get(("format", format, kind.name), lambda: self._parse(format, kind))  # type: ignore[return-value]

    def for_unit(self, unit: Unit, symbol_style: Optional[SymbolFormat] = None, kind: Optional[UnitKind] = None) -> PaddedFormat:
        k = kind or unit.kind  # type: ignore[attr-defined]
        key = ("unit", k.name, unit.symbol, symbol_style)
        return self._get(key, lambda: PaddedFormat("", _symbol_for(unit, k, symbol_style), ""))  # type: ignore[return-value]

    @staticmethod
    def _parse(format: str, kind: UnitKind) -> Tuple[PaddedFormat, Optional[Unit]]:
        pre, body, post = split_padding(format)
        unit = kind.try_parse_unit(body) if body else None
        return PaddedFormat(pre, body, post), unit


# Process-wide caches; entries live until the interpreter exits.
FORMAT_CACHE = FormatCache()
UNIT_FORMAT_CACHE = UnitFormatCache()


__all__ = [
    "QuantityFormat",
    "PaddedFormat",
    "FormatCache",
    "UnitFormatCache",
    "FORMAT_CACHE",
    "UNIT_FORMAT_CACHE",
    "split_padding",
]
