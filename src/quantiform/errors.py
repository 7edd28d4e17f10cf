"""
quantiform.errors
=================

The single error kind raised by the parsing and formatting entry points.

Every lexical failure (bad symbol or power syntax), semantic failure
(unknown symbol, unregistered exponent combination) and structural failure
(missing numeric literal, trailing input) surfaces as `UnitFormatError`.
It subclasses `ValueError` so callers that already guard unit parsing with
``except ValueError`` keep working.
"""

from __future__ import annotations

from typing import Optional


class UnitFormatError(ValueError):
    """Text could not be read as a unit, a quantity or a format."""

    def __init__(self, message: str, text: Optional[str] = None, position: Optional[int] = None) -> None:
        self.message = message
        self.text = text
        self.position = position
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.text is None:
            return self.message
        if self.position is None:
            return f"{self.message} in {self.text!r}"
        return f"{self.message} at position {self.position} in {self.text!r}"


class MissingAttributeError(UnitFormatError):
    """The persisted form lacks a required attribute."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Could not find attribute named: {name}")


__all__ = ["UnitFormatError", "MissingAttributeError"]
