"""
Quantiform: parse and format physical quantities written as text.

Quantiform reads expressions such as ``"1.2 m/s²"``, ``"5 kg⋅m⁻¹⋅s⁻²"`` or
``"3 m^-2"`` into quantities stored as a single SI value, and writes them
back out with composite formats (``"F2 km/h"``), symbol styles and locale
aware numbers. The kind registry is imported lazily to keep import-time side
effects out of ``import quantiform``.
"""

from importlib import metadata as _metadata
from typing import Any

from quantiform.errors import MissingAttributeError, UnitFormatError

__author__ = "Parneet Sidhu"
__license__ = "MIT"

# Try to read the installed package version first; fall back to pyproject.toml for local dev.
try:
    __version__ = _metadata.version("quantiform")
except _metadata.PackageNotFoundError:
    import tomllib
    from pathlib import Path

    with open(Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]


def __getattr__(name: str) -> Any:
    """
    Lazy attribute access: ``quantiform.kinds`` is the default kind registry
    and ``quantiform.Quantity`` the generic quantity type.
    """
    if name == "kinds":
        from quantiform.units.registry import DEFAULT_REGISTRY

        return DEFAULT_REGISTRY
    if name == "Quantity":
        from quantiform.core.quantity import Quantity

        return Quantity
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["kinds", "Quantity"])


# Public names exposed by the package. Keep this minimal and stable.
__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "UnitFormatError",
    "MissingAttributeError",
    "Quantity",
    "kinds",
]
