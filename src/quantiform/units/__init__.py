from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from quantiform.units.registry import UnitKindRegistry
# Lazy access helpers -------------------------------------------------------

def _get_default_registry() -> "UnitKindRegistry":
    # Import here to avoid import-time side-effects / circular imports.
    from quantiform.units.registry import DEFAULT_REGISTRY  # local import
    return DEFAULT_REGISTRY

def __getattr__(name: str) -> Any:
    """
    Lazy attribute access: module-level names such as ``Length`` or ``Speed``
    resolve to the kinds of the default registry on first use.
    """
    if name.startswith("_"):
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    registry = _get_default_registry()
    if name in registry:
        return registry.get(name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__() -> list[str]:
    # Improve discoverability in REPL / autocomplete.
    return sorted(list(globals().keys()) + list(_get_default_registry().all()))
