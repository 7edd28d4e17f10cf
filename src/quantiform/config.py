"""
quantiform.config
=================

Process-wide defaults used when a call does not pass ``locale=`` or
``symbol_style=`` explicitly.

The default locale is read from the ``QUANTIFORM_LOCALE`` environment
variable, then from Babel's view of ``LC_NUMERIC``, and finally falls back to
``en_US``. Settings are immutable; `configure` swaps in a new instance.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, replace
from typing import Any, Optional

from babel import Locale, UnknownLocaleError, default_locale

from quantiform.units.utils import SymbolFormat

logger = logging.getLogger(__name__)

ENV_LOCALE = "QUANTIFORM_LOCALE"
_FALLBACK_LOCALE = "en_US"


@dataclass(frozen=True, slots=True)
class Settings:
    locale: Locale
    symbol_style: Optional[SymbolFormat] = None


def _locale_from_env() -> Locale:
    for candidate in (os.environ.get(ENV_LOCALE), default_locale("LC_NUMERIC")):
        if not candidate:
            continue
        try:
            return Locale.parse(candidate)
        except (ValueError, UnknownLocaleError):
            logger.debug("Ignoring unusable locale %r", candidate)
    return Locale.parse(_FALLBACK_LOCALE)


_lock = threading.Lock()
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        with _lock:
            if _settings is None:
                _settings = Settings(locale=_locale_from_env())
    return _settings


def configure(**changes: Any) -> Settings:
    """Replace the process-wide settings.

    ``locale`` may be given as a string such as ``"sv_SE"``.
    """
    global _settings
    if "locale" in changes and not isinstance(changes["locale"], Locale):
        changes["locale"] = Locale.parse(changes["locale"])
    with _lock:
        current = _settings or Settings(locale=_locale_from_env())
        _settings = replace(current, **changes)
    return _settings


def reset() -> None:
    """Forget configured settings; the next lookup re-reads the environment."""
    global _settings
    with _lock:
        _settings = None


def resolve_locale(locale: "Locale | str | None") -> Locale:
    if locale is None:
        return get_settings().locale
    if isinstance(locale, Locale):
        return locale
    return Locale.parse(locale)


__all__ = ["Settings", "get_settings", "configure", "reset", "resolve_locale", "ENV_LOCALE"]
