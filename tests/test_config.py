# tests/test_config.py
import pytest
from babel import Locale

from quantiform import config
from quantiform.units.utils import SymbolFormat


def test_locale_from_environment(monkeypatch):
    monkeypatch.setenv(config.ENV_LOCALE, "sv_SE")
    config.reset()
    assert config.get_settings().locale == Locale.parse("sv_SE")

def test_unusable_environment_locale_falls_back(monkeypatch):
    monkeypatch.setenv(config.ENV_LOCALE, "not_a_locale")
    monkeypatch.setenv("LC_ALL", "")
    monkeypatch.setenv("LC_NUMERIC", "")
    monkeypatch.setenv("LANG", "")
    monkeypatch.setenv("LANGUAGE", "")
    config.reset()
    assert isinstance(config.get_settings().locale, Locale)

def test_configure_replaces_settings():
    before = config.get_settings()
    after = config.configure(locale="de_DE", symbol_style=SymbolFormat.FRACTION_SUPERSCRIPT)
    assert after is not before
    assert after.locale == Locale.parse("de_DE")
    assert config.get_settings() is after
    assert before.locale == Locale.parse("en_US")

def test_settings_are_frozen():
    with pytest.raises(AttributeError):
        config.get_settings().locale = Locale.parse("de_DE")  # type: ignore[misc]

@pytest.mark.parametrize("value,expected", [
    (None, "en_US"),
    ("fr_FR", "fr_FR"),
    (Locale.parse("de_DE"), "de_DE"),
])
def test_resolve_locale(value, expected):
    assert str(config.resolve_locale(value)) == expected
