# tests/conftest.py
import pytest

from quantiform import config
from quantiform.units.registry import DEFAULT_REGISTRY as _kinds


@pytest.fixture(scope="session")
def kinds():
    return _kinds


@pytest.fixture(autouse=True)
def en_us_settings(monkeypatch):
    """Every test starts from en_US with no symbol style, whatever the host locale."""
    monkeypatch.setenv(config.ENV_LOCALE, "en_US")
    config.reset()
    yield
    config.reset()


@pytest.fixture
def length(kinds):
    return kinds.Length


@pytest.fixture
def speed(kinds):
    return kinds.Speed
