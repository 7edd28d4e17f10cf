import pytest

from quantiform.core.dimensions import (
    AMOUNT,
    CURRENT,
    DIM_0,
    LENGTH,
    LUMINOUS,
    MASS,
    TEMPERATURE,
    TIME,
    Dim,
    Dimension,
)

# --- Basic structure & base vectors -------------------------------------------------

def test_base_vectors_shape_and_types():
    bases = [DIM_0, LENGTH, MASS, TIME, CURRENT, TEMPERATURE, AMOUNT, LUMINOUS]
    for b in bases:
        assert isinstance(b, Dimension)
        assert len(b) == 7
        assert all(isinstance(x, int) for x in b)

def test_dimensional_basis():
    assert LENGTH      == (1,0,0,0,0,0,0)
    assert MASS        == (0,1,0,0,0,0,0)
    assert TIME        == (0,0,1,0,0,0,0)
    assert CURRENT     == (0,0,0,1,0,0,0)
    assert TEMPERATURE == (0,0,0,0,1,0,0)
    assert AMOUNT      == (0,0,0,0,0,1,0)
    assert LUMINOUS    == (0,0,0,0,0,0,1)
    assert DIM_0       == (0,0,0,0,0,0,0)

# --- Algebra -----------------------------------------------------------------------

@pytest.mark.parametrize("a,b,expected", [
    (LENGTH, TIME ** -1, (1,0,-1,0,0,0,0)),
    (LENGTH, LENGTH, (2,0,0,0,0,0,0)),
    (MASS, TIME, (0,1,1,0,0,0,0)),
    (DIM_0, LENGTH, LENGTH),
])
def test_mul(a: Dim, b: Dim, expected):
    assert a * b == expected
    assert a * b == b * a
    assert isinstance(a * b, Dimension)

@pytest.mark.parametrize("a", [LENGTH, MASS, TIME, Dimension((2, -1, 3, 0, 0, 0, -4))])
def test_div_identities(a: Dim):
    assert a / a == DIM_0
    assert a / DIM_0 == a
    assert DIM_0 / a == tuple(-x for x in a)

@pytest.mark.parametrize("a,n,expected", [
    (LENGTH, 0, DIM_0),
    (LENGTH, 1, LENGTH),
    (LENGTH, 3, (3,0,0,0,0,0,0)),
    (TIME, -2, (0,0,-2,0,0,0,0)),
])
def test_pow(a: Dim, n: int, expected):
    assert a ** n == expected

def test_pow_requires_int():
    with pytest.raises(TypeError):
        _ = LENGTH ** 0.5

def test_operator_algebraic_laws():
    a, b = LENGTH, TIME
    assert ((a * b) ** 3) == ((a ** 3) * (b ** 3))
    assert ((a ** 2) * (a ** -5)) == (a ** -3)
    assert ((a ** 4) ** -2) == (a ** -8)

def test_physical_examples():
    force = MASS * LENGTH / TIME ** 2
    assert force == (1,1,-2,0,0,0,0)
    pressure = force / LENGTH ** 2
    assert pressure == (-1,1,-2,0,0,0,0)
    assert (force * LENGTH) / TIME == MASS * (LENGTH ** 2) * (TIME ** -3)

# --- Construction ------------------------------------------------------------------

def test_constructs_from_iterable():
    assert Dimension([1, 0, -1, 0, 0, 0, 0]) == (1, 0, -1, 0, 0, 0, 0)

def test_rejects_wrong_length():
    with pytest.raises(ValueError):
        Dimension((1, 2, 3))

def test_hash_matches_plain_tuple():
    t = (1, 0, -1, 0, 0, 0, 0)
    assert hash(Dimension(t)) == hash(t)
    assert {Dimension(t): "ok"}[t] == "ok"

# --- Helpers -----------------------------------------------------------------------

def test_is_dimensionless():
    assert DIM_0.is_dimensionless is True
    assert LENGTH.is_dimensionless is False
    assert (LENGTH / LENGTH).is_dimensionless is True

@pytest.mark.parametrize("dim, expected", [
    (DIM_0, ""),
    (LENGTH, "[L^1]"),
    (TEMPERATURE ** 2, "[Θ^2]"),
    (MASS * LENGTH * TIME ** -2, "[L^1][M^1][T^-2]"),
])
def test_repr(dim, expected):
    assert repr(dim) == expected
