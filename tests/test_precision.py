import math

import pytest

from yapbsp.errors import GeometryValueError
from yapbsp.precision import EpsilonPrecision, default_precision, DEFAULT_EPSILON


class TestEpsilonPrecision:
    """Tolerant three-way comparison"""

    def test_compare_within_epsilon(self):
        p = EpsilonPrecision(1e-3)
        assert p.compare(1.0, 1.0005) == 0
        assert p.compare(1.0, 1.002) == -1
        assert p.compare(1.002, 1.0) == 1

    def test_derived_predicates_agree(self):
        p = EpsilonPrecision(0.1)
        assert p.eq(1.0, 1.05)
        assert p.lte(1.0, 1.05)
        assert p.gte(1.0, 1.05)
        assert not p.lt(1.0, 1.05)
        assert p.lt(1.0, 1.2)
        assert p.gt(1.2, 1.0)
        assert p.eq_zero(-0.05)
        assert not p.eq_zero(0.2)

    def test_sign(self):
        p = EpsilonPrecision(1e-6)
        assert p.sign(1e-9) == 0
        assert p.sign(-1.0) == -1
        assert p.sign(2.0) == 1

    def test_infinities(self):
        p = EpsilonPrecision(1e-6)
        assert p.eq(math.inf, math.inf)
        assert p.eq(-math.inf, -math.inf)
        assert p.lt(-math.inf, math.inf)
        assert p.gt(math.inf, 1e300)

    def test_nan_sorts_last(self):
        p = EpsilonPrecision(1e-6)
        nan = math.nan
        assert p.compare(nan, nan) == 0
        assert p.compare(nan, 1.0) == 1
        assert p.compare(1.0, nan) == -1
        assert p.compare(nan, math.inf) == 1
        assert not p.eq(nan, 0.0)

    def test_max_min(self):
        p = EpsilonPrecision(0.1)
        assert p.max(1.0, 2.0) == 2.0
        assert p.min(1.0, 2.0) == 1.0
        # equal values keep the first argument
        assert p.max(1.0, 1.05) == 1.0

    def test_zero_epsilon_is_exact(self):
        p = EpsilonPrecision(0.0)
        assert p.eq(1.0, 1.0)
        assert not p.eq(1.0, 1.0 + 1e-15)

    @pytest.mark.parametrize('bad', [-1.0, math.nan, math.inf])
    def test_bad_epsilon(self, bad):
        with pytest.raises(GeometryValueError):
            EpsilonPrecision(bad)

    def test_bad_epsilon_is_a_value_error(self):
        with pytest.raises(ValueError):
            EpsilonPrecision(-1.0)

    def test_immutable(self):
        p = EpsilonPrecision(1e-3)
        with pytest.raises(AttributeError):
            p.epsilon = 2.0

    def test_equality_and_hash(self):
        assert EpsilonPrecision(1e-3) == EpsilonPrecision(1e-3)
        assert EpsilonPrecision(1e-3) != EpsilonPrecision(1e-4)
        assert hash(EpsilonPrecision(1e-3)) == hash(EpsilonPrecision(1e-3))


def test_default_precision_is_shared():
    assert default_precision() is default_precision()
    assert default_precision().epsilon == DEFAULT_EPSILON


def test_epsilon_from_environment(monkeypatch):
    from yapbsp import precision
    monkeypatch.setenv(precision.EPSILON_ENV, '1e-4')
    assert precision._epsilon_from_env() == 1e-4
    monkeypatch.setenv(precision.EPSILON_ENV, 'not-a-number')
    assert precision._epsilon_from_env(default=0.5) == 0.5
    monkeypatch.setenv(precision.EPSILON_ENV, '-3')
    assert precision._epsilon_from_env(default=0.5) == 0.5
    monkeypatch.delenv(precision.EPSILON_ENV)
    assert precision._epsilon_from_env(default=0.25) == 0.25
