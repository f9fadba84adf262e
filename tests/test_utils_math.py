"""
Tests for the epsilon functions used by the ISDA integrals.

The closed forms are used for |x| >= 1e-5 and a Taylor series below. Both
branches must agree at the switch; the second derivative loses about five
digits to cancellation there so its tolerance is looser.
"""

import math

import pytest

from isdacds.utils.math import epsilon, epsilon_p, epsilon_pp
from isdacds.utils.global_vars import g_epsilon_switch, g_epsilon_pp_switch


class TestLimits:
    """Values at zero are the Taylor constants"""

    def test_epsilon_at_zero(self):
        assert epsilon(0.0) == 1.0

    def test_epsilon_p_at_zero(self):
        assert epsilon_p(0.0) == 0.5

    def test_epsilon_pp_at_zero(self):
        assert epsilon_pp(0.0) == pytest.approx(1.0 / 3.0, abs=1e-15)


class TestClosedForms:
    """Values away from zero against hand computed expressions"""

    def test_epsilon_at_one(self):
        assert epsilon(1.0) == pytest.approx(math.e - 1.0, rel=1e-14)

    def test_epsilon_at_minus_one(self):
        assert epsilon(-1.0) == pytest.approx(1.0 - math.exp(-1.0), rel=1e-14)

    def test_epsilon_p_at_one(self):
        """(e - (e - 1)) / 1 = 1"""
        assert epsilon_p(1.0) == pytest.approx(1.0, rel=1e-14)

    def test_epsilon_pp_at_one(self):
        """(e - 2e + 2e - 2) / 1 = e - 2"""
        assert epsilon_pp(1.0) == pytest.approx(math.e - 2.0, rel=1e-13)

    def test_epsilon_large_negative(self):
        """No overflow for the arguments met when rates are large"""
        x = -50.0
        assert epsilon(x) == pytest.approx(1.0 / 50.0, rel=1e-12)

    @pytest.mark.parametrize("x", [-0.5, -0.01, 0.01, 0.3])
    def test_epsilon_p_is_derivative(self, x):
        h = 1e-6
        fd = (epsilon(x + h) - epsilon(x - h)) / (2.0 * h)
        assert epsilon_p(x) == pytest.approx(fd, rel=1e-7)

    @pytest.mark.parametrize("x", [-0.5, -0.01, 0.01, 0.3])
    def test_epsilon_pp_is_derivative(self, x):
        h = 1e-5
        fd = (epsilon_p(x + h) - epsilon_p(x - h)) / (2.0 * h)
        assert epsilon_pp(x) == pytest.approx(fd, rel=1e-6)


@pytest.mark.numerical
class TestContinuityAtSwitch:
    """Series and closed form agree on either side of the switch"""

    @pytest.mark.parametrize("sign", [1.0, -1.0])
    def test_epsilon(self, sign):
        inside = sign * g_epsilon_switch * (1.0 - 1e-9)
        outside = sign * g_epsilon_switch
        assert abs(epsilon(inside) - epsilon(outside)) < 1e-9

    @pytest.mark.parametrize("sign", [1.0, -1.0])
    def test_epsilon_p(self, sign):
        inside = sign * g_epsilon_switch * (1.0 - 1e-9)
        outside = sign * g_epsilon_switch
        assert abs(epsilon_p(inside) - epsilon_p(outside)) < 1e-9

    @pytest.mark.parametrize("sign", [1.0, -1.0])
    def test_epsilon_pp(self, sign):
        inside = sign * g_epsilon_switch * (1.0 - 1e-9)
        outside = sign * g_epsilon_switch
        assert abs(epsilon_pp(inside) - epsilon_pp(outside)) < 1e-9

    @pytest.mark.parametrize("sign", [1.0, -1.0])
    def test_epsilon_pp_at_own_switch(self, sign):
        """The closed form of epsilon_pp only takes over once cancellation
        is harmless"""
        inside = sign * g_epsilon_pp_switch * (1.0 - 1e-9)
        outside = sign * g_epsilon_pp_switch
        assert abs(epsilon_pp(inside) - epsilon_pp(outside)) < 1e-9

    def test_series_accuracy_near_zero(self):
        x = 1e-6
        assert epsilon(x) == pytest.approx(math.expm1(x) / x, rel=1e-12)
