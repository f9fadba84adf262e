##############################################################################

##############################################################################

"""
Zero rate curves of the ISDA standard model.

Both the risk-free discount curve and the credit survival curve of the ISDA
model are defined by continuously compounded zero rates at a set of node
times, interpolated so that r(t)·t is linear between nodes. The implied
instantaneous forward (or hazard) rate is therefore piecewise constant. To
the left of the first node the zero rate is flat; to the right of the last
node r(t)·t continues on the last segment. A single node curve is flat.

The interpolation is written in jax so that the sensitivity of the zero
rate at any time to the node rates is an exact gradient. The pricer uses
these gradients to map its adjoint values onto curve nodes.

Example:
    >>> curve = IsdaDiscountCurve(value_dt, [1.0, 5.0], [0.02, 0.03],
    ...                           name="USD-DISC")
    >>> curve.discount_factor(value_dt.add_tenor("2Y"))
    >>> curve.zero_rate_sensitivity(2.0).curve_vector("USD-DISC")
    array([0.375, 0.625])
"""

import logging

import numpy as np
import jax
import jax.numpy as jnp

from isdacds.utils.date import Date
from isdacds.utils.day_count import DayCount, DayCountTypes
from isdacds.utils.error import LibError
from isdacds.utils.helpers import check_argument_types, label_to_string
from isdacds.market.curves.curve_sensitivity import CurveSensitivity

jax.config.update("jax_enable_x64", True)

logger = logging.getLogger(__name__)

###############################################################################


def _product_linear_zero_rate(t, times, rates):
    """ Zero rate at time t with r(t)·t linear between node times. """

    if times.shape[0] == 1:
        return rates[0] + 0.0 * t

    # clamp so that neither branch of the where divides by zero
    t_safe = jnp.maximum(t, times[0])
    idx = jnp.clip(jnp.searchsorted(times, t_safe, side="left") - 1,
                   0, times.shape[0] - 2)

    t0 = times[idx]
    t1 = times[idx + 1]
    rt0 = rates[idx] * t0
    rt1 = rates[idx + 1] * t1
    rt = rt0 + (rt1 - rt0) * (t_safe - t0) / (t1 - t0)

    return jnp.where(t <= times[0], rates[0] + 0.0 * t, rt / t_safe)


_zero_rate = jax.jit(_product_linear_zero_rate)
_zero_rates = jax.jit(jax.vmap(_product_linear_zero_rate,
                               in_axes=(0, None, None)))
_zero_rate_grads = jax.jit(jax.vmap(jax.grad(_product_linear_zero_rate,
                                             argnums=2),
                                    in_axes=(0, None, None)))

###############################################################################


class IsdaCurve:
    """ Curve of continuously compounded zero rates at node times, measured
    in years from the valuation date with the curve day count. """

    def __init__(self,
                 value_dt: Date,
                 times: (list, np.ndarray),
                 zero_rates: (list, np.ndarray),
                 dc_type: DayCountTypes = DayCountTypes.ACT_365F,
                 name: str = ""):

        check_argument_types(self.__init__, locals())

        times = np.array(times, dtype=float)
        zero_rates = np.array(zero_rates, dtype=float)

        if times.ndim != 1 or len(times) == 0:
            raise LibError("Curve needs at least one node time")

        if len(times) != len(zero_rates):
            raise LibError("Number of node times " + str(len(times))
                           + " and zero rates " + str(len(zero_rates))
                           + " differ")

        if times[0] <= 0.0:
            raise LibError("Node times must be positive")

        if np.any(np.diff(times) <= 0.0):
            raise LibError("Node times must be strictly increasing")

        if np.any(np.isnan(zero_rates)):
            raise LibError("Zero rates contain NaN")

        self._value_dt = value_dt
        self._times = times
        self._zero_rates = zero_rates
        self._dc_type = dc_type
        self._day_count = DayCount(dc_type)
        self._name = name

        self._jtimes = jnp.array(times)
        self._jrates = jnp.array(zero_rates)

    ###########################################################################

    @classmethod
    def from_dates(cls,
                   value_dt: Date,
                   dts: list,
                   zero_rates: (list, np.ndarray),
                   dc_type: DayCountTypes = DayCountTypes.ACT_365F,
                   name: str = ""):
        """ Create a curve with nodes at dates rather than times. """

        dc = DayCount(dc_type)
        times = [dc.year_frac(value_dt, dt)[0] for dt in dts]
        return cls(value_dt, times, zero_rates, dc_type, name)

    ###########################################################################

    @property
    def value_dt(self):
        return self._value_dt

    @property
    def times(self):
        return self._times

    @property
    def zero_rates(self):
        return self._zero_rates

    @property
    def dc_type(self):
        return self._dc_type

    @property
    def name(self):
        return self._name

    def parameter_count(self):
        return len(self._times)

    def parameter_keys(self):
        """ Node times, which label the sensitivities of this curve. """
        return list(self._times)

    ###########################################################################

    def relative_year_fraction(self, dt: Date):
        """ Year fraction from the valuation date to dt in the curve day
        count. Negative for dates before the valuation date. """
        return self._day_count.year_frac(self._value_dt, dt)[0]

    def zero_rate(self, t: float):
        """ Continuously compounded zero rate at time t. """
        return float(_zero_rate(t, self._jtimes, self._jrates))

    def zero_rates_at(self, ts):
        """ Zero rates at an array of times. """
        ts = jnp.atleast_1d(jnp.asarray(ts, dtype=float))
        return np.asarray(_zero_rates(ts, self._jtimes, self._jrates))

    def zero_rate_jacobian(self, ts):
        """ Matrix of d r(ts[i]) / d r_j, one row per time. """
        ts = jnp.atleast_1d(jnp.asarray(ts, dtype=float))
        return np.asarray(_zero_rate_grads(ts, self._jtimes, self._jrates))

    def zero_rate_sensitivity(self, t: float):
        """ Sensitivity of the zero rate at t to the node zero rates. """
        weights = self.zero_rate_jacobian([t])[0]
        return CurveSensitivity.of(self._name, self._times, weights)

    def _exp_minus_rt(self, t: float):
        return float(np.exp(-self.zero_rate(t) * t))

    ###########################################################################

    def with_zero_rates(self, zero_rates):
        """ Copy of this curve with new node zero rates. """
        return type(self)(self._value_dt, self._times, zero_rates,
                          self._dc_type, self._name)

    def with_bumped_node(self, i: int, bump: float):
        """ Copy of this curve with the zero rate of node i shifted by
        bump. """

        if i < 0 or i >= len(self._times):
            raise LibError("Node index " + str(i) + " out of range")

        rates = self._zero_rates.copy()
        rates[i] += bump
        return self.with_zero_rates(rates)

    def with_parallel_shift(self, bump: float):
        """ Copy of this curve with every node zero rate shifted by bump. """
        return self.with_zero_rates(self._zero_rates + bump)

    ###########################################################################

    def __repr__(self):
        s = label_to_string("OBJECT TYPE", type(self).__name__)
        s += label_to_string("NAME", self._name)
        s += label_to_string("VALUATION DATE", self._value_dt)
        s += label_to_string("DAY COUNT", self._dc_type)
        s += label_to_string("TIMES", list(self._times), list_format=True)
        s += label_to_string("ZERO RATES", list(self._zero_rates), "",
                             list_format=True)
        return s

###############################################################################


class IsdaDiscountCurve(IsdaCurve):
    """ Risk-free discount curve of the ISDA model. """

    def discount_factor_at(self, t: float):
        return self._exp_minus_rt(t)

    def discount_factor(self, dt: Date):
        """ Discount factor from the valuation date to dt. """
        return self._exp_minus_rt(self.relative_year_fraction(dt))

###############################################################################


class IsdaSurvivalCurve(IsdaCurve):
    """ Credit curve of the ISDA model. The zero rates are the average hazard
    rates to each node time. """

    @classmethod
    def from_hazard_rates(cls,
                          value_dt: Date,
                          times: (list, np.ndarray),
                          hazard_rates: (list, np.ndarray),
                          dc_type: DayCountTypes = DayCountTypes.ACT_365F,
                          name: str = ""):
        """ Create a survival curve from hazard rates that are constant
        between node times, the first applying from time zero. """

        times = np.array(times, dtype=float)
        hazard_rates = np.array(hazard_rates, dtype=float)

        if len(times) != len(hazard_rates):
            raise LibError("Number of node times and hazard rates differ")

        if len(times) == 0 or np.any(np.diff(times) <= 0.0) or times[0] <= 0.0:
            raise LibError("Node times must be positive and strictly "
                           "increasing")

        if np.any(hazard_rates < 0.0):
            logger.warning("Negative hazard rate in curve %s", name)

        dts = np.diff(np.concatenate(([0.0], times)))
        zero_rates = np.cumsum(hazard_rates * dts) / times
        return cls(value_dt, times, zero_rates, dc_type, name)

    def survival_probability_at(self, t: float):
        return self._exp_minus_rt(t)

    def survival_probability(self, dt: Date):
        """ Probability of no default from the valuation date to dt. """
        return self._exp_minus_rt(self.relative_year_fraction(dt))

###############################################################################
