##############################################################################

##############################################################################

"""
Piecewise integration of the ISDA model over a merged knot grid.

Between two knots both curves have a constant forward rate, so the
integrals of the protection leg and of the premium accrued on default have
closed forms in terms of

- dht = h(t1)·t1 - h(t0)·t0, the integrated hazard rate
- dhrt = dht + r(t1)·t1 - r(t0)·t0, hazard plus risk-free rate
- b0, b1, the risky discount factors exp(-h·t - r·t) at the knots

Each interval kernel returns its value together with the partial
derivatives with respect to (dht, dhrt, b0, b1). The single integration
loop sums the values and scatters the partials onto per-knot adjoints of
h(t)·t and r(t)·t, so pricing and sensitivities share the same code path.
Near dhrt = 0 the kernels switch to the epsilon functions.

Example:
    >>> knots = integration_points(0.0, 5.0, disc.times, surv.times)
    >>> result = integrate(knots, surv, disc, protection_kernel)
    >>> result.value
"""

import logging
from collections import namedtuple

import numpy as np

from isdacds.utils.error import LibError
from isdacds.utils.global_vars import g_epsilon_switch, g_knot_tol
from isdacds.utils.math import epsilon, epsilon_p, epsilon_pp

logger = logging.getLogger(__name__)

###############################################################################

IntegralResult = namedtuple("IntegralResult",
                            ["value", "knots", "ht_bar", "rt_bar"])

###############################################################################


def _strictly_inside(t0: float, t1: float, times):
    times = np.asarray(times, dtype=float)
    return np.sort(times[(times > t0) & (times < t1)])


def _close_with_end(knots: list, t1: float):
    """ Append t1, replacing the last interior knot when it is closer than
    the tolerance. """

    if len(knots) > 1 and t1 - knots[-1] <= g_knot_tol:
        knots[-1] = t1
    else:
        knots.append(t1)

    return np.array(knots)

###############################################################################


def integration_points(t0: float,
                       t1: float,
                       times_a,
                       times_b):
    """ The knots at which either curve changes slope between t0 and t1. Both
    end points are included and points within half a day of the previous
    point (or of t1) are dropped. """

    if t0 >= t1:
        raise LibError("Integration start " + str(t0)
                       + " must be before end " + str(t1))

    interior = np.sort(np.concatenate((_strictly_inside(t0, t1, times_a),
                                       _strictly_inside(t0, t1, times_b))))

    knots = [t0]
    for t in interior:
        if t - knots[-1] > g_knot_tol:
            knots.append(t)

    return _close_with_end(knots, t1)

###############################################################################


def truncate_inclusive(t0: float,
                       t1: float,
                       knots):
    """ Restrict a knot set to [t0, t1] with both ends included. """

    if t0 >= t1:
        raise LibError("Truncation start " + str(t0)
                       + " must be before end " + str(t1))

    truncated = [t0]
    for t in _strictly_inside(t0, t1, knots):
        if t - truncated[-1] > g_knot_tol:
            truncated.append(t)

    return _close_with_end(truncated, t1)

###############################################################################
# Interval kernels. Each takes
#   dht, dhrt, b0, b1 - the curve dependent quantities of the interval
#   dt                - the interval length
#   s0, s1            - the time accrued since the start of the coupon at
#                       either end of the interval
# and returns (value, dht_bar, dhrt_bar, b0_bar, b1_bar).
###############################################################################


def protection_kernel(dht, dhrt, b0, b1, dt, s0, s1):
    """ Probability weighted discounted default payment over the interval. """

    if abs(dhrt) < g_epsilon_switch:
        eps = epsilon(-dhrt)
        value = dht * b0 * eps
        return (value,
                b0 * eps,
                -dht * b0 * epsilon_p(-dhrt),
                dht * eps,
                0.0)

    db = b0 - b1
    value = db * dht / dhrt
    return (value,
            db / dhrt,
            -db * dht / dhrt / dhrt,
            dht / dhrt,
            -dht / dhrt)

###############################################################################


def markit_fix_kernel(dht, dhrt, b0, b1, dt, s0, s1):
    """ Accrual on default with the Markit correction of the ISDA model. """

    if abs(dhrt) < g_epsilon_switch:
        eps_p = epsilon_p(-dhrt)
        value = dht * dt * b0 * eps_p
        return (value,
                dt * b0 * eps_p,
                -dht * dt * b0 * epsilon_pp(-dhrt),
                dht * dt * eps_p,
                0.0)

    db = b0 - b1
    value = dht * dt / dhrt * (db / dhrt - b1)
    return (value,
            dt / dhrt * (db / dhrt - b1),
            dht * dt / dhrt / dhrt * (b1 - 2.0 * db / dhrt),
            dht * dt / dhrt / dhrt,
            -dht * dt / dhrt * (1.0 + 1.0 / dhrt))

###############################################################################


def time_weighted_kernel(dht, dhrt, b0, b1, dt, s0, s1):
    """ Accrual on default integrating the accrued time exactly. Used by the
    original ISDA formula, whose accrued times carry a half day offset, and
    by the mathematically correct one. """

    if abs(dhrt) < g_epsilon_switch:
        eps = epsilon(-dhrt)
        eps_p = epsilon_p(-dhrt)
        weight = s0 * eps + dt * eps_p
        value = dht * b0 * weight
        return (value,
                b0 * weight,
                -dht * b0 * (s0 * eps_p + dt * epsilon_pp(-dhrt)),
                dht * weight,
                0.0)

    db = b0 - b1
    bracket = s0 * b0 - s1 * b1 + dt / dhrt * db
    value = dht / dhrt * bracket
    return (value,
            bracket / dhrt,
            dht / dhrt / dhrt * (-2.0 * dt / dhrt * db - s0 * b0 + s1 * b1),
            dht / dhrt * (s0 + dt / dhrt),
            dht / dhrt * (-s1 - dt / dhrt))

###############################################################################


def integrate(knots,
              survival_curve,
              discount_curve,
              kernel,
              time_origin: float = 0.0):
    """ Sum the kernel over consecutive knot pairs. Returns the integral and
    its adjoints with respect to h(t)·t and r(t)·t at every knot. The
    accrued times passed to the kernel are measured from time_origin. """

    knots = np.asarray(knots, dtype=float)
    n = len(knots)

    ht = survival_curve.zero_rates_at(knots) * knots
    rt = discount_curve.zero_rates_at(knots) * knots
    b = np.exp(-ht - rt)

    value = 0.0
    ht_bar = np.zeros(n)
    rt_bar = np.zeros(n)
    b_bar = np.zeros(n)

    for j in range(1, n):

        dht = ht[j] - ht[j - 1]
        dhrt = dht + rt[j] - rt[j - 1]
        dt = knots[j] - knots[j - 1]

        v, dht_bar, dhrt_bar, b0_bar, b1_bar = kernel(
            dht, dhrt, b[j - 1], b[j], dt,
            knots[j - 1] - time_origin, knots[j] - time_origin)

        value += v

        ht_bar[j] += dht_bar + dhrt_bar
        ht_bar[j - 1] -= dht_bar + dhrt_bar
        rt_bar[j] += dhrt_bar
        rt_bar[j - 1] -= dhrt_bar
        b_bar[j - 1] += b0_bar
        b_bar[j] += b1_bar

    # b = exp(-ht - rt)
    ht_bar -= b_bar * b
    rt_bar -= b_bar * b

    return IntegralResult(value, knots, ht_bar, rt_bar)

###############################################################################


def node_sensitivities(result: IntegralResult,
                       survival_curve,
                       discount_curve):
    """ Map the knot adjoints of an integral onto the node zero rates of the
    two curves. Returns (survival weights, discount weights). """

    knots = result.knots
    jac_h = survival_curve.zero_rate_jacobian(knots)
    jac_r = discount_curve.zero_rate_jacobian(knots)

    surv_weights = (result.ht_bar * knots) @ jac_h
    disc_weights = (result.rt_bar * knots) @ jac_r

    return surv_weights, disc_weights

###############################################################################
