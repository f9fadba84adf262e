##############################################################################

##############################################################################

"""
Numerically stable kernels used by the ISDA integrals.

Integrating exp(-(h + r)t) over a knot interval produces ratios such as
(e^x - 1)/x that lose all precision as x approaches zero. The functions
below evaluate them in closed form away from zero and by a third order
Taylor expansion inside |x| < g_epsilon_switch. The closed form of
epsilon_pp cancels down to x^3, so it keeps a longer series out to
|x| < g_epsilon_pp_switch.

- epsilon(x)    = (e^x - 1) / x
- epsilon_p(x)  = d/dx epsilon(x)    = (x e^x - e^x + 1) / x^2
- epsilon_pp(x) = d2/dx2 epsilon(x)  = (x^2 e^x - 2x e^x + 2e^x - 2) / x^3

Example:
    >>> epsilon(0.0)
    1.0
    >>> epsilon_p(0.0)
    0.5
"""

import numpy as np

from isdacds.utils.global_vars import g_epsilon_switch, g_epsilon_pp_switch

###############################################################################


def epsilon(x: float):
    """ (e^x - 1)/x with its limit value 1 at zero. """

    if abs(x) >= g_epsilon_switch:
        return np.expm1(x) / x

    x2 = x * x
    return 1.0 + x / 2.0 + x2 / 6.0 + x2 * x / 24.0

###############################################################################


def epsilon_p(x: float):
    """ First derivative of epsilon, equal to 1/2 at zero. """

    if abs(x) >= g_epsilon_switch:
        e = np.exp(x)
        return (x * e - np.expm1(x)) / x / x

    x2 = x * x
    return 0.5 + x / 3.0 + x2 / 8.0 + x2 * x / 30.0

###############################################################################


def epsilon_pp(x: float):
    """ Second derivative of epsilon, equal to 1/3 at zero. """

    if abs(x) >= g_epsilon_pp_switch:
        x2 = x * x
        e = np.exp(x)
        return (x2 * e - 2.0 * (x * e - np.expm1(x))) / x2 / x

    # sum of x^k / (k! (k + 3))
    x2 = x * x
    x3 = x2 * x
    return 1.0 / 3.0 + x / 4.0 + x2 / 10.0 + x3 / 36.0 \
        + x3 * x / 168.0 + x3 * x2 / 960.0 + x3 * x3 / 6480.0

###############################################################################
