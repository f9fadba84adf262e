"""Shared numeric constants used across the isdacds package."""

g_small = 1e-12       #: Small epsilon value for numerical checks

g_epsilon_switch = 1e-5     #: Below this |x| the epsilon functions use their Taylor series
g_epsilon_pp_switch = 1e-2  #: Below this |x| epsilon_pp uses its Taylor series
g_knot_tol = 1.0 / 730.0    #: Integration knots closer than half a day are merged
g_isda_omega = 1.0 / 730.0  #: Half-day offset of the original ISDA accrual formula
g_basis_point = 1e-4        #: One basis point
