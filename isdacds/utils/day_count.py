##############################################################################

##############################################################################

"""
Day count conventions converting a pair of dates into a year fraction.

The ISDA standard model measures curve time with ACT/365F and accrues the
CDS premium with ACT/360, so both must be available; ACT/ACT ISDA and
30E/360 complete the set used by bespoke contracts.

year_frac returns a tuple (year fraction, day count numerator,
denominator), matching the convention of the rest of the library. Reversed
dates give the negative year fraction.

Example:
    >>> dc = DayCount(DayCountTypes.ACT_360)
    >>> yf, num, den = dc.year_frac(Date(20, 3, 2024), Date(20, 6, 2024))
    >>> num, den
    (92, 360)
"""

from enum import Enum

from isdacds.utils.date import Date, is_leap_year, datediff
from isdacds.utils.error import LibError

###############################################################################


class DayCountTypes(Enum):
    ACT_365F = 1
    ACT_360 = 2
    ACT_ACT_ISDA = 3
    THIRTY_E_360 = 4

###############################################################################


class DayCount:
    """ Calculate the fractional day count between two dates according to a
    specified day count convention. """

    def __init__(self,
                 dcc_type: DayCountTypes):
        """ Create Day Count convention by passing in the Day Count Type. """

        if isinstance(dcc_type, DayCountTypes) is False:
            raise LibError("Need to pass a DayCountTypes")

        self._type = dcc_type

    ###########################################################################

    def year_frac(self,
                  dt1: Date,
                  dt2: Date):
        """ This method performs the calculation of the day count fraction
        between dt1 and dt2 and returns the year fraction, the numerator and
        the denominator. If dt2 is before dt1 the fraction is negative. """

        if dt2 < dt1:
            acc_factor, num, den = self.year_frac(dt2, dt1)
            return -acc_factor, -num, den

        if self._type == DayCountTypes.ACT_365F:

            num = datediff(dt1, dt2)
            den = 365
            return num / den, num, den

        elif self._type == DayCountTypes.ACT_360:

            num = datediff(dt1, dt2)
            den = 360
            return num / den, num, den

        elif self._type == DayCountTypes.ACT_ACT_ISDA:

            y1 = dt1.y()
            y2 = dt2.y()
            num = datediff(dt1, dt2)

            if y1 == y2:
                den = 366 if is_leap_year(y1) else 365
                return num / den, num, den

            den1 = 366 if is_leap_year(y1) else 365
            den2 = 366 if is_leap_year(y2) else 365
            days_year1 = datediff(dt1, Date(1, 1, y1 + 1))
            days_year2 = datediff(Date(1, 1, y2), dt2)
            acc_factor = days_year1 / den1 + days_year2 / den2
            acc_factor += y2 - y1 - 1
            return acc_factor, num, den1

        elif self._type == DayCountTypes.THIRTY_E_360:

            d1 = min(dt1.d(), 30)
            d2 = min(dt2.d(), 30)
            num = 360 * (dt2.y() - dt1.y()) + 30 * (dt2.m() - dt1.m()) + (d2 - d1)
            den = 360
            return num / den, num, den

        raise LibError(str(self._type) + " is not one of DayCountTypes")

    ###########################################################################

    def __repr__(self):
        return self._type.name

###############################################################################
