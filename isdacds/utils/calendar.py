##############################################################################

##############################################################################

"""
Business day calendars and adjustment rules.

Only weekend calendars are supported: regional holiday tables are market
data and belong to the caller. Adjustment rules follow the usual
definitions (FOLLOWING, MODIFIED_FOLLOWING, PRECEDING) and schedule
generation rules are BACKWARD from the termination date, which is the CDS
standard, or FORWARD from the effective date.

Example:
    >>> cal = Calendar(CalendarTypes.WEEKEND)
    >>> cal.adjust(Date(20, 9, 2025), BusDayAdjustTypes.FOLLOWING)
    22-SEP-2025
    >>> cal.add_business_days(Date(19, 9, 2025), 3)
    24-SEP-2025
"""

from enum import Enum

from isdacds.utils.date import Date
from isdacds.utils.error import LibError

###############################################################################


class CalendarTypes(Enum):
    NONE = 1
    WEEKEND = 2


class BusDayAdjustTypes(Enum):
    NONE = 1
    FOLLOWING = 2
    MODIFIED_FOLLOWING = 3
    PRECEDING = 4


class DateGenRuleTypes(Enum):
    FORWARD = 1
    BACKWARD = 2

###############################################################################


class Calendar:
    """ Class to manage designation of payment dates as holidays according to
    a calendar type. """

    def __init__(self,
                 cal_type: CalendarTypes):
        """ Create a calendar based on a specified calendar type. """

        if cal_type not in CalendarTypes:
            raise LibError("Need to pass a CalendarTypes")

        self._cal_type = cal_type

    ###########################################################################

    def is_business_day(self,
                        dt: Date):
        """ Determines if a date is a business day according to the calendar.
        NONE treats every day as a business day. """

        if self._cal_type == CalendarTypes.NONE:
            return True

        return dt.is_weekend() is False

    ###########################################################################

    def adjust(self,
               dt: Date,
               bd_type: BusDayAdjustTypes):
        """ Adjust a payment date if it falls on a holiday according to the
        specified business day convention. """

        if bd_type == BusDayAdjustTypes.NONE:
            return dt

        elif bd_type == BusDayAdjustTypes.FOLLOWING:

            while self.is_business_day(dt) is False:
                dt = dt.add_days(1)

            return dt

        elif bd_type == BusDayAdjustTypes.MODIFIED_FOLLOWING:

            new_dt = dt
            while self.is_business_day(new_dt) is False:
                new_dt = new_dt.add_days(1)

            # if the new date is in the next month go back
            if new_dt.m() != dt.m():
                new_dt = dt
                while self.is_business_day(new_dt) is False:
                    new_dt = new_dt.add_days(-1)

            return new_dt

        elif bd_type == BusDayAdjustTypes.PRECEDING:

            while self.is_business_day(dt) is False:
                dt = dt.add_days(-1)

            return dt

        raise LibError("Unknown adjustment convention" + str(bd_type))

    ###########################################################################

    def add_business_days(self,
                          dt: Date,
                          num_days: int):
        """ Returns a new date that is num_days business days after Date. """

        if isinstance(num_days, int) is False:
            raise LibError("Num days must be an integer")

        step = 1 if num_days >= 0 else -1
        num_days_left = abs(num_days)

        while num_days_left > 0:
            dt = dt.add_days(step)
            if self.is_business_day(dt):
                num_days_left -= 1

        return dt

    ###########################################################################

    def __repr__(self):
        return self._cal_type.name

###############################################################################
