##############################################################################

##############################################################################

"""
Generation of coupon accrual schedules.

A Schedule is a list of dates starting at the effective date and ending at
the termination date with the intermediate dates spaced according to the
frequency. BACKWARD generation (the CDS market standard) rolls back from the
termination date so any stub is at the front; FORWARD generation rolls
forward so any stub is at the back. Stubs are always short.

The effective date is kept as given. Intermediate dates are adjusted with
the business day convention and the termination date is adjusted only when
adjust_termination_dt is True; a CDS accrues to its unadjusted maturity.

Example:
    >>> schedule = Schedule(Date(20, 3, 2024), Date(20, 3, 2025),
    ...                     FrequencyTypes.QUARTERLY)
    >>> schedule.schedule_dts()
    [20-MAR-2024, 20-JUN-2024, 20-SEP-2024, 20-DEC-2024, 20-MAR-2025]
"""

from isdacds.utils.date import Date
from isdacds.utils.error import LibError
from isdacds.utils.frequency import FrequencyTypes, months_in_period
from isdacds.utils.calendar import Calendar, CalendarTypes
from isdacds.utils.calendar import BusDayAdjustTypes, DateGenRuleTypes
from isdacds.utils.helpers import check_argument_types, label_to_string

###############################################################################


class Schedule:
    """ A schedule is a set of dates generated according to ISDA standard
    rules which starts on the next date after the effective date and runs up
    to a termination date. Dates are adjusted to a provided calendar. """

    def __init__(self,
                 effective_dt: Date,
                 termination_dt: Date,
                 freq_type: FrequencyTypes = FrequencyTypes.QUARTERLY,
                 cal_type: CalendarTypes = CalendarTypes.WEEKEND,
                 bd_type: BusDayAdjustTypes = BusDayAdjustTypes.FOLLOWING,
                 dg_type: DateGenRuleTypes = DateGenRuleTypes.BACKWARD,
                 adjust_termination_dt: bool = True,
                 end_of_month: bool = False):
        """ Create Schedule object which calculates a sequence of dates
        following the ISDA convention for fixed income products. """

        check_argument_types(self.__init__, locals())

        if effective_dt >= termination_dt:
            raise LibError("Effective date must be before termination date.")

        self._effective_dt = effective_dt
        self._termination_dt = termination_dt
        self._freq_type = freq_type
        self._cal_type = cal_type
        self._bd_type = bd_type
        self._dg_type = dg_type
        self._adjust_termination_dt = adjust_termination_dt
        self._end_of_month = end_of_month

        self._unadjusted_dts = []
        self._adjusted_dts = []

        self._generate()

    ###########################################################################

    def schedule_dts(self):
        """ Returns a list of the adjusted schedule dates. """
        return self._adjusted_dts

    def unadjusted_dts(self):
        """ Returns a list of the schedule dates before adjustment. """
        return self._unadjusted_dts

    ###########################################################################

    def _roll(self, anchor_dt: Date, num_months: int):

        dt = anchor_dt.add_months(num_months)
        if self._end_of_month is True and anchor_dt.is_eom():
            dt = dt.eom()
        return dt

    ###########################################################################

    def _generate(self):
        """ Generate the schedule of dates. """

        num_months = months_in_period(self._freq_type)

        unadjusted_dts = []

        if self._dg_type == DateGenRuleTypes.BACKWARD:

            unadjusted_dts.append(self._termination_dt)

            k = 1
            next_dt = self._roll(self._termination_dt, -k * num_months)
            while next_dt > self._effective_dt:
                unadjusted_dts.append(next_dt)
                k += 1
                next_dt = self._roll(self._termination_dt, -k * num_months)

            unadjusted_dts.append(self._effective_dt)
            unadjusted_dts.reverse()

        elif self._dg_type == DateGenRuleTypes.FORWARD:

            unadjusted_dts.append(self._effective_dt)

            k = 1
            next_dt = self._roll(self._effective_dt, k * num_months)
            while next_dt < self._termination_dt:
                unadjusted_dts.append(next_dt)
                k += 1
                next_dt = self._roll(self._effective_dt, k * num_months)

            unadjusted_dts.append(self._termination_dt)

        else:
            raise LibError("Unknown date generation rule " + str(self._dg_type))

        calendar = Calendar(self._cal_type)

        adjusted_dts = [unadjusted_dts[0]]
        for dt in unadjusted_dts[1:-1]:
            adjusted_dts.append(calendar.adjust(dt, self._bd_type))

        if self._adjust_termination_dt is True:
            adjusted_dts.append(calendar.adjust(unadjusted_dts[-1],
                                                self._bd_type))
        else:
            adjusted_dts.append(unadjusted_dts[-1])

        self._unadjusted_dts = unadjusted_dts
        self._adjusted_dts = adjusted_dts

    ###########################################################################

    def __repr__(self):
        """ Print out the details of the schedule and the actual dates. This
        can be used for providing transparency on schedule calculations. """

        s = label_to_string("OBJECT TYPE", type(self).__name__)
        s += label_to_string("EFFECTIVE DATE", self._effective_dt)
        s += label_to_string("END DATE", self._termination_dt)
        s += label_to_string("FREQUENCY", self._freq_type)
        s += label_to_string("CALENDAR", self._cal_type)
        s += label_to_string("BUSDAYRULE", self._bd_type)
        s += label_to_string("DATEGENRULE", self._dg_type)
        s += label_to_string("ADJUST TERM DATE", self._adjust_termination_dt)
        s += label_to_string("END OF MONTH", self._end_of_month, "")

        if len(self._adjusted_dts) > 0:
            s += "\n\n"
            s += label_to_string("EFF", self._adjusted_dts[0], "")

        for dt in self._adjusted_dts[1:-1]:
            s += "\n" + label_to_string("FLW", dt, "")

        if len(self._adjusted_dts) > 1:
            s += "\n" + label_to_string("MAT", self._adjusted_dts[-1], "")

        return s

###############################################################################
