##############################################################################

##############################################################################

"""
Calendar date type used for contract schedules and curve valuation dates.

The Date class is a light immutable value type keyed by day, month and
year. It supports the date arithmetic needed to build CDS schedules:

- add_days, add_weekdays, add_months, add_years, add_tenor ("3M", "5Y")
- subtraction of two dates giving the number of calendar days
- ordering and hashing so dates can be compared and used as keys

Example:
    >>> value_dt = Date(15, 6, 2023)
    >>> maturity_dt = value_dt.add_tenor("5Y")
    >>> maturity_dt - value_dt
    1827
"""

import datetime

from isdacds.utils.error import LibError

###############################################################################

short_month_names = ['JAN', 'FEB', 'MAR', 'APR', 'MAY', 'JUN',
                     'JUL', 'AUG', 'SEP', 'OCT', 'NOV', 'DEC']

###############################################################################


def is_leap_year(y: int):
    """ Test whether year y is a leap year - if so return True, else False """
    leap_year = ((y % 4 == 0) and (y % 100 != 0) or (y % 400 == 0))
    return leap_year


def days_in_month(m: int, y: int):
    """ Number of days in month m of year y. """
    if m == 2:
        return 29 if is_leap_year(y) else 28
    if m in (4, 6, 9, 11):
        return 30
    return 31


def datediff(d1, d2):
    """ Calculate the number of days between two dates. """
    return d2._ordinal - d1._ordinal

###############################################################################


class Date():
    """ A date class to manage dates that is simple to use and includes a
    number of useful date functions used frequently in finance. """

    MON = 0
    TUE = 1
    WED = 2
    THU = 3
    FRI = 4
    SAT = 5
    SUN = 6

    def __init__(self,
                 d: int,
                 m: int,
                 y: int):
        """ Create a date given a day of month, month and year. The arguments
        must be in the order day (of month), month number and then the year.
        The year must be a 4-digit number greater than or equal to 1900. """

        if y < 1900:
            raise LibError("Year cannot be before 1900")

        if m < 1 or m > 12:
            raise LibError("Month " + str(m) + " is not valid.")

        if d < 1 or d > days_in_month(m, y):
            raise LibError("Day " + str(d) + " is not valid for month "
                           + str(m) + " of " + str(y))

        self._d = d
        self._m = m
        self._y = y
        self._ordinal = datetime.date(y, m, d).toordinal()
        self._weekday = datetime.date(y, m, d).weekday()

    ###########################################################################

    @classmethod
    def from_date(cls, date: datetime.date):
        """ Create a Date from a python datetime.date """
        return cls(date.day, date.month, date.year)

    @classmethod
    def from_string(cls, date_string: str, format_string: str):
        """ Create a Date from a date and format string. """
        py_dt = datetime.datetime.strptime(date_string, format_string)
        return cls(py_dt.day, py_dt.month, py_dt.year)

    @classmethod
    def _from_ordinal(cls, ordinal: int):
        return cls.from_date(datetime.date.fromordinal(ordinal))

    ###########################################################################

    def d(self):
        return self._d

    def m(self):
        return self._m

    def y(self):
        return self._y

    def weekday(self):
        return self._weekday

    def datetime(self):
        """ Returns a python datetime.date of this date. """
        return datetime.date(self._y, self._m, self._d)

    ###########################################################################

    def __eq__(self, other):
        if not isinstance(other, Date):
            return NotImplemented
        return self._ordinal == other._ordinal

    def __lt__(self, other):
        return self._ordinal < other._ordinal

    def __le__(self, other):
        return self._ordinal <= other._ordinal

    def __gt__(self, other):
        return self._ordinal > other._ordinal

    def __ge__(self, other):
        return self._ordinal >= other._ordinal

    def __hash__(self):
        return hash(self._ordinal)

    def __sub__(self, other):
        """ Number of calendar days from other to self. """
        return self._ordinal - other._ordinal

    ###########################################################################

    def is_weekend(self):
        """ Returns True if the date falls on a Saturday or Sunday. """
        return self._weekday == Date.SAT or self._weekday == Date.SUN

    def is_eom(self):
        """ Returns True if this date falls on a month end. """
        return self._d == days_in_month(self._m, self._y)

    def eom(self):
        """ Returns the last date of the month of this date. """
        return Date(days_in_month(self._m, self._y), self._m, self._y)

    ###########################################################################

    def add_days(self,
                 num_days: int = 1):
        """ Returns a new date that is num_days after the Date. """
        return Date._from_ordinal(self._ordinal + num_days)

    def add_weekdays(self,
                     num_days: int):
        """ Returns a new date that is num_days working days after Date. Note
        that only weekends are taken into account. Other Holidays are not. If
        you want to include regional holidays then use add_business_days from
        the Calendar class. """

        step = 1 if num_days >= 0 else -1
        num_days_left = abs(num_days)
        end_dt = self

        while num_days_left > 0:
            end_dt = end_dt.add_days(step)
            if end_dt.is_weekend() is False:
                num_days_left -= 1

        # a zero shift from a weekend rolls forward to the next weekday
        while end_dt.is_weekend():
            end_dt = end_dt.add_days(step)

        return end_dt

    def add_months(self,
                   mm: int):
        """ Returns the date that is mm months after the Date. If the day of
        month does not exist in the target month it is set to month end. """

        m = self._m + mm
        y = self._y

        while m > 12:
            m = m - 12
            y += 1

        while m < 1:
            m = m + 12
            y -= 1

        d = min(self._d, days_in_month(m, y))
        return Date(d, m, y)

    def add_years(self,
                  yy: (int, float)):
        """ Returns the date yy years after the Date. Whole years are added as
        calendar months; fractional years are rounded to the nearest day. """

        if isinstance(yy, int) or float(yy).is_integer():
            return self.add_months(12 * int(yy))

        whole = int(yy)
        dt = self.add_months(12 * whole)
        return dt.add_days(int(round((yy - whole) * 365.0)))

    def add_tenor(self,
                  tenor: str):
        """ Return the date following the Date by a period given by the
        tenor which is a string consisting of a number and a letter, the
        letter being d, w, m, y for day, week, month or year. This is case
        independent. For example 10Y means 10 years while 120m also means 10
        years. """

        if isinstance(tenor, str) is False:
            raise LibError("Tenor must be a string e.g. '5Y'")

        tenor = tenor.upper()

        if tenor == "ON":
            return self.add_days(1)
        elif tenor == "TN":
            return self.add_days(2)

        period_type = tenor[-1]
        try:
            num_periods = int(tenor[:-1])
        except ValueError:
            raise LibError("Unknown tenor " + tenor)

        if period_type == "D":
            return self.add_days(num_periods)
        elif period_type == "W":
            return self.add_days(7 * num_periods)
        elif period_type == "M":
            return self.add_months(num_periods)
        elif period_type == "Y":
            return self.add_months(12 * num_periods)

        raise LibError("Unknown period type in tenor " + tenor)

    ###########################################################################

    def __repr__(self):
        return f"{self._d:02d}-{short_month_names[self._m - 1]}-{self._y}"

###############################################################################
