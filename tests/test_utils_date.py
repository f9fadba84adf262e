"""
Test suite for isdacds.utils.date module
Tests Date class functionality including arithmetic, formatting, and tenor operations
"""
import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import datetime

import pytest
from isdacds.utils.date import Date, is_leap_year, days_in_month
from isdacds.utils.error import LibError


class TestDate:
    """Test cases for Date class"""

    def test_date_creation(self):
        d1 = Date(15, 6, 2024)
        assert d1.d() == 15
        assert d1.m() == 6
        assert d1.y() == 2024

    def test_date_string_representation(self):
        assert str(Date(15, 5, 2024)) == "15-MAY-2024"
        assert repr(Date(1, 1, 2024)) == "01-JAN-2024"

    def test_date_comparison(self):
        d1 = Date(1, 6, 2024)
        d2 = Date(2, 6, 2024)
        d3 = Date(1, 6, 2024)

        assert d1 < d2
        assert d2 > d1
        assert d1 == d3
        assert d1 <= d3
        assert d1 >= d3
        assert d1 != d2

    def test_dates_are_hashable(self):
        dts = {Date(1, 6, 2024), Date(1, 6, 2024), Date(2, 6, 2024)}
        assert len(dts) == 2

    def test_date_arithmetic(self):
        d = Date(15, 6, 2024)

        d_plus_10 = d.add_days(10)
        assert d_plus_10 == Date(25, 6, 2024)

        d_minus_20 = d.add_days(-20)
        assert d_minus_20 == Date(26, 5, 2024)

        assert d_plus_10 - d == 10
        assert d - d_plus_10 == -10

    def test_weekday(self):
        assert Date(15, 5, 2024).weekday() == Date.WED
        assert Date(20, 4, 2024).weekday() == Date.SAT
        assert Date(20, 4, 2024).is_weekend()
        assert Date(22, 4, 2024).is_weekend() is False

    def test_add_months(self):
        d = Date(15, 6, 2024)

        assert d.add_months(1) == Date(15, 7, 2024)
        assert d.add_months(12) == Date(15, 6, 2025)
        assert d.add_months(-6) == Date(15, 12, 2023)

    def test_add_months_clamps_to_month_end(self):
        assert Date(31, 1, 2024).add_months(1) == Date(29, 2, 2024)
        assert Date(31, 1, 2023).add_months(1) == Date(28, 2, 2023)
        assert Date(31, 3, 2024).add_months(-1) == Date(29, 2, 2024)

    def test_eom(self):
        assert Date(10, 2, 2024).eom() == Date(29, 2, 2024)
        assert Date(30, 4, 2024).is_eom()
        assert Date(30, 5, 2024).is_eom() is False

    def test_add_weekdays(self):
        # Wednesday plus three weekdays is the following Monday
        assert Date(15, 5, 2024).add_weekdays(3) == Date(20, 5, 2024)
        assert Date(20, 5, 2024).add_weekdays(-1) == Date(17, 5, 2024)

    def test_add_years(self):
        assert Date(29, 2, 2024).add_years(1) == Date(28, 2, 2025)
        assert Date(15, 5, 2024).add_years(5) == Date(15, 5, 2029)

    def test_datetime_conversion(self):
        d = Date(15, 5, 2024)
        assert d.datetime() == datetime.date(2024, 5, 15)
        assert Date.from_date(datetime.date(2024, 5, 15)) == d
        assert Date.from_string("2024-05-15", "%Y-%m-%d") == d


class TestTenors:
    """Tenor strings used for curve nodes and CDS maturities"""

    @pytest.mark.parametrize("tenor,expected", [
        ("1D", Date(16, 5, 2024)),
        ("2W", Date(29, 5, 2024)),
        ("3M", Date(15, 8, 2024)),
        ("6m", Date(15, 11, 2024)),
        ("5Y", Date(15, 5, 2029)),
        ("120M", Date(15, 5, 2034)),
        ("ON", Date(16, 5, 2024)),
        ("TN", Date(17, 5, 2024)),
    ])
    def test_add_tenor(self, tenor, expected):
        assert Date(15, 5, 2024).add_tenor(tenor) == expected

    def test_unknown_tenor_raises(self):
        with pytest.raises(LibError):
            Date(15, 5, 2024).add_tenor("5Q")

        with pytest.raises(LibError):
            Date(15, 5, 2024).add_tenor("XY")

    def test_tenor_must_be_string(self):
        with pytest.raises(LibError):
            Date(15, 5, 2024).add_tenor(5)


class TestDateValidation:
    """Invalid dates raise LibError"""

    @pytest.mark.parametrize("d,m,y", [
        (32, 1, 2023),
        (0, 1, 2023),
        (29, 2, 2023),
        (15, 13, 2023),
        (15, 0, 2023),
        (1, 1, 1800),
    ])
    def test_invalid_date(self, d, m, y):
        with pytest.raises(LibError):
            Date(d, m, y)

    def test_leap_years(self):
        assert is_leap_year(2024)
        assert is_leap_year(2000)
        assert is_leap_year(1900) is False
        assert is_leap_year(2023) is False
        assert days_in_month(2, 2024) == 29
        assert days_in_month(2, 2023) == 28
