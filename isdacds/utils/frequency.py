"""
Payment frequency types for CDS premium legs.

Provides frequency enumeration and conversion utilities for coupon
payment frequencies. Standard CDS contracts pay quarterly; the other
frequencies are used for bespoke contracts and schedule tests.

Frequency types:
- ANNUAL: Once per year (frequency = 1)
- SEMI_ANNUAL: Twice per year (frequency = 2)
- QUARTERLY: Four times per year (frequency = 4)
- MONTHLY: Twelve times per year (frequency = 12)

Example:
    >>> freq = annual_frequency(FrequencyTypes.QUARTERLY)
    >>> print(freq)  # 4.0
    >>> months_in_period(FrequencyTypes.QUARTERLY)  # 3
"""

from isdacds.utils.error import LibError

from enum import Enum


class FrequencyTypes(Enum):
    ANNUAL = 1
    SEMI_ANNUAL = 2
    QUARTERLY = 4
    MONTHLY = 12


def annual_frequency(freq_type: FrequencyTypes):
    """ This is a function that takes in a Frequency Type and returns a
    float value for the number of times a year a payment occurs."""
    if isinstance(freq_type, FrequencyTypes) is False:
        raise LibError(f"Unknown frequency type {freq_type}")

    return float(freq_type.value)


def months_in_period(freq_type: FrequencyTypes):
    """ Number of calendar months spanned by one regular coupon period. """
    return 12 // int(annual_frequency(freq_type))
