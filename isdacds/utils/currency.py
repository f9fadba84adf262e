"""
Currency type enumeration for contract and curve denomination.

Every CDS is denominated in one currency; the discount curve used to price
it is looked up by that currency and every Valuation carries it.

Supported currencies:
- USD: US Dollar
- EUR: Euro
- GBP: British Pound Sterling
- CHF: Swiss Franc
- JPY: Japanese Yen
- NONE: No currency specified

Example:
    >>> model.build_discount_curve(CurrencyTypes.USD, tenors, zero_rates)
    >>> cds = CDS(value_dt, "5Y", 0.01, currency=CurrencyTypes.USD)
"""

from enum import Enum

###############################################################################

class CurrencyTypes(Enum):
    USD = 1
    EUR = 2
    GBP = 3
    CHF = 4
    JPY = 5
    NONE = 6

###############################################################################
