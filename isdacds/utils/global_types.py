"""
Global type enumerations for contracts, pricing choices and requests.

Provides enumeration types used throughout the isdacds library for:
- Protection direction (BUY/SELL)
- Clean or dirty price conventions
- The accrual-on-default formula of the ISDA model
- Instrument types
- Request types for calculations (VALUE, DELTA, PAR_SPREAD, ...)

Protection direction follows the "buy protection = negative carry"
convention: a protection buyer pays the running coupon, so its notional is
normalised to +N and its present value is protection minus premium.

Accrual-on-default formulas:
- ORIGINAL_ISDA: formula of the ISDA model up to version 1.8.2, which
  includes a half-day offset in the accrued time
- MARKIT_FIX: the fix proposed by Markit as a comment in version 1.8.2
- CORRECT_MATH: the mathematically correct integral

Example:
    >>> cds = CDS(
    ...     accrual_start_dt=Date(20, 3, 2024),
    ...     maturity_dt_or_tenor="5Y",
    ...     running_coupon=0.01,
    ...     protection_type=ProtectionTypes.BUY
    ... )
    >>>
    >>> pricer = IsdaCdsPricer(AccrualOnDefaultFormulae.MARKIT_FIX)
    >>> pv = pricer.present_value(cds, model, settle_dt, PriceTypes.CLEAN)
    >>>
    >>> results = cds.position(model).compute([RequestTypes.VALUE,
    ...                                        RequestTypes.DELTA])
"""

from enum import Enum


class ProtectionTypes(Enum):
    BUY = 1
    SELL = 2

    def normalize(self, amount: float):
        """ Sign the amount by the direction: positive when buying. """
        if self == ProtectionTypes.BUY:
            return abs(amount)
        return -abs(amount)

class PriceTypes(Enum):
    CLEAN = 1
    DIRTY = 2

    def is_clean_price(self):
        return self == PriceTypes.CLEAN

class AccrualOnDefaultFormulae(Enum):
    ORIGINAL_ISDA = 1
    MARKIT_FIX = 2
    CORRECT_MATH = 3

class InstrumentTypes(Enum):
    CDS = 1

class RequestTypes(Enum):
    VALUE = 1
    DELTA = 2
    PAR_SPREAD = 3
    RPV01 = 4
    RECOVERY01 = 5
