"""
Credit instruments module for isdacds.

This module contains the single name credit default swap contract and its
accrual periods.
"""

from .cds import CDS, CreditCouponPeriod

__all__ = ['CDS', 'CreditCouponPeriod']
