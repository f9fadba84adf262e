"""
Pricers of the ISDA standard CDS model.
"""

from .isda_cds_pricer import IsdaCdsPricer

__all__ = ['IsdaCdsPricer']
