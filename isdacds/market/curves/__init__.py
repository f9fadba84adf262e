"""
Market curves package for the ISDA standard model.

Provides:
- ISDA zero rate curves in the discount and survival roles
- Constant recovery rates
- Node sensitivity accumulator
"""

from .isda_curve import IsdaCurve, IsdaDiscountCurve, IsdaSurvivalCurve
from .recovery_rates import ConstantRecoveryRate
from .curve_sensitivity import CurveSensitivity

__all__ = ['IsdaCurve', 'IsdaDiscountCurve', 'IsdaSurvivalCurve',
           'ConstantRecoveryRate', 'CurveSensitivity']
