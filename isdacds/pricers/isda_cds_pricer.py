##############################################################################

##############################################################################

"""
Pricer for single name credit default swaps based on the ISDA standard model.

The protection leg pays (1 - R) on default between the effective start
date and the protection end date. The premium leg pays the running coupon
on each period end the entity survives to and, if the contract says so,
the premium accrued up to the default date. Both legs are integrated
exactly over the knots of the discount and survival curves and rolled
forward to the cash settlement (reference) date.

The accrual on default integral exists in three flavours:
- ORIGINAL_ISDA: ISDA model up to version 1.8.2, with a half day offset
- MARKIT_FIX: the correction suggested by Markit
- CORRECT_MATH: the exact integral

Sign convention: a protection buyer has notional +N and present value
N·(protection leg - risky annuity × coupon); a seller has -N.

The sensitivity of the present value to the zero rates of both curves is
computed by reverse mode differentiation of the same integration loop that
prices the legs.

Example:
    >>> pricer = IsdaCdsPricer(AccrualOnDefaultFormulae.MARKIT_FIX)
    >>> settle_dt = cds.settlement_dt(model.value_dt)
    >>> pv = pricer.present_value(cds, model, settle_dt)
    >>> spread = pricer.par_spread(cds, model, settle_dt)
    >>> sens = pricer.present_value_sensitivity(cds, model, settle_dt)
    >>> sens.to_dataframe()
"""

import logging

import numpy as np

from isdacds.utils.date import Date
from isdacds.utils.day_count import DayCount
from isdacds.utils.error import LibError
from isdacds.utils.global_types import AccrualOnDefaultFormulae, PriceTypes
from isdacds.utils.global_vars import g_isda_omega
from isdacds.market.curves.curve_sensitivity import CurveSensitivity
from isdacds.market.curves.isda_curve import IsdaCurve
from isdacds.market.curves.recovery_rates import ConstantRecoveryRate
from isdacds.trades.credit.cds import CDS
from isdacds.pricers.integration import (integration_points,
                                         truncate_inclusive,
                                         integrate,
                                         node_sensitivities,
                                         protection_kernel,
                                         markit_fix_kernel,
                                         time_weighted_kernel)

logger = logging.getLogger(__name__)

###############################################################################


class _LegValue:
    """ Value of a leg per unit notional with its optional sensitivity. """

    __slots__ = ("value", "sensitivity")

    def __init__(self, value, sensitivity=None):
        self.value = value
        self.sensitivity = sensitivity

###############################################################################


class IsdaCdsPricer:
    """ Prices a CDS with the ISDA standard model given a CreditModel holding
    the discount curve, the survival curve and the recovery rate. """

    DEFAULT = None

    def __init__(self,
                 formula: AccrualOnDefaultFormulae = AccrualOnDefaultFormulae.ORIGINAL_ISDA):

        if isinstance(formula, AccrualOnDefaultFormulae) is False:
            raise LibError("Formula must be an AccrualOnDefaultFormulae")

        self._formula = formula

        if formula == AccrualOnDefaultFormulae.MARKIT_FIX:
            self._aod_kernel = markit_fix_kernel
        else:
            self._aod_kernel = time_weighted_kernel

        if formula == AccrualOnDefaultFormulae.ORIGINAL_ISDA:
            self._omega = g_isda_omega
        else:
            self._omega = 0.0

    @property
    def formula(self):
        return self._formula

###############################################################################
# Public operations
###############################################################################

    def present_value(self,
                      cds: CDS,
                      model,
                      reference_dt: Date,
                      price_type: PriceTypes = PriceTypes.CLEAN):
        """ Present value of the CDS in its currency, signed by direction. """

        price = self.price(cds, model, reference_dt, price_type)
        return cds.signed_notional * price

    def price(self,
              cds: CDS,
              model,
              reference_dt: Date,
              price_type: PriceTypes = PriceTypes.CLEAN):
        """ Value of a protection buyer per unit notional: protection leg
        less the risky annuity times the running coupon. """

        market = self._market(cds, model, reference_dt, price_type)
        if self._is_expired(cds, model):
            return 0.0

        disc, surv, recovery = market
        step_in_dt, eff_start_dt = self._dates(cds, model)

        protection = self._protection_full(cds, disc, surv, reference_dt,
                                           eff_start_dt, False).value
        annuity = self._risky_annuity(cds, disc, surv, reference_dt,
                                      step_in_dt, eff_start_dt, price_type,
                                      False).value

        return (1.0 - recovery) * protection - annuity * cds.running_coupon

    def par_spread(self,
                   cds: CDS,
                   model,
                   reference_dt: Date):
        """ Running coupon that makes the clean price zero. """

        disc, surv, recovery = self._market(cds, model, reference_dt,
                                            PriceTypes.CLEAN)

        if self._is_expired(cds, model):
            raise LibError("CDS already expired: protection ended on "
                           + str(cds.protection_end_dt))

        step_in_dt, eff_start_dt = self._dates(cds, model)

        protection = self._protection_full(cds, disc, surv, reference_dt,
                                           eff_start_dt, False).value
        annuity = self._risky_annuity(cds, disc, surv, reference_dt,
                                      step_in_dt, eff_start_dt,
                                      PriceTypes.CLEAN, False).value

        if annuity == 0.0:
            raise LibError("Risky annuity is zero so the par spread is "
                           "undefined")

        return (1.0 - recovery) * protection / annuity

    def protection_leg(self,
                       cds: CDS,
                       model,
                       reference_dt: Date):
        """ Value of the protection leg per unit notional. """

        disc, surv, recovery = self._market(cds, model, reference_dt,
                                            PriceTypes.CLEAN)
        if self._is_expired(cds, model):
            return 0.0

        _, eff_start_dt = self._dates(cds, model)
        protection = self._protection_full(cds, disc, surv, reference_dt,
                                           eff_start_dt, False).value
        return (1.0 - recovery) * protection

    def risky_annuity(self,
                      cds: CDS,
                      model,
                      reference_dt: Date,
                      price_type: PriceTypes = PriceTypes.CLEAN):
        """ Value of the premium leg per unit notional and unit coupon. """

        disc, surv, _ = self._market(cds, model, reference_dt, price_type)
        if self._is_expired(cds, model):
            return 0.0

        step_in_dt, eff_start_dt = self._dates(cds, model)
        return self._risky_annuity(cds, disc, surv, reference_dt, step_in_dt,
                                   eff_start_dt, price_type, False).value

    def rpv01(self,
              cds: CDS,
              model,
              reference_dt: Date,
              price_type: PriceTypes = PriceTypes.CLEAN):
        """ Risky annuity scaled by the signed notional. """

        annuity = self.risky_annuity(cds, model, reference_dt, price_type)
        return cds.signed_notional * annuity

    def recovery01(self,
                   cds: CDS,
                   model,
                   reference_dt: Date):
        """ Change in present value for a unit increase of the recovery
        rate. """

        disc, surv, _ = self._market(cds, model, reference_dt,
                                     PriceTypes.CLEAN)
        if self._is_expired(cds, model):
            return 0.0

        _, eff_start_dt = self._dates(cds, model)
        protection = self._protection_full(cds, disc, surv, reference_dt,
                                           eff_start_dt, False).value
        return -cds.signed_notional * protection

    def present_value_sensitivity(self,
                                  cds: CDS,
                                  model,
                                  reference_dt: Date,
                                  price_type: PriceTypes = PriceTypes.CLEAN):
        """ Derivative of the present value with respect to the node zero
        rates of the discount and survival curves. """

        disc, surv, recovery = self._market(cds, model, reference_dt,
                                            price_type)
        if self._is_expired(cds, model):
            return CurveSensitivity.none()

        if disc.name == surv.name:
            raise LibError("Discount and survival curves share the name '"
                           + disc.name + "' so their sensitivities would "
                           "be mixed")

        step_in_dt, eff_start_dt = self._dates(cds, model)
        signed_notional = cds.signed_notional

        protection = self._protection_full(cds, disc, surv, reference_dt,
                                           eff_start_dt, True)
        annuity = self._risky_annuity(cds, disc, surv, reference_dt,
                                      step_in_dt, eff_start_dt, price_type,
                                      True)

        protection_sens = protection.sensitivity.multiplied_by(
            (1.0 - recovery) * signed_notional)
        annuity_sens = annuity.sensitivity.multiplied_by(
            -cds.running_coupon * signed_notional)

        return protection_sens.combined_with(annuity_sens)

###############################################################################
# Inputs
###############################################################################

    def _market(self, cds, model, reference_dt, price_type):
        """ Validate the inputs and fetch the curves and recovery rate. """

        if cds is None or model is None or reference_dt is None:
            raise LibError("CDS, model and reference date must all be given")

        if isinstance(cds, CDS) is False:
            raise LibError("Expected a CDS and not " + str(type(cds)))

        if isinstance(reference_dt, Date) is False:
            raise LibError("Reference date must be a Date")

        if isinstance(price_type, PriceTypes) is False:
            raise LibError("Price type must be a PriceTypes")

        disc = model.discount_curve(cds.currency)
        surv = model.survival_curve(cds.legal_entity, cds.currency)
        recovery_rates = model.recovery_rates(cds.legal_entity)

        if isinstance(disc, IsdaCurve) is False:
            raise LibError("Discount curve must be an ISDA zero rate curve "
                           "and not " + type(disc).__name__)

        if isinstance(surv, IsdaCurve) is False:
            raise LibError("Survival curve must be an ISDA zero rate curve "
                           "and not " + type(surv).__name__)

        if isinstance(recovery_rates, ConstantRecoveryRate) is False:
            raise LibError("Recovery rate must be a ConstantRecoveryRate "
                           "and not " + type(recovery_rates).__name__)

        if disc.dc_type != surv.dc_type:
            raise LibError("Discount curve day count " + str(disc.dc_type)
                           + " differs from survival curve day count "
                           + str(surv.dc_type))

        recovery = recovery_rates.recovery_rate(cds.protection_end_dt)

        return disc, surv, recovery

    def _is_expired(self, cds, model):

        if cds.protection_end_dt > model.value_dt:
            return False

        logger.debug("CDS with protection end %s expired at %s",
                     cds.protection_end_dt, model.value_dt)
        return True

    def _dates(self, cds, model):
        step_in_dt = cds.step_in_dt(model.value_dt)
        return step_in_dt, cds.effective_start_dt(step_in_dt)

###############################################################################
# Legs
###############################################################################

    def _roll_to_reference(self, value, raw_surv, raw_disc, disc, surv,
                           reference_dt, with_sensitivity):
        """ Divide a leg value by the discount factor at the reference date
        and build its sensitivity from the raw node weights. """

        t_ref = disc.relative_year_fraction(reference_dt)
        df_ref = disc.discount_factor_at(t_ref)
        rolled = value / df_ref

        if with_sensitivity is False:
            return _LegValue(rolled)

        ref_weights = disc.zero_rate_jacobian([t_ref])[0]
        disc_weights = raw_disc / df_ref + rolled * t_ref * ref_weights
        surv_weights = raw_surv / df_ref

        sensitivity = CurveSensitivity.of(surv.name, surv.times, surv_weights) \
            + CurveSensitivity.of(disc.name, disc.times, disc_weights)

        return _LegValue(rolled, sensitivity)

    def _protection_full(self, cds, disc, surv, reference_dt, eff_start_dt,
                         with_sensitivity):
        """ Protection leg for a zero recovery rate. Zero when protection
        starts on or after its end. """

        t_start = disc.relative_year_fraction(eff_start_dt)
        t_end = disc.relative_year_fraction(cds.protection_end_dt)

        if t_start >= t_end:
            logger.debug("No protection left between %s and %s",
                         eff_start_dt, cds.protection_end_dt)
            return self._roll_to_reference(0.0, np.zeros(len(surv.times)),
                                           np.zeros(len(disc.times)),
                                           disc, surv, reference_dt,
                                           with_sensitivity)

        knots = integration_points(t_start, t_end,
                                   disc.parameter_keys(),
                                   surv.parameter_keys())

        logger.debug("Protection leg integrated over %d knots", len(knots))

        result = integrate(knots, surv, disc, protection_kernel)

        raw_surv = raw_disc = None
        if with_sensitivity:
            raw_surv, raw_disc = node_sensitivities(result, surv, disc)

        return self._roll_to_reference(result.value, raw_surv, raw_disc,
                                       disc, surv, reference_dt,
                                       with_sensitivity)

    def _risky_annuity(self, cds, disc, surv, reference_dt, step_in_dt,
                       eff_start_dt, price_type, with_sensitivity):
        """ Premium leg per unit coupon, including the accrual on default
        when the contract pays it. """

        pv = 0.0
        raw_surv = np.zeros(len(surv.times))
        raw_disc = np.zeros(len(disc.times))

        periods = cds.periodic_payments()

        for period in periods:

            if step_in_dt >= period.end_dt:
                continue

            t_e = surv.relative_year_fraction(period.effective_end_dt)
            t_p = disc.relative_year_fraction(period.payment_dt)
            q = surv.survival_probability_at(t_e)
            p = disc.discount_factor_at(t_p)
            amount = period.year_frac * p * q
            pv += amount

            if with_sensitivity:
                raw_surv -= amount * t_e * surv.zero_rate_jacobian([t_e])[0]
                raw_disc -= amount * t_p * disc.zero_rate_jacobian([t_p])[0]

        start_dt = eff_start_dt if len(periods) == 1 \
            else cds.accrual_start_dt
        t_start = disc.relative_year_fraction(start_dt)
        t_end = disc.relative_year_fraction(cds.protection_end_dt)

        if cds.pay_accrued_on_default and t_start < t_end:

            schedule = integration_points(t_start, t_end,
                                          disc.parameter_keys(),
                                          surv.parameter_keys())

            curve_day_count = DayCount(disc.dc_type)

            for period in periods:

                value = self._accrual_on_default(period, eff_start_dt,
                                                 schedule, disc, surv,
                                                 with_sensitivity)
                if value is None:
                    continue

                scale = period.year_frac / \
                    curve_day_count.year_frac(period.start_dt,
                                              period.end_dt)[0]

                pv += value[0] * scale

                if with_sensitivity:
                    raw_surv += value[1] * scale
                    raw_disc += value[2] * scale

        rolled = self._roll_to_reference(pv, raw_surv, raw_disc, disc, surv,
                                         reference_dt, with_sensitivity)

        if price_type.is_clean_price():
            rolled.value -= cds.accrued_year_fraction(step_in_dt)

        return rolled

    def _accrual_on_default(self, period, eff_start_dt, schedule, disc, surv,
                            with_sensitivity):
        """ Premium accrued to the default time within one period. Returns
        None when the period has no protection left. """

        start_dt = eff_start_dt if period.effective_start_dt < eff_start_dt \
            else period.effective_start_dt

        if start_dt >= period.effective_end_dt:
            logger.debug("Skipping accrual on default for period ending %s",
                         period.end_dt)
            return None

        knots = truncate_inclusive(
            disc.relative_year_fraction(start_dt),
            disc.relative_year_fraction(period.effective_end_dt),
            schedule)

        period_start = disc.relative_year_fraction(period.effective_start_dt)

        result = integrate(knots, surv, disc, self._aod_kernel,
                           period_start - self._omega)

        if with_sensitivity is False:
            return result.value, None, None

        surv_weights, disc_weights = node_sensitivities(result, surv, disc)
        return result.value, surv_weights, disc_weights

###############################################################################


IsdaCdsPricer.DEFAULT = IsdaCdsPricer()

###############################################################################
