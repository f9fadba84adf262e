"Valuation Engine"

import logging

from isdacds.utils.error import LibError
from isdacds.utils.global_types import (InstrumentTypes,
                                        RequestTypes,
                                        PriceTypes,
                                        AccrualOnDefaultFormulae)
from isdacds.utils.global_vars import g_basis_point
from isdacds.requests.results import Valuation, Delta, Risk, AnalyticsResult
from isdacds.pricers.isda_cds_pricer import IsdaCdsPricer

logger = logging.getLogger(__name__)


class Engine:
    def __init__(self,
                 model,
                 formula: AccrualOnDefaultFormulae = AccrualOnDefaultFormulae.ORIGINAL_ISDA,
                 price_type: PriceTypes = PriceTypes.CLEAN):

        self.model = model
        self.price_type = price_type
        self._pricer = IsdaCdsPricer(formula)

    @property
    def pricer(self):
        return self._pricer

    def compute(self, derivative, request_list):
        """Return analytics for the given derivative and requested measures."""
        reqs = set(request_list)

        if derivative.derivative_type != InstrumentTypes.CDS:
            raise LibError(f"{derivative.derivative_type} not yet implemented")

        for req in reqs:
            if not isinstance(req, RequestTypes):
                raise LibError(f"Unknown request {req}")

        reference_dt = derivative.settlement_dt(self.model.value_dt)
        logger.debug("Computing %s for CDS on %s settling %s",
                     sorted(r.name for r in reqs), derivative.legal_entity,
                     reference_dt)

        value = None
        if RequestTypes.VALUE in reqs:
            value = self.valuation(derivative, reference_dt)

        risk = None
        if RequestTypes.DELTA in reqs:
            risk = self.delta(derivative, reference_dt)

        par_spread = None
        if RequestTypes.PAR_SPREAD in reqs:
            par_spread = self._pricer.par_spread(derivative, self.model,
                                                 reference_dt)

        rpv01 = None
        if RequestTypes.RPV01 in reqs:
            rpv01 = self._pricer.rpv01(derivative, self.model, reference_dt,
                                       self.price_type)

        recovery01 = None
        if RequestTypes.RECOVERY01 in reqs:
            recovery01 = Valuation(
                amount=self._pricer.recovery01(derivative, self.model,
                                               reference_dt),
                currency=derivative.currency)

        return AnalyticsResult(value=value, risk=risk, par_spread=par_spread,
                               rpv01=rpv01, recovery01=recovery01)

    def valuation(self,
                  derivative,
                  reference_dt):

        pv = self._pricer.present_value(derivative, self.model, reference_dt,
                                        self.price_type)
        return Valuation(amount=pv, currency=derivative.currency)

    def delta(self,
              derivative,
              reference_dt):
        """Per basis point node sensitivities of the discount and survival
        curves. An expired contract has an empty Risk."""

        sens = self._pricer.present_value_sensitivity(derivative, self.model,
                                                      reference_dt,
                                                      self.price_type)

        ladders = []
        for name in sens.curve_names():
            times = sens.node_times(name)
            ladders.append(Delta(
                risk_ladder=sens.curve_vector(name) * g_basis_point,
                tenors=[f"{t:.4f}" for t in times],
                currency=derivative.currency,
                curve_name=name))

        return Risk(ladders)
