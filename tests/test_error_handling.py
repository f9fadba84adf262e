"""
Robustness and error handling tests.

Tests cover input validation and error conditions of the pricer, the
model and the market objects so that invalid inputs fail with a clear
LibError rather than a wrong number.

Focus areas:
- Missing or invalid pricer inputs
- Curves and recovery rates the ISDA model does not support
- Inconsistent curve day counts
- Out-of-range parameters
"""

import pytest

from isdacds.utils.date import Date
from isdacds.utils.currency import CurrencyTypes
from isdacds.utils.day_count import DayCountTypes
from isdacds.utils.error import LibError
from isdacds.utils.global_types import PriceTypes
from isdacds.market.curves.recovery_rates import ConstantRecoveryRate
from isdacds.market.curves.isda_curve import IsdaSurvivalCurve
from isdacds.trades.credit.cds import CDS
from isdacds.pricers.isda_cds_pricer import IsdaCdsPricer


class FlatCurve:
    """A curve that is not an ISDA zero rate curve"""

    name = "FLAT"

    def discount_factor(self, dt):
        return 1.0


class TestPricerInputs:
    """Missing or wrongly typed pricer inputs"""

    def test_none_contract(self, credit_model):
        with pytest.raises(LibError):
            IsdaCdsPricer().present_value(None, credit_model, Date(20, 5, 2024))

    def test_none_model(self, standard_cds):
        with pytest.raises(LibError):
            IsdaCdsPricer().present_value(standard_cds, None, Date(20, 5, 2024))

    def test_none_reference_date(self, standard_cds, credit_model):
        with pytest.raises(LibError):
            IsdaCdsPricer().present_value(standard_cds, credit_model, None)

    def test_not_a_cds(self, credit_model):
        with pytest.raises(LibError):
            IsdaCdsPricer().par_spread("CDS", credit_model, Date(20, 5, 2024))

    def test_reference_date_type(self, standard_cds, credit_model):
        with pytest.raises(LibError):
            IsdaCdsPricer().protection_leg(standard_cds, credit_model, "20-05-2024")

    def test_price_type(self, standard_cds, credit_model):
        with pytest.raises(LibError):
            IsdaCdsPricer().risky_annuity(standard_cds, credit_model,
                                          Date(20, 5, 2024), "CLEAN")

    def test_formula_type(self):
        with pytest.raises(LibError):
            IsdaCdsPricer("MARKIT_FIX")

    def test_error_message(self, credit_model):
        with pytest.raises(LibError, match="CDS, model and reference date"):
            IsdaCdsPricer().present_value(None, credit_model, Date(20, 5, 2024))


class TestUnsupportedMarket:
    """The ISDA model needs zero rate curves and a constant recovery"""

    def test_discount_curve_not_isda(self, credit_model, standard_cds):
        credit_model.add_discount_curve(CurrencyTypes.USD, FlatCurve())
        ref_dt = standard_cds.settlement_dt(credit_model.value_dt)
        with pytest.raises(LibError, match="Discount curve"):
            IsdaCdsPricer().present_value(standard_cds, credit_model, ref_dt)

    def test_survival_curve_not_isda(self, credit_model, standard_cds):
        credit_model.add_survival_curve("ACME", CurrencyTypes.USD, FlatCurve())
        ref_dt = standard_cds.settlement_dt(credit_model.value_dt)
        with pytest.raises(LibError, match="Survival curve"):
            IsdaCdsPricer().present_value_sensitivity(standard_cds, credit_model, ref_dt)

    def test_recovery_not_constant(self, credit_model, standard_cds):
        credit_model.add_recovery_rate("ACME", 0.4)
        ref_dt = standard_cds.settlement_dt(credit_model.value_dt)
        with pytest.raises(LibError, match="ConstantRecoveryRate"):
            IsdaCdsPricer().par_spread(standard_cds, credit_model, ref_dt)

    def test_day_counts_differ(self, credit_model, standard_cds, survival_tenors,
                               survival_zero_rates):
        credit_model.build_survival_curve("ACME", CurrencyTypes.USD, survival_tenors,
                                          survival_zero_rates,
                                          dc_type=DayCountTypes.ACT_360)
        ref_dt = standard_cds.settlement_dt(credit_model.value_dt)
        with pytest.raises(LibError, match="day count"):
            IsdaCdsPricer().present_value(standard_cds, credit_model, ref_dt)

    def test_unknown_entity(self, credit_model, standard_cds_params):
        params = dict(standard_cds_params)
        params['legal_entity'] = "OTHER"
        cds = CDS(**params)
        with pytest.raises(LibError):
            IsdaCdsPricer().present_value(cds, credit_model,
                                          cds.settlement_dt(credit_model.value_dt))

    def test_unknown_currency(self, credit_model, standard_cds_params):
        params = dict(standard_cds_params)
        params['currency'] = CurrencyTypes.EUR
        cds = CDS(**params)
        with pytest.raises(LibError):
            IsdaCdsPricer().present_value(cds, credit_model,
                                          cds.settlement_dt(credit_model.value_dt))

    def test_shared_curve_names(self, credit_model, standard_cds):
        # a survival curve filed under the discount curve name replaces it
        surv = credit_model.survival_curve("ACME", CurrencyTypes.USD)
        renamed = IsdaSurvivalCurve(surv.value_dt, surv.times, surv.zero_rates,
                                    name="USD_DISC")
        credit_model.add_survival_curve("ACME", CurrencyTypes.USD, renamed)
        ref_dt = standard_cds.settlement_dt(credit_model.value_dt)

        with pytest.raises(LibError, match="share the name"):
            IsdaCdsPricer().present_value_sensitivity(standard_cds, credit_model,
                                                      ref_dt, PriceTypes.CLEAN)


class TestRecoveryRate:

    @pytest.mark.parametrize("rate", [-0.1, 1.01])
    def test_out_of_range(self, rate):
        with pytest.raises(LibError):
            ConstantRecoveryRate(Date(15, 5, 2024), rate)

    @pytest.mark.parametrize("rate", [0.0, 0.4, 1.0])
    def test_bounds_allowed(self, rate):
        recovery = ConstantRecoveryRate(Date(15, 5, 2024), rate, "ACME")
        assert recovery.recovery_rate() == rate
        assert recovery.recovery_rate(Date(20, 6, 2029)) == rate
        assert recovery.legal_entity == "ACME"

    def test_value_date_type(self):
        with pytest.raises(LibError):
            ConstantRecoveryRate("15-05-2024", 0.4)

    def test_model_validates_recovery(self, credit_model):
        with pytest.raises(LibError):
            credit_model.set_recovery_rate("ACME", 1.5)
