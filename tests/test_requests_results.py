"""
Tests for the result containers: Valuation, Delta, Risk and
AnalyticsResult.
"""

import numpy as np
import pytest

from isdacds.utils.currency import CurrencyTypes
from isdacds.requests.results import Valuation, Ladder, Delta, Risk, AnalyticsResult


@pytest.fixture
def disc_delta():
    return Delta(risk_ladder=[10.0, -4.0], tenors=["1.0000", "5.0000"],
                 currency=CurrencyTypes.USD, curve_name="USD_DISC")


@pytest.fixture
def surv_delta():
    return Delta(risk_ladder=[120.0, 300.0, 50.0], tenors=["1.0000", "3.0000", "5.0000"],
                 currency=CurrencyTypes.USD, curve_name="ACME_USD_SURV")


class TestValuation:

    def test_arithmetic(self):
        v1 = Valuation(1000.0, CurrencyTypes.USD)
        v2 = Valuation(500.0, CurrencyTypes.USD)
        assert (v1 + v2).amount == 1500.0
        assert (v1 - v2).amount == 500.0
        assert (v1 * 2.0).amount == 2000.0
        assert (2.0 * v1).amount == 2000.0
        assert (v1 / 4.0).amount == 250.0
        assert sum([v1, v2]).amount == 1500.0

    def test_currency_mismatch(self):
        with pytest.raises(ValueError):
            Valuation(1.0, CurrencyTypes.USD) + Valuation(1.0, CurrencyTypes.EUR)

    def test_currency_type(self):
        with pytest.raises(TypeError):
            Valuation(1.0, "USD")

    def test_repr(self):
        assert repr(Valuation(1234.567, CurrencyTypes.USD)) == "1234.57 USD"


class TestDelta:

    def test_value_is_sum(self, disc_delta):
        assert disc_delta.value.amount == pytest.approx(6.0)
        assert disc_delta.value.currency == CurrencyTypes.USD

    def test_ladder(self, disc_delta):
        ladder = disc_delta.ladder
        assert isinstance(ladder, Ladder)
        assert ladder.to_dict() == {"1.0000": 10.0, "5.0000": -4.0}
        assert ladder.df.loc["5.0000", "USD_DISC_Risk"] == -4.0

    def test_table(self, disc_delta):
        table = disc_delta.table
        assert "TOTAL" in table
        assert "USD_DISC" in table

    def test_add(self, disc_delta):
        total = disc_delta + disc_delta
        np.testing.assert_allclose(total.risk_ladder, [20.0, -8.0])
        assert sum([disc_delta, disc_delta]).value.amount == pytest.approx(12.0)

    def test_add_mismatch(self, disc_delta, surv_delta):
        with pytest.raises(ValueError):
            disc_delta + surv_delta

    def test_tenor_count(self):
        with pytest.raises(ValueError):
            Delta([1.0, 2.0], ["1.0000"], CurrencyTypes.USD, "USD_DISC")


class TestRisk:

    def test_access(self, disc_delta, surv_delta):
        risk = Risk([disc_delta, surv_delta])
        assert risk.USD_DISC is disc_delta
        assert risk("ACME_USD_SURV") is surv_delta
        assert risk.curve_names == ["USD_DISC", "ACME_USD_SURV"]
        assert list(risk) == [disc_delta, surv_delta]
        assert "ACME_USD_SURV=470" in repr(risk)

    def test_missing_curve(self, disc_delta):
        with pytest.raises(ValueError):
            Risk([disc_delta])("EUR_DISC")

    def test_duplicate_curve(self, disc_delta):
        with pytest.raises(ValueError):
            Risk([disc_delta, disc_delta])

    def test_df(self, disc_delta, surv_delta):
        df = Risk([disc_delta, surv_delta]).df
        assert len(df) == 5
        assert df[df.curve == "ACME_USD_SURV"].delta.sum() == pytest.approx(470.0)


class TestAnalyticsResult:

    def test_defaults_are_none(self):
        result = AnalyticsResult()
        assert result.value is None
        assert result.risk is None
        assert result.par_spread is None
        assert result.rpv01 is None
        assert result.recovery01 is None
        assert repr(result) == "AnalyticsResult()"

    def test_repr(self):
        result = AnalyticsResult(value=Valuation(10.0, CurrencyTypes.USD),
                                 par_spread=0.0123)
        assert repr(result) == "AnalyticsResult(value=10.00 USD, par_spread=0.012300)"
