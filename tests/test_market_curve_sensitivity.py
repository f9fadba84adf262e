"""
Tests for the CurveSensitivity accumulator.
"""

import numpy as np
import pandas as pd
import pytest

from isdacds.market.curves.curve_sensitivity import CurveSensitivity
from isdacds.utils.error import LibError


class TestCurveSensitivity:

    def test_empty(self):
        sens = CurveSensitivity.none()
        assert sens.is_empty()
        assert sens.curve_names() == []
        assert repr(sens) == "CurveSensitivity(EMPTY)"

    def test_single_curve(self):
        sens = CurveSensitivity.of("USD_DISC", [1.0, 5.0], [0.2, 0.8])
        assert sens.is_empty() is False
        np.testing.assert_allclose(sens.curve_vector("USD_DISC"), [0.2, 0.8])
        np.testing.assert_allclose(sens.node_times("USD_DISC"), [1.0, 5.0])

    def test_same_curve_adds_node_by_node(self):
        s1 = CurveSensitivity.of("USD_DISC", [1.0, 5.0], [0.2, 0.8])
        s2 = CurveSensitivity.of("USD_DISC", [1.0, 5.0], [0.1, 0.0])
        np.testing.assert_allclose((s1 + s2).curve_vector("USD_DISC"), [0.3, 0.8])

    def test_different_curves_kept_apart(self):
        s1 = CurveSensitivity.of("USD_DISC", [1.0, 5.0], [0.2, 0.8])
        s2 = CurveSensitivity.of("ACME_USD_SURV", [1.0, 3.0, 5.0], [1.0, 2.0, 3.0])
        combined = s1.combined_with(s2)
        assert combined.curve_names() == ["USD_DISC", "ACME_USD_SURV"]
        np.testing.assert_allclose(combined.curve_vector("ACME_USD_SURV"), [1.0, 2.0, 3.0])

    def test_combine_is_immutable(self):
        s1 = CurveSensitivity.of("USD_DISC", [1.0, 5.0], [0.2, 0.8])
        s2 = CurveSensitivity.of("USD_DISC", [1.0, 5.0], [0.1, 0.1])
        s1 + s2
        np.testing.assert_allclose(s1.curve_vector("USD_DISC"), [0.2, 0.8])

    def test_mismatched_node_times_raise(self):
        s1 = CurveSensitivity.of("USD_DISC", [1.0, 5.0], [0.2, 0.8])
        s2 = CurveSensitivity.of("USD_DISC", [1.0, 4.0], [0.1, 0.0])
        with pytest.raises(LibError):
            s1.combined_with(s2)

        s3 = CurveSensitivity.of("USD_DISC", [1.0], [0.1])
        with pytest.raises(LibError):
            s1.combined_with(s3)

    def test_weights_must_match_times(self):
        with pytest.raises(LibError):
            CurveSensitivity.of("USD_DISC", [1.0, 5.0], [0.2])

    def test_multiplied_by(self):
        sens = CurveSensitivity.of("USD_DISC", [1.0, 5.0], [0.2, 0.8])
        np.testing.assert_allclose(sens.multiplied_by(2.0).curve_vector("USD_DISC"), [0.4, 1.6])
        np.testing.assert_allclose((sens * -1.0).curve_vector("USD_DISC"), [-0.2, -0.8])
        np.testing.assert_allclose((3.0 * sens).curve_vector("USD_DISC"), [0.6, 2.4])

    def test_get(self):
        sens = CurveSensitivity.of("USD_DISC", [1.0, 5.0], [0.2, 0.8])
        assert sens.get("USD_DISC", 5.0) == pytest.approx(0.8)
        assert sens.get("EUR_DISC", 5.0) == 0.0
        with pytest.raises(LibError):
            sens.get("USD_DISC", 3.0)

    def test_missing_curve_vector_raises(self):
        with pytest.raises(LibError):
            CurveSensitivity.none().curve_vector("USD_DISC")

    def test_to_dataframe(self):
        sens = CurveSensitivity.of("USD_DISC", [1.0, 5.0], [0.2, 0.8]) \
            + CurveSensitivity.of("ACME_USD_SURV", [3.0], [-1.5])
        df = sens.to_dataframe()
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["curve", "time", "sensitivity"]
        assert len(df) == 3
        assert df[df.curve == "ACME_USD_SURV"].sensitivity.iloc[0] == pytest.approx(-1.5)

    def test_empty_dataframe(self):
        df = CurveSensitivity.none().to_dataframe()
        assert len(df) == 0
        assert list(df.columns) == ["curve", "time", "sensitivity"]
