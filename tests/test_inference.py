"""Tests for z-statistics, p-values and inference tables."""

import numpy as np
import pandas as pd
import pytest
from scipy import stats

from fmlogit.inference import (
    inference_table,
    inference_tables,
    two_sided_p_values,
    z_statistics,
)


class TestZStatistics:
    """Test estimate / std."""

    def test_ratio(self):
        """Test the plain ratio."""
        assert np.allclose(z_statistics([1.0, -2.0], [0.5, 4.0]), [2.0, -0.5])

    def test_zero_std_gives_signed_infinity(self):
        """Test that a zero std never raises and keeps the sign."""
        z = z_statistics([0.3, -0.3], [0.0, 0.0])
        assert z[0] == np.inf
        assert z[1] == -np.inf

    def test_zero_over_zero(self):
        """Test that a zero estimate with zero std gives z = 0."""
        assert z_statistics([0.0], [0.0])[0] == 0.0


class TestPValues:
    """Test two-sided normal p-values."""

    def test_matches_normal_cdf(self):
        """Test against 2 * (1 - Phi(|z|))."""
        z = np.array([-2.5, -1.0, 0.0, 0.5, 1.96])
        expected = 2 * (1 - stats.norm.cdf(np.abs(z)))
        assert np.allclose(two_sided_p_values(z), expected)

    @pytest.mark.parametrize("z", [-np.inf, -40.0, -1.0, 0.0, 3.0, 40.0, np.inf])
    def test_in_unit_interval(self, z):
        """Test that p-values lie in [0, 1]."""
        p = two_sided_p_values([z])[0]
        assert 0.0 <= p <= 1.0

    def test_infinite_z_gives_zero(self):
        """Test that p = 0 exactly for infinite z."""
        assert np.all(two_sided_p_values([np.inf, -np.inf]) == 0.0)

    def test_large_finite_z_underflows_to_zero(self):
        """Test that p-values below float64 range come back as 0 with a non-zero std."""
        table = inference_table([1.0], [0.02], ["a"])
        assert table.loc["a", "std"] > 0
        assert np.isclose(table.loc["a", "z"], 50.0)
        assert table.loc["a", "p-value"] == 0.0
        assert two_sided_p_values([30.0])[0] > 0.0


class TestInferenceTable:
    """Test table assembly."""

    def test_columns_and_index(self):
        """Test the table layout."""
        table = inference_table([0.1, -0.2, 0.1], [0.05, 0.1, 0.0], ["a", "b", "c"])
        assert list(table.columns) == ["estimate", "std", "z", "p-value"]
        assert list(table.index) == ["a", "b", "c"]
        assert np.allclose(table["z"].iloc[:2], [2.0, -2.0])
        assert table.loc["c", "z"] == np.inf
        assert table.loc["c", "p-value"] == 0.0

    def test_tables_per_variable(self):
        """Test that tables are keyed and ordered by variable."""
        index = ["y1", "y2"]
        est = pd.DataFrame({"x2": [0.1, -0.1], "x1": [0.3, -0.3]}, index=index)
        se = pd.DataFrame({"x2": [0.1, 0.1], "x1": [0.1, 0.2]}, index=index)
        tables = inference_tables(est, se)
        assert list(tables) == ["x2", "x1"]
        assert np.allclose(tables["x1"]["z"], [3.0, -1.5])
        assert list(tables["x2"].index) == index
