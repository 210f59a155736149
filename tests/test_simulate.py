"""Tests for data simulation."""

import numpy as np
import pytest

from fmlogit import FractionalMultinomialLogit, simulate_data, simulate_model


class TestSimulateDataValidation:
    """Test input validation for simulate_data."""

    def test_valid_parameters(self):
        """Test that valid parameters work."""
        X, y, true_beta = simulate_data(N=100, J=3, K=2, seed=42)
        assert X.shape == (100, 2)
        assert y.shape == (100, 3)
        assert true_beta.shape == (2, 2)

    def test_invalid_N(self):
        """Test that N < 1 raises ValueError."""
        with pytest.raises(ValueError, match="N must be >= 1"):
            simulate_data(N=0, J=3, K=2)

    def test_invalid_J(self):
        """Test that J < 2 raises ValueError."""
        with pytest.raises(ValueError, match="J must be >= 2"):
            simulate_data(N=100, J=1, K=2)

    def test_invalid_K(self):
        """Test that K < 1 raises ValueError."""
        with pytest.raises(ValueError, match="K must be >= 1"):
            simulate_data(N=100, J=3, K=0)

    def test_invalid_concentration(self):
        """Test that a non-positive concentration raises ValueError."""
        with pytest.raises(ValueError, match="concentration must be > 0"):
            simulate_data(N=100, J=3, K=2, concentration=0.0)

    def test_invalid_true_beta_shape(self):
        """Test that wrong true_beta shape raises ValueError."""
        wrong_beta = np.random.randn(3, 3)  # Should be (J-1, K) = (2, 2)
        with pytest.raises(ValueError, match="true_beta must have shape"):
            simulate_data(N=100, J=3, K=2, true_beta=wrong_beta)


class TestSimulateDataOutput:
    """Test output properties of simulate_data."""

    def test_constant_is_last_column(self):
        """Test that the design ends with a column of ones."""
        X, _, _ = simulate_data(50, 3, 4, seed=1)
        assert np.all(X[:, -1] == 1)

    def test_shares_sum_to_one(self):
        """Test that each row of y is a share vector."""
        _, y, _ = simulate_data(200, 4, 3, seed=42)
        assert np.all(y >= 0)
        assert np.allclose(y.sum(axis=1), 1)

    def test_reproducibility(self):
        """Test that the same seed reproduces the data."""
        first = simulate_data(30, 3, 3, seed=7)
        second = simulate_data(30, 3, 3, seed=7)
        for a, b in zip(first, second):
            assert np.array_equal(a, b)

    def test_true_beta_used(self):
        """Test that supplied parameters are returned unchanged."""
        beta = np.array([[0.5, -0.2], [1.0, 0.3]])
        _, _, true_beta = simulate_data(10, 3, 2, true_beta=beta)
        assert np.array_equal(true_beta, beta)

    def test_shares_track_probabilities(self):
        """Test that high concentration keeps shares near the logit probabilities."""
        beta = np.array([[1.0, 0.0], [-1.0, 0.5]])
        X, y, _ = simulate_data(
            5000, 3, 2, true_beta=beta, concentration=5000.0, seed=3
        )
        model = simulate_model(5000, 3, 2, true_beta=beta, concentration=5000.0, seed=3)
        assert np.allclose(model.y, y)
        assert np.abs(y - model.predict()).mean() < 0.02


class TestSimulateModel:
    """Test the fitted-model wrapper."""

    def test_returns_model(self):
        """Test the type and covariance structure."""
        model = simulate_model(100, 4, 3, coef_se=0.2, seed=0)
        assert isinstance(model, FractionalMultinomialLogit)
        assert model.J == 4 and model.K == 3
        assert np.allclose(model.vcov[0], 0)
        assert np.allclose(model.vcov[1], 0.04 * np.eye(3))

    def test_invalid_coef_se(self):
        """Test that a negative coef_se raises ValueError."""
        with pytest.raises(ValueError, match="coef_se must be >= 0"):
            simulate_model(10, 3, 2, coef_se=-1.0)
