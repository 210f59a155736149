"""
Data Simulation for Fractional Multinomial Logit Models

Generates synthetic share data whose expected shares follow the multinomial
logit link, and wraps it into a fitted-model object with known coefficients.
Fully vectorized implementation.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from .model import FractionalMultinomialLogit


def simulate_data(
    N: int,
    J: int,
    K: int,
    true_beta: npt.NDArray[np.float64] | None = None,
    concentration: float = 50.0,
    seed: int | None = 42,
    rng: np.random.Generator | None = None,
) -> tuple[
    npt.NDArray[np.float64],
    npt.NDArray[np.float64],
    npt.NDArray[np.float64],
]:
    """
    Generates a synthetic fractional-response dataset.

    The simulation process:
    1. Generates random covariates X ~ N(0, 1) and appends a constant column
    2. Computes expected shares p = softmax(X @ beta.T) with a zero baseline row
    3. Draws observed shares y ~ Dirichlet(concentration * p)

    Args:
        N (int): Number of observations.
        J (int): Number of alternatives, baseline included.
        K (int): Number of covariates, constant included.
        true_beta (np.ndarray, optional): True parameters (J-1, K).
                                         If None, generated uniformly in [-1, 1].
        concentration (float): Dirichlet precision; larger values keep shares
                               closer to their expectation.
        seed (int | None): Random seed for reproducibility. Ignored if rng is provided.
        rng (np.random.Generator, optional): Use an existing RNG instead of seed.

    Returns:
        tuple: (X, y, true_beta_free)
            - X (np.ndarray): Design matrix (N, K), last column all ones
            - y (np.ndarray): Share matrix (N, J), rows sum to one
            - true_beta_free (np.ndarray): True parameter matrix (J-1, K)

    Raises:
        ValueError: If N, J, K or concentration are invalid.
        ValueError: If true_beta has an incorrect shape.
    """
    if N < 1:
        raise ValueError(f"N must be >= 1, got {N}")
    if J < 2:
        raise ValueError(f"J must be >= 2, got {J}")
    if K < 1:
        raise ValueError(f"K must be >= 1, got {K}")
    if concentration <= 0:
        raise ValueError(f"concentration must be > 0, got {concentration}")
    if true_beta is not None and true_beta.shape != (J - 1, K):
        raise ValueError(
            f"true_beta must have shape ({J - 1}, {K}), got {true_beta.shape}"
        )

    rng = rng or np.random.default_rng(seed)

    # Generate covariates; the constant goes last
    X = np.hstack([rng.normal(size=(N, K - 1)), np.ones((N, 1))])

    # Generate or Use Parameters
    if true_beta is None:
        true_beta_free = rng.uniform(-1, 1, (J - 1, K))
    else:
        true_beta_free = np.asarray(true_beta, dtype=np.float64)

    # Add fixed class 0 (identification constraint)
    beta_full = np.vstack([np.zeros((1, K)), true_beta_free])

    V = X @ beta_full.T
    a = np.exp(V - np.max(V, axis=1, keepdims=True))
    probs = a / np.sum(a, axis=1, keepdims=True)

    # Gamma draws normalized per row are Dirichlet(concentration * probs)
    g = rng.gamma(shape=concentration * probs)
    y = g / np.sum(g, axis=1, keepdims=True)

    return X, y, true_beta_free


def simulate_model(
    N: int,
    J: int,
    K: int,
    true_beta: npt.NDArray[np.float64] | None = None,
    coef_se: float = 0.1,
    concentration: float = 50.0,
    seed: int | None = 42,
    rng: np.random.Generator | None = None,
) -> FractionalMultinomialLogit:
    """
    Simulate data and return it as a fitted model at the true coefficients.

    Each non-baseline alternative gets the covariance ``coef_se**2 * I``.

    Args:
        N, J, K, true_beta, concentration, seed, rng: As for :func:`simulate_data`.
        coef_se (float): Standard error assigned to every free coefficient.

    Returns:
        FractionalMultinomialLogit with known coefficients and covariances.
    """
    if coef_se < 0:
        raise ValueError(f"coef_se must be >= 0, got {coef_se}")
    X, y, true_beta_free = simulate_data(
        N=N,
        J=J,
        K=K,
        true_beta=true_beta,
        concentration=concentration,
        seed=seed,
        rng=rng,
    )
    vcov = [coef_se**2 * np.eye(K) for _ in range(J - 1)]
    return FractionalMultinomialLogit.from_estimates(true_beta_free, vcov, X, y)
