"""
Krinsky-Robb standard errors for partial effects.

Each (variable, alternative) pair is an independent task: R coefficient draws
are taken from the coefficient's asymptotic normal distribution, the effect is
recomputed under every draw, and the spread of the recomputed effects is the
standard error. The R draws of one task are evaluated together on a stacked
(R, J, K) array of private coefficient copies.

Simulation always evaluates effects at the covariate mean, whichever
aggregation strategy was used for the point estimates.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

import numpy as np
import numpy.typing as npt

from .exceptions import DimensionMismatchError
from .partial_effects import discrete_change, marginal_effect

if TYPE_CHECKING:
    from .model import FractionalMultinomialLogit

logger = logging.getLogger(__name__)

DEFAULT_REPLICATIONS = 1000


def coefficient_standard_error(
    vcov: Sequence[npt.NDArray[np.float64]], i: int, k: int
) -> float:
    """
    Standard error of coefficient (i, k) from the per-alternative covariances.

    Raises:
        DimensionMismatchError: If there is no covariance matrix for row i or
            it does not cover index k.
    """
    if i >= len(vcov):
        raise DimensionMismatchError(
            f"no covariance matrix for alternative {i}; got {len(vcov)} matrices"
        )
    cov = np.asarray(vcov[i])
    if cov.ndim != 2 or min(cov.shape) <= k:
        raise DimensionMismatchError(
            f"covariance matrix {i} has shape {cov.shape}, cannot index coefficient {k}"
        )
    variance = float(cov[k, k])
    if variance < 0:
        warnings.warn(
            f"Negative variance for coefficient ({i}, {k}). Standard error set to NaN.",
            RuntimeWarning,
            stacklevel=2,
        )
        return float("nan")
    return float(np.sqrt(variance))


def _effects_at_mean(
    model: "FractionalMultinomialLogit",
    betas: npt.NDArray[np.float64],
    k: int,
    effect: str,
    point: npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    """Effects at ``point`` for a stack of coefficient matrices, shape (R, J)."""
    if effect == "marginal":
        probs = model.predict(newdata=point, newbeta=betas)
        return marginal_effect(probs, betas, k)[..., 0, :]
    return discrete_change(model, point, k, beta=betas)[..., 0, :]


def simulate_task(
    model: "FractionalMultinomialLogit",
    i: int,
    k: int,
    effect: str,
    R: int,
    rng: np.random.Generator,
) -> float:
    """
    Krinsky-Robb standard error of alternative i's effect of covariate k.

    The draws are centered on the coefficient being perturbed, beta[i, k].
    """
    se_ik = coefficient_standard_error(model.vcov, i, k)
    if np.isnan(se_ik):
        return se_ik
    draws = rng.normal(model.coefficient[i, k], se_ik, size=R)

    betas = np.repeat(model.coefficient[np.newaxis], R, axis=0)
    betas[:, i, k] = draws

    simulated = _effects_at_mean(model, betas, k, effect, model.covariate_means)[:, i]
    # Identical draws (zero se) have exactly zero spread
    if np.ptp(simulated) == 0:
        return 0.0
    return float(np.std(simulated, ddof=1))


def krinsky_robb_se(
    model: "FractionalMultinomialLogit",
    variables: Sequence[int],
    effect: str = "marginal",
    R: int = DEFAULT_REPLICATIONS,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
) -> npt.NDArray[np.float64]:
    """
    Krinsky-Robb standard errors for the at-the-mean effects.

    Args:
        model: Fitted model with per-alternative covariance matrices.
        variables: Covariate column indices.
        effect: "marginal" or "discrete".
        R: Number of draws per (alternative, variable) pair.
        rng: Random generator. Takes precedence over ``seed``.
        seed: Seed for a fresh generator when ``rng`` is None.

    Returns:
        Standard errors of shape (J, len(variables)).

    Note:
        Only one coefficient is redrawn per task, and the baseline row has an
        all-zero covariance. Its draws are therefore identical and its standard
        error is exactly 0, so the baseline alternative's z is +/-inf and its
        p-value 0. That row carries no evidence about significance.

    Raises:
        ValueError: If R < 2 or effect is unknown.
        DimensionMismatchError: If a covariance matrix is missing or too small.
    """
    if R < 2:
        raise ValueError(f"R must be >= 2, got {R}")
    if effect not in ("marginal", "discrete"):
        raise ValueError(f"effect must be 'marginal' or 'discrete', got {effect!r}")

    rng = rng or np.random.default_rng(seed)

    # Variables outer, alternatives inner: fixes the draw order for a seed
    tasks = [(col, k, i) for col, k in enumerate(variables) for i in range(model.J)]
    logger.debug(
        "Krinsky-Robb: %d tasks x %d draws (%s effect at the mean)",
        len(tasks),
        R,
        effect,
    )

    se = np.empty((model.J, len(variables)))
    for col, k, i in tasks:
        se[i, col] = simulate_task(model, i, k, effect, R, rng)
    return se
