"""
Partial effects of covariates on fractional multinomial logit shares.

Marginal effects differentiate the logit link:

    d p_j / d x_k = p_j * (beta_jk - sum_i p_i * beta_ik)

Discrete effects compare predicted shares with covariate k moved from its
minimum to its maximum observed value. Both are aggregated either at a single
covariate point ("atmean") or averaged over every observation ("aveacr").
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

import numpy as np
import numpy.typing as npt

from .exceptions import (
    DimensionMismatchError,
    UnknownVariableError,
    UnsupportedCombinationError,
)

if TYPE_CHECKING:
    from .model import FractionalMultinomialLogit

MARG_TYPES = ("atmean", "aveacr")

EffectPair = tuple[npt.NDArray[np.float64], Optional[npt.NDArray[np.float64]]]


def select_variables(
    names: Sequence[str], varlist: str | Sequence[str] | None = None
) -> list[int]:
    """
    Resolve requested covariate names to design-matrix column indices.

    Args:
        names: All covariate names; the last one is the constant.
        varlist: Names to select, in the order given. A single string selects
                 one variable. None or an empty sequence selects every
                 non-constant column.

    Returns:
        Column indices in request order.

    Raises:
        UnknownVariableError: If a requested name matches no column.
        ValueError: If a name is requested twice.
    """
    if isinstance(varlist, str):
        varlist = [varlist]
    if varlist is None or len(varlist) == 0:
        return list(range(len(names) - 1))

    lookup = {name: k for k, name in enumerate(names)}
    unknown = [name for name in varlist if name not in lookup]
    if unknown:
        raise UnknownVariableError(
            f"Unrecognized variables {unknown}; available columns are {list(names)}"
        )
    if len(set(varlist)) != len(varlist):
        raise ValueError(f"varlist contains duplicate names: {list(varlist)}")
    return [lookup[name] for name in varlist]


def evaluation_point(
    model: "FractionalMultinomialLogit", at: Optional[npt.ArrayLike] = None
) -> npt.NDArray[np.float64]:
    """
    Covariate point (constant excluded) at which "atmean" effects are evaluated.

    Returns a fresh array each call: the caller's ``at`` when given, otherwise
    the column means of the design matrix.
    """
    if at is None:
        return model.covariate_means
    point = np.array(at, dtype=np.float64).ravel()
    if point.shape != (model.K - 1,):
        raise DimensionMismatchError(
            f"at must have {model.K - 1} values (constant excluded), got {point.size}"
        )
    return point


def check_marg_type(marg_type: str, at: Optional[npt.ArrayLike] = None) -> None:
    """Validate the aggregation strategy and its combination with ``at``."""
    if marg_type not in MARG_TYPES:
        raise ValueError(f"marg_type must be one of {MARG_TYPES}, got {marg_type!r}")
    if at is not None and marg_type != "atmean":
        raise UnsupportedCombinationError(
            "an evaluation point 'at' is only supported with marg_type='atmean'"
        )


def marginal_effect(
    probs: npt.NDArray[np.float64], beta: npt.NDArray[np.float64], k: int
) -> npt.NDArray[np.float64]:
    """
    Marginal effect of covariate k on every share.

    Args:
        probs: Predicted shares (..., n, J).
        beta: Coefficient matrix (J, K) or a stack (..., J, K) matching ``probs``.
        k: Covariate column.

    Returns:
        Effects with the shape of ``probs``.
    """
    beta_k = np.asarray(beta)[..., :, k][..., np.newaxis, :]
    beta_bar = np.sum(probs * beta_k, axis=-1, keepdims=True)
    return probs * (beta_k - beta_bar)


def _shift(
    points: npt.NDArray[np.float64], k: int, value: float
) -> npt.NDArray[np.float64]:
    shifted = points.copy()
    # The constant is re-supplied by predict, so shifting it changes nothing
    if k < shifted.shape[-1]:
        shifted[..., k] = value
    return shifted


def discrete_change(
    model: "FractionalMultinomialLogit",
    points: npt.NDArray[np.float64],
    k: int,
    beta: Optional[npt.NDArray[np.float64]] = None,
) -> npt.NDArray[np.float64]:
    """
    Share difference when covariate k moves from its minimum to its maximum.

    Args:
        model: Fitted model; supplies the observed range of column k.
        points: Covariate vector (K-1,) or matrix (n, K-1).
        k: Covariate column.
        beta: Optional coefficient matrix or stack passed to ``predict``.

    Returns:
        ``predict(max) - predict(min)`` with shape (..., n, J).
    """
    column = model.X[:, k]
    low = _shift(points, k, column.min())
    high = _shift(points, k, column.max())
    return model.predict(newdata=high, newbeta=beta) - model.predict(
        newdata=low, newbeta=beta
    )


def marginal_effects(
    model: "FractionalMultinomialLogit",
    k: int,
    marg_type: str = "atmean",
    at: Optional[npt.ArrayLike] = None,
) -> EffectPair:
    """
    Marginal effect of covariate k per alternative.

    Returns:
        ``(effect, per_obs)``: effect has shape (J,); per_obs is the (N, J)
        matrix of observation-level effects for "aveacr", else None.
    """
    check_marg_type(marg_type, at)
    if marg_type == "aveacr":
        per_obs = marginal_effect(model.predict(), model.coefficient, k)
        return per_obs.mean(axis=0), per_obs

    probs = model.predict(newdata=evaluation_point(model, at))
    return marginal_effect(probs, model.coefficient, k)[0], None


def discrete_effects(
    model: "FractionalMultinomialLogit",
    k: int,
    marg_type: str = "atmean",
    at: Optional[npt.ArrayLike] = None,
) -> EffectPair:
    """
    Discrete (minimum to maximum) effect of covariate k per alternative.

    Returns:
        ``(effect, per_obs)`` as for :func:`marginal_effects`.
    """
    check_marg_type(marg_type, at)
    if marg_type == "aveacr":
        per_obs = discrete_change(model, model.X[:, :-1], k)
        return per_obs.mean(axis=0), per_obs

    return discrete_change(model, evaluation_point(model, at), k)[0], None


EFFECT_FUNCTIONS = {
    "marginal": marginal_effects,
    "discrete": discrete_effects,
}
