"""
Average partial effects of the covariates of a fractional multinomial logit.

Two effect kinds are available. A marginal effect is the change in each
predicted share for a unit change in a continuous covariate. A discrete effect
is the change in each predicted share when a covariate moves from its minimum
to its maximum observed value (0 to 1 for a binary covariate).

Each kind can be aggregated in two ways:

* ``"atmean"``: the effect at the mean of all covariates (MEM / DEM), or at a
  caller-supplied point ``at``.
* ``"aveacr"``: the average of the observation-level effects (AME / ADE).

Standard errors use the Krinsky-Robb method and are always computed for the
effect at the mean, see :mod:`fmlogit.krinsky_robb`. Simulation cost grows
with ``R`` times the number of alternatives and selected variables, so
restrict ``varlist`` to the variables needed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

import numpy as np
import numpy.typing as npt
import pandas as pd

from .inference import inference_tables
from .krinsky_robb import DEFAULT_REPLICATIONS, krinsky_robb_se
from .partial_effects import EFFECT_FUNCTIONS, check_marg_type, select_variables
from .results import EffectsResult, assemble

if TYPE_CHECKING:
    from .model import FractionalMultinomialLogit

logger = logging.getLogger(__name__)


def effects(
    model: "FractionalMultinomialLogit",
    effect: str = "marginal",
    marg_type: str = "atmean",
    se: bool = False,
    varlist: str | Sequence[str] | None = None,
    at: Optional[npt.ArrayLike] = None,
    R: int = DEFAULT_REPLICATIONS,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
) -> EffectsResult:
    """
    Average partial effects (APEs) of the covariates.

    Args:
        model: Fitted fractional multinomial logit model.
        effect: "marginal" or "discrete".
        marg_type: "atmean" (effect at the mean) or "aveacr" (average of
                   observation-level effects).
        se: Whether to compute Krinsky-Robb standard errors and z-tables.
        varlist: Variable names to compute, in order. None or an empty list
                 selects every covariate except the constant; name
                 "constant" to include it.
        at: Covariate values (length K-1, constant excluded) at which to
            evaluate the effects. Only supported for ``marg_type="atmean"``.
        R: Krinsky-Robb draws per (alternative, variable) pair.
        rng: Random generator for the draws. Takes precedence over ``seed``.
        seed: Seed for a fresh generator when ``rng`` is None.

    Returns:
        EffectsResult with effects, optional se / ztable / marg_list, R and expl.
        The baseline alternative (row 0) always has se 0, z +/-inf and
        p-value 0 because its coefficients are fixed at zero; read nothing
        into that row's significance.

    Raises:
        ValueError: If ``effect`` or ``marg_type`` is unknown.
        UnknownVariableError: If ``varlist`` names a missing column.
        UnsupportedCombinationError: If ``at`` is given with
            ``marg_type="aveacr"``.
        DimensionMismatchError: If ``at`` or the covariance matrices have the
            wrong shape.

    Example:
        >>> from fmlogit import simulate_model
        >>> model = simulate_model(N=500, J=3, K=3)
        >>> result = model.effects(effect="marginal", se=True, R=200, seed=1)
        >>> result.ztable["x1"]
    """
    if effect not in EFFECT_FUNCTIONS:
        raise ValueError(
            f"effect must be one of {tuple(EFFECT_FUNCTIONS)}, got {effect!r}"
        )
    check_marg_type(marg_type, at)

    variables = select_variables(model.x_names, varlist)
    names = [model.x_names[k] for k in variables]
    logger.debug("Computing %s effects (%s) for %s", effect, marg_type, names)

    compute = EFFECT_FUNCTIONS[effect]
    estimates = np.empty((model.J, len(variables)))
    marg_list: dict[str, pd.DataFrame] | None = {} if marg_type == "aveacr" else None
    for col, k in enumerate(variables):
        estimate, per_obs = compute(model, k, marg_type, at)
        estimates[:, col] = estimate
        if marg_list is not None:
            marg_list[names[col]] = pd.DataFrame(per_obs, columns=model.y_names)

    effects_df = pd.DataFrame(estimates, index=model.y_names, columns=names)
    if not se:
        return assemble(
            effects_df, effect=effect, marg_type=marg_type, marg_list=marg_list
        )

    se_df = pd.DataFrame(
        krinsky_robb_se(model, variables, effect=effect, R=R, rng=rng, seed=seed),
        index=model.y_names,
        columns=names,
    )
    return assemble(
        effects_df,
        effect=effect,
        marg_type=marg_type,
        se=se_df,
        ztable=inference_tables(effects_df, se_df),
        marg_list=marg_list,
        R=R,
    )
