"""z-tests for partial effects with simulated standard errors."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt
import pandas as pd
from scipy import stats

TABLE_COLUMNS = ["estimate", "std", "z", "p-value"]


def z_statistics(
    estimate: npt.ArrayLike, std: npt.ArrayLike
) -> npt.NDArray[np.float64]:
    """
    Elementwise ``estimate / std``.

    A zero standard error gives +/-inf for a non-zero estimate and 0 for a
    zero estimate; nothing is raised.
    """
    estimate = np.asarray(estimate, dtype=np.float64)
    std = np.asarray(std, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        z = estimate / std
    return np.where((estimate == 0) & (std == 0), 0.0, z)


def two_sided_p_values(z: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    ``2 * (1 - Phi(|z|))`` under the standard normal.

    Beyond |z| of about 38 the true p-value is below the smallest float64 and
    the result is exactly 0.0, even with a non-zero standard error. A zero
    p-value therefore does not imply a zero std.
    """
    # sf(|z|) equals 1 - cdf(|z|) without cancellation in the upper tail
    return 2 * stats.norm.sf(np.abs(np.asarray(z, dtype=np.float64)))


def inference_table(
    estimate: npt.ArrayLike, std: npt.ArrayLike, alternatives: Sequence[str]
) -> pd.DataFrame:
    """
    One row per alternative with estimate, std, z and p-value.

    See :func:`two_sided_p_values` for p-values that underflow to 0.
    """
    z = z_statistics(estimate, std)
    return pd.DataFrame(
        {
            "estimate": np.asarray(estimate, dtype=np.float64),
            "std": np.asarray(std, dtype=np.float64),
            "z": z,
            "p-value": two_sided_p_values(z),
        },
        index=list(alternatives),
        columns=TABLE_COLUMNS,
    )


def inference_tables(
    effects: pd.DataFrame, se: pd.DataFrame
) -> dict[str, pd.DataFrame]:
    """Per-variable inference tables, keyed and ordered by ``effects.columns``."""
    return {
        name: inference_table(
            effects[name].to_numpy(), se[name].to_numpy(), effects.index
        )
        for name in effects.columns
    }
