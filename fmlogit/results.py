"""
Result object for partial-effect computations.

:class:`EffectsResult` is a frozen dataclass: attribute access
(``result.effects``), dict-like access (``result["se"]``,
``result.get("ztable")``, ``"marg_list" in result``) and ``to_dict()`` for a
plain-Python snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Optional

import numpy as np
import pandas as pd

MARG_TYPE_LABELS = {
    "atmean": "at the mean,",
    "aveacr": "average across observations,",
}


def _to_python(obj: Any) -> Any:
    """Recursively convert pandas and NumPy values to Python-native types."""
    if isinstance(obj, pd.DataFrame):
        return {str(col): _to_python(obj[col].to_dict()) for col in obj.columns}
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, dict):
        return {k: _to_python(v) for k, v in obj.items()}
    return obj


def _copy_tables(
    tables: Optional[dict[str, pd.DataFrame]],
) -> Optional[dict[str, pd.DataFrame]]:
    if tables is None:
        return None
    return {name: table.copy() for name, table in tables.items()}


def describe(effect: str, marg_type: str, se: bool) -> str:
    """Human-readable description of the computed effects."""
    se_label = (
        "Krinsky-Robb standard error calculated"
        if se
        else "standard error not computed"
    )
    return f"{effect} effect {MARG_TYPE_LABELS[marg_type]} {se_label}"


@dataclass(frozen=True)
class EffectsResult:
    """
    Average partial effects of a fractional multinomial logit model.

    Attributes:
        effects: Effects (J x k), index = alternatives, columns = variables.
        se: Krinsky-Robb standard errors with the labels of ``effects``,
            or None when not requested.
        ztable: Per-variable tables (estimate, std, z, p-value), or None.
        marg_list: Per-variable observation-level effects (N x J) for
            ``marg_type="aveacr"``, else None.
        R: Krinsky-Robb replications used; 0 without standard errors.
        expl: Description of the effect kind and aggregation strategy.
        effect: "marginal" or "discrete".
        marg_type: "atmean" or "aveacr".

    Only the fields are frozen: ``result.effects = ...`` raises, but the
    DataFrames themselves stay mutable. :func:`assemble` stores copies, so
    the tables belong to this result and changing the inputs afterwards does
    not reach them. Edits made through ``result.effects`` do persist.
    """

    effects: pd.DataFrame
    se: Optional[pd.DataFrame]
    ztable: Optional[dict[str, pd.DataFrame]]
    marg_list: Optional[dict[str, pd.DataFrame]]
    R: int
    expl: str
    effect: str
    marg_type: str

    def __getitem__(self, key: str) -> Any:
        try:
            return getattr(self, key)
        except AttributeError:
            raise KeyError(key) from None

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self, key, default)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in {f.name for f in fields(self)}

    def to_dict(self) -> dict[str, Any]:
        """Plain dictionary of every field, JSON-serialisable."""
        return {f.name: _to_python(getattr(self, f.name)) for f in fields(self)}


def assemble(
    effects: pd.DataFrame,
    *,
    effect: str,
    marg_type: str,
    se: Optional[pd.DataFrame] = None,
    ztable: Optional[dict[str, pd.DataFrame]] = None,
    marg_list: Optional[dict[str, pd.DataFrame]] = None,
    R: int = 0,
) -> EffectsResult:
    """Package copies of the computed pieces into an :class:`EffectsResult`."""
    return EffectsResult(
        effects=effects.copy(),
        se=se.copy() if se is not None else None,
        ztable=_copy_tables(ztable),
        marg_list=_copy_tables(marg_list),
        R=R if se is not None else 0,
        expl=describe(effect, marg_type, se is not None),
        effect=effect,
        marg_type=marg_type,
    )
