"""
fmlogit: Fractional Multinomial Logit Partial Effects

A Python library for average partial effects (marginal and discrete) of
fitted fractional multinomial logit models, with Krinsky-Robb standard errors.
"""

from .exceptions import (
    DimensionMismatchError,
    FMLogitError,
    UnknownVariableError,
    UnsupportedCombinationError,
)
from .margins import effects
from .model import FractionalMultinomialLogit
from .results import EffectsResult
from .simulate import simulate_data, simulate_model

__all__ = [
    "DimensionMismatchError",
    "EffectsResult",
    "FMLogitError",
    "FractionalMultinomialLogit",
    "UnknownVariableError",
    "UnsupportedCombinationError",
    "effects",
    "simulate_data",
    "simulate_model",
]
