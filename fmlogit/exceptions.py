"""Exceptions raised by fmlogit."""


class FMLogitError(ValueError):
    """Base class for invalid requests against a fitted model."""


class UnknownVariableError(FMLogitError):
    """A requested variable name does not match any design-matrix column."""


class UnsupportedCombinationError(FMLogitError):
    """The requested options cannot be combined (e.g. ``at`` with ``aveacr``)."""


class DimensionMismatchError(FMLogitError):
    """Coefficient, covariance or covariate shapes are inconsistent."""
