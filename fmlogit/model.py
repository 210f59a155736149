"""
Fractional Multinomial Logit Model

Container for an already-estimated fractional multinomial logit model and its
vectorized prediction function.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import numpy as np
import numpy.typing as npt

from .exceptions import DimensionMismatchError

CONSTANT_NAME = "constant"


def _as_matrix(
    data: Any, name: str
) -> tuple[npt.NDArray[np.float64], list[str] | None]:
    """Return a float copy of ``data`` and its column names, if it carries any."""
    columns = None
    if hasattr(data, "to_numpy"):
        # Handle pandas objects gracefully
        if hasattr(data, "columns"):
            columns = [str(c) for c in data.columns]
        data = data.to_numpy()
    arr = np.array(data, dtype=np.float64)
    if arr.ndim != 2:
        raise DimensionMismatchError(
            f"{name} must be 2-dimensional, got {arr.ndim} dims"
        )
    return arr, columns


def _readonly(arr: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    arr.setflags(write=False)
    return arr


class FractionalMultinomialLogit:
    """
    Fitted fractional multinomial logit model.

    Shares are modelled as ``P(y_j | x) = exp(x @ beta_j) / sum_i exp(x @ beta_i)``,
    with row 0 of the coefficient matrix acting as the baseline alternative.
    The last column of ``X`` is the constant.

    Attributes:
        coefficient (np.ndarray): Coefficient matrix of shape (J, K).
        vcov (list[np.ndarray]): One (K, K) covariance matrix per coefficient row.
        X (np.ndarray): Design matrix of shape (N, K).
        y (np.ndarray): Share matrix of shape (N, J).
        x_names (list[str]): Column names of X.
        y_names (list[str]): Alternative names (columns of y).
    """

    def __init__(
        self,
        coefficient: npt.ArrayLike,
        vcov: Sequence[npt.ArrayLike],
        X: Any,
        y: Any,
        x_names: Optional[Sequence[str]] = None,
        y_names: Optional[Sequence[str]] = None,
    ) -> None:
        """
        Store read-only copies of the fitted quantities.

        Args:
            coefficient: Coefficient matrix (J, K).
            vcov: Sequence of covariance matrices, one per row of ``coefficient``.
            X: Design matrix (N, K) whose last column is the constant.
               A pandas DataFrame supplies ``x_names`` from its columns.
            y: Share matrix (N, J). A pandas DataFrame supplies ``y_names``.
            x_names: Optional covariate names. Defaults to x1..x{K-1}, "constant".
            y_names: Optional alternative names. Defaults to y1..yJ.

        Raises:
            DimensionMismatchError: If the shapes or name lists are inconsistent.
        """
        beta = np.array(coefficient, dtype=np.float64)
        if beta.ndim != 2:
            raise DimensionMismatchError(
                f"coefficient must be a (J, K) matrix, got shape {beta.shape}"
            )
        J, K = beta.shape
        if J < 2:
            raise DimensionMismatchError(f"coefficient must have >= 2 rows, got {J}")

        X_arr, x_columns = _as_matrix(X, "X")
        y_arr, y_columns = _as_matrix(y, "y")

        if X_arr.shape[1] != K:
            raise DimensionMismatchError(
                f"X must have {K} columns, got {X_arr.shape[1]}"
            )
        if y_arr.shape != (X_arr.shape[0], J):
            raise DimensionMismatchError(
                f"y must have shape ({X_arr.shape[0]}, {J}), got {y_arr.shape}"
            )

        if x_names is None:
            x_names = x_columns or [f"x{k}" for k in range(1, K)] + [CONSTANT_NAME]
        if y_names is None:
            y_names = y_columns or [f"y{j}" for j in range(1, J + 1)]
        if len(x_names) != K:
            raise DimensionMismatchError(
                f"x_names must have {K} entries, got {len(x_names)}"
            )
        if len(y_names) != J:
            raise DimensionMismatchError(
                f"y_names must have {J} entries, got {len(y_names)}"
            )

        self.coefficient = _readonly(beta)
        self.vcov = [_readonly(np.array(v, dtype=np.float64)) for v in vcov]
        self.X = _readonly(X_arr)
        self.y = _readonly(y_arr)
        self.x_names = [str(name) for name in x_names]
        self.y_names = [str(name) for name in y_names]

    @classmethod
    def from_estimates(
        cls,
        estimates: npt.ArrayLike,
        vcov: Sequence[npt.ArrayLike],
        X: Any,
        y: Any,
        x_names: Optional[Sequence[str]] = None,
        y_names: Optional[Sequence[str]] = None,
    ) -> "FractionalMultinomialLogit":
        """
        Build a model from the free (non-baseline) estimates.

        Args:
            estimates: Coefficients of shape (J-1, K) for alternatives 1..J-1.
            vcov: J-1 covariance matrices matching ``estimates``.
            X, y, x_names, y_names: As for the constructor.

        Returns:
            Model whose coefficient row 0 is all zeros, with a zero
            covariance matrix for the baseline.

        Raises:
            DimensionMismatchError: If ``estimates`` and ``vcov`` disagree in length.
        """
        beta_free = np.atleast_2d(np.asarray(estimates, dtype=np.float64))
        if len(vcov) != beta_free.shape[0]:
            raise DimensionMismatchError(
                f"vcov must have {beta_free.shape[0]} entries, got {len(vcov)}"
            )
        K = beta_free.shape[1]
        beta_fixed = np.zeros((1, K))
        return cls(
            np.vstack([beta_fixed, beta_free]),
            [np.zeros((K, K))] + list(vcov),
            X,
            y,
            x_names=x_names,
            y_names=y_names,
        )

    @property
    def J(self) -> int:
        """Number of alternatives, baseline included."""
        return self.coefficient.shape[0]

    @property
    def K(self) -> int:
        """Number of covariates, constant included."""
        return self.coefficient.shape[1]

    @property
    def N(self) -> int:
        return self.X.shape[0]

    @property
    def covariate_means(self) -> npt.NDArray[np.float64]:
        """Column means of the non-constant covariates, shape (K-1,)."""
        return self.X[:, :-1].mean(axis=0)

    def calculate_utilities(
        self, X: npt.NDArray[np.float64], beta: npt.NDArray[np.float64]
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """
        Computes the deterministic utility V and the exponentiated utility a.

        Args:
            X (np.ndarray): Covariate matrix of shape (N, K).
            beta (np.ndarray): Parameter matrix of shape (J, K), or a stack
                               of them with shape (..., J, K).

        Returns:
            tuple:
                - V (np.ndarray): Deterministic utilities (..., N, J).
                - a (np.ndarray): Exponentiated utilities exp(V), shifted by
                  the row max.
        """
        V = X @ np.swapaxes(beta, -1, -2)
        # Numerical stability: subtract max V per row to avoid overflow
        V_stable = V - np.max(V, axis=-1, keepdims=True)
        a = np.exp(V_stable)
        return V, a

    def _design(self, newdata: Optional[npt.ArrayLike]) -> npt.NDArray[np.float64]:
        """Append the constant to ``newdata`` (a (K-1,) vector or (n, K-1) matrix)."""
        if newdata is None:
            return self.X
        points = np.atleast_2d(np.asarray(newdata, dtype=np.float64))
        if points.ndim != 2 or points.shape[1] != self.K - 1:
            raise DimensionMismatchError(
                f"newdata must have {self.K - 1} covariates (constant excluded), "
                f"got shape {np.shape(newdata)}"
            )
        return np.hstack([points, np.ones((points.shape[0], 1))])

    def predict(
        self,
        newdata: Optional[npt.ArrayLike] = None,
        newbeta: Optional[npt.ArrayLike] = None,
    ) -> npt.NDArray[np.float64]:
        """
        Compute predicted shares.

        Args:
            newdata: None for the training design, a single covariate vector of
                     length K-1, or a matrix (n, K-1). The constant is re-supplied.
            newbeta: Optional coefficient matrix (J, K) replacing the fitted one,
                     or a stack (..., J, K) evaluated in one pass.

        Returns:
            Probabilities of shape (..., n, J); rows sum to one.

        Raises:
            DimensionMismatchError: If newdata or newbeta have the wrong shape.
        """
        X = self._design(newdata)
        if newbeta is None:
            beta = self.coefficient
        else:
            beta = np.asarray(newbeta, dtype=np.float64)
            if beta.ndim < 2 or beta.shape[-2:] != self.coefficient.shape:
                raise DimensionMismatchError(
                    f"newbeta must end in shape {self.coefficient.shape}, "
                    f"got {beta.shape}"
                )
        _, a = self.calculate_utilities(X, beta)
        return a / np.sum(a, axis=-1, keepdims=True)

    def effects(self, **kwargs: Any) -> Any:
        """Average partial effects of the covariates. See :func:`fmlogit.effects`."""
        from .margins import effects

        return effects(self, **kwargs)
