"""
Basic Example: Partial Effects of a Fractional Multinomial Logit Model

This example demonstrates:
1. Building a fitted model from known estimates and covariances
2. Marginal effects at the mean (MEM) versus average marginal effects (AME)
3. Discrete effects of a binary covariate
4. Krinsky-Robb standard errors and z-tests
"""

import numpy as np

from fmlogit import FractionalMultinomialLogit, simulate_data


def main():
    # Settings
    N = 2000  # Number of observations
    J = 3  # Number of alternatives (baseline included)
    K = 4  # Number of covariates (constant included)

    print(f"Simulating Data (N={N}, J={J}, K={K})...")
    true_beta = np.array(
        [
            [0.8, -0.4, 0.6, 0.2],
            [-0.5, 0.3, 1.0, -0.1],
        ]
    )
    X, y, _ = simulate_data(N, J, K, true_beta=true_beta, seed=42)
    X[:, 2] = (X[:, 2] > 0).astype(float)  # make x3 binary

    # Estimates and covariances would normally come from the fitting routine
    vcov = [np.diag([0.04, 0.03, 0.05, 0.02]) ** 2 for _ in range(J - 1)]
    model = FractionalMultinomialLogit.from_estimates(
        true_beta, vcov, X, y, y_names=["base", "alt_a", "alt_b"]
    )

    print("\nMarginal effect at the mean (MEM):")
    mem = model.effects(effect="marginal", marg_type="atmean")
    print(mem.effects.round(4))

    print("\nAverage marginal effect (AME):")
    ame = model.effects(effect="marginal", marg_type="aveacr")
    print(ame.effects.round(4))
    print("Effects sum to zero across alternatives:", np.allclose(ame.effects.sum(), 0))

    print("\nDiscrete effect of x3 at the mean (0 -> 1):")
    dem = model.effects(effect="discrete", varlist="x3", se=True, R=1000, seed=3)
    print(dem.expl)
    print(dem.ztable["x3"].round(4))

    print("\nMarginal effect of x1 at a chosen point:")
    point = np.array([1.0, 0.0, 1.0])
    at_point = model.effects(varlist="x1", at=point)
    print(at_point.effects.round(4))


if __name__ == "__main__":
    main()
