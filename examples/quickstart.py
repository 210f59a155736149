"""Minimal quickstart for fmlogit partial effects."""

from __future__ import annotations

from fmlogit import simulate_model


def main() -> None:
    # Simulated model at known coefficients
    model = simulate_model(N=2000, J=3, K=4, coef_se=0.05, seed=42)

    # - model.X: (N, K) design matrix, last column is the constant.
    # - model.coefficient: (J, K), row 0 is the baseline (all zeros).
    # - model.vcov: one (K, K) covariance matrix per row of the coefficient matrix.

    # Marginal effects at the mean with Krinsky-Robb standard errors
    result = model.effects(
        effect="marginal", marg_type="atmean", se=True, R=500, seed=1
    )
    print(result.expl)
    for name, table in result.ztable.items():
        print(f"\n{name}\n{table.round(4)}")

    # Average discrete effects for a subset of variables
    discrete = model.effects(effect="discrete", marg_type="aveacr", varlist=["x1"])
    print(f"\n{discrete.expl}\n{discrete.effects.round(4)}")


if __name__ == "__main__":
    main()
