"""
Example: Load a Fitted Model from CSV and Compute Partial Effects

This example demonstrates:
1. Saving a design matrix, shares and estimates to CSV files
2. Loading them back with pandas, keeping column names
3. Building a fitted model from the loaded estimates
4. Computing labelled effects and z-tables
"""

import os

import numpy as np
import pandas as pd

from fmlogit import FractionalMultinomialLogit, simulate_data


def save_model_to_csv(X, y, estimates, coef_se, filepath_prefix="fmlogit"):
    """
    Save data and estimates to CSV files.

    Args:
        X: Design matrix (N, K), last column the constant
        y: Share matrix (N, J)
        estimates: Free coefficients (J-1, K)
        coef_se: Standard errors of the free coefficients (J-1, K)
        filepath_prefix: Prefix for output files
    """
    K = X.shape[1]
    J = y.shape[1]
    x_names = ["income", "age", "urban", "size"][:K - 1] + ["constant"]
    y_names = ["food", "housing", "transport", "other"][:J]

    pd.DataFrame(X, columns=x_names).to_csv(f"{filepath_prefix}_X.csv", index=False)
    pd.DataFrame(y, columns=y_names).to_csv(f"{filepath_prefix}_y.csv", index=False)

    # Estimates in long format: one row per (alternative, covariate)
    rows = []
    for j in range(J - 1):
        for k in range(K):
            rows.append(
                {
                    "alternative": y_names[j + 1],
                    "covariate": x_names[k],
                    "estimate": estimates[j, k],
                    "std_error": coef_se[j, k],
                }
            )
    pd.DataFrame(rows).to_csv(f"{filepath_prefix}_estimates.csv", index=False)

    print(f"Data saved with prefix {filepath_prefix}_")


def load_model_from_csv(filepath_prefix="fmlogit"):
    """
    Load data and estimates from CSV files.

    Args:
        filepath_prefix: Prefix for input files

    Returns:
        FractionalMultinomialLogit: Model with names taken from the CSV headers
    """
    X = pd.read_csv(f"{filepath_prefix}_X.csv")
    y = pd.read_csv(f"{filepath_prefix}_y.csv")
    estimates_df = pd.read_csv(f"{filepath_prefix}_estimates.csv")

    # Pivot back to (J-1, K), keeping the CSV column and alternative order
    wide = estimates_df.pivot(index="alternative", columns="covariate")
    alternatives = list(y.columns[1:])
    estimates = wide["estimate"].loc[alternatives, X.columns].to_numpy()
    coef_se = wide["std_error"].loc[alternatives, X.columns].to_numpy()

    vcov = [np.diag(se**2) for se in coef_se]
    model = FractionalMultinomialLogit.from_estimates(estimates, vcov, X, y)

    print(f"Model loaded: N={model.N}, J={model.J}, K={model.K}")
    return model


def main():
    """Main example workflow."""
    print("=" * 80)
    print("Example: CSV Data Loading for Partial Effects")
    print("=" * 80)

    print("\n1. Generating synthetic data...")
    N, J, K = 500, 4, 4
    X, y, true_beta = simulate_data(N, J, K, seed=42)
    X[:, 2] = (X[:, 2] > 0).astype(float)  # a binary covariate for discrete effects
    coef_se = np.full((J - 1, K), 0.08)

    print("\n2. Saving data to CSV files...")
    save_model_to_csv(X, y, true_beta, coef_se, filepath_prefix="example_fmlogit")

    print("\n3. Loading model from CSV files...")
    model = load_model_from_csv(filepath_prefix="example_fmlogit")
    assert np.allclose(model.X, X)
    print(f"Covariates: {model.x_names}")
    print(f"Alternatives: {model.y_names}")

    print("\n4. Marginal effects of income and age at the mean...")
    marginal = model.effects(varlist=["income", "age"], se=True, R=500, seed=7)
    for name, table in marginal.ztable.items():
        print(f"\n{name}\n{table.round(4)}")

    print("\n5. Average discrete effect of urban...")
    discrete = model.effects(effect="discrete", marg_type="aveacr", varlist="urban")
    print(discrete.expl)
    print(discrete.effects.round(4))

    print("\n" + "=" * 80)
    print("Example completed successfully!")
    print("=" * 80)

    for suffix in ("X", "y", "estimates"):
        path = f"example_fmlogit_{suffix}.csv"
        if os.path.exists(path):
            os.remove(path)
    print("\nTemporary CSV files cleaned up.")


if __name__ == "__main__":
    main()
