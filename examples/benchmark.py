"""
Benchmark script for partial effects and Krinsky-Robb standard errors

Tests speed across problem sizes, effect kinds and replication counts.
"""

import time

import numpy as np

from fmlogit import effects, simulate_model


def benchmark_effects(N, J, K, effect="marginal", R=1000, seed=42):
    """
    Benchmark a single effects run.

    Returns:
        dict: Contains timing and summary information
    """
    # Simulate data
    t0 = time.time()
    model = simulate_model(N, J, K, seed=seed)
    sim_time = time.time() - t0

    # Point estimates at the mean
    t0 = time.time()
    atmean = effects(model, effect=effect, marg_type="atmean")
    atmean_time = time.time() - t0

    # Point estimates averaged across observations
    t0 = time.time()
    aveacr = effects(model, effect=effect, marg_type="aveacr")
    aveacr_time = time.time() - t0

    # Krinsky-Robb standard errors
    t0 = time.time()
    with_se = effects(model, effect=effect, se=True, R=R, seed=seed)
    se_time = time.time() - t0

    gap = np.abs(atmean.effects.to_numpy() - aveacr.effects.to_numpy())

    return {
        "N": N,
        "J": J,
        "K": K,
        "effect": effect,
        "R": with_se.R,
        "sim_time": sim_time,
        "atmean_time": atmean_time,
        "aveacr_time": aveacr_time,
        "se_time": se_time,
        "total_time": sim_time + atmean_time + aveacr_time + se_time,
        "max_mem_ame_gap": float(gap.max()),
        "mean_se": float(with_se.se.to_numpy().mean()),
    }


def print_results(results):
    """Pretty print benchmark results."""
    print("\n" + "=" * 96)
    print(
        f"{'N':<7} {'J':<4} {'K':<4} {'Effect':<10} {'R':<7} "
        f"{'MEM(s)':<8} {'AME(s)':<8} "
        f"{'SE(s)':<8} {'Total(s)':<9} {'Gap':<8} {'MeanSE':<8}"
    )
    print("=" * 96)

    for r in results:
        print(
            f"{r['N']:<7} {r['J']:<4} {r['K']:<4} {r['effect']:<10} {r['R']:<7} "
            f"{r['atmean_time']:<8.3f} {r['aveacr_time']:<8.3f} {r['se_time']:<8.3f} "
            f"{r['total_time']:<9.3f} {r['max_mem_ame_gap']:<8.4f} {r['mean_se']:<8.4f}"
        )
    print("=" * 96)


def main():
    print("Fractional Multinomial Logit Partial Effects Benchmark")
    print("=" * 96)

    problem_sizes = [
        (500, 3, 3),
        (2000, 4, 4),
        (10000, 5, 5),
    ]

    results = []

    print("\n1. Problem Size Scaling (marginal, R=1000)")
    print("-" * 96)
    for N, J, K in problem_sizes:
        print(f"Running: N={N}, J={J}, K={K}...", end=" ", flush=True)
        r = benchmark_effects(N, J, K)
        results.append(r)
        print(f"✓ ({r['se_time']:.2f}s)")

    print("\n2. Effect Kind Comparison (N=2000, J=4, K=4)")
    print("-" * 96)
    for effect in ["marginal", "discrete"]:
        print(f"Running: {effect}...", end=" ", flush=True)
        r = benchmark_effects(2000, 4, 4, effect=effect)
        results.append(r)
        print(f"✓ ({r['se_time']:.2f}s)")

    print("\n3. Replication Scaling (N=2000, J=4, K=4)")
    print("-" * 96)
    for R in [250, 1000, 4000]:
        print(f"Running: R={R}...", end=" ", flush=True)
        r = benchmark_effects(2000, 4, 4, R=R)
        results.append(r)
        print(f"✓ ({r['se_time']:.2f}s)")

    print_results(results)


if __name__ == "__main__":
    main()
