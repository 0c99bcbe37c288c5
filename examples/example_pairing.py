"""
Fund Pairing Walkthrough
Three funds of monthly returns, target: Global Equity

Shows each stage of the pipeline separately, then the one-call version.
"""

from pathlib import Path

import matplotlib.pyplot as plt

from fund_pairing import (
    AllocationProjector,
    MomentEstimator,
    PairOptimizer,
    SeriesStore,
    analyze_target,
    generate_sample_series,
)
from fund_pairing.visualization import plot_pairing_frontier

# Get the project root directory (parent of examples/)
PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_DIR = PROJECT_ROOT / 'output'
OUTPUT_DIR.mkdir(exist_ok=True)

TARGET = 'Global Equity'
CURRENT_HOLDING = 100000
EXTRA_FUNDS = 50000

store = SeriesStore.from_frame(generate_sample_series(n_funds=3, n_periods=60))
print(f"Funds: {store.fund_names}")

# === Step by step ===
moments = MomentEstimator().estimate(store.samples())
for name in moments.fund_names:
    print(f"{name:<16} mean={moments.mean(name):.5f}  std={moments.std(name):.5f}")

ranked = PairOptimizer().optimize(TARGET, moments)
for r in ranked:
    print(f"{r.candidate:<16} w_target={r.weight_target:.2%}  "
          f"return={r.portfolio_return:.5f}  risk={r.portfolio_risk:.5f}  sharpe={r.sharpe:.4f}")

best = ranked[0]
allocation = AllocationProjector().project_from_moments(
    CURRENT_HOLDING, EXTRA_FUNDS, best, moments, TARGET
)
print(f"\nPut {allocation.additional_target:,.0f} into {TARGET} "
      f"and {allocation.additional_candidate:,.0f} into {best.candidate}")

# === One call ===
report = analyze_target(store, TARGET, CURRENT_HOLDING, EXTRA_FUNDS)
print(report.summary_report())

plot_pairing_frontier(report, save_path=str(OUTPUT_DIR / 'example_pairing.png'))
plt.show()
