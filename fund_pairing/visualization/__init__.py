"""Visualization modules for fund pairing analysis."""

from fund_pairing.visualization.plots import (
    plot_candidate_weights,
    plot_pairing_frontier
)

__all__ = [
    "plot_candidate_weights",
    "plot_pairing_frontier",
]
