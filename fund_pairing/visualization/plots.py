"""
Plotting Module for Fund Pairing
=================================

Visualizes a PairingReport on the risk-return plane:
- The minimum variance mix of the target with each candidate, joined in
  rank order
- The best candidate's mix
- The current portfolio (target fund only)
- The projected portfolio after investing the new cash
- Optionally, every long-only mix of the target and its best partner

Values are plotted in the units of the input data (no percentage scaling),
since the input may be returns or prices.
"""

import math
from typing import Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from fund_pairing.core.optimizer import PairOptimizer
from fund_pairing.core.pipeline import PairingReport


def plot_pairing_frontier(
    report: PairingReport,
    show_curve: bool = True,
    n_curve_points: int = 50,
    annotate: bool = True,
    figsize: Tuple[int, int] = (12, 8),
    save_path: Optional[str] = None,
    title: Optional[str] = None
) -> Figure:
    """
    Plot candidate mixes, the best mix, and the current and projected portfolios.

    Args:
        report: Result of analyze_target()
        show_curve: If True, draw every long-only mix of target and best partner
        n_curve_points: Number of points on that curve
        annotate: If True, label each candidate point with its fund name
        figsize: Figure size (width, height)
        save_path: If provided, save the figure to this path
        title: Plot title (default names the target fund)

    Returns:
        matplotlib Figure object
    """
    fig, ax = plt.subplots(figsize=figsize)
    best = report.best

    risks = np.array([r.portfolio_risk for r in report.candidates])
    returns = np.array([r.portfolio_return for r in report.candidates])

    ax.plot(risks, returns, 'b-o', linewidth=1.5, markersize=5,
            label='Candidate Mixes (by rank)', zorder=2)

    if annotate:
        for r in report.candidates:
            ax.annotate(r.candidate, r.point,
                        xytext=(5, 5), textcoords='offset points', fontsize=9)

    if show_curve:
        curve_returns, curve_risks, _ = PairOptimizer().combination_curve(
            report.target, best.candidate, report.moments, n_curve_points
        )
        ax.plot(curve_risks, curve_returns, color='gray', linestyle='--', linewidth=1,
                label=f'{report.target} / {best.candidate} Mixes', zorder=1)

    sharpe_label = 'n/a' if math.isnan(best.sharpe) else f'{best.sharpe:.3f}'
    ax.scatter([best.portfolio_risk], [best.portfolio_return],
               c='red', s=120, edgecolors='black',
               label=f'Max Sharpe Ratio: {best.candidate} (Sharpe={sharpe_label})', zorder=5)

    ax.scatter([report.current_risk], [report.current_return],
               c='blue', s=120, edgecolors='black',
               label=f'Current Portfolio (100% {report.target})', zorder=5)

    projected_risk, projected_return = report.projected_point
    ax.scatter([projected_risk], [projected_return],
               c='green', s=120, edgecolors='black',
               label='New Portfolio (approximate)', zorder=5)

    ax.set_xlabel('Risk (Standard Deviation)', fontsize=12)
    ax.set_ylabel('Expected Return', fontsize=12)
    ax.set_title(title or f'Two-Fund Combinations for {report.target}',
                 fontsize=14, fontweight='bold')
    ax.legend(loc='best', fontsize=10)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_candidate_weights(
    report: PairingReport,
    figsize: Tuple[int, int] = (10, 6),
    save_path: Optional[str] = None
) -> Figure:
    """
    Stacked bar chart of the target/candidate weights for each candidate.

    Args:
        report: Result of analyze_target()
        figsize: Figure size
        save_path: Optional path to save figure

    Returns:
        matplotlib Figure object
    """
    fig, ax = plt.subplots(figsize=figsize)

    names = [r.candidate for r in report.candidates]
    w_target = np.array([r.weight_target for r in report.candidates]) * 100
    w_candidate = np.array([r.weight_candidate for r in report.candidates]) * 100

    ax.bar(names, w_target, color='steelblue', edgecolor='black', label=report.target)
    bars = ax.bar(names, w_candidate, bottom=w_target, color='orange',
                  edgecolor='black', label='Candidate')

    for bar, w in zip(bars, w_target):
        ax.annotate(f'{w:.1f}%',
                    xy=(bar.get_x() + bar.get_width() / 2, w),
                    xytext=(0, -12), textcoords='offset points',
                    ha='center', fontsize=9, fontweight='bold')

    ax.set_xlabel('Candidate Fund (ranked)', fontsize=12)
    ax.set_ylabel('Weight %', fontsize=12)
    ax.set_ylim(0, 100)
    ax.set_title(f'Minimum Variance Weights with {report.target}',
                 fontsize=14, fontweight='bold')
    ax.legend(fontsize=10)
    ax.grid(True, axis='y', alpha=0.3)
    plt.setp(ax.get_xticklabels(), rotation=45, ha='right')

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig
