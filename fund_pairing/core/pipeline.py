"""
Pairing pipeline: SeriesStore -> moments -> ranked candidates -> allocation.

analyze_target() is the single entry point the CLI (or any other front end)
calls. It validates every user input before doing numeric work, so a bad
target or amount never produces partial results.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from fund_pairing.core.allocation import Allocation, AllocationProjector, validate_amount
from fund_pairing.core.config import AnalysisConfig
from fund_pairing.core.errors import InvalidTarget, NoCandidateAvailable
from fund_pairing.core.loader import SeriesStore
from fund_pairing.core.moments import MomentEstimator, MomentTable
from fund_pairing.core.optimizer import CandidateResult, PairOptimizer, sharpe_ratio

logger = logging.getLogger(__name__)


def _fmt(value: float, digits: int = 4) -> str:
    return 'nan' if math.isnan(value) else f"{value:.{digits}f}"


@dataclass(frozen=True)
class PairingReport:
    """Everything a front end needs to present one pairing analysis."""

    target: str
    current_holding: float
    extra_funds: float
    candidates: List[CandidateResult]
    moments: MomentTable
    current_return: float
    current_risk: float
    current_sharpe: float
    allocation: Allocation

    @property
    def best(self) -> CandidateResult:
        return self.candidates[0]

    @property
    def current_point(self) -> Tuple[float, float]:
        """(risk, return) of holding the target fund alone."""
        return self.current_risk, self.current_return

    @property
    def projected_point(self) -> Tuple[float, float]:
        return self.allocation.point

    def summary_report(self) -> str:
        """
        Generate a plain-text summary of the analysis.

        Returns:
            Formatted string report
        """
        best = self.best
        alloc = self.allocation

        lines = []
        lines.append("=" * 70)
        lines.append("FUND PAIRING SUMMARY REPORT")
        lines.append("=" * 70)
        lines.append(f"Target fund: {self.target}")
        lines.append(f"Best partner fund: {best.candidate}")
        lines.append(f"Historical optimal weight (target): {best.weight_target*100:.2f}%")

        lines.append("\n--- Candidate Ranking ---")
        lines.append(f"{'Candidate':<20} {'W Target':>10} {'Return':>12} {'Risk':>12} {'Sharpe':>10}")
        lines.append("-" * 68)
        for r in self.candidates:
            lines.append(
                f"{r.candidate:<20} {r.weight_target*100:>9.2f}% "
                f"{r.portfolio_return:>12.6f} {r.portfolio_risk:>12.6f} {_fmt(r.sharpe):>10}"
            )

        lines.append("\n--- Current Portfolio ---")
        lines.append(f"Holding in {self.target}: {self.current_holding:,.0f} (100% target fund)")
        lines.append(f"Expected Return: {_fmt(self.current_return)}")
        lines.append(f"Risk: {_fmt(self.current_risk)}")
        lines.append(f"Sharpe Ratio: {_fmt(self.current_sharpe)}")

        lines.append("\n--- Suggested Investment ---")
        lines.append(f"Additional funds: {self.extra_funds:,.0f}")
        lines.append(f"Invest in {self.target}: {alloc.additional_target:,.0f}")
        lines.append(f"Invest in {best.candidate}: {alloc.additional_candidate:,.0f}")

        lines.append("\n--- Portfolio After Investment (approximate) ---")
        lines.append(
            f"Weights: {self.target} {alloc.final_weight_target*100:.2f}%, "
            f"{best.candidate} {alloc.final_weight_candidate*100:.2f}%"
        )
        lines.append(f"Expected Return: {_fmt(alloc.projected_return)}")
        lines.append(f"Risk: {_fmt(alloc.projected_risk)}")
        lines.append(f"Sharpe Ratio: {_fmt(alloc.projected_sharpe)}")
        lines.append("\n" + "=" * 70)

        return "\n".join(lines)


def analyze_target(
    store: SeriesStore,
    target: str,
    current_holding,
    extra_funds,
    config: Optional[AnalysisConfig] = None
) -> PairingReport:
    """
    Find the best partner for a target fund and split new cash between them.

    Args:
        store: Loaded fund table
        target: Fund already held
        current_holding: Amount currently invested in the target
        extra_funds: New cash to invest
        config: Analysis settings (default: AnalysisConfig())

    Returns:
        PairingReport

    Raises:
        InvalidInput: If an amount is missing, non-numeric or negative
        InvalidTarget: If the target is not in the store
        EmptySample: If a fund has no numeric values
        NoCandidateAvailable: If the store holds no fund besides the target
    """
    if config is None:
        config = AnalysisConfig()

    current_holding = validate_amount(current_holding, "Current holding")
    extra_funds = validate_amount(extra_funds, "Additional funds")
    if target not in store:
        raise InvalidTarget(target, store.fund_names)

    table = store.columns() if config.alignment == 'date' else store.samples()
    moments = MomentEstimator(config.alignment).estimate(table)

    candidates = PairOptimizer().optimize(target, moments)
    if not candidates:
        raise NoCandidateAvailable(target)
    best = candidates[0]

    allocation = AllocationProjector().project_from_moments(
        current_holding, extra_funds, best, moments, target
    )

    current_return = moments.mean(target)
    current_risk = moments.std(target)

    logger.info(
        "Target %s: best partner %s at %.2f%% target weight",
        target, best.candidate, best.weight_target * 100
    )

    return PairingReport(
        target=target,
        current_holding=current_holding,
        extra_funds=extra_funds,
        candidates=candidates,
        moments=moments,
        current_return=current_return,
        current_risk=current_risk,
        current_sharpe=sharpe_ratio(current_return, current_risk),
        allocation=allocation,
    )
