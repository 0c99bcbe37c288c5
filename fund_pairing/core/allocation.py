"""
Allocation Projector
====================

Splits a new cash amount between the target fund and its best partner so
the combined holding moves toward the minimum variance mix, then estimates
where the resulting portfolio sits on the risk-return plane.

Policies:
- Only new cash is allocated. Existing target holdings are never sold, so
  the amount added to the target is floored at zero.
- The investor is assumed to hold none of the candidate fund yet.
- Projected risk is the WEIGHTED SUM OF STANDARD DEVIATIONS of the two
  funds, not the covariance-based portfolio risk used when ranking. It is a
  quick upper-bound style estimate for the post-investment portfolio and is
  kept this way so results stay comparable with earlier reports.
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

from fund_pairing.core.errors import InvalidInput
from fund_pairing.core.moments import MomentTable
from fund_pairing.core.optimizer import CandidateResult, sharpe_ratio

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Allocation:
    """How to invest new cash, and the portfolio it leads to."""

    additional_target: float
    additional_candidate: float
    final_weight_target: float
    final_weight_candidate: float
    projected_return: float
    projected_risk: float
    projected_sharpe: float

    @property
    def point(self) -> Tuple[float, float]:
        """(risk, return) of the projected portfolio, for plotting."""
        return self.projected_risk, self.projected_return


def validate_amount(value, name: str) -> float:
    """
    Convert a user-entered amount to float.

    Raises:
        InvalidInput: If the value is missing, non-numeric, non-finite or
            negative
    """
    if value is None or isinstance(value, bool):
        raise InvalidInput(f"{name} must be a number, got {value!r}")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(amount):
        raise InvalidInput(f"{name} must be a finite number, got {value!r}")
    if amount < 0:
        raise InvalidInput(f"{name} cannot be negative, got {amount}")
    return amount


class AllocationProjector:
    """
    Projects the effect of investing new cash in a target/candidate pair.

    Example:
        >>> projector = AllocationProjector()
        >>> alloc = projector.project(100000, 50000, best, 0.01, 0.0004, 0.006, 0.0001)
        >>> alloc.additional_target   # with best.weight_target == 0.7
        5000.0
    """

    def project(
        self,
        current_holding: float,
        new_cash: float,
        best: CandidateResult,
        target_mean: float,
        target_variance: float,
        candidate_mean: float,
        candidate_variance: float
    ) -> Allocation:
        """
        Split new cash and project the resulting portfolio.

        Args:
            current_holding: Amount already invested in the target fund
            new_cash: Amount of new cash to invest
            best: Top-ranked CandidateResult (supplies the target weight)
            target_mean: Mean return of the target fund
            target_variance: Variance of the target fund
            candidate_mean: Mean return of the candidate fund
            candidate_variance: Variance of the candidate fund

        Returns:
            Allocation with the suggested split and projected statistics
        """
        current_holding = validate_amount(current_holding, "Current holding")
        new_cash = validate_amount(new_cash, "Additional funds")

        total = current_holding + new_cash
        ideal_target_value = total * best.weight_target

        additional_target = max(0.0, ideal_target_value - current_holding)
        # Not clamped: with weight_target in [0, 1] this is only ever
        # negative by float rounding
        additional_candidate = new_cash - additional_target

        final_target_value = current_holding + additional_target
        final_candidate_value = additional_candidate
        final_total = final_target_value + final_candidate_value

        if final_total > 0:
            final_weight_target = final_target_value / final_total
            final_weight_candidate = final_candidate_value / final_total
        else:
            final_weight_target = 0.0
            final_weight_candidate = 0.0

        projected_return = (final_weight_target * target_mean
                            + final_weight_candidate * candidate_mean)
        projected_risk = (final_weight_target * math.sqrt(target_variance)
                          + final_weight_candidate * math.sqrt(candidate_variance))

        logger.debug(
            "Allocating %.2f to target and %.2f to %s",
            additional_target, additional_candidate, best.candidate
        )

        return Allocation(
            additional_target=additional_target,
            additional_candidate=additional_candidate,
            final_weight_target=final_weight_target,
            final_weight_candidate=final_weight_candidate,
            projected_return=projected_return,
            projected_risk=projected_risk,
            projected_sharpe=sharpe_ratio(projected_return, projected_risk),
        )

    def project_from_moments(
        self,
        current_holding: float,
        new_cash: float,
        best: CandidateResult,
        moments: MomentTable,
        target: str
    ) -> Allocation:
        """Same as project(), reading both funds' statistics from a MomentTable."""
        return self.project(
            current_holding,
            new_cash,
            best,
            target_mean=moments.mean(target),
            target_variance=moments.variance(target),
            candidate_mean=moments.mean(best.candidate),
            candidate_variance=moments.variance(best.candidate),
        )
