"""
Pair Optimizer - Two-Fund Minimum Variance Portfolios
======================================================

For a target fund T and every candidate fund C, this module finds the
long-only mix of T and C with the lowest variance and ranks the candidates
by the Sharpe ratio of that mix.

Theory Background:
------------------
For two assets the minimum variance weight has a closed form. With
variances sT^2, sC^2 and covariance sTC, the portfolio variance

    var(w) = w^2 * sT^2 + (1-w)^2 * sC^2 + 2 * w * (1-w) * sTC

is a parabola in w whose minimum is at

    w* = (sC^2 - sTC) / (sT^2 + sC^2 - 2 * sTC)

A w* outside [0, 1] would mean shorting one fund to lever the other. Only
long-only mixes are allowed, so w* is clipped to the nearest end of
[0, 1]. When the denominator is zero (the two funds move identically) the
weight on the target falls back to 0.

The ranking signal is a Sharpe proxy: return / risk with no risk-free rate.
A mix with zero risk has no defined ratio; it gets NaN and is ranked after
every candidate with a numeric ratio.
"""

import logging
import math
import warnings
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from fund_pairing.core.errors import InvalidTarget
from fund_pairing.core.moments import MomentTable

logger = logging.getLogger(__name__)

# Relative size below which a mix variance counts as exactly zero
HEDGE_TOLERANCE = 1e-12


@dataclass(frozen=True)
class CandidateResult:
    """Minimum variance mix of the target fund with one candidate fund."""

    candidate: str
    weight_target: float
    weight_candidate: float
    portfolio_return: float
    portfolio_risk: float
    sharpe: float

    @property
    def point(self) -> Tuple[float, float]:
        """(risk, return) of the mix, for plotting."""
        return self.portfolio_risk, self.portfolio_return

    @property
    def has_sharpe(self) -> bool:
        return not math.isnan(self.sharpe)


def sharpe_ratio(portfolio_return: float, portfolio_risk: float) -> float:
    """
    Return / risk, or NaN when risk is zero.

    Zero risk is a legitimate degenerate case, not an error, so no
    exception is raised.
    """
    if portfolio_risk == 0:
        return float('nan')
    return portfolio_return / portfolio_risk


def min_variance_weight(var_target: float, var_candidate: float, cov: float) -> float:
    """
    Long-only minimum variance weight on the target fund.

    Args:
        var_target: Variance of the target fund
        var_candidate: Variance of the candidate fund
        cov: Covariance between the two

    Returns:
        Weight on the target, clipped to [0, 1]; 0 if the denominator is 0
    """
    denominator = var_target + var_candidate - 2 * cov
    if denominator == 0:
        weight = 0.0
    else:
        weight = (var_candidate - cov) / denominator
    return float(min(1.0, max(0.0, weight)))


def pair_stats(
    weight_target: float,
    mean_target: float,
    mean_candidate: float,
    var_target: float,
    var_candidate: float,
    cov: float
) -> Tuple[float, float]:
    """
    Return and risk of a two-fund mix.

    Formula:
        mu_p = w * mu_T + (1-w) * mu_C
        var_p = w^2 * sT^2 + (1-w)^2 * sC^2 + 2 * w * (1-w) * sTC

    Returns:
        Tuple of (return, risk); risk is never negative. A variance within
        HEDGE_TOLERANCE of zero, relative to the size of its terms, is
        treated as exactly zero so a perfect hedge always has zero risk.
    """
    weight_candidate = 1 - weight_target
    ret = weight_target * mean_target + weight_candidate * mean_candidate
    terms = (weight_target ** 2 * var_target,
             weight_candidate ** 2 * var_candidate,
             2 * weight_target * weight_candidate * cov)
    var = sum(terms)

    # A perfectly hedged mix cancels to float noise of either sign
    tolerance = HEDGE_TOLERANCE * sum(abs(t) for t in terms)
    if abs(var) <= tolerance:
        var = 0.0
    elif var < 0:
        warnings.warn(
            f"Two-fund variance is negative ({var:.3g}); the covariance is not "
            f"consistent with the variances, risk is reported as 0"
        )
        var = 0.0
    return float(ret), float(math.sqrt(var))


def rank_candidates(results: Iterable[CandidateResult]) -> List[CandidateResult]:
    """
    Sort candidates by Sharpe ratio, best first.

    The sort is stable: ties keep their input order, and NaN ratios come
    after all numeric ones in their input order.
    """
    return sorted(
        results,
        key=lambda r: (not r.has_sharpe, -r.sharpe if r.has_sharpe else 0.0)
    )


class PairOptimizer:
    """
    Finds the best diversification partner for a target fund.

    Example:
        >>> moments = MomentEstimator().estimate({'A': [1, 2, 3, 4], 'B': [4, 3, 2, 1]})
        >>> [best] = PairOptimizer().optimize('A', moments)
        >>> best.weight_target
        0.5
    """

    def evaluate(self, target: str, candidate: str, moments: MomentTable) -> CandidateResult:
        """Minimum variance mix of target with a single candidate."""
        var_t = moments.variance(target)
        var_c = moments.variance(candidate)
        cov = moments.covariance(target, candidate)

        w_t = min_variance_weight(var_t, var_c, cov)
        ret, risk = pair_stats(
            w_t, moments.mean(target), moments.mean(candidate), var_t, var_c, cov
        )
        return CandidateResult(
            candidate=candidate,
            weight_target=w_t,
            weight_candidate=1 - w_t,
            portfolio_return=ret,
            portfolio_risk=risk,
            sharpe=sharpe_ratio(ret, risk),
        )

    def optimize(
        self,
        target: str,
        moments: MomentTable,
        candidates: Optional[Iterable[str]] = None
    ) -> List[CandidateResult]:
        """
        Evaluate and rank every candidate against the target.

        Args:
            target: Name of the fund already held
            moments: Moment estimates covering the target and candidates
            candidates: Funds to consider (default: every other fund).
                They are evaluated in table order; the target is skipped.

        Returns:
            CandidateResults sorted by Sharpe ratio, best first. Empty when
            there is no fund other than the target.

        Raises:
            InvalidTarget: If the target or a candidate is not in the table
        """
        if target not in moments:
            raise InvalidTarget(target, moments.fund_names)

        if candidates is None:
            pool = [name for name in moments.fund_names if name != target]
        else:
            wanted = set(candidates)
            for name in wanted:
                if name not in moments:
                    raise InvalidTarget(name, moments.fund_names)
            pool = [name for name in moments.fund_names if name in wanted and name != target]

        results = [self.evaluate(target, name, moments) for name in pool]
        ranked = rank_candidates(results)

        if ranked:
            logger.debug(
                "Best partner for %s: %s (Sharpe %.4f)",
                target, ranked[0].candidate, ranked[0].sharpe
            )
        return ranked

    def combination_curve(
        self,
        target: str,
        candidate: str,
        moments: MomentTable,
        n_points: int = 50
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Risk and return of every long-only mix of two funds.

        Traces w from 0 (all candidate) to 1 (all target), which is the
        two-asset frontier the minimum variance mix lies on.

        Returns:
            Tuple of (returns, risks, weights_on_target)
        """
        var_t = moments.variance(target)
        var_c = moments.variance(candidate)
        cov = moments.covariance(target, candidate)
        mean_t = moments.mean(target)
        mean_c = moments.mean(candidate)

        weights = np.linspace(0.0, 1.0, n_points)
        returns = []
        risks = []
        for w in weights:
            ret, risk = pair_stats(w, mean_t, mean_c, var_t, var_c, cov)
            returns.append(ret)
            risks.append(risk)

        return np.array(returns), np.array(risks), weights
