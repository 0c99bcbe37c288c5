"""Tests for the two-fund minimum variance optimizer and candidate ranking."""

import math

import numpy as np
import pytest

from fund_pairing.core.errors import InvalidTarget
from fund_pairing.core.moments import MomentEstimator, MomentTable
from fund_pairing.core.optimizer import (
    CandidateResult,
    PairOptimizer,
    min_variance_weight,
    pair_stats,
    rank_candidates,
    sharpe_ratio,
)


@pytest.fixture()
def moments():
    """Target T with three candidates whose optimal mixes are worked out by hand."""
    names = ["T", "C1", "C2", "C3"]
    means = np.array([0.01, 0.008, 0.012, 0.005])
    cov = np.array([
        [0.04, 0.00, 0.03, 0.015],
        [0.00, 0.01, 0.00, 0.000],
        [0.03, 0.00, 0.09, 0.000],
        [0.015, 0.00, 0.00, 0.010],
    ])
    return MomentTable(names, means, cov, np.full((4, 4), 60))


def _result(name, sharpe):
    return CandidateResult(name, 0.5, 0.5, 0.0, 1.0, sharpe)


# ============================================================================
# Weight, stats and ratio helpers
# ============================================================================


def test_min_variance_weight_interior_solution():
    assert min_variance_weight(0.04, 0.01, 0.0) == pytest.approx(0.2)


def test_min_variance_weight_clamps_negative_to_zero():
    # Unconstrained weight is (0.01 - 0.015) / 0.02 = -0.25
    assert min_variance_weight(0.04, 0.01, 0.015) == 0.0


def test_min_variance_weight_clamps_above_one():
    # Unconstrained weight is (0.09 - 0.05) / 0.03 = 1.33
    assert min_variance_weight(0.04, 0.09, 0.05) == 1.0


def test_min_variance_weight_zero_denominator_falls_back_to_zero():
    assert min_variance_weight(0.04, 0.04, 0.04) == 0.0


def test_pair_stats_uses_full_covariance_formula():
    ret, risk = pair_stats(0.5, 0.01, 0.02, 0.04, 0.09, 0.03)

    assert ret == pytest.approx(0.015)
    assert risk == pytest.approx(math.sqrt(0.25 * 0.04 + 0.25 * 0.09 + 2 * 0.25 * 0.03))


def test_pair_stats_floors_negative_float_noise():
    _, risk = pair_stats(0.5, 0.0, 0.0, 1.0, 1.0, -1.0000000000000002)
    assert risk == 0.0


def test_sharpe_ratio_is_nan_for_zero_risk():
    assert math.isnan(sharpe_ratio(0.05, 0.0))
    assert sharpe_ratio(0.05, 0.1) == pytest.approx(0.5)


# ============================================================================
# Ranking
# ============================================================================


def test_rank_candidates_descending_by_sharpe():
    ranked = rank_candidates([_result("a", 0.1), _result("b", 0.9), _result("c", -0.2)])
    assert [r.candidate for r in ranked] == ["b", "a", "c"]


def test_rank_candidates_puts_nan_last_in_input_order():
    nan = float("nan")
    ranked = rank_candidates([
        _result("n1", nan), _result("a", -1.0), _result("n2", nan), _result("b", 2.0),
    ])
    assert [r.candidate for r in ranked] == ["b", "a", "n1", "n2"]


def test_rank_candidates_is_stable_for_ties():
    ranked = rank_candidates([_result("first", 0.5), _result("second", 0.5), _result("top", 0.7)])
    assert [r.candidate for r in ranked] == ["top", "first", "second"]


# ============================================================================
# PairOptimizer
# ============================================================================


def test_optimize_ranks_hand_computed_candidates(moments):
    ranked = PairOptimizer().optimize("T", moments)

    assert [r.candidate for r in ranked] == ["C1", "C2", "C3"]

    best = ranked[0]
    assert best.weight_target == pytest.approx(0.2)
    assert best.weight_candidate == pytest.approx(0.8)
    assert best.portfolio_return == pytest.approx(0.0084)
    assert best.portfolio_risk == pytest.approx(math.sqrt(0.008))
    assert best.sharpe == pytest.approx(0.0084 / math.sqrt(0.008))

    c2 = ranked[1]
    assert c2.weight_target == pytest.approx(6 / 7)

    c3 = ranked[2]
    assert c3.weight_target == 0.0
    assert c3.portfolio_return == pytest.approx(0.005)
    assert c3.portfolio_risk == pytest.approx(0.1)


def test_optimize_weights_are_feasible(moments):
    for r in PairOptimizer().optimize("T", moments):
        assert 0.0 <= r.weight_target <= 1.0
        assert r.weight_target + r.weight_candidate == pytest.approx(1.0)
        assert r.portfolio_risk >= 0


def test_optimize_never_pairs_target_with_itself(moments):
    ranked = PairOptimizer().optimize("C2", moments)
    assert "C2" not in [r.candidate for r in ranked]
    assert len(ranked) == 3


def test_optimize_restricts_to_given_candidates(moments):
    ranked = PairOptimizer().optimize("T", moments, candidates={"C3", "C2", "T"})
    assert [r.candidate for r in ranked] == ["C2", "C3"]


def test_optimize_unknown_target_raises(moments):
    with pytest.raises(InvalidTarget):
        PairOptimizer().optimize("Nope", moments)


def test_optimize_unknown_candidate_raises(moments):
    with pytest.raises(InvalidTarget):
        PairOptimizer().optimize("T", moments, candidates=["C1", "Nope"])


def test_mirror_funds_hedge_to_zero_risk():
    moments = MomentEstimator().estimate({"A": [1, 2, 3, 4], "B": [4, 3, 2, 1]})
    [result] = PairOptimizer().optimize("A", moments)

    assert result.candidate == "B"
    assert result.weight_target == pytest.approx(0.5)
    assert result.portfolio_return == pytest.approx(2.5)
    assert result.portfolio_risk == 0.0
    assert math.isnan(result.sharpe)
    assert not result.has_sharpe


def test_identical_funds_use_zero_denominator_fallback():
    moments = MomentEstimator().estimate({"A": [1.0, 2.0, 3.0], "B": [1.0, 2.0, 3.0]})
    [result] = PairOptimizer().optimize("A", moments)

    assert result.weight_target == 0.0
    assert result.weight_candidate == 1.0
    assert result.portfolio_risk == pytest.approx(moments.std("B"))


def test_single_fund_gives_no_candidates():
    moments = MomentEstimator().estimate({"Only": [0.01, 0.02, 0.03]})
    assert PairOptimizer().optimize("Only", moments) == []


def test_combination_curve_spans_both_funds(moments):
    returns, risks, weights = PairOptimizer().combination_curve("T", "C1", moments, n_points=11)

    assert len(returns) == len(risks) == len(weights) == 11
    # w = 0 is all candidate, w = 1 is all target
    assert returns[0] == pytest.approx(0.008)
    assert risks[0] == pytest.approx(0.1)
    assert returns[-1] == pytest.approx(0.01)
    assert risks[-1] == pytest.approx(0.2)
    # w = 0.2 is the minimum variance mix
    assert risks.min() == pytest.approx(math.sqrt(0.008))
    assert weights[np.argmin(risks)] == pytest.approx(0.2)


@pytest.mark.parametrize("scale", [1.0, 0.1, 0.07, 0.03, 0.013, 0.01, 1e-4, 250.0])
def test_mirror_funds_hedge_to_zero_risk_at_any_scale(scale):
    moments = MomentEstimator().estimate({
        "A": [scale * v for v in (1, 2, 3, 4)],
        "B": [scale * v for v in (4, 3, 2, 1)],
    })
    [result] = PairOptimizer().optimize("A", moments)

    assert result.weight_target == pytest.approx(0.5)
    assert result.portfolio_risk == 0.0
    assert math.isnan(result.sharpe)


def test_pair_stats_zeroes_positive_float_noise():
    _, risk = pair_stats(0.5, 0.0, 0.0, 1.0, 1.0, -0.9999999999999998)
    assert risk == 0.0


def test_inconsistent_covariance_warns_instead_of_passing_as_riskless():
    # Only two shared rows, so cov(A, B) = -1 exceeds sqrt(0.25 * 1)
    table = {
        "A": [-1.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
        "B": [1.0, -1.0] + [np.nan] * 6,
    }
    moments = MomentEstimator("date").estimate(table)
    assert moments.covariance("A", "B") == pytest.approx(-1.0)

    with pytest.warns(UserWarning, match="variance is negative"):
        [result] = PairOptimizer().optimize("A", moments)

    assert result.weight_target == pytest.approx(2 / 3.25)
    assert result.portfolio_risk == 0.0
