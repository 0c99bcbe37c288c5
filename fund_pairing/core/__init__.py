"""Core computational modules for fund pairing."""

from fund_pairing.core.allocation import Allocation, AllocationProjector
from fund_pairing.core.loader import FundSeries, SeriesStore, generate_sample_series
from fund_pairing.core.moments import MomentEstimator, MomentTable
from fund_pairing.core.optimizer import CandidateResult, PairOptimizer
from fund_pairing.core.pipeline import PairingReport, analyze_target

__all__ = [
    "Allocation",
    "AllocationProjector",
    "CandidateResult",
    "FundSeries",
    "MomentEstimator",
    "MomentTable",
    "PairOptimizer",
    "PairingReport",
    "SeriesStore",
    "analyze_target",
    "generate_sample_series",
]
