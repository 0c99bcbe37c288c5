"""
Fund Pairing - Two-Fund Diversification Analysis
================================================

Finds the fund that best complements a fund you already hold and suggests
how to split new cash between the two.

Usage:
    from fund_pairing import SeriesStore, analyze_target
    from fund_pairing.visualization import plot_pairing_frontier

Classes:
    SeriesStore - Fund history loaded from CSV/Excel or a DataFrame
    MomentEstimator - Means, variances and covariances
    PairOptimizer - Minimum variance mixes and candidate ranking
    AllocationProjector - New cash split and projected portfolio

Functions:
    analyze_target - Run the whole analysis for one target fund
    generate_sample_series - Create synthetic fund returns
"""

from fund_pairing.core.allocation import Allocation, AllocationProjector
from fund_pairing.core.config import AnalysisConfig
from fund_pairing.core.errors import (
    EmptyDataset,
    EmptySample,
    FundPairingError,
    InvalidInput,
    InvalidTarget,
    NoCandidateAvailable,
    UnsupportedFileType,
)
from fund_pairing.core.loader import FundSeries, SeriesStore, generate_sample_series
from fund_pairing.core.moments import MomentEstimator, MomentTable
from fund_pairing.core.optimizer import CandidateResult, PairOptimizer
from fund_pairing.core.pipeline import PairingReport, analyze_target

__version__ = "1.0.0"

__all__ = [
    "Allocation",
    "AllocationProjector",
    "AnalysisConfig",
    "CandidateResult",
    "EmptyDataset",
    "EmptySample",
    "FundPairingError",
    "FundSeries",
    "InvalidInput",
    "InvalidTarget",
    "MomentEstimator",
    "MomentTable",
    "NoCandidateAvailable",
    "PairOptimizer",
    "PairingReport",
    "SeriesStore",
    "UnsupportedFileType",
    "analyze_target",
    "generate_sample_series",
]
