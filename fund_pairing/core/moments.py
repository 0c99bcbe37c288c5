"""
Moment Estimation
=================

Computes the sample statistics the pair optimizer needs from each fund's
history:
- Mean return per fund
- Variance per fund
- Covariance for every pair of funds

All second moments are POPULATION moments (divide by N, not N-1). This
matches the spreadsheet-style calculation the results are compared against,
so it must not be switched to the sample estimator.

Funds are cleaned independently, so two samples can have different lengths.
How such a pair is lined up for the covariance is controlled by the
alignment policy:

- 'position': pair the first min(len(A), len(B)) cleaned values of each
  fund by position. This reproduces the historical results but ignores
  dates on ragged data.
- 'date': pair values that share an original row and drop rows where
  either fund is missing.

Both policies agree whenever no fund has missing values.
"""

import logging
import warnings
from typing import List, Mapping, Sequence

import numpy as np

from fund_pairing.core.config import AnalysisConfig
from fund_pairing.core.errors import EmptyDataset, EmptySample, InvalidInput, InvalidTarget

logger = logging.getLogger(__name__)


class MomentTable:
    """
    Means, variances and covariances for a set of funds.

    The covariance matrix is symmetric and its diagonal holds each fund's
    variance.

    Attributes:
        fund_names (List[str]): Fund names in table order
        means (np.ndarray): Mean of each fund
        cov_matrix (np.ndarray): Population covariance matrix (n x n)
        n_obs (np.ndarray): Number of paired observations behind each
            covariance entry
    """

    def __init__(
        self,
        fund_names: Sequence[str],
        means: np.ndarray,
        cov_matrix: np.ndarray,
        n_obs: np.ndarray
    ):
        self.fund_names = list(fund_names)
        self.means = np.asarray(means, dtype=float)
        self.cov_matrix = np.asarray(cov_matrix, dtype=float)
        self.n_obs = np.asarray(n_obs, dtype=int)
        self._index = {name: i for i, name in enumerate(self.fund_names)}

    def __contains__(self, fund: str) -> bool:
        return fund in self._index

    def __len__(self) -> int:
        return len(self.fund_names)

    def index_of(self, fund: str) -> int:
        try:
            return self._index[fund]
        except KeyError:
            raise InvalidTarget(fund, self.fund_names) from None

    def mean(self, fund: str) -> float:
        return float(self.means[self.index_of(fund)])

    def variance(self, fund: str) -> float:
        i = self.index_of(fund)
        return float(self.cov_matrix[i, i])

    def std(self, fund: str) -> float:
        return float(np.sqrt(self.variance(fund)))

    def covariance(self, fund_a: str, fund_b: str) -> float:
        return float(self.cov_matrix[self.index_of(fund_a), self.index_of(fund_b)])


def _population_covariance(x: np.ndarray, y: np.ndarray) -> float:
    # Cov = (1/N) * sum((x - mean_x) * (y - mean_y))
    return float(np.mean((x - x.mean()) * (y - y.mean())))


class MomentEstimator:
    """
    Estimates a MomentTable from per-fund return samples.

    Example:
        >>> estimator = MomentEstimator()
        >>> moments = estimator.estimate({'A': [1, 2, 3, 4], 'B': [4, 3, 2, 1]})
        >>> moments.covariance('A', 'B')
        -1.25
    """

    def __init__(self, alignment: str = 'position'):
        """
        Args:
            alignment: 'position' or 'date' (see module docstring)
        """
        self.alignment = AnalysisConfig.validate_alignment(alignment)

    def estimate(self, table: Mapping[str, Sequence[float]]) -> MomentTable:
        """
        Compute means, variances and pairwise covariances.

        Non-finite entries (NaN, inf) are treated as missing. Under 'date'
        alignment the sequences must keep missing entries in place so that
        equal positions refer to the same row.

        Args:
            table: Mapping of fund name to its sequence of values

        Returns:
            MomentTable for the funds, in mapping order

        Raises:
            EmptyDataset: If the table has no funds
            EmptySample: If a fund has no finite values
        """
        fund_names: List[str] = list(table.keys())
        if not fund_names:
            raise EmptyDataset("No funds to estimate")

        raw = {name: np.asarray(table[name], dtype=float) for name in fund_names}
        clean = {name: values[np.isfinite(values)] for name, values in raw.items()}

        for name in fund_names:
            if clean[name].size == 0:
                raise EmptySample(name)

        n = len(fund_names)
        means = np.array([clean[name].mean() for name in fund_names])
        cov_matrix = np.zeros((n, n))
        n_obs = np.zeros((n, n), dtype=int)

        for i, name_a in enumerate(fund_names):
            # Diagonal is the fund's own variance under both policies
            cov_matrix[i, i] = _population_covariance(clean[name_a], clean[name_a])
            n_obs[i, i] = clean[name_a].size
            for j in range(i + 1, n):
                name_b = fund_names[j]
                if self.alignment == 'date':
                    x, y = self._align_by_row(raw[name_a], raw[name_b], name_a, name_b)
                else:
                    x, y = self._align_by_position(clean[name_a], clean[name_b], name_a, name_b)
                cov = _population_covariance(x, y)
                cov_matrix[i, j] = cov_matrix[j, i] = cov
                n_obs[i, j] = n_obs[j, i] = x.size

        logger.debug("Estimated moments for %d funds (%s alignment)", n, self.alignment)
        return MomentTable(fund_names, means, cov_matrix, n_obs)

    @staticmethod
    def _align_by_position(x: np.ndarray, y: np.ndarray, name_a: str, name_b: str):
        if x.size != y.size:
            warnings.warn(
                f"'{name_a}' has {x.size} values and '{name_b}' has {y.size}; "
                f"pairing the first {min(x.size, y.size)} of each by position, not by date"
            )
        size = min(x.size, y.size)
        return x[:size], y[:size]

    @staticmethod
    def _align_by_row(x: np.ndarray, y: np.ndarray, name_a: str, name_b: str):
        if x.size != y.size:
            raise InvalidInput(
                f"Date alignment needs equal-length columns; '{name_a}' has {x.size} "
                f"rows and '{name_b}' has {y.size}"
            )
        both = np.isfinite(x) & np.isfinite(y)
        if not both.any():
            raise EmptyDataset(f"'{name_a}' and '{name_b}' have no rows in common")
        return x[both], y[both]
