"""
Data Loader Module for Fund Pairing
====================================

This module turns an uploaded table of fund values into a SeriesStore:
- CSV files
- Excel files (first sheet unless a sheet is named)
- pandas DataFrames already in memory

The table is expected to have one column per fund and, optionally, a
reserved date column which is never treated as a fund:

    Date,       FundA,  FundB,  FundC
    2020-01-31, 0.012,  0.004,  -0.010
    2020-02-29, -0.021, 0.007,  0.015

Cells that are missing or cannot be read as numbers are dropped for that
fund only, so two funds may end up with samples of different lengths.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

import numpy as np
import pandas as pd

from fund_pairing.core.errors import EmptyDataset, InvalidTarget, UnsupportedFileType

logger = logging.getLogger(__name__)

CSV_SUFFIXES = ('.csv',)
EXCEL_SUFFIXES = ('.xlsx', '.xls')


@dataclass(frozen=True)
class FundSeries:
    """A fund's cleaned sample: finite values only, in row order."""

    name: str
    values: np.ndarray

    def __len__(self) -> int:
        return len(self.values)


class SeriesStore:
    """
    The parsed fund table the engine reads from.

    A store is built once per input file and never mutated; loading another
    file means building a new store and passing that one to the pipeline.

    Attributes:
        fund_names (List[str]): Fund columns in file order
        frame (pd.DataFrame): Numeric fund columns, NaN where a cell was
            missing or non-numeric. Row labels are the original rows.
        dates (Optional[pd.Series]): The date column, if the table had one

    Example:
        >>> store = SeriesStore.from_file("funds.csv")
        >>> store.fund_names
        ['FundA', 'FundB', 'FundC']
        >>> store.series('FundA').values
        array([ 0.012, -0.021])
    """

    def __init__(self, frame: pd.DataFrame, date_column: str = 'Date'):
        """
        Build a store from a raw table.

        Args:
            frame: Table with one column per fund and an optional date column
            date_column: Name of the reserved date column

        Raises:
            EmptyDataset: If the table has no fund columns or no usable rows
        """
        self.date_column = date_column

        raw = frame.rename(columns=str)

        # Spreadsheets often carry trailing columns with no header and no data
        fund_names = [
            col for col in raw.columns
            if col != date_column and not (col.startswith('Unnamed:') and raw[col].isna().all())
        ]
        if not fund_names:
            raise EmptyDataset("Input table has no fund columns")

        numeric = raw[fund_names].apply(pd.to_numeric, errors='coerce')
        numeric = numeric.replace([np.inf, -np.inf], np.nan).astype(float)

        # Blank lines and rows with nothing but a date carry no data
        keep = numeric.notna().any(axis=1)
        numeric = numeric[keep]
        if numeric.empty:
            raise EmptyDataset("Input table has no data rows")

        self.fund_names: List[str] = fund_names
        self.frame: pd.DataFrame = numeric
        if date_column in raw.columns:
            self.dates: Optional[pd.Series] = raw.loc[keep, date_column]
        else:
            self.dates = None

        logger.debug(
            "Loaded %d funds over %d rows", len(self.fund_names), len(self.frame)
        )

    @classmethod
    def from_frame(cls, frame: pd.DataFrame, date_column: str = 'Date') -> 'SeriesStore':
        return cls(frame, date_column=date_column)

    @classmethod
    def from_file(
        cls,
        file_path: Union[str, Path],
        sheet_name: Optional[str] = None,
        date_column: str = 'Date'
    ) -> 'SeriesStore':
        """
        Load a store from a CSV or Excel file.

        Args:
            file_path: Path to a .csv, .xlsx or .xls file
            sheet_name: Sheet to read from an Excel file (default: first sheet)
            date_column: Name of the reserved date column

        Returns:
            SeriesStore built from the file

        Raises:
            FileNotFoundError: If the file does not exist
            UnsupportedFileType: If the suffix is not CSV or Excel
            EmptyDataset: If the file holds no fund data
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        suffix = path.suffix.lower()
        if suffix in CSV_SUFFIXES:
            try:
                frame = pd.read_csv(path, skip_blank_lines=True)
            except pd.errors.EmptyDataError as e:
                raise EmptyDataset(f"{path.name} is empty") from e
        elif suffix in EXCEL_SUFFIXES:
            frame = pd.read_excel(path, sheet_name=sheet_name if sheet_name else 0)
        else:
            raise UnsupportedFileType(
                f"Unsupported file type '{path.suffix}'. Upload a CSV or Excel file."
            )

        logger.info("Read %s (%d rows x %d columns)", path.name, *frame.shape)
        return cls(frame, date_column=date_column)

    def __contains__(self, fund: str) -> bool:
        return fund in self.fund_names

    def __iter__(self) -> Iterator[FundSeries]:
        for name in self.fund_names:
            yield self.series(name)

    def __len__(self) -> int:
        return len(self.fund_names)

    @property
    def n_rows(self) -> int:
        return len(self.frame)

    def series(self, fund: str) -> FundSeries:
        """Cleaned sample of one fund (missing and non-numeric cells dropped)."""
        if fund not in self.fund_names:
            raise InvalidTarget(fund, self.fund_names)
        column = self.frame[fund]
        return FundSeries(name=fund, values=column.dropna().to_numpy(dtype=float))

    def samples(self) -> Dict[str, np.ndarray]:
        """Cleaned sample of every fund, keyed by fund name in table order."""
        return {series.name: series.values for series in self}

    def columns(self) -> Dict[str, np.ndarray]:
        """
        Every fund column with NaN left in place.

        Unlike samples(), values keep their row position, which is what
        date-aligned covariance needs.
        """
        return {name: self.frame[name].to_numpy(dtype=float) for name in self.fund_names}


def generate_sample_series(
    n_funds: int = 4,
    n_periods: int = 60,
    seed: int = 42
) -> pd.DataFrame:
    """
    Generate a table of synthetic monthly fund returns for demonstrations.

    Args:
        n_funds: Number of fund columns
        n_periods: Number of monthly rows
        seed: Random seed for reproducibility

    Returns:
        DataFrame with a 'Date' column followed by one column per fund
    """
    rng = np.random.default_rng(seed)

    means = np.linspace(0.004, 0.012, n_funds)
    vols = np.linspace(0.02, 0.06, n_funds)

    # One common market factor so the funds are correlated but not identical
    market = rng.normal(0.0, 0.03, n_periods)
    betas = np.linspace(0.3, 1.2, n_funds)
    noise = rng.normal(0.0, 1.0, (n_periods, n_funds)) * vols
    returns = means + np.outer(market, betas) + noise

    if n_funds <= 4:
        names = ['Global Equity', 'Domestic Bond', 'REIT', 'Emerging Markets'][:n_funds]
    else:
        names = [f'Fund_{i+1}' for i in range(n_funds)]

    frame = pd.DataFrame(returns, columns=names)
    frame.insert(0, 'Date', pd.date_range('2020-01-31', periods=n_periods, freq='ME'))
    return frame
