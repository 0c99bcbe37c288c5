"""Shared fixtures for fund pairing tests."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from fund_pairing.core.loader import SeriesStore


@pytest.fixture()
def mirror_frame():
    """Two funds that move in exact opposition."""
    return pd.DataFrame(
        {
            "Date": ["2024-01-31", "2024-02-29", "2024-03-31", "2024-04-30"],
            "A": [1.0, 2.0, 3.0, 4.0],
            "B": [4.0, 3.0, 2.0, 1.0],
        }
    )


@pytest.fixture()
def three_fund_frame():
    """Target plus a diversifying fund and a near-copy of the target."""
    rng = np.random.default_rng(7)
    base = rng.normal(0.01, 0.04, 48)
    return pd.DataFrame(
        {
            "Date": pd.date_range("2020-01-31", periods=48, freq="ME"),
            "Equity": base,
            "Bond": 0.004 - 0.3 * base + rng.normal(0.0, 0.01, 48),
            "EquityClone": base * 1.05 + rng.normal(0.0, 0.002, 48),
        }
    )


@pytest.fixture()
def ragged_frame():
    """B is missing its second value, so cleaned samples differ in length."""
    return pd.DataFrame(
        {
            "Date": ["d1", "d2", "d3", "d4", "d5"],
            "A": [1.0, 2.0, 3.0, 4.0, 5.0],
            "B": [2.0, None, 6.0, 8.0, 10.0],
        }
    )


@pytest.fixture()
def mirror_store(mirror_frame):
    return SeriesStore.from_frame(mirror_frame)


@pytest.fixture()
def three_fund_store(three_fund_frame):
    return SeriesStore.from_frame(three_fund_frame)
