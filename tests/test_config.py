"""Tests for AnalysisConfig."""

from pathlib import Path

import pytest

from fund_pairing.core.config import AnalysisConfig
from fund_pairing.core.errors import InvalidInput


def test_defaults():
    config = AnalysisConfig()

    assert config.date_column == "Date"
    assert config.alignment == "position"
    assert config.output_dir == Path("output")
    assert config.save_plots is True


def test_unknown_alignment_is_rejected():
    with pytest.raises(InvalidInput):
        AnalysisConfig(alignment="nearest")


def test_curve_needs_two_points():
    with pytest.raises(InvalidInput):
        AnalysisConfig(n_curve_points=1)


def test_ensure_output_dir_creates_directory(tmp_path):
    config = AnalysisConfig(output_dir=tmp_path / "charts" / "run1")
    assert config.ensure_output_dir().is_dir()


def test_describe_mentions_alignment():
    lines = AnalysisConfig(alignment="date").describe()
    assert "Covariance alignment: date" in lines
