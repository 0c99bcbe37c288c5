"""Smoke tests for the pairing charts."""

import matplotlib.pyplot as plt
import pytest
from matplotlib.figure import Figure

from fund_pairing.core.pipeline import analyze_target
from fund_pairing.visualization import plot_candidate_weights, plot_pairing_frontier


@pytest.fixture()
def report(three_fund_store):
    return analyze_target(three_fund_store, "Equity", 100000, 50000)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_frontier_plot_has_all_markers(report, tmp_path):
    path = tmp_path / "pairing.png"
    fig = plot_pairing_frontier(report, save_path=str(path))

    assert isinstance(fig, Figure)
    assert path.exists()

    ax = fig.axes[0]
    labels = [text.get_text() for text in ax.get_legend().get_texts()]
    assert any(label.startswith("Max Sharpe Ratio") for label in labels)
    assert any(label.startswith("Current Portfolio") for label in labels)
    assert "New Portfolio (approximate)" in labels
    # Candidate line plus combination curve
    assert len(ax.get_lines()) == 2


def test_frontier_plot_without_curve(report):
    fig = plot_pairing_frontier(report, show_curve=False, annotate=False)
    assert len(fig.axes[0].get_lines()) == 1


def test_frontier_plot_handles_nan_sharpe(mirror_store):
    report = analyze_target(mirror_store, "A", 100, 100)
    fig = plot_pairing_frontier(report)

    labels = [text.get_text() for text in fig.axes[0].get_legend().get_texts()]
    assert any("Sharpe=n/a" in label for label in labels)


def test_weights_plot(report, tmp_path):
    path = tmp_path / "weights.png"
    fig = plot_candidate_weights(report, save_path=str(path))

    assert isinstance(fig, Figure)
    assert path.exists()
    # One stacked pair of bars per candidate
    assert len(fig.axes[0].patches) == 2 * len(report.candidates)
