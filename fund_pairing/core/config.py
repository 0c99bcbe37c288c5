"""
Analysis configuration.

Collects the assumptions the pipeline and CLI share so they can be set in
one place and logged with each run.
"""

from pathlib import Path
from typing import List, Union

from fund_pairing.core.errors import InvalidInput


class AnalysisConfig:
    """
    Stores all configurable assumptions for a pairing analysis.

    Attributes:
        date_column: Name of the reserved date column (never treated as a fund)
        alignment: How covariance pairs funds with different missing rows.
            'position' cleans each fund independently and pairs values by
            position; 'date' pairs values by their original row.
        output_dir: Directory for saved charts
        log_dir: Directory for log files
        save_plots: If True, the CLI saves the pairing chart
        n_curve_points: Number of points on the best pair's combination curve
    """

    ALIGNMENTS = ('position', 'date')

    def __init__(
        self,
        date_column: str = 'Date',
        alignment: str = 'position',
        output_dir: Union[str, Path] = 'output',
        log_dir: Union[str, Path] = 'logs',
        save_plots: bool = True,
        n_curve_points: int = 50
    ):
        self.date_column = date_column
        self.alignment = self.validate_alignment(alignment)
        self.output_dir = Path(output_dir)
        self.log_dir = Path(log_dir)
        self.save_plots = save_plots
        if n_curve_points < 2:
            raise InvalidInput(f"n_curve_points must be at least 2, got {n_curve_points}")
        self.n_curve_points = n_curve_points

    @classmethod
    def validate_alignment(cls, alignment: str) -> str:
        """Return the alignment name, raising InvalidInput if it is unknown."""
        if alignment not in cls.ALIGNMENTS:
            raise InvalidInput(
                f"Unknown alignment: {alignment!r}. Use one of {', '.join(cls.ALIGNMENTS)}"
            )
        return alignment

    def ensure_output_dir(self) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir

    def describe(self) -> List[str]:
        """Lines describing the current configuration, ready for logging."""
        return [
            "=" * 60,
            "CURRENT ANALYSIS CONFIGURATION",
            "=" * 60,
            f"Date column: {self.date_column}",
            f"Covariance alignment: {self.alignment}",
            f"Output directory: {self.output_dir}",
            f"Save plots: {'Yes' if self.save_plots else 'No'}",
            "=" * 60,
        ]

