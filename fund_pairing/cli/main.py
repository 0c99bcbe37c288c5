"""
Main Runner Script for Fund Pairing
====================================

This script runs the full pairing workflow:
1. Loading fund history from CSV or Excel
2. Estimating means, variances and covariances
3. Ranking every other fund as a partner for the target fund
4. Splitting new cash between the target and its best partner
5. Reporting and charting the results

Usage:
    fp-analyze --holding 0 --extra 10000         # Run with sample data
    fp-analyze --file funds.csv --target FundA --holding 0 --extra 5000
    fp-analyze --file funds.xlsx --sheet Returns --holding 100000 --extra 50000
    fp-analyze --file funds.csv --list-funds     # Show the funds in a file
"""

import argparse
import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import matplotlib

from fund_pairing.core.config import AnalysisConfig
from fund_pairing.core.errors import FundPairingError
from fund_pairing.core.loader import SeriesStore, generate_sample_series
from fund_pairing.core.pipeline import PairingReport, analyze_target


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logger(
    script_name: str = "fund_pairing",
    log_dir: Union[str, Path] = "logs"
) -> logging.Logger:
    """
    Sets up a logger that writes to both file and console.

    Args:
        script_name: Name of the script (used in log filename)
        log_dir: Directory for log files (created if missing)

    Returns:
        Configured logger instance
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    # Generate unique log filename
    timestamp = datetime.now().strftime("%Y_%m_%d_%H%M")
    log_filename = log_dir / f"log_{script_name}_{timestamp}.txt"

    # The package logger, so messages from fund_pairing.core.* land here too
    logger = logging.getLogger("fund_pairing")
    logger.setLevel(logging.INFO)
    logger.propagate = False

    # Clear existing handlers (prevent duplicates)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(log_filename, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Data anomalies are reported with warnings.warn in the core modules
    logging.captureWarnings(True)
    warnings_logger = logging.getLogger("py.warnings")
    warnings_logger.handlers = list(logger.handlers)
    warnings_logger.propagate = False

    return logger


# =============================================================================
# MAIN ANALYSIS FUNCTIONS
# =============================================================================

def load_store(
    file_path: Optional[str],
    sheet: Optional[str],
    config: AnalysisConfig,
    logger: logging.Logger
) -> SeriesStore:
    """Load the fund table from a file, or generate sample data if no file is given."""
    if file_path:
        logger.info(f"Loading data from: {file_path}")
        if sheet:
            logger.info(f"Sheet: {sheet}")
        return SeriesStore.from_file(file_path, sheet_name=sheet, date_column=config.date_column)

    logger.info("No file specified. Using sample data...")
    return SeriesStore.from_frame(generate_sample_series(), date_column=config.date_column)


def run_full_analysis(
    store: SeriesStore,
    target: str,
    current_holding: float,
    extra_funds: float,
    config: Optional[AnalysisConfig] = None,
    logger: Optional[logging.Logger] = None,
    keep_figures: bool = False
) -> PairingReport:
    """
    Run the pairing analysis, log the report and save charts.

    Args:
        store: Loaded fund table
        target: Fund already held
        current_holding: Amount currently invested in the target
        extra_funds: New cash to invest
        config: Analysis settings
        logger: Logger instance
        keep_figures: If True, leave figures open for plt.show()

    Returns:
        PairingReport for the target
    """
    if config is None:
        config = AnalysisConfig()
    if logger is None:
        logger = setup_logger(log_dir=config.log_dir)

    for line in config.describe():
        logger.info(line)
    logger.info(f"Funds: {', '.join(store.fund_names)} ({store.n_rows} rows)")

    report = analyze_target(store, target, current_holding, extra_funds, config)

    for line in report.summary_report().splitlines():
        logger.info(line)

    if config.save_plots:
        # Imported here so the report path works without a display backend
        import matplotlib.pyplot as plt
        from fund_pairing.visualization import plot_candidate_weights, plot_pairing_frontier

        output_dir = config.ensure_output_dir()
        frontier_path = output_dir / f"pairing_{_slug(target)}.png"
        plot_pairing_frontier(
            report, n_curve_points=config.n_curve_points, save_path=str(frontier_path)
        )
        logger.info(f"Saved: {frontier_path}")

        weights_path = output_dir / f"weights_{_slug(target)}.png"
        plot_candidate_weights(report, save_path=str(weights_path))
        logger.info(f"Saved: {weights_path}")

        if not keep_figures:
            plt.close('all')

    return report


def _slug(name: str) -> str:
    return "".join(c if c.isalnum() else "_" for c in name).strip("_") or "target"


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Find the best partner fund for a target fund and split new cash',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fp-analyze --holding 0 --extra 10000                # Run with sample data
  fp-analyze --file funds.csv --target "Global Equity" --holding 0 --extra 5000
  fp-analyze --file funds.xlsx --holding 100000 --extra 50000
  fp-analyze --file funds.csv --alignment date --holding 0 --extra 5000
        """
    )

    parser.add_argument('--file', '-f', type=str,
                        help='CSV or Excel file with one column per fund')
    parser.add_argument('--sheet', '-s', type=str, default=None,
                        help='Excel sheet to read (default: first sheet)')
    parser.add_argument('--target', '-t', type=str, default=None,
                        help='Fund already held (default: first fund in the file)')
    parser.add_argument('--holding', type=str, default=None,
                        help='Amount currently invested in the target (required, 0 if none)')
    parser.add_argument('--extra', type=str, default=None,
                        help='New cash to invest (required)')
    parser.add_argument('--alignment', choices=AnalysisConfig.ALIGNMENTS, default='position',
                        help='How to pair funds with missing values for covariance '
                             '(default: position)')
    parser.add_argument('--date-column', type=str, default='Date',
                        help='Name of the date column (default: Date)')
    parser.add_argument('--list-funds', action='store_true',
                        help='List the funds in the file and exit')
    parser.add_argument('--output-dir', type=str, default='output',
                        help='Directory for charts (default: ./output)')
    parser.add_argument('--log-dir', type=str, default='logs',
                        help='Directory for log files (default: ./logs)')
    parser.add_argument('--no-plots', action='store_true',
                        help='Disable chart generation')
    parser.add_argument('--show-plots', action='store_true',
                        help='Show charts interactively (default: just save)')
    return parser


def main(argv=None) -> int:
    """Main entry point for the fund pairing script."""
    args = build_parser().parse_args(argv)

    if not args.show_plots:
        matplotlib.use('Agg')

    logger = None
    try:
        config = AnalysisConfig(
            date_column=args.date_column,
            alignment=args.alignment,
            output_dir=args.output_dir,
            log_dir=args.log_dir,
            save_plots=not args.no_plots or args.show_plots,
        )
        logger = setup_logger("fund_pairing", config.log_dir)

        store = load_store(args.file, args.sheet, config, logger)

        if args.list_funds:
            for name in store.fund_names:
                logger.info(f"  {name}")
            return 0

        target = args.target
        if target is None:
            target = store.fund_names[0]
            logger.info(f"No target specified. Using first fund: {target}")

        run_full_analysis(
            store, target, args.holding, args.extra,
            config=config, logger=logger, keep_figures=args.show_plots
        )

        if args.show_plots:
            import matplotlib.pyplot as plt
            plt.show()

        logger.info("Analysis completed successfully!")
        return 0

    except (FundPairingError, FileNotFoundError) as e:
        if logger is None:
            print(f"Error: {e}", file=sys.stderr)
        else:
            logger.error(f"Analysis aborted: {e}")
        return 2

    except Exception as e:
        if logger is None:
            raise
        logger.error(f"Analysis failed: {e}")
        logger.error(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
