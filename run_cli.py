"""
CLI entry point for fund pairing analysis.

Usage:
    python run_cli.py --holding 0 --extra 10000        # Run with sample data
    python run_cli.py --file funds.csv --holding 0 --extra 5000
    python run_cli.py --file funds.xlsx --target FundA --holding 100000 --extra 50000

For installed package, use: fp-analyze
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from fund_pairing.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
