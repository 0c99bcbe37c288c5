"""Setup file for editable install compatibility."""
from setuptools import setup, find_packages

setup(
    name="fund-pairing",
    version="1.0.0",
    packages=find_packages(include=["fund_pairing", "fund_pairing.*"]),
    install_requires=[
        "numpy>=1.20",
        "pandas>=2.2",
        "matplotlib>=3.4",
        "openpyxl>=3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "fp-analyze=fund_pairing.cli.main:main",
        ],
    },
    python_requires=">=3.9",
)
