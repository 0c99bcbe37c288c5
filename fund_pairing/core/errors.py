"""
Exceptions raised by the fund pairing engine.

Every error derives from FundPairingError, which is itself a ValueError so
callers that only guard against bad values keep working.

A zero-risk portfolio is not an error: its Sharpe ratio is NaN and it is
ranked after every portfolio with a numeric ratio.
"""


class FundPairingError(ValueError):
    """Base class for all fund pairing errors."""


class EmptyDataset(FundPairingError):
    """The input table has no fund columns or no data rows."""


class EmptySample(FundPairingError):
    """A fund column has no valid numeric entries."""

    def __init__(self, fund: str):
        self.fund = fund
        super().__init__(f"Fund '{fund}' has no valid numeric values")


class InvalidTarget(FundPairingError):
    """The target fund is not one of the known funds."""

    def __init__(self, target, known=None):
        self.target = target
        self.known = list(known) if known is not None else []
        message = f"Unknown target fund: {target!r}"
        if self.known:
            message += f". Available funds: {', '.join(self.known)}"
        super().__init__(message)


class InvalidInput(FundPairingError):
    """A user-supplied amount or setting is missing, non-numeric or negative."""


class NoCandidateAvailable(FundPairingError):
    """There is no other fund to pair the target with."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"No candidate fund available to pair with '{target}'")


class UnsupportedFileType(FundPairingError):
    """The input file is neither CSV nor Excel."""
