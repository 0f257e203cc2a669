"""Mini README: Exception hierarchy shared by the ledger and its interfaces.

Validation errors derive from ``ValueError`` so callers that only care about
"bad input" can keep catching the builtin, while interfaces catch the
specific classes to decide how the message reaches the user.
"""

from __future__ import annotations


class FinxError(Exception):
    """Base class for errors raised by FinX."""


class InvalidAmountError(FinxError, ValueError):
    """Raised when an amount is missing, non-numeric, or not positive."""

    def __init__(self, message: str = "Enter a valid amount.") -> None:
        super().__init__(message)


class InvalidTransactionTypeError(FinxError, ValueError):
    """Raised when a transaction kind is neither income nor expense."""


class MountingPointError(FinxError, RuntimeError):
    """Raised at start-up when a required display surface is missing."""
