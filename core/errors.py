"""Error taxonomy for the ReceiptSpend engine."""

from __future__ import annotations

__all__ = [
    "ReceiptSpendError",
    "ValidationError",
    "NotFoundError",
    "DataQualityWarning",
]


class ReceiptSpendError(Exception):
    """Base class for failures raised by ReceiptSpend operations."""


class ValidationError(ReceiptSpendError, ValueError):
    """Raised when a write carries a blank prefix or an invalid category reference."""


class NotFoundError(ReceiptSpendError, KeyError):
    """Raised when a mutation references a prefix rule id that does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class DataQualityWarning(UserWarning):
    """Emitted when a receipt is excluded from aggregation because of bad data."""
