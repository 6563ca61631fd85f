"""
Transaction Record Module

Immutable record of one completed balance mutation. Records are created by
the owning account and are never changed afterwards.
"""

from decimal import Decimal
from datetime import datetime
from dataclasses import dataclass, field
from typing import Any, Dict
from enum import Enum


# Locale's default date and time representation
TIMESTAMP_FORMAT = "%c"


class TransactionKind(Enum):
    """Kinds of balance mutations"""
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"


@dataclass(frozen=True)
class TransactionRecord:
    """
    One completed deposit or withdrawal.
    Values are stored as given; sign and currency code are not validated here.
    """
    sequence_number: int
    kind: TransactionKind
    amount: Decimal
    currency_code: str
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def timestamp(self) -> str:
        return self.created_at.strftime(TIMESTAMP_FORMAT)

    def describe(self) -> str:
        """Single human-readable line for the history listing"""
        return (
            f"Transaction ID: {self.sequence_number}"
            f" | Type: {self.kind.value}"
            f" | Amount: {self.amount} {self.currency_code}"
            f" | Timestamp: {self.timestamp}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain dictionary for structured logs"""
        return {
            "sequence_number": self.sequence_number,
            "kind": self.kind.value,
            "amount": str(self.amount),
            "currency_code": self.currency_code,
            "created_at": self.created_at.isoformat(),
        }
