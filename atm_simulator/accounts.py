"""
Account Module

The single account behind a teller session: PIN secret, running balance and
an append-only transaction history. Overdraft and amount rules belong to the
teller; the account applies whatever it is given.
"""

from decimal import Decimal
from itertools import count
from typing import Iterator, List

from .currency import DEFAULT_BASE_CURRENCY, as_money
from .transactions import TransactionKind, TransactionRecord


class Account:
    """PIN-protected account with balance and transaction history"""

    def __init__(self, pin: int, opening_balance: Decimal,
                 currency_code: str = DEFAULT_BASE_CURRENCY):
        self._pin = pin
        self._balance = as_money(opening_balance)
        self.currency_code = currency_code.upper()
        self._history: List[TransactionRecord] = []
        self._sequence = count(1)

    def __repr__(self) -> str:
        return (
            f"Account(balance={self._balance} {self.currency_code}, "
            f"transactions={len(self._history)})"
        )

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def transaction_count(self) -> int:
        return len(self._history)

    def validate_secret(self, candidate: int) -> bool:
        """Exact match against the stored PIN. Attempts are not limited."""
        return candidate == self._pin

    def update_balance(self, delta: Decimal) -> None:
        """Add delta (positive or negative) to the balance without checks"""
        if not isinstance(delta, Decimal):
            delta = Decimal(str(delta))
        self._balance += delta

    def get_balance(self) -> Decimal:
        """Current balance snapshot"""
        return self._balance

    def record_transaction(self, kind: TransactionKind, amount: Decimal,
                           currency_code: str) -> TransactionRecord:
        """
        Append a record to the history

        Args:
            kind: Deposit or withdrawal
            amount: Transaction amount
            currency_code: Currency of the amount

        Returns:
            The appended record, numbered by the account's own counter
        """
        record = TransactionRecord(
            sequence_number=next(self._sequence),
            kind=kind,
            amount=amount,
            currency_code=currency_code,
        )
        self._history.append(record)
        return record

    def list_transactions(self) -> Iterator[TransactionRecord]:
        """Yield records in insertion order; each call starts over"""
        yield from tuple(self._history)
