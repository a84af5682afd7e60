"""
Transaction Ledger Module

Append-only record of account transactions. Entries are never mutated or
deleted. Reads go through an aggregated view that folds everything older
than the most recent entries into a single synthetic transaction, so the
observed history stays bounded while its total amount is preserved.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterator, List

DEFAULT_AGGREGATION_THRESHOLD = 50


@dataclass(frozen=True)
class Transaction:
    """
    A single balance movement
    Positive amounts are deposits, negative amounts are withdrawals
    """
    amount: int
    date: date
    balance: int  # Balance immediately after this transaction

    @property
    def is_deposit(self) -> bool:
        return self.amount > 0

    @property
    def is_withdrawal(self) -> bool:
        return self.amount < 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "amount": self.amount,
            "date": self.date.isoformat(),
            "balance": self.balance
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Transaction':
        """Create instance from dictionary"""
        entry_date = data["date"]
        if isinstance(entry_date, str):
            entry_date = date.fromisoformat(entry_date)
        return cls(
            amount=int(data["amount"]),
            date=entry_date,
            balance=int(data["balance"])
        )


class TransactionLedger:
    """
    Ordered, append-only transaction history with an aggregated read view
    """

    def __init__(self, aggregation_threshold: int = DEFAULT_AGGREGATION_THRESHOLD):
        if aggregation_threshold < 1:
            raise ValueError("Aggregation threshold must be a positive integer")

        self.aggregation_threshold = aggregation_threshold
        self._transactions: List[Transaction] = []

    def add(self, transaction: Transaction) -> None:
        """
        Append a transaction to the end of the history

        The caller is responsible for validating the transaction.
        """
        self._transactions.append(transaction)

    def history(self) -> List[Transaction]:
        """Full, non-aggregated history in chronological order"""
        return list(self._transactions)

    def needs_aggregation(self) -> bool:
        return len(self._transactions) > self.aggregation_threshold

    def observe(self) -> List[Transaction]:
        """
        Externally visible history

        When the full history is longer than the aggregation threshold, the
        oldest entries are replaced by one synthetic transaction whose amount
        is their sum and whose date and balance come from the last of them.
        The most recent ``aggregation_threshold`` entries are returned as-is.

        Recomputed on every call; storage is never modified.

        Returns:
            List of at most ``aggregation_threshold + 1`` transactions
        """
        if not self.needs_aggregation():
            return list(self._transactions)

        aggregate_count = len(self._transactions) - self.aggregation_threshold
        aggregated = self._aggregate(self._transactions[:aggregate_count])

        return [aggregated] + self._transactions[aggregate_count:]

    @staticmethod
    def _aggregate(transactions: List[Transaction]) -> Transaction:
        """Fold a non-empty run of transactions into one"""
        last = transactions[-1]
        return Transaction(
            amount=sum(t.amount for t in transactions),
            date=last.date,
            balance=last.balance
        )

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.observe())
