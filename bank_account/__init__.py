"""
Bank Account

A single bank account with an append-only transaction ledger, derived
balances, and an ordered chain of withdrawal rules enforcing daily limits.
"""

from .errors import BankAccountError, InvalidArgumentError, InvalidOperationError
from .ledger import Transaction, TransactionLedger
from .dates import DateProvider, SystemDateProvider, FixedDateProvider
from .accounts import BankAccount

__version__ = "1.0.0"

__all__ = [
    "BankAccount",
    "BankAccountError",
    "DateProvider",
    "FixedDateProvider",
    "InvalidArgumentError",
    "InvalidOperationError",
    "SystemDateProvider",
    "Transaction",
    "TransactionLedger",
]
