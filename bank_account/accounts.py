"""
Account Module

A single bank account. The balance is always derived from the transaction
ledger, never stored separately. Deposits are checked for a non-negative
amount; withdrawals run the full withdrawal rule chain. A failed operation
leaves the ledger untouched.
"""

from threading import RLock
from typing import Iterable, List, Optional
import uuid

from .config import BankAccountConfig, get_config
from .dates import DateProvider
from .errors import BankAccountError
from .events import EventDispatcher, DomainEvent, create_account_event
from .ledger import Transaction, TransactionLedger
from .logging_config import get_logger, log_action
from .rules import (
    WithdrawalRequest, WithdrawalRule, WithdrawalRuleChain,
    default_withdrawal_rules, ensure_non_negative
)


class BankAccount:
    """
    Bank account backed by an append-only transaction ledger
    """

    def __init__(
        self,
        date_provider: DateProvider,
        rules: Optional[Iterable[WithdrawalRule]] = None,
        settings: Optional[BankAccountConfig] = None,
        event_dispatcher: Optional[EventDispatcher] = None,
        account_id: Optional[str] = None
    ):
        """
        Args:
            date_provider: Source of "today" for every operation
            rules: Withdrawal rules in priority order (standard chain if omitted)
            settings: Limits and ledger threshold (global config if omitted)
            event_dispatcher: Optional dispatcher notified of every operation
            account_id: Identifier used in logs and events (generated if omitted)
        """
        if date_provider is None:
            raise ValueError("date_provider is required")

        settings = settings or get_config()

        self.account_id = account_id or str(uuid.uuid4())
        self.date_provider = date_provider
        self._ledger = TransactionLedger(settings.ledger_aggregation_threshold)

        if rules is None:
            rules = default_withdrawal_rules(
                max_daily_amount=settings.max_daily_withdrawal_amount,
                max_daily_count=settings.max_daily_withdrawal_count
            )
        self.rule_chain = WithdrawalRuleChain(rules)

        self._event_dispatcher = event_dispatcher
        # Deposit/withdraw read the history and then append; both steps must be atomic
        self._lock = RLock()
        self.logger = get_logger("bank_account.accounts")

    def deposit(self, amount: int) -> Transaction:
        """
        Deposit money into the account

        Args:
            amount: Non-negative amount in integer units

        Returns:
            The recorded Transaction

        Raises:
            InvalidArgumentError: If the amount is negative
        """
        _ensure_integer(amount)

        with self._lock:
            today = self.date_provider.today()
            try:
                ensure_non_negative(amount)
            except BankAccountError as e:
                self._reject(DomainEvent.DEPOSIT_REJECTED, "deposit", amount, e)
                raise

            transaction = self._record(amount, today)

        self._accept(DomainEvent.DEPOSIT_ACCEPTED, "deposit", transaction)
        return transaction

    def withdraw(self, amount: int) -> Transaction:
        """
        Withdraw money from the account

        Args:
            amount: Non-negative amount in integer units

        Returns:
            The recorded Transaction (with a negative amount)

        Raises:
            InvalidArgumentError: If the amount is negative or exceeds the balance
            InvalidOperationError: If a daily withdrawal limit would be exceeded
        """
        _ensure_integer(amount)

        with self._lock:
            history = self._ledger.history()
            request = WithdrawalRequest(
                amount=amount,
                today=self.date_provider.today(),
                balance=sum(t.amount for t in history),
                history=tuple(history)
            )
            try:
                self.rule_chain.evaluate(request)
            except BankAccountError as e:
                self._reject(DomainEvent.WITHDRAWAL_REJECTED, "withdraw", amount, e)
                raise

            transaction = self._record(-amount, request.today)

        self._accept(DomainEvent.WITHDRAWAL_ACCEPTED, "withdraw", transaction)
        return transaction

    def get_balance(self) -> int:
        """Sum of all transaction amounts over the full history"""
        return sum(t.amount for t in self._ledger.history())

    def get_transactions(self) -> List[Transaction]:
        """Transaction history in chronological order, oldest entries aggregated"""
        return self._ledger.observe()

    def _record(self, amount: int, today) -> Transaction:
        transaction = Transaction(
            amount=amount,
            date=today,
            balance=self.get_balance() + amount
        )
        self._ledger.add(transaction)
        return transaction

    def _accept(self, event_type: DomainEvent, action: str, transaction: Transaction) -> None:
        log_action(
            self.logger, "info", f"{action.capitalize()} of {abs(transaction.amount)} recorded",
            action=action,
            resource=self.account_id,
            extra=transaction.to_dict()
        )
        self._publish(create_account_event(
            event_type, self.account_id, abs(transaction.amount),
            data={"date": transaction.date.isoformat(), "balance": transaction.balance}
        ))

    def _reject(self, event_type: DomainEvent, action: str, amount: int, error: Exception) -> None:
        log_action(
            self.logger, "warning", f"{action.capitalize()} of {amount} rejected: {error}",
            action=action,
            resource=self.account_id,
            extra={"amount": amount, "error": type(error).__name__}
        )
        self._publish(create_account_event(
            event_type, self.account_id, amount,
            data={"reason": str(error)}
        ))

    def _publish(self, event) -> None:
        if self._event_dispatcher:
            self._event_dispatcher.publish(event)

    def __repr__(self) -> str:
        return f"BankAccount(account_id={self.account_id!r}, balance={self.get_balance()})"


def _ensure_integer(amount) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"Amount must be an integer, got {type(amount).__name__}")
