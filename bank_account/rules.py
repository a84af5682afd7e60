"""
Withdrawal Rules Module

Business rules evaluated before a withdrawal is recorded. Rules run as an
ordered chain and the first violation wins, so the order of the chain is the
priority in which violations are reported:

1. non-negative amount
2. sufficient balance
3. daily withdrawal amount
4. daily withdrawal count
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .errors import BankAccountError, InvalidArgumentError, InvalidOperationError
from .ledger import Transaction
from .logging_config import get_logger, log_action

DEFAULT_MAX_DAILY_WITHDRAWAL_AMOUNT = 100
DEFAULT_MAX_DAILY_WITHDRAWAL_COUNT = 3

NEGATIVE_AMOUNT_MESSAGE = "Negative amounts are not allowed."
INSUFFICIENT_BALANCE_MESSAGE = "Balance is insufficient."


class WithdrawalRuleType(Enum):
    """Kinds of withdrawal rules"""
    NON_NEGATIVE_AMOUNT = "non_negative_amount"
    SUFFICIENT_BALANCE = "sufficient_balance"
    DAILY_AMOUNT_LIMIT = "daily_amount_limit"
    DAILY_COUNT_LIMIT = "daily_count_limit"


@dataclass(frozen=True)
class WithdrawalRequest:
    """
    Snapshot of everything a rule may look at

    ``history`` is the full, non-aggregated transaction history so daily
    totals never depend on how the ledger presents old entries.
    """
    amount: int
    today: date
    balance: int
    history: Tuple[Transaction, ...] = ()

    def withdrawals_today(self) -> List[Transaction]:
        """Withdrawals recorded on the request date"""
        return [t for t in self.history if t.is_withdrawal and t.date == self.today]

    def amount_withdrawn_today(self) -> int:
        return sum(abs(t.amount) for t in self.withdrawals_today())

    def withdrawal_count_today(self) -> int:
        return len(self.withdrawals_today())


def ensure_non_negative(amount: int) -> None:
    """Reject negative amounts (shared by deposits and withdrawals)"""
    if amount < 0:
        raise InvalidArgumentError(NEGATIVE_AMOUNT_MESSAGE)


class WithdrawalRule(ABC):
    """A single check that can reject a withdrawal"""

    rule_type: WithdrawalRuleType

    @property
    def name(self) -> str:
        return self.rule_type.value

    @abstractmethod
    def check(self, request: WithdrawalRequest) -> None:
        """Raise if the request violates this rule"""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NonNegativeAmountRule(WithdrawalRule):
    rule_type = WithdrawalRuleType.NON_NEGATIVE_AMOUNT

    def check(self, request: WithdrawalRequest) -> None:
        ensure_non_negative(request.amount)


class SufficientBalanceRule(WithdrawalRule):
    rule_type = WithdrawalRuleType.SUFFICIENT_BALANCE

    def check(self, request: WithdrawalRequest) -> None:
        if request.amount > request.balance:
            raise InvalidArgumentError(INSUFFICIENT_BALANCE_MESSAGE)


class DailyWithdrawalAmountRule(WithdrawalRule):
    """Caps the total amount withdrawn per calendar day"""

    rule_type = WithdrawalRuleType.DAILY_AMOUNT_LIMIT

    def __init__(self, maximum: int = DEFAULT_MAX_DAILY_WITHDRAWAL_AMOUNT):
        self.maximum = maximum

    def check(self, request: WithdrawalRequest) -> None:
        candidate_total = request.amount_withdrawn_today() + request.amount
        if candidate_total > self.maximum:
            raise InvalidOperationError(f"Cannot withdraw more than {self.maximum} per day.")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(maximum={self.maximum})"


class DailyWithdrawalCountRule(WithdrawalRule):
    """Caps the number of withdrawals per calendar day"""

    rule_type = WithdrawalRuleType.DAILY_COUNT_LIMIT

    def __init__(self, maximum: int = DEFAULT_MAX_DAILY_WITHDRAWAL_COUNT):
        self.maximum = maximum

    def check(self, request: WithdrawalRequest) -> None:
        if request.withdrawal_count_today() >= self.maximum:
            raise InvalidOperationError(f"Cannot exceed {self.maximum} withdrawals per day.")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(maximum={self.maximum})"


class WithdrawalRuleChain:
    """
    Ordered, short-circuit evaluation of withdrawal rules
    """

    def __init__(self, rules: Iterable[WithdrawalRule]):
        self._rules: Tuple[WithdrawalRule, ...] = tuple(rules)
        self.logger = get_logger("bank_account.rules")

    @property
    def rules(self) -> Tuple[WithdrawalRule, ...]:
        return self._rules

    def evaluate(self, request: WithdrawalRequest) -> None:
        """
        Run every rule in order, stopping at the first violation

        Raises:
            InvalidArgumentError: If the request violates a precondition
            InvalidOperationError: If a daily limit would be exceeded
        """
        for rule in self._rules:
            try:
                rule.check(request)
            except BankAccountError as e:
                log_action(
                    self.logger, "debug", f"Rule {rule.name} rejected withdrawal: {e}",
                    action="withdraw",
                    resource="rule_chain",
                    extra={
                        "rule": rule.name,
                        "amount": request.amount,
                        "date": request.today.isoformat()
                    }
                )
                raise

    def __len__(self) -> int:
        return len(self._rules)


def default_withdrawal_rules(
    max_daily_amount: Optional[int] = None,
    max_daily_count: Optional[int] = None
) -> List[WithdrawalRule]:
    """
    Build the standard rule chain in priority order

    Args:
        max_daily_amount: Daily withdrawal amount cap (defaults to 100)
        max_daily_count: Daily withdrawal count cap (defaults to 3)
    """
    if max_daily_amount is None:
        max_daily_amount = DEFAULT_MAX_DAILY_WITHDRAWAL_AMOUNT
    if max_daily_count is None:
        max_daily_count = DEFAULT_MAX_DAILY_WITHDRAWAL_COUNT

    return [
        NonNegativeAmountRule(),
        SufficientBalanceRule(),
        DailyWithdrawalAmountRule(max_daily_amount),
        DailyWithdrawalCountRule(max_daily_count),
    ]
