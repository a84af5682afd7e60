"""
Test suite for withdrawal rules

Each rule is tested in isolation, then the chain is tested for ordering.
"""

import pytest
from datetime import date

from bank_account.errors import InvalidArgumentError, InvalidOperationError
from bank_account.ledger import Transaction
from bank_account.rules import (
    WithdrawalRequest, WithdrawalRuleChain, WithdrawalRuleType,
    NonNegativeAmountRule, SufficientBalanceRule,
    DailyWithdrawalAmountRule, DailyWithdrawalCountRule,
    default_withdrawal_rules, ensure_non_negative
)

TODAY = date(2015, 7, 1)
YESTERDAY = date(2015, 6, 30)


def request(amount, balance=1000, history=()):
    return WithdrawalRequest(amount=amount, today=TODAY, balance=balance, history=tuple(history))


class TestWithdrawalRequest:
    """Test daily aggregates computed from history"""

    def test_only_todays_withdrawals_count(self):
        """Test that deposits and other days are ignored"""
        history = [
            Transaction(amount=500, date=TODAY, balance=500),
            Transaction(amount=-30, date=YESTERDAY, balance=470),
            Transaction(amount=-20, date=TODAY, balance=450),
            Transaction(amount=-15, date=TODAY, balance=435),
        ]

        req = request(1, history=history)

        assert req.amount_withdrawn_today() == 35
        assert req.withdrawal_count_today() == 2
        assert req.withdrawals_today() == history[2:]

    def test_empty_history(self):
        """Test aggregates with no history"""
        req = request(1)

        assert req.amount_withdrawn_today() == 0
        assert req.withdrawal_count_today() == 0


class TestIndividualRules:
    """Test each rule on its own"""

    def test_non_negative_amount(self):
        """Test negative amounts are rejected and zero is allowed"""
        rule = NonNegativeAmountRule()

        rule.check(request(0))
        with pytest.raises(InvalidArgumentError, match="Negative amounts are not allowed."):
            rule.check(request(-1))

    def test_ensure_non_negative(self):
        """Test the shared amount guard"""
        ensure_non_negative(0)
        with pytest.raises(InvalidArgumentError):
            ensure_non_negative(-5)

    def test_sufficient_balance(self):
        """Test that withdrawing the whole balance is allowed but not more"""
        rule = SufficientBalanceRule()

        rule.check(request(10, balance=10))
        with pytest.raises(InvalidArgumentError, match="Balance is insufficient."):
            rule.check(request(11, balance=10))

    def test_daily_amount_limit(self):
        """Test that the daily total may reach but not exceed the limit"""
        rule = DailyWithdrawalAmountRule()
        history = [Transaction(amount=-60, date=TODAY, balance=940)]

        rule.check(request(40, history=history))
        with pytest.raises(InvalidOperationError, match="Cannot withdraw more than 100 per day."):
            rule.check(request(41, history=history))

    def test_daily_amount_limit_ignores_other_days(self):
        """Test that yesterday's withdrawals do not count"""
        rule = DailyWithdrawalAmountRule()
        history = [Transaction(amount=-100, date=YESTERDAY, balance=900)]

        rule.check(request(100, history=history))

    def test_daily_count_limit(self):
        """Test that a fourth withdrawal on the same day is rejected"""
        rule = DailyWithdrawalCountRule()
        two = [Transaction(amount=-1, date=TODAY, balance=999 - i) for i in range(2)]
        three = [Transaction(amount=-1, date=TODAY, balance=999 - i) for i in range(3)]

        rule.check(request(1, history=two))
        with pytest.raises(InvalidOperationError, match="Cannot exceed 3 withdrawals per day."):
            rule.check(request(1, history=three))

    def test_custom_limits_in_messages(self):
        """Test that configured limits appear in error messages"""
        history = [Transaction(amount=-5, date=TODAY, balance=995)]

        with pytest.raises(InvalidOperationError, match="Cannot withdraw more than 5 per day."):
            DailyWithdrawalAmountRule(maximum=5).check(request(1, history=history))

        with pytest.raises(InvalidOperationError, match="Cannot exceed 1 withdrawals per day."):
            DailyWithdrawalCountRule(maximum=1).check(request(1, history=history))

    def test_rule_names(self):
        """Test rule identification"""
        assert NonNegativeAmountRule().name == "non_negative_amount"
        assert DailyWithdrawalCountRule().rule_type == WithdrawalRuleType.DAILY_COUNT_LIMIT


class TestWithdrawalRuleChain:
    """Test ordered, short-circuit evaluation"""

    def test_default_order(self):
        """Test the standard chain order"""
        chain = WithdrawalRuleChain(default_withdrawal_rules())

        assert [rule.rule_type for rule in chain.rules] == [
            WithdrawalRuleType.NON_NEGATIVE_AMOUNT,
            WithdrawalRuleType.SUFFICIENT_BALANCE,
            WithdrawalRuleType.DAILY_AMOUNT_LIMIT,
            WithdrawalRuleType.DAILY_COUNT_LIMIT,
        ]
        assert len(chain) == 4

    def test_default_limits_are_configurable(self):
        """Test building the chain with other limits"""
        rules = default_withdrawal_rules(max_daily_amount=500, max_daily_count=10)

        assert rules[2].maximum == 500
        assert rules[3].maximum == 10

    def test_valid_request_passes(self):
        """Test that a valid request raises nothing"""
        chain = WithdrawalRuleChain(default_withdrawal_rules())

        chain.evaluate(request(50))

    def test_balance_reported_before_daily_limits(self):
        """Test insufficient balance wins over both daily limits"""
        history = [Transaction(amount=-1, date=TODAY, balance=2 - i) for i in range(3)]
        chain = WithdrawalRuleChain(default_withdrawal_rules())

        with pytest.raises(InvalidArgumentError, match="Balance is insufficient."):
            chain.evaluate(request(101, balance=0, history=history))

    def test_amount_limit_reported_before_count_limit(self):
        """Test the amount limit wins when both daily limits are exceeded"""
        history = [
            Transaction(amount=-40, date=TODAY, balance=160),
            Transaction(amount=-40, date=TODAY, balance=120),
            Transaction(amount=-20, date=TODAY, balance=100),
        ]
        chain = WithdrawalRuleChain(default_withdrawal_rules())

        with pytest.raises(InvalidOperationError, match="Cannot withdraw more than 100 per day."):
            chain.evaluate(request(1, balance=100, history=history))

    def test_stops_at_first_violation(self):
        """Test that later rules are not consulted after a violation"""
        calls = []

        class RecordingRule(SufficientBalanceRule):
            def check(self, req):
                calls.append(req.amount)

        chain = WithdrawalRuleChain([NonNegativeAmountRule(), RecordingRule()])

        with pytest.raises(InvalidArgumentError):
            chain.evaluate(request(-1))
        assert calls == []

        chain.evaluate(request(1))
        assert calls == [1]

    def test_rules_are_read_only(self):
        """Test that the chain exposes an immutable sequence"""
        chain = WithdrawalRuleChain(default_withdrawal_rules())

        assert isinstance(chain.rules, tuple)
