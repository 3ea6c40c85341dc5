"""
Test suite for the account model and action values

Tests construction, Decimal conversion and snapshots. Accounts never
validate their balances; actions never validate their amounts.
"""

import pytest
from decimal import Decimal

from atm_core.accounts import Account, BalanceField, BalanceSnapshot
from atm_core.actions import (
    Card, Cash, OperationType,
    RequestCardBalance, RequestDepositBalance,
    WithdrawFromDeposit, WithdrawFromCard,
    DepositToDeposit, DepositToCard, PayPhone
)


class TestAccount:
    """Test Account construction"""

    def test_balances_become_decimal(self):
        account = Account(
            name="Raman Kozar",
            card_id="4409 7788 9321 8700",
            pin=5678,
            phone_number="+48567897464",
            cash_balance=500,
            deposit_balance="1000.00",
            card_balance=300.0,
            phone_balance=Decimal('13.25')
        )
        assert account.cash_balance == Decimal('500')
        assert account.deposit_balance == Decimal('1000.00')
        assert account.card_balance == Decimal('300.0')
        assert all(isinstance(v, Decimal) for v in account.snapshot().as_dict().values())

    def test_open_defaults_to_zero(self):
        account = Account.open("A", "1", 1, "+1")
        assert account.snapshot() == BalanceSnapshot(
            cash=Decimal('0'), deposit=Decimal('0'),
            card=Decimal('0'), phone=Decimal('0')
        )

    def test_negative_balances_allowed(self):
        account = Account.open("A", "1", 1, "+1", card=-10)
        assert account.card_balance == Decimal('-10')

    def test_identity_is_by_reference(self):
        a = Account.open("A", "1", 1, "+1")
        b = Account.open("A", "1", 1, "+1")
        assert a != b
        assert a == a


class TestBalanceSnapshot:
    """Test snapshots and deltas"""

    def test_get_and_as_dict(self):
        snap = BalanceSnapshot(
            cash=Decimal('1'), deposit=Decimal('2'),
            card=Decimal('3'), phone=Decimal('4')
        )
        assert snap.get(BalanceField.CARD) == Decimal('3')
        assert snap.as_dict()[BalanceField.PHONE] == Decimal('4')

    def test_diff_only_reports_changes(self):
        before = BalanceSnapshot(Decimal('500'), Decimal('1000'), Decimal('300'), Decimal('0'))
        after = BalanceSnapshot(Decimal('600'), Decimal('900'), Decimal('300'), Decimal('0'))
        assert before.diff(after) == {
            BalanceField.CASH: Decimal('100'),
            BalanceField.DEPOSIT: Decimal('-100'),
        }

    def test_snapshot_is_a_copy(self):
        account = Account.open("A", "1", 1, "+1", cash=5)
        snap = account.snapshot()
        account.cash_balance += 1
        assert snap.cash == Decimal('5')


class TestActions:
    """Test action and payment values"""

    def test_amounts_become_decimal(self):
        assert WithdrawFromDeposit(1000).amount == Decimal('1000')
        assert WithdrawFromCard("12,50").amount == Decimal('12.50')
        assert Cash(1000.01).amount == Decimal('1000.01')
        assert Card(Decimal('5')).amount == Decimal('5')

    def test_sign_is_not_checked(self):
        assert DepositToCard(-5).amount == Decimal('-5')
        assert DepositToDeposit(0).amount == Decimal('0')

    def test_invalid_amount_type(self):
        with pytest.raises(TypeError):
            WithdrawFromCard(None)

    def test_actions_are_immutable(self):
        action = WithdrawFromCard(10)
        with pytest.raises(AttributeError):
            action.amount = Decimal('20')

    def test_operation_types(self):
        assert RequestCardBalance().operation == OperationType.BALANCE_REQUEST
        assert RequestDepositBalance().operation == OperationType.BALANCE_REQUEST
        assert WithdrawFromDeposit(1).operation == OperationType.CASH_WITHDRAWAL
        assert WithdrawFromCard(1).operation == OperationType.CASH_WITHDRAWAL
        assert DepositToDeposit(1).operation == OperationType.DEPOSIT_TOP_UP
        assert DepositToCard(1).operation == OperationType.CARD_TOP_UP
        assert PayPhone("+1").operation == OperationType.PHONE_TOP_UP

    def test_operation_description(self):
        assert OperationType.BALANCE_REQUEST.description == (
            'The user has selected the "Balance Request" operation'
        )

    def test_value_equality(self):
        assert WithdrawFromCard(10) == WithdrawFromCard(Decimal('10'))
        assert PayPhone("+1") != PayPhone("+2")
        assert Cash(5) != Card(5)
