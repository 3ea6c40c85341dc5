"""
Account Module

Holds the identity, credentials and balances of the single card holder the
bank serves. The account has no rules of its own: sufficiency checks and
mutations belong to the bank that owns it.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Dict
from enum import Enum

from .amounts import AmountLike, as_amount


class BalanceField(Enum):
    """Balances kept for a card holder"""
    CASH = "cash"          # Cash in hand
    DEPOSIT = "deposit"    # Bank deposit
    CARD = "card"          # Card account
    PHONE = "phone"        # Mobile phone balance


@dataclass(frozen=True)
class BalanceSnapshot:
    """Read-only copy of all four balances at one point in time"""
    cash: Decimal
    deposit: Decimal
    card: Decimal
    phone: Decimal

    def get(self, field: BalanceField) -> Decimal:
        return getattr(self, field.value)

    def as_dict(self) -> Dict[BalanceField, Decimal]:
        return {f: self.get(f) for f in BalanceField}

    def diff(self, other: 'BalanceSnapshot') -> Dict[BalanceField, Decimal]:
        """Signed deltas from self to other, non-zero entries only"""
        deltas = {}
        for f in BalanceField:
            delta = other.get(f) - self.get(f)
            if delta != 0:
                deltas[f] = delta
        return deltas


@dataclass(eq=False)
class Account:
    """
    Card holder record.

    Identity is by reference: one Account object is one person's state for
    the session. Balances may go negative; nothing here prevents it.
    """
    name: str
    card_id: str
    pin: int
    phone_number: str
    cash_balance: Decimal
    deposit_balance: Decimal
    card_balance: Decimal
    phone_balance: Decimal

    def __post_init__(self):
        for attr in ('cash_balance', 'deposit_balance', 'card_balance', 'phone_balance'):
            setattr(self, attr, as_amount(getattr(self, attr)))

    @classmethod
    def open(
        cls,
        name: str,
        card_id: str,
        pin: int,
        phone_number: str,
        cash: AmountLike = 0,
        deposit: AmountLike = 0,
        card: AmountLike = 0,
        phone: AmountLike = 0
    ) -> 'Account':
        """Create an account with short keyword names for the balances"""
        return cls(
            name=name,
            card_id=card_id,
            pin=pin,
            phone_number=phone_number,
            cash_balance=cash,
            deposit_balance=deposit,
            card_balance=card,
            phone_balance=phone
        )

    def snapshot(self) -> BalanceSnapshot:
        return BalanceSnapshot(
            cash=self.cash_balance,
            deposit=self.deposit_balance,
            card=self.card_balance,
            phone=self.phone_balance
        )
