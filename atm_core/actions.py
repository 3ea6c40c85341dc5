"""
ATM Actions Module

The operations a card holder can request at the terminal, and the payment
methods accepted for a phone top-up. Each is a small immutable value; the
dispatcher branches on its type.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Union
from enum import Enum

from .amounts import as_amount


class OperationType(Enum):
    """Operation the user selected on the terminal menu"""
    BALANCE_REQUEST = "Balance Request"
    CASH_WITHDRAWAL = "Withdrawal Cash"
    DEPOSIT_TOP_UP = "Puting Money To The Deposit"
    PHONE_TOP_UP = "Puting Money To The Phone"
    CARD_TOP_UP = "Puting Money To The Card"

    @property
    def description(self) -> str:
        return f'The user has selected the "{self.value}" operation'


def _coerce_amount(instance, attr: str = 'amount') -> None:
    # Frozen dataclass: bypass __setattr__. Sign is deliberately not checked.
    object.__setattr__(instance, attr, as_amount(getattr(instance, attr)))


@dataclass(frozen=True)
class RequestCardBalance:
    operation = OperationType.BALANCE_REQUEST


@dataclass(frozen=True)
class RequestDepositBalance:
    operation = OperationType.BALANCE_REQUEST


@dataclass(frozen=True)
class WithdrawFromDeposit:
    amount: Decimal
    operation = OperationType.CASH_WITHDRAWAL

    def __post_init__(self):
        _coerce_amount(self)


@dataclass(frozen=True)
class WithdrawFromCard:
    amount: Decimal
    operation = OperationType.CASH_WITHDRAWAL

    def __post_init__(self):
        _coerce_amount(self)


@dataclass(frozen=True)
class DepositToDeposit:
    amount: Decimal
    operation = OperationType.DEPOSIT_TOP_UP

    def __post_init__(self):
        _coerce_amount(self)


@dataclass(frozen=True)
class DepositToCard:
    amount: Decimal
    operation = OperationType.CARD_TOP_UP

    def __post_init__(self):
        _coerce_amount(self)


@dataclass(frozen=True)
class PayPhone:
    phone_number: str
    operation = OperationType.PHONE_TOP_UP


Action = Union[
    RequestCardBalance,
    RequestDepositBalance,
    WithdrawFromDeposit,
    WithdrawFromCard,
    DepositToDeposit,
    DepositToCard,
    PayPhone,
]


@dataclass(frozen=True)
class Cash:
    """Pay with cash in hand"""
    amount: Decimal

    def __post_init__(self):
        _coerce_amount(self)


@dataclass(frozen=True)
class Card:
    """Pay from the card account"""
    amount: Decimal

    def __post_init__(self):
        _coerce_amount(self)


PaymentMethod = Union[Cash, Card]
