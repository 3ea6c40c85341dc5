"""
Dispatch Outcome Module

Every call to the ATM produces exactly one Outcome: a Success naming the
balances that were reported or changed, or a Failure naming what went wrong.
Business failures are values, never exceptions.
"""

from decimal import Decimal
from dataclasses import dataclass, field
from typing import Dict, Optional, Union
from enum import Enum

from .accounts import BalanceField
from .actions import Action, OperationType


class ErrorKind(Enum):
    """Reasons a requested action was declined"""
    INCORRECT_CREDENTIALS = "The entered PIN/card number is incorrect"
    EMPTY_CARD_BALANCE = "Balance of the card is empty"
    EMPTY_DEPOSIT_BALANCE = "Balance of the bank deposit is empty"
    INSUFFICIENT_CASH = "You have not enough cash"
    INSUFFICIENT_CARD = "You have not enough money on the card"
    INSUFFICIENT_DEPOSIT = "You have not enough money on bank deposit"
    INCORRECT_PHONE = "The entered phone number is incorrect"
    INCORRECT_PAYMENT = "Have troubles with payment"

    @property
    def message(self) -> str:
        return self.value

    @property
    def critical(self) -> bool:
        return ERROR_SEVERITY[self]


# Empty-balance inquiries are informational; everything else is critical
ERROR_SEVERITY: Dict[ErrorKind, bool] = {
    ErrorKind.INCORRECT_CREDENTIALS: True,
    ErrorKind.EMPTY_CARD_BALANCE: False,
    ErrorKind.EMPTY_DEPOSIT_BALANCE: False,
    ErrorKind.INSUFFICIENT_CASH: True,
    ErrorKind.INSUFFICIENT_CARD: True,
    ErrorKind.INSUFFICIENT_DEPOSIT: True,
    ErrorKind.INCORRECT_PHONE: True,
    ErrorKind.INCORRECT_PAYMENT: True,
}


@dataclass(frozen=True)
class Success:
    """
    Completed action.

    ``balances`` holds the new values of the balances that changed, or for
    an inquiry the single balance that was requested. ``amount`` is the
    quantity moved, None for inquiries.
    """
    action: Action
    balances: Dict[BalanceField, Decimal] = field(default_factory=dict)
    amount: Optional[Decimal] = None
    paid_by: Optional[BalanceField] = None  # phone top-ups only

    @property
    def is_success(self) -> bool:
        return True

    @property
    def operation(self) -> OperationType:
        return self.action.operation

    @property
    def changed_fields(self):
        if self.amount is None:
            return frozenset()
        return frozenset(self.balances)


@dataclass(frozen=True)
class Failure:
    """Declined action. A Failure guarantees no balance was touched."""
    action: Action
    error: ErrorKind
    critical: bool

    @classmethod
    def of(cls, action: Action, error: ErrorKind) -> 'Failure':
        return cls(action=action, error=error, critical=error.critical)

    @property
    def is_success(self) -> bool:
        return False

    @property
    def operation(self) -> OperationType:
        return self.action.operation


Outcome = Union[Success, Failure]
