"""
Bank Rules Engine Module

The bank owns the card holder's account and is the only component allowed
to read credentials or change balances. It answers yes/no questions for the
ATM (credentials, sufficiency, phone number) and applies mutations.

Checks never raise: a failed rule is a False the ATM turns into a Failure.
Mutations assume their check already passed and move value between exactly
two balances under the account lock, so no reader sees half a transfer.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import replace
from decimal import Decimal
from typing import Iterator
import threading

from .accounts import Account, BalanceSnapshot
from .amounts import AmountLike, ZERO, as_amount
from .logging_config import get_logger


class BankAPI(ABC):
    """Operations the ATM may call on a bank"""

    # Identity
    @property
    @abstractmethod
    def holder_name(self) -> str:
        pass

    @abstractmethod
    def authenticate(self, card_id: str, pin: int) -> bool:
        pass

    # Balance reads
    @property
    @abstractmethod
    def card_balance(self) -> Decimal:
        pass

    @property
    @abstractmethod
    def deposit_balance(self) -> Decimal:
        pass

    @property
    @abstractmethod
    def cash_balance(self) -> Decimal:
        pass

    @property
    @abstractmethod
    def phone_balance(self) -> Decimal:
        pass

    @abstractmethod
    def snapshot(self) -> BalanceSnapshot:
        pass

    # Checks
    @abstractmethod
    def has_nonzero_card_balance(self) -> bool:
        pass

    @abstractmethod
    def has_nonzero_deposit_balance(self) -> bool:
        pass

    @abstractmethod
    def can_cover_cash(self, amount: AmountLike) -> bool:
        pass

    @abstractmethod
    def can_cover_card(self, amount: AmountLike) -> bool:
        pass

    @abstractmethod
    def can_cover_deposit(self, amount: AmountLike) -> bool:
        pass

    @abstractmethod
    def matches_phone(self, number: str) -> bool:
        pass

    # Mutations
    @abstractmethod
    def withdraw_from_deposit(self, amount: AmountLike) -> None:
        pass

    @abstractmethod
    def withdraw_from_card(self, amount: AmountLike) -> None:
        pass

    @abstractmethod
    def deposit_to_deposit(self, amount: AmountLike) -> None:
        pass

    @abstractmethod
    def deposit_to_card(self, amount: AmountLike) -> None:
        pass

    @abstractmethod
    def pay_phone_by_cash(self, amount: AmountLike) -> None:
        pass

    @abstractmethod
    def pay_phone_by_card(self, amount: AmountLike) -> None:
        pass

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        """Hold the account for a check-then-mutate sequence (default no-op)"""
        yield


class Bank(BankAPI):
    """
    Production bank serving one account

    The bank keeps its own copy of the account, so later changes to the
    record passed in do not reach the balances it guards.
    """

    def __init__(self, account: Account):
        self._account = replace(account)
        self._lock = threading.RLock()
        self.logger = get_logger("atm.bank")

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        with self._lock:
            yield

    @property
    def holder_name(self) -> str:
        return self._account.name

    def authenticate(self, card_id: str, pin: int) -> bool:
        return card_id == self._account.card_id and pin == self._account.pin

    @property
    def card_balance(self) -> Decimal:
        return self._account.card_balance

    @property
    def deposit_balance(self) -> Decimal:
        return self._account.deposit_balance

    @property
    def cash_balance(self) -> Decimal:
        return self._account.cash_balance

    @property
    def phone_balance(self) -> Decimal:
        return self._account.phone_balance

    def snapshot(self) -> BalanceSnapshot:
        with self._lock:
            return self._account.snapshot()

    # Any non-zero value counts as present, including a negative one
    def has_nonzero_card_balance(self) -> bool:
        return self._account.card_balance != ZERO

    def has_nonzero_deposit_balance(self) -> bool:
        return self._account.deposit_balance != ZERO

    def can_cover_cash(self, amount: AmountLike) -> bool:
        return self._account.cash_balance >= as_amount(amount)

    def can_cover_card(self, amount: AmountLike) -> bool:
        return self._account.card_balance >= as_amount(amount)

    def can_cover_deposit(self, amount: AmountLike) -> bool:
        return self._account.deposit_balance >= as_amount(amount)

    def matches_phone(self, number: str) -> bool:
        return number == self._account.phone_number

    def withdraw_from_deposit(self, amount: AmountLike) -> None:
        amt = as_amount(amount)
        with self._lock:
            self._account.cash_balance += amt
            self._account.deposit_balance -= amt
        self.logger.debug(f"Moved {amt} from deposit to cash")

    def withdraw_from_card(self, amount: AmountLike) -> None:
        amt = as_amount(amount)
        with self._lock:
            self._account.cash_balance += amt
            self._account.card_balance -= amt
        self.logger.debug(f"Moved {amt} from card to cash")

    def deposit_to_deposit(self, amount: AmountLike) -> None:
        amt = as_amount(amount)
        with self._lock:
            self._account.deposit_balance += amt
            self._account.cash_balance -= amt
        self.logger.debug(f"Moved {amt} from cash to deposit")

    def deposit_to_card(self, amount: AmountLike) -> None:
        amt = as_amount(amount)
        with self._lock:
            self._account.card_balance += amt
            self._account.cash_balance -= amt
        self.logger.debug(f"Moved {amt} from cash to card")

    def pay_phone_by_cash(self, amount: AmountLike) -> None:
        amt = as_amount(amount)
        with self._lock:
            self._account.phone_balance += amt
            self._account.cash_balance -= amt
        self.logger.debug(f"Moved {amt} from cash to phone")

    def pay_phone_by_card(self, amount: AmountLike) -> None:
        amt = as_amount(amount)
        with self._lock:
            self._account.phone_balance += amt
            self._account.card_balance -= amt
        self.logger.debug(f"Moved {amt} from card to phone")
