"""
ATM Dispatcher Module

Routes a requested action to the bank: authenticate first, then run the
action's check and, if it passes, its mutation. Each call ends in exactly one
Outcome, and a declined action never touches a balance.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .accounts import BalanceField
from .actions import (
    Action, PaymentMethod, Cash, Card,
    RequestCardBalance, RequestDepositBalance,
    WithdrawFromDeposit, WithdrawFromCard,
    DepositToDeposit, DepositToCard, PayPhone
)
from .audit import AuditTrail, AuditEventType
from .bank import BankAPI
from .logging_config import get_logger, log_action, mask_card_id
from .outcomes import ErrorKind, Failure, Outcome, Success


class ATM:
    """
    Teller terminal in front of one bank
    """

    def __init__(self, bank: BankAPI, audit_trail: Optional[AuditTrail] = None):
        self.bank = bank
        self.audit_trail = audit_trail
        self.logger = get_logger("atm.dispatcher")

    def execute(
        self,
        card_id: str,
        pin: int,
        action: Action,
        payment: Optional[PaymentMethod] = None
    ) -> Outcome:
        """
        Authenticate and run one action

        Args:
            card_id: Card number as entered
            pin: PIN as entered
            action: Requested operation
            payment: Payment method, used only by PayPhone

        Returns:
            Success or Failure

        Raises:
            TypeError: If action or payment is not a known variant
        """
        with self.bank.exclusive():
            if not self.bank.authenticate(card_id, pin):
                outcome = Failure.of(action, ErrorKind.INCORRECT_CREDENTIALS)
            else:
                outcome = self._dispatch(action, payment)

        self._record(card_id, outcome)
        return outcome

    def session(self, card_id: str, pin: int) -> 'ATMSession':
        """Bind one credential pair for several consecutive actions"""
        return ATMSession(self, card_id, pin)

    def _dispatch(self, action: Action, payment: Optional[PaymentMethod]) -> Outcome:
        bank = self.bank

        if isinstance(action, RequestCardBalance):
            if bank.has_nonzero_card_balance():
                return Success(action, {BalanceField.CARD: bank.card_balance})
            return Failure.of(action, ErrorKind.EMPTY_CARD_BALANCE)

        if isinstance(action, RequestDepositBalance):
            if bank.has_nonzero_deposit_balance():
                return Success(action, {BalanceField.DEPOSIT: bank.deposit_balance})
            return Failure.of(action, ErrorKind.EMPTY_DEPOSIT_BALANCE)

        if isinstance(action, WithdrawFromDeposit):
            if not bank.can_cover_deposit(action.amount):
                return Failure.of(action, ErrorKind.INSUFFICIENT_DEPOSIT)
            bank.withdraw_from_deposit(action.amount)
            return self._moved(action, action.amount, BalanceField.CASH, BalanceField.DEPOSIT)

        if isinstance(action, WithdrawFromCard):
            if not bank.can_cover_card(action.amount):
                return Failure.of(action, ErrorKind.INSUFFICIENT_CARD)
            bank.withdraw_from_card(action.amount)
            return self._moved(action, action.amount, BalanceField.CASH, BalanceField.CARD)

        if isinstance(action, DepositToDeposit):
            if not bank.can_cover_cash(action.amount):
                return Failure.of(action, ErrorKind.INSUFFICIENT_CASH)
            bank.deposit_to_deposit(action.amount)
            return self._moved(action, action.amount, BalanceField.DEPOSIT, BalanceField.CASH)

        if isinstance(action, DepositToCard):
            if not bank.can_cover_cash(action.amount):
                return Failure.of(action, ErrorKind.INSUFFICIENT_CASH)
            bank.deposit_to_card(action.amount)
            return self._moved(action, action.amount, BalanceField.CARD, BalanceField.CASH)

        if isinstance(action, PayPhone):
            return self._pay_phone(action, payment)

        raise TypeError(f"Unsupported action: {type(action).__name__}")

    def _pay_phone(self, action: PayPhone, payment: Optional[PaymentMethod]) -> Outcome:
        bank = self.bank

        # Phone number is checked before the payment is even looked at
        if not bank.matches_phone(action.phone_number):
            return Failure.of(action, ErrorKind.INCORRECT_PHONE)

        if payment is None:
            return Failure.of(action, ErrorKind.INCORRECT_PAYMENT)

        if isinstance(payment, Card):
            if not bank.can_cover_card(payment.amount):
                return Failure.of(action, ErrorKind.INSUFFICIENT_CARD)
            bank.pay_phone_by_card(payment.amount)
            return self._moved(action, payment.amount, BalanceField.PHONE, BalanceField.CARD)

        if isinstance(payment, Cash):
            if not bank.can_cover_cash(payment.amount):
                return Failure.of(action, ErrorKind.INSUFFICIENT_CASH)
            bank.pay_phone_by_cash(payment.amount)
            return self._moved(action, payment.amount, BalanceField.PHONE, BalanceField.CASH)

        raise TypeError(f"Unsupported payment method: {type(payment).__name__}")

    def _moved(
        self,
        action: Action,
        amount: Decimal,
        credited: BalanceField,
        debited: BalanceField
    ) -> Success:
        snapshot = self.bank.snapshot()
        return Success(
            action,
            balances={
                credited: snapshot.get(credited),
                debited: snapshot.get(debited)
            },
            amount=amount,
            paid_by=debited if credited == BalanceField.PHONE else None
        )

    def _record(self, card_id: str, outcome: Outcome) -> None:
        """Log and audit a finished dispatch"""
        masked = mask_card_id(card_id)
        action_name = type(outcome.action).__name__
        details = {
            "action": action_name,
            "operation": outcome.operation.value,
        }

        if outcome.is_success:
            details["balances"] = {f.value: str(v) for f, v in outcome.balances.items()}
            if outcome.amount is not None:
                details["amount"] = str(outcome.amount)
                event_type = AuditEventType.TRANSACTION_COMPLETED
            else:
                event_type = AuditEventType.BALANCE_INQUIRY
            log_action(
                self.logger, "info", f"ATM action completed: {action_name}",
                action="execute", resource=f"card:{masked}", extra=details
            )
        else:
            details["error"] = outcome.error.name
            details["critical"] = outcome.critical
            if outcome.error == ErrorKind.INCORRECT_CREDENTIALS:
                event_type = AuditEventType.AUTHENTICATION_FAILED
            else:
                event_type = AuditEventType.TRANSACTION_DECLINED
            log_action(
                self.logger, "warning", f"ATM action declined: {outcome.error.name}",
                action="execute", resource=f"card:{masked}", extra=details
            )

        if self.audit_trail is not None:
            self.audit_trail.log_event(
                event_type=event_type,
                entity_type="card",
                entity_id=masked,
                metadata=details
            )


@dataclass
class ATMSession:
    """Credentials entered once, reused for each action"""
    atm: ATM
    card_id: str
    pin: int

    def execute(self, action: Action, payment: Optional[PaymentMethod] = None) -> Outcome:
        return self.atm.execute(self.card_id, self.pin, action, payment)
