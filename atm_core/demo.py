"""
Demo Bootstrap

Builds the configured demo card holder, a bank and an ATM, and runs a few
scripted visits to the terminal. Each visit prints its receipt.
"""

from typing import Callable, Dict, List, Optional, Tuple

from .accounts import Account
from .actions import (
    Action, PaymentMethod, Card, Cash,
    RequestCardBalance, RequestDepositBalance,
    WithdrawFromDeposit, WithdrawFromCard,
    DepositToCard, PayPhone
)
from .atm import ATM
from .audit import AuditTrail
from .bank import Bank
from .config import AtmConfig, get_config
from .outcomes import Outcome
from .receipts import ReceiptPrinter
from .storage import InMemoryStorage

# (card_id override, pin override, action, payment); None keeps the demo credential
Step = Tuple[Optional[str], Optional[int], Action, Optional[PaymentMethod]]


def _scenarios(cfg: AtmConfig) -> Dict[str, List[Step]]:
    phone = cfg.demo_phone_number
    return {
        # The terminal's original test block: empty the deposit, then ask for it
        "empty-deposit": [
            (None, None, WithdrawFromDeposit(1000), None),
            (None, None, RequestDepositBalance(), None),
        ],
        "card": [
            (None, None, RequestCardBalance(), None),
            (None, None, WithdrawFromCard(100), None),
            (None, None, DepositToCard(50), None),
            (None, None, WithdrawFromCard(1000), None),
        ],
        "phone": [
            (None, None, PayPhone(phone), Cash(20)),
            (None, None, PayPhone(phone), Card(15)),
            (None, None, PayPhone(phone), None),
            (None, None, PayPhone("+48000000000"), Cash(20)),
        ],
        "wrong-pin": [
            (None, 1111, RequestCardBalance(), None),
        ],
    }


SCENARIOS = ("empty-deposit", "card", "phone", "wrong-pin")


def build_account(cfg: AtmConfig) -> Account:
    return Account(
        name=cfg.demo_name,
        card_id=cfg.demo_card_id,
        pin=cfg.demo_pin,
        phone_number=cfg.demo_phone_number,
        cash_balance=cfg.demo_cash_balance,
        deposit_balance=cfg.demo_deposit_balance,
        card_balance=cfg.demo_card_balance,
        phone_balance=cfg.demo_phone_balance
    )


def run_scenario(
    name: str,
    cfg: Optional[AtmConfig] = None,
    emit: Callable[[str], None] = print
) -> List[Outcome]:
    """
    Run one named scenario against a fresh demo account

    Raises:
        KeyError: If the scenario name is unknown
    """
    cfg = cfg or get_config()
    steps = _scenarios(cfg)[name]

    bank = Bank(build_account(cfg))
    audit_trail = AuditTrail(InMemoryStorage()) if cfg.enable_audit_logging else None
    atm = ATM(bank, audit_trail)
    printer = ReceiptPrinter(bank.holder_name, cfg.currency_symbol)

    outcomes = []
    for card_id, pin, action, payment in steps:
        outcome = atm.execute(
            card_id if card_id is not None else cfg.demo_card_id,
            pin if pin is not None else cfg.demo_pin,
            action,
            payment
        )
        emit(printer.render(outcome))
        outcomes.append(outcome)
    return outcomes
