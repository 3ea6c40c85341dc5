"""
Receipt Rendering Module

Turns an Outcome into the message printed for the card holder. The wording
follows the terminal's original receipts; nothing here affects balances.
"""

from decimal import Decimal

from .accounts import BalanceField
from .actions import (
    RequestCardBalance, RequestDepositBalance,
    WithdrawFromDeposit, WithdrawFromCard,
    DepositToDeposit, DepositToCard, PayPhone
)
from .outcomes import Failure, Outcome, Success
from .amounts import format_amount


class ReceiptPrinter:
    """Formats outcomes for one card holder"""

    def __init__(self, holder_name: str, currency_symbol: str = "zł"):
        self.holder_name = holder_name
        self.currency_symbol = currency_symbol

    def money(self, amount: Decimal) -> str:
        return format_amount(amount, self.currency_symbol)

    def render(self, outcome: Outcome) -> str:
        if isinstance(outcome, Failure):
            return self.render_failure(outcome)
        return self.render_success(outcome)

    def render_failure(self, outcome: Failure) -> str:
        if outcome.critical:
            return f"Dear {self.holder_name}. Error: {outcome.error.message}"
        return f"Dear {self.holder_name}. {outcome.error.message}"

    def render_success(self, outcome: Success) -> str:
        action = outcome.action
        balances = outcome.balances
        head = f"Dear {self.holder_name}, {outcome.operation.description}"

        if isinstance(action, RequestCardBalance):
            return (f"{head}, your card balance is "
                    f"{self.money(balances[BalanceField.CARD])}. Thank you.")

        if isinstance(action, RequestDepositBalance):
            return (f"{head}, your balance at your deposit is "
                    f"{self.money(balances[BalanceField.DEPOSIT])}. Thank you.")

        amount = self.money(outcome.amount)
        cash = balances.get(BalanceField.CASH)

        if isinstance(action, WithdrawFromCard):
            return (f"{head}, you've withdrawn the amount {amount} from your card. Thank you. "
                    f"Your card balance is {self.money(balances[BalanceField.CARD])}. "
                    f"Your cash balance is {self.money(cash)}.")

        if isinstance(action, WithdrawFromDeposit):
            return (f"{head}, you've withdrawn the amount {amount} from your deposit. Thank you. "
                    f"Your deposit balance is {self.money(balances[BalanceField.DEPOSIT])}. "
                    f"Your cash balance is {self.money(cash)}.")

        if isinstance(action, DepositToCard):
            return (f"{head}, you've topped up your card in the amount {amount}. Thank you. "
                    f"Your card balance is {self.money(balances[BalanceField.CARD])}. "
                    f"Your cash balance is {self.money(cash)}.")

        if isinstance(action, DepositToDeposit):
            return (f"{head}, you've topped up your deposit in the amount {amount}. Thank you. "
                    f"Your deposit balance is {self.money(balances[BalanceField.DEPOSIT])}. "
                    f"Your cash balance is {self.money(cash)}.")

        if isinstance(action, PayPhone):
            source = outcome.paid_by
            method = "cash" if source == BalanceField.CASH else "card"
            return (f"{head}, you've topped up your mobile in the amount {amount} by {method}. "
                    f"Thank you. Your {method} balance is {self.money(balances[source])}. "
                    f"Your mobile balance is {self.money(balances[BalanceField.PHONE])}.")

        raise TypeError(f"Unsupported action: {type(action).__name__}")


def render_outcome(outcome: Outcome, holder_name: str, currency_symbol: str = "zł") -> str:
    """Shortcut for a one-off receipt"""
    return ReceiptPrinter(holder_name, currency_symbol).render(outcome)
