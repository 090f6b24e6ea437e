"""
Balance mutation primitives.

These functions never touch the database. They operate on any object with
wallet_balance and bonus_balance attributes (a User, or a plain stand-in
in tests) and either apply the whole mutation or raise without changing
anything. Callers hold the row lock.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal, Protocol

from investplan.config.constants import ZERO
from investplan.utils.exceptions import InsufficientFundsError
from investplan.utils.formatters import format_money


WALLET_BALANCE = "wallet_balance"
BONUS_BALANCE = "bonus_balance"

BalanceField = Literal["wallet_balance", "bonus_balance"]


class BalanceHolder(Protocol):
    """Anything carrying the two balances."""

    wallet_balance: Decimal
    bonus_balance: Decimal


@dataclass(frozen=True)
class FundingSplit:
    """How an amount was funded across the two balances."""

    bonus_used: Decimal
    wallet_used: Decimal

    @property
    def total(self) -> Decimal:
        return self.bonus_used + self.wallet_used


def _require_non_negative(amount: Decimal) -> None:
    if amount < ZERO:
        raise ValueError(f"Amount must not be negative: {amount}")


def _check_field(field: str) -> None:
    if field not in (WALLET_BALANCE, BONUS_BALANCE):
        raise ValueError(f"Unknown balance field: {field}")


def split_bonus_then_wallet(
    bonus_balance: Decimal, wallet_balance: Decimal, amount: Decimal
) -> FundingSplit:
    """
    Decide how to fund amount: bonus first, remainder from wallet.

    Args:
        bonus_balance: Available bonus balance
        wallet_balance: Available wallet balance
        amount: Amount to fund

    Returns:
        FundingSplit with bonus_used + wallet_used == amount

    Raises:
        InsufficientFundsError: If wallet cannot cover the remainder

    Example:
        >>> split_bonus_then_wallet(Decimal("300"), Decimal("800"), Decimal("1000"))
        FundingSplit(bonus_used=Decimal('300'), wallet_used=Decimal('700'))
    """
    _require_non_negative(amount)

    bonus_used = min(max(bonus_balance, ZERO), amount)
    wallet_used = amount - bonus_used

    if wallet_balance < wallet_used:
        raise InsufficientFundsError(
            "Insufficient wallet balance to activate this plan, even with "
            f"bonus. Needed {format_money(wallet_used)} from wallet.",
            required=amount,
            available=max(bonus_balance, ZERO) + max(wallet_balance, ZERO),
        )

    return FundingSplit(bonus_used=bonus_used, wallet_used=wallet_used)


def debit_bonus_then_wallet(
    account: BalanceHolder, amount: Decimal
) -> FundingSplit:
    """
    Debit amount from account, consuming bonus before wallet.

    All-or-nothing: on InsufficientFundsError neither balance changes.
    """
    split = split_bonus_then_wallet(
        account.bonus_balance, account.wallet_balance, amount
    )
    account.bonus_balance = account.bonus_balance - split.bonus_used
    account.wallet_balance = account.wallet_balance - split.wallet_used
    return split


def debit(account: BalanceHolder, field: BalanceField, amount: Decimal) -> Decimal:
    """
    Debit a single balance.

    Returns:
        New balance

    Raises:
        InsufficientFundsError: If the balance is below amount
    """
    _check_field(field)
    _require_non_negative(amount)

    current = getattr(account, field)
    if current < amount:
        raise InsufficientFundsError(
            f"Insufficient balance. You need {format_money(amount)}.",
            required=amount,
            available=current,
        )

    new_balance = current - amount
    setattr(account, field, new_balance)
    return new_balance


def credit(account: BalanceHolder, field: BalanceField, amount: Decimal) -> Decimal:
    """
    Credit a single balance.

    Returns:
        New balance
    """
    _check_field(field)
    _require_non_negative(amount)

    new_balance = getattr(account, field) + amount
    setattr(account, field, new_balance)
    return new_balance
