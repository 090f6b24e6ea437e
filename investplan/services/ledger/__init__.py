"""
Ledger primitives.

Pure balance mutations with all-or-nothing semantics.
"""

from investplan.services.ledger.primitives import (
    BONUS_BALANCE,
    WALLET_BALANCE,
    FundingSplit,
    credit,
    debit,
    debit_bonus_then_wallet,
    split_bonus_then_wallet,
)

__all__ = [
    "BONUS_BALANCE",
    "WALLET_BALANCE",
    "FundingSplit",
    "credit",
    "debit",
    "debit_bonus_then_wallet",
    "split_bonus_then_wallet",
]
