"""
Referral services package.

- config: CommissionRates value loaded from the global settings row
- commission_engine: single-hop commission payouts
"""

from investplan.services.referral.commission_engine import (
    CommissionKind,
    CommissionResult,
    ReferralCommissionEngine,
)
from investplan.services.referral.config import CommissionRates

__all__ = [
    "CommissionKind",
    "CommissionRates",
    "CommissionResult",
    "ReferralCommissionEngine",
]
