"""
Plan operation results.

Returned in ServiceResult.data by the PlanService facade.
"""

from dataclasses import dataclass
from decimal import Decimal

from investplan.models.plan import Plan
from investplan.models.plan_instance import PlanInstance
from investplan.models.user import User
from investplan.services.referral import CommissionResult


@dataclass
class ActivationResult:
    """Plan activated."""

    user: User
    instance: PlanInstance
    plan: Plan
    bonus_used: Decimal
    wallet_used: Decimal
    message: str
    commission: CommissionResult | None = None


@dataclass
class UpgradeResult:
    """Plan upgraded to a higher tier."""

    user: User
    old_instance: PlanInstance
    new_instance: PlanInstance
    price_difference: Decimal
    message: str


@dataclass
class CollectionResult:
    """Daily profit collected."""

    user: User
    instance: PlanInstance
    profit: Decimal
    message: str
    commission: CommissionResult | None = None


@dataclass
class RenewalResult:
    """Expired plan renewed."""

    user: User
    old_instance: PlanInstance
    new_instance: PlanInstance
    renewal_cost: Decimal
    message: str


@dataclass
class CatalogView:
    """Catalog with the user's active instance (if any)."""

    plans: list[Plan]
    active_plan_instance: PlanInstance | None
