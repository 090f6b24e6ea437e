"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from investplan.models.base import Base
from investplan.models.enums import PlanStatus, TransactionType, YieldType
from investplan.models.global_settings import GlobalSettings
from investplan.models.plan import Plan
from investplan.models.plan_instance import PlanInstance
from investplan.models.transaction import Transaction
from investplan.models.user import User

__all__ = [
    # Base
    "Base",
    # Enums
    "PlanStatus",
    "TransactionType",
    "YieldType",
    # Core Models
    "User",
    "Plan",
    "PlanInstance",
    "Transaction",
    # System Models
    "GlobalSettings",
]
