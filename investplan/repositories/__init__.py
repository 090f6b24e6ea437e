"""Data access layer."""

from investplan.repositories.global_settings_repository import (
    GlobalSettingsRepository,
)
from investplan.repositories.plan_instance_repository import (
    PlanInstanceRepository,
)
from investplan.repositories.plan_repository import PlanRepository
from investplan.repositories.transaction_repository import TransactionRepository
from investplan.repositories.user_repository import UserRepository

__all__ = [
    "GlobalSettingsRepository",
    "PlanInstanceRepository",
    "PlanRepository",
    "TransactionRepository",
    "UserRepository",
]
