"""
Plan engine exceptions.

Every user-visible failure of a plan operation is a PlanOperationError
subclass with a human-readable message and a stable error code.
"""

from datetime import datetime
from decimal import Decimal


class PlanOperationError(Exception):
    """Base class for plan operation failures."""

    error_code = "plan_operation_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(PlanOperationError):
    """Plan, instance or user does not exist."""

    error_code = "not_found"


class PreconditionFailedError(PlanOperationError):
    """Operation is not allowed in the current state."""

    error_code = "precondition_failed"


class CollectionTooSoonError(PreconditionFailedError):
    """Profit was already collected within the cooldown window."""

    error_code = "collection_too_soon"

    def __init__(
        self, message: str, next_collection_at: datetime, remaining_hours: Decimal
    ) -> None:
        super().__init__(message)
        self.next_collection_at = next_collection_at
        self.remaining_hours = remaining_hours


class PlanExpiredError(PreconditionFailedError):
    """Active instance is past its end date."""

    error_code = "plan_expired"


class InsufficientFundsError(PlanOperationError):
    """Balances do not cover the required amount."""

    error_code = "insufficient_funds"

    def __init__(
        self, message: str, required: Decimal, available: Decimal
    ) -> None:
        super().__init__(message)
        self.required = required
        self.available = available


class InvalidAmountError(PlanOperationError):
    """Investment amount is not numeric or outside plan bounds."""

    error_code = "invalid_amount"


class InvalidPlanDataError(PlanOperationError):
    """Catalog create/update payload failed validation."""

    error_code = "invalid_plan_data"


class ConfigurationMissingError(PlanOperationError):
    """Global settings row is absent. Server-side fault, not user error."""

    error_code = "configuration_missing"


class PlanInUseError(PlanOperationError):
    """Catalog entry still has active holders."""

    error_code = "plan_in_use"

    def __init__(self, message: str, active_instances: int) -> None:
        super().__init__(message)
        self.active_instances = active_instances


class OperationInProgressError(PlanOperationError):
    """Another operation holds the user's lock."""

    error_code = "operation_in_progress"
