"""Input validators for plan operations."""

from investplan.validators.amount import parse_amount, validate_amount_in_range
from investplan.validators.plan import (
    MUTABLE_PLAN_FIELDS,
    REQUIRED_PLAN_FIELDS,
    validate_plan_fields,
    validate_plan_terms,
)

__all__ = [
    "parse_amount",
    "validate_amount_in_range",
    "MUTABLE_PLAN_FIELDS",
    "REQUIRED_PLAN_FIELDS",
    "validate_plan_fields",
    "validate_plan_terms",
]
