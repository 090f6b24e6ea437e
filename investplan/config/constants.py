"""
Business constants.

Single source of truth for fixed values of the plan engine.
"""

from decimal import Decimal

# Key of the GlobalSettings row holding commission rates
MAIN_SETTINGS_KEY = "main_settings"

# Money precision (matches DECIMAL(18, 8) columns)
MONEY_QUANT = Decimal("0.00000001")
# Exclusive bound on money magnitude (10 integer digits)
MONEY_LIMIT = Decimal("10000000000")
ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Plan catalog limits
PLAN_NAME_MAX_LENGTH = 255

# Lock key template for per-user serialization
USER_PLAN_LOCK_KEY = "user:{user_id}:plan_operation"

# Dramatiq task time limit for the expiry sweep (milliseconds)
DRAMATIQ_TIME_LIMIT_SWEEP = 300_000

EXPIRY_SWEEP_LOCK_KEY = "plan_expiry_sweep"
