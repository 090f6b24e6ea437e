"""
Plan services package.

- lifecycle: activate, upgrade, collect, renew
- catalog: listings and admin CRUD
- expiry_sweeper: optional batch expiry
- service: PlanService facade
"""

from investplan.services.plan.expiry_sweeper import PlanExpirySweeper, SweepStats
from investplan.services.plan.service import PlanService

__all__ = ["PlanExpirySweeper", "PlanService", "SweepStats"]
