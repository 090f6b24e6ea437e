"""
Plan instance lifecycle.

none -> active -> expired. An expired instance is terminal; re-entering
active always creates a new instance.

- activator: Activate (bonus-first funding)
- upgrader: Upgrade to a higher tier
- collector: CollectDailyProfit with lazy expiry
- renewer: Renew an expired instance
"""

from investplan.services.plan.lifecycle.activator import PlanActivator
from investplan.services.plan.lifecycle.collector import ProfitCollector
from investplan.services.plan.lifecycle.renewer import PlanRenewer
from investplan.services.plan.lifecycle.upgrader import PlanUpgrader

__all__ = [
    "PlanActivator",
    "PlanRenewer",
    "PlanUpgrader",
    "ProfitCollector",
]
