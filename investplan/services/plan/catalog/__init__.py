"""
Plan catalog.

- reader: user and admin listings, plan history
- admin_manager: create, update and guarded delete
"""

from investplan.services.plan.catalog.admin_manager import PlanAdminManager
from investplan.services.plan.catalog.reader import PlanCatalogReader

__all__ = ["PlanAdminManager", "PlanCatalogReader"]
