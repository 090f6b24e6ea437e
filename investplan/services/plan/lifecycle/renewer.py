"""
Plan renewer.

Re-opens an expired instance's plan at its min_amount, paid from the
wallet only.
"""

from loguru import logger

from investplan.models.enums import PlanStatus
from investplan.services.ledger import WALLET_BALANCE, debit
from investplan.services.plan.lifecycle.base import LifecycleStep
from investplan.services.plan.results import RenewalResult
from investplan.utils.exceptions import (
    InsufficientFundsError,
    NotFoundError,
    PreconditionFailedError,
)
from investplan.utils.formatters import format_money


class PlanRenewer(LifecycleStep):
    """Handles renewal of expired plans."""

    async def renew(self, user_id: int, instance_id: int) -> RenewalResult:
        """
        Renew an expired instance.

        Raises:
            NotFoundError: Unknown user, instance not owned by user, or the
                plan was removed from the catalog
            PreconditionFailedError: Instance not expired, or user already
                has an active plan
            InsufficientFundsError: Wallet below the plan's min_amount
        """
        user = await self._lock_user(user_id)

        old_instance = await self.instance_repo.get_by_id(instance_id)
        if old_instance is None or old_instance.user_id != user.id:
            raise NotFoundError("Plan history not found.")

        if old_instance.status != PlanStatus.EXPIRED.value:
            raise PreconditionFailedError("Only expired plans can be renewed.")

        if user.has_active_plan:
            raise PreconditionFailedError(
                "You already have an active plan. Another plan cannot be "
                "renewed right now."
            )

        plan = await self._get_plan(
            old_instance.plan_id, "This plan is no longer available."
        )
        renewal_cost = plan.min_amount

        if user.wallet_balance < renewal_cost:
            raise InsufficientFundsError(
                "Insufficient balance. You need "
                f"{format_money(renewal_cost)} to renew.",
                required=renewal_cost,
                available=user.wallet_balance,
            )

        debit(user, WALLET_BALANCE, renewal_cost)

        now = self.clock()
        new_instance = await self._open_instance(user, plan, renewal_cost, now)

        await self._record_investment(
            user,
            renewal_cost,
            f'Renewal of plan "{plan.name}"',
            new_instance,
        )

        logger.info(
            "Plan renewed",
            extra={
                "user_id": user.id,
                "old_instance_id": old_instance.id,
                "new_instance_id": new_instance.id,
                "plan_id": plan.id,
                "renewal_cost": str(renewal_cost),
            },
        )

        return RenewalResult(
            user=user,
            old_instance=old_instance,
            new_instance=new_instance,
            renewal_cost=renewal_cost,
            message="Plan renewed successfully!",
        )
