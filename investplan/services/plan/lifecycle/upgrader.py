"""
Plan upgrader.

Moves a user's active instance to a strictly higher tier. Tiers are ranked
by min_amount; the new instance is funded at the new plan's min_amount and
the user pays the difference between the two min_amounts from the wallet.
"""

from loguru import logger

from investplan.services.ledger import WALLET_BALANCE, debit
from investplan.services.plan.lifecycle.base import LifecycleStep
from investplan.services.plan.results import UpgradeResult
from investplan.utils.exceptions import (
    InsufficientFundsError,
    NotFoundError,
    PreconditionFailedError,
)
from investplan.utils.formatters import format_money


class PlanUpgrader(LifecycleStep):
    """Handles plan upgrades."""

    async def upgrade(self, user_id: int, new_plan_id: int) -> UpgradeResult:
        """
        Upgrade user's active plan.

        Raises:
            NotFoundError: Unknown user, target plan or active instance
            PreconditionFailedError: No active plan, or target not higher
            InsufficientFundsError: Wallet below the price difference
        """
        user = await self._lock_user(user_id)

        if not user.has_active_plan:
            raise PreconditionFailedError(
                "You do not have an active plan to upgrade."
            )

        new_plan = await self._get_plan(new_plan_id, "New plan not found.")

        old_instance = await self.instance_repo.get_for_update(
            user.active_plan_instance_id
        )
        if old_instance is None:
            raise NotFoundError("Active plan instance not found.")

        old_plan = await self._get_plan(
            old_instance.plan_id, "Current plan no longer exists."
        )

        if new_plan.min_amount <= old_plan.min_amount:
            raise PreconditionFailedError(
                "You can only upgrade to a higher-value plan."
            )

        price_difference = new_plan.min_amount - old_plan.min_amount
        if user.wallet_balance < price_difference:
            raise InsufficientFundsError(
                "Insufficient balance. You need "
                f"{format_money(price_difference)} for this upgrade.",
                required=price_difference,
                available=user.wallet_balance,
            )

        debit(user, WALLET_BALANCE, price_difference)

        await self.instance_repo.mark_expired(old_instance)

        now = self.clock()
        new_instance = await self._open_instance(
            user, new_plan, new_plan.min_amount, now
        )

        await self._record_investment(
            user,
            price_difference,
            f'Upgrade from plan "{old_plan.name}" to "{new_plan.name}"',
            new_instance,
        )

        logger.info(
            "Plan upgraded",
            extra={
                "user_id": user.id,
                "old_instance_id": old_instance.id,
                "new_instance_id": new_instance.id,
                "old_plan_id": old_plan.id,
                "new_plan_id": new_plan.id,
                "price_difference": str(price_difference),
            },
        )

        return UpgradeResult(
            user=user,
            old_instance=old_instance,
            new_instance=new_instance,
            price_difference=price_difference,
            message="Plan upgraded successfully!",
        )
