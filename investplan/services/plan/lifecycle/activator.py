"""
Plan activator.

Activates a plan for a user without an active instance.
"""

from typing import Any

from loguru import logger

from investplan.services.ledger import debit_bonus_then_wallet
from investplan.services.plan.lifecycle.base import LifecycleStep
from investplan.services.plan.results import ActivationResult
from investplan.utils.exceptions import PreconditionFailedError
from investplan.validators.amount import parse_amount, validate_amount_in_range


class PlanActivator(LifecycleStep):
    """Handles plan activation."""

    async def activate(
        self, user_id: int, plan_id: int, invested_amount: Any
    ) -> ActivationResult:
        """
        Activate plan for user.

        Funding consumes bonus balance first; the remainder comes from the
        wallet. Only the wallet part is ledgered.

        Args:
            user_id: User ID
            plan_id: Catalog plan ID
            invested_amount: Raw amount (parsed here)

        Returns:
            ActivationResult

        Raises:
            NotFoundError: Unknown user or plan
            PreconditionFailedError: User already has an active plan
            InvalidAmountError: Amount not numeric or outside plan bounds
            InsufficientFundsError: Bonus + wallet below amount
        """
        user = await self._lock_user(user_id)

        if user.has_active_plan:
            raise PreconditionFailedError(
                "You already have an active plan. To change it, upgrade instead."
            )

        plan = await self._get_plan(plan_id, "Plan not found.")

        amount = parse_amount(invested_amount)
        validate_amount_in_range(amount, plan.min_amount, plan.max_amount)

        split = debit_bonus_then_wallet(user, amount)
        now = self.clock()

        instance = await self._open_instance(user, plan, amount, now)

        # Bonus spend is not ledgered, only the wallet debit
        await self._record_investment(
            user,
            split.wallet_used,
            f'Investment in plan "{plan.name}"',
            instance,
        )

        logger.info(
            "Plan activated",
            extra={
                "user_id": user.id,
                "plan_id": plan.id,
                "instance_id": instance.id,
                "invested_amount": str(amount),
                "bonus_used": str(split.bonus_used),
                "wallet_used": str(split.wallet_used),
                "daily_profit": str(instance.daily_profit),
            },
        )

        return ActivationResult(
            user=user,
            instance=instance,
            plan=plan,
            bonus_used=split.bonus_used,
            wallet_used=split.wallet_used,
            message="Plan activated successfully!",
        )
