"""
Referral commission engine.

Pays one level up: the user's direct referrer only.

- Activation: referral_commission_rate % of the invested amount, paid
  whether or not the referrer holds a plan.
- Daily collection: daily_commission_rate % of the collected profit, paid
  only while the referrer holds an active plan instance.

Each payout runs in its own transaction after the downstream user's
operation has committed. A failure is rolled back and logged; it never
undoes or fails the downstream operation.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investplan.config.constants import ZERO
from investplan.models.enums import TransactionType
from investplan.models.user import User
from investplan.repositories.transaction_repository import TransactionRepository
from investplan.repositories.user_repository import UserRepository
from investplan.services.ledger import WALLET_BALANCE, credit
from investplan.services.referral.config import CommissionRates
from investplan.utils.money import percent_of


class CommissionKind(StrEnum):
    """Event that produced a commission."""

    ACTIVATION = "activation"
    DAILY = "daily"


@dataclass(frozen=True)
class CommissionResult:
    """A commission that was paid."""

    referrer_id: int
    source_user_id: int
    amount: Decimal
    kind: CommissionKind
    transaction_id: int


class ReferralCommissionEngine:
    """Computes and disburses single-hop referral commissions."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize engine.

        Args:
            session: Async database session
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.transaction_repo = TransactionRepository(session)

    async def pay_activation_commission(
        self,
        user: User,
        invested_amount: Decimal,
        rates: CommissionRates,
        plan_instance_id: int | None = None,
    ) -> CommissionResult | None:
        """
        Pay the referrer a share of a plan activation.

        Args:
            user: User who activated a plan
            invested_amount: Principal of the new instance
            rates: Commission rates for this operation
            plan_instance_id: New instance ID (for the ledger entry)

        Returns:
            CommissionResult, or None if nothing was paid
        """
        return await self._pay(
            user=user,
            base_amount=invested_amount,
            rate=rates.referral_commission_rate,
            kind=CommissionKind.ACTIVATION,
            description=f"Commission for plan activation by user {user.id}",
            require_active_plan=False,
            plan_instance_id=plan_instance_id,
        )

    async def pay_daily_commission(
        self,
        user: User,
        daily_profit: Decimal,
        rates: CommissionRates,
        plan_instance_id: int | None = None,
    ) -> CommissionResult | None:
        """
        Pay the referrer a share of a daily collection.

        Skipped when the referrer has no active plan instance.
        """
        return await self._pay(
            user=user,
            base_amount=daily_profit,
            rate=rates.daily_commission_rate,
            kind=CommissionKind.DAILY,
            description=f"Daily commission from user {user.id} profit",
            require_active_plan=True,
            plan_instance_id=plan_instance_id,
        )

    async def _pay(
        self,
        user: User,
        base_amount: Decimal,
        rate: Decimal,
        kind: CommissionKind,
        description: str,
        require_active_plan: bool,
        plan_instance_id: int | None,
    ) -> CommissionResult | None:
        user_id = user.id
        referrer_id = user.invited_by_id
        if referrer_id is None:
            return None

        if referrer_id == user_id:
            logger.warning(
                "User is marked as their own referrer, skipping commission",
                extra={"user_id": user_id},
            )
            return None

        commission = percent_of(base_amount, rate)
        if commission <= ZERO:
            logger.debug(
                "Commission rounds to zero, skipping",
                extra={"user_id": user_id, "kind": kind.value, "rate": str(rate)},
            )
            return None

        try:
            referrer = await self.user_repo.get_for_update(referrer_id)
            if referrer is None:
                logger.warning(
                    "Referrer not found for commission",
                    extra={"user_id": user_id, "referrer_id": referrer_id},
                )
                await self.session.commit()
                return None

            if require_active_plan and not referrer.has_active_plan:
                logger.debug(
                    "Referrer has no active plan, daily commission skipped",
                    extra={"user_id": user_id, "referrer_id": referrer_id},
                )
                await self.session.commit()
                return None

            credit(referrer, WALLET_BALANCE, commission)
            await self.user_repo.save(referrer)

            transaction = await self.transaction_repo.record(
                user_id=referrer.id,
                type=TransactionType.COMMISSION,
                amount=commission,
                description=description,
                source_user_id=user_id,
                plan_instance_id=plan_instance_id,
            )
            await self.session.commit()

        except Exception as e:
            await self.session.rollback()
            logger.exception(
                "Referral commission payout failed",
                extra={
                    "user_id": user_id,
                    "referrer_id": referrer_id,
                    "kind": kind.value,
                    "amount": str(commission),
                    "error": str(e),
                },
            )
            return None

        logger.info(
            "Referral commission paid",
            extra={
                "user_id": user_id,
                "referrer_id": referrer_id,
                "kind": kind.value,
                "amount": str(commission),
            },
        )

        return CommissionResult(
            referrer_id=referrer_id,
            source_user_id=user_id,
            amount=commission,
            kind=kind,
            transaction_id=transaction.id,
        )
