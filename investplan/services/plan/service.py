"""
Plan service facade.

Entry point for the HTTP layer. Each operation:
1. takes the per-user lock,
2. loads the commission rates once (fails fast if the settings row is gone),
3. runs the lifecycle step and commits, or rolls back on failure,
4. pays the referral commission as a separate, best-effort transaction.

Results are ServiceResult values; user-facing failures never raise.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from investplan.config.constants import USER_PLAN_LOCK_KEY
from investplan.config.settings import settings
from investplan.repositories.global_settings_repository import (
    GlobalSettingsRepository,
)
from investplan.services.base_service import BaseService, ServiceResult, log_operation
from investplan.services.plan.catalog import PlanAdminManager, PlanCatalogReader
from investplan.services.plan.lifecycle import (
    PlanActivator,
    PlanRenewer,
    PlanUpgrader,
    ProfitCollector,
)
from investplan.services.referral import CommissionRates, ReferralCommissionEngine
from investplan.utils.datetime_utils import Clock, utc_now
from investplan.utils.distributed_lock import get_distributed_lock
from investplan.utils.exceptions import (
    CollectionTooSoonError,
    ConfigurationMissingError,
    InsufficientFundsError,
    OperationInProgressError,
    PlanInUseError,
    PlanOperationError,
)


T = TypeVar("T")


class PlanService(BaseService):
    """
    Plan service facade.

    The session must be created with expire_on_commit=False (see
    investplan.config.database.create_session_maker): results carry ORM
    objects that are read after commit.
    """

    def __init__(
        self,
        session: AsyncSession,
        redis_client: Any | None = None,
        clock: Clock = utc_now,
    ) -> None:
        """
        Initialize plan service.

        Args:
            session: Async database session
            redis_client: Optional Redis client for per-user locks
            clock: Wall clock returning aware UTC datetimes
        """
        super().__init__(session)
        self.redis_client = redis_client
        self.clock = clock

        self.settings_repo = GlobalSettingsRepository(session)

        self.activator = PlanActivator(session, clock)
        self.upgrader = PlanUpgrader(session, clock)
        self.collector = ProfitCollector(session, clock)
        self.renewer = PlanRenewer(session, clock)
        self.catalog_reader = PlanCatalogReader(session)
        self.admin_manager = PlanAdminManager(session)
        self.referral_engine = ReferralCommissionEngine(session)

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------

    async def list_plans(self, user_id: int) -> ServiceResult:
        """Catalog plus the user's active instance."""
        try:
            view = await self.catalog_reader.list_plans(user_id)
        except PlanOperationError as e:
            return await self._fail("list_plans", user_id, e)
        return ServiceResult(success=True, data=view)

    async def plan_history(self, user_id: int) -> ServiceResult:
        """User's instances, newest first."""
        try:
            instances = await self.catalog_reader.plan_history(user_id)
        except PlanOperationError as e:
            return await self._fail("plan_history", user_id, e)
        return ServiceResult(success=True, data=instances)

    async def activate(
        self, user_id: int, plan_id: int, invested_amount: Any
    ) -> ServiceResult:
        """Activate a plan; pays the activation commission."""
        try:
            outcome, rates = await self._run_locked(
                user_id, self.activator.activate, user_id, plan_id, invested_amount
            )
        except PlanOperationError as e:
            return await self._fail("activate", user_id, e)

        outcome.commission = await self.referral_engine.pay_activation_commission(
            outcome.user,
            outcome.instance.invested_amount,
            rates,
            plan_instance_id=outcome.instance.id,
        )
        return ServiceResult(success=True, data=outcome)

    async def upgrade(self, user_id: int, new_plan_id: int) -> ServiceResult:
        """Upgrade to a higher tier. No commission."""
        try:
            outcome, _ = await self._run_locked(
                user_id, self.upgrader.upgrade, user_id, new_plan_id
            )
        except PlanOperationError as e:
            return await self._fail("upgrade", user_id, e)
        return ServiceResult(success=True, data=outcome)

    async def collect(self, user_id: int) -> ServiceResult:
        """Collect daily profit; pays the daily commission."""
        try:
            outcome, rates = await self._run_locked(
                user_id, self.collector.collect, user_id
            )
        except PlanOperationError as e:
            return await self._fail("collect", user_id, e)

        outcome.commission = await self.referral_engine.pay_daily_commission(
            outcome.user,
            outcome.profit,
            rates,
            plan_instance_id=outcome.instance.id,
        )
        return ServiceResult(success=True, data=outcome)

    async def renew(self, user_id: int, instance_id: int) -> ServiceResult:
        """Renew an expired instance. No commission."""
        try:
            outcome, _ = await self._run_locked(
                user_id, self.renewer.renew, user_id, instance_id
            )
        except PlanOperationError as e:
            return await self._fail("renew", user_id, e)
        return ServiceResult(success=True, data=outcome)

    # ------------------------------------------------------------------
    # Admin catalog operations
    # ------------------------------------------------------------------

    @log_operation
    async def list_plans_for_admin(self) -> ServiceResult:
        """All catalog entries."""
        plans = await self.catalog_reader.list_for_admin()
        return ServiceResult(success=True, data=plans)

    @log_operation
    async def create_plan(self, data: dict[str, Any]) -> ServiceResult:
        """Create a catalog entry."""
        return await self._run_admin(
            "create_plan", self.admin_manager.create_plan, data
        )

    @log_operation
    async def update_plan(
        self, plan_id: int, data: dict[str, Any]
    ) -> ServiceResult:
        """Partially update a catalog entry."""
        return await self._run_admin(
            "update_plan", self.admin_manager.update_plan, plan_id, data
        )

    @log_operation
    async def delete_plan(self, plan_id: int) -> ServiceResult:
        """Delete a catalog entry without active holders."""
        return await self._run_admin(
            "delete_plan", self.admin_manager.delete_plan, plan_id
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load_commission_rates(self) -> CommissionRates:
        """Read the settings row once for this operation."""
        global_settings = await self.settings_repo.get_settings()
        return CommissionRates.from_settings(global_settings)

    async def _run_locked(
        self,
        user_id: int,
        step: Callable[..., Awaitable[T]],
        *args: Any,
    ) -> tuple[T, CommissionRates]:
        """
        Run a lifecycle step under the user's lock and commit it.

        Raises:
            PlanOperationError: Step or precondition failure (rolled back)
            SQLAlchemyError: Infrastructure failure (rolled back)
        """
        lock = get_distributed_lock(redis_client=self.redis_client)
        lock_key = USER_PLAN_LOCK_KEY.format(user_id=user_id)

        async with lock.lock(
            lock_key,
            timeout=settings.plan_lock_timeout,
            blocking=True,
            blocking_timeout=settings.plan_lock_blocking_timeout,
        ) as acquired:
            if not acquired:
                raise OperationInProgressError(
                    "Another operation is in progress. Please wait."
                )

            try:
                rates = await self._load_commission_rates()
                result = await step(*args)
                await self.session.commit()
            except SQLAlchemyError as e:
                await self.session.rollback()
                self.logger.error(
                    f"Database error in {step.__name__}",
                    extra={"user_id": user_id, "error": str(e)},
                    exc_info=True,
                )
                raise

        return result, rates

    async def _run_admin(
        self,
        operation: str,
        step: Callable[..., Awaitable[Any]],
        *args: Any,
    ) -> ServiceResult:
        try:
            data = await step(*args)
            await self.session.commit()
        except PlanOperationError as e:
            return await self._fail(operation, None, e)
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return ServiceResult(success=True, data=data)

    async def _fail(
        self, operation: str, user_id: int | None, error: PlanOperationError
    ) -> ServiceResult:
        """Roll back and turn an operation error into a ServiceResult."""
        await self.session.rollback()

        log_extra = {
            "operation": operation,
            "user_id": user_id,
            "error_code": error.error_code,
        }
        if isinstance(error, ConfigurationMissingError):
            self.logger.error(
                f"{operation} failed: system settings missing", extra=log_extra
            )
        else:
            self.logger.info(
                f"{operation} rejected: {error.message}", extra=log_extra
            )

        return ServiceResult(
            success=False,
            data=self._error_details(error),
            error=error.message,
            error_code=error.error_code,
        )

    @staticmethod
    def _error_details(error: PlanOperationError) -> dict[str, Any] | None:
        if isinstance(error, CollectionTooSoonError):
            return {
                "next_collection_at": error.next_collection_at,
                "remaining_hours": error.remaining_hours,
            }
        if isinstance(error, InsufficientFundsError):
            return {"required": error.required, "available": error.available}
        if isinstance(error, PlanInUseError):
            return {"active_instances": error.active_instances}
        return None
