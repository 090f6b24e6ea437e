"""Integration tests for catalog listings and admin plan management."""

from decimal import Decimal

import pytest

from investplan.models import Plan
from investplan.services.plan import PlanService


@pytest.fixture
async def service(session, clock, make_settings):
    """PlanService with settings present."""
    await make_settings()
    return PlanService(session, clock=clock)


def plan_payload(**overrides):
    payload = {
        "name": "Platinum",
        "min_amount": "2000",
        "max_amount": "20000",
        "daily_yield_type": "percentage",
        "daily_yield_value": "2.5",
        "duration_days": 90,
    }
    payload.update(overrides)
    return payload


class TestListings:
    """User and admin views."""

    @pytest.mark.asyncio
    async def test_list_plans_sorted_with_active_instance(
        self, service, make_user, make_plan
    ):
        """Catalog is ordered by min_amount; the active instance is attached."""
        user_id = await make_user(wallet="5000")
        gold = await make_plan(name="Gold", min_amount="1500", max_amount="9000")
        starter = await make_plan(name="Starter", min_amount="500")

        before = await service.list_plans(user_id)
        assert [p.name for p in before.data.plans] == ["Starter", "Gold"]
        assert before.data.active_plan_instance is None

        await service.activate(user_id, gold, "1500")
        after = await service.list_plans(user_id)

        assert after.data.active_plan_instance.plan_id == gold
        assert after.data.active_plan_instance.plan.name == "Gold"
        assert starter in [p.id for p in after.data.plans]

    @pytest.mark.asyncio
    async def test_list_plans_unknown_user(self, service):
        """Unknown user is not found."""
        result = await service.list_plans(404)

        assert result.error_code == "not_found"

    @pytest.mark.asyncio
    async def test_plan_history_newest_first(
        self, service, make_user, make_plan, clock
    ):
        """History lists every instance, newest first."""
        user_id = await make_user(wallet="5000")
        plan_id = await make_plan()
        first = await service.activate(user_id, plan_id, "1000")
        first_id = first.data.instance.id
        clock.advance(days=31)
        await service.collect(user_id)
        renewed = await service.renew(user_id, first_id)
        renewed_id = renewed.data.new_instance.id

        result = await service.plan_history(user_id)

        assert [i.id for i in result.data] == [renewed_id, first_id]

    @pytest.mark.asyncio
    async def test_admin_listing(self, service, make_plan):
        """Admins see every plan."""
        await make_plan(name="Starter")
        await make_plan(name="Gold", min_amount="1500", max_amount="9000")

        result = await service.list_plans_for_admin()

        assert result.success is True
        assert len(result.data) == 2


class TestCreatePlan:
    """Catalog creation."""

    @pytest.mark.asyncio
    async def test_create_plan(self, service, fetch):
        """Valid payload is stored with normalized values."""
        result = await service.create_plan(
            plan_payload(hash_rate="250 TH/s")
        )

        assert result.success is True
        plan = await fetch(Plan, result.data.id)
        assert plan.name == "Platinum"
        assert plan.min_amount == Decimal("2000")
        assert plan.daily_yield_value == Decimal("2.5")
        assert plan.duration_days == 90
        assert plan.image_url == ""
        assert plan.hash_rate == "250 TH/s"

    @pytest.mark.asyncio
    async def test_create_missing_field(self, service):
        """Everything but image and hash rate is required."""
        payload = plan_payload()
        del payload["daily_yield_type"]

        result = await service.create_plan(payload)

        assert result.success is False
        assert result.error_code == "invalid_plan_data"

    @pytest.mark.asyncio
    async def test_create_inconsistent_bounds(self, service):
        """max_amount below min_amount is refused."""
        result = await service.create_plan(plan_payload(max_amount="1000"))

        assert result.error_code == "invalid_plan_data"

    @pytest.mark.asyncio
    async def test_fixed_yield_keeps_money_precision(
        self, service, make_user, fetch
    ):
        """A fixed daily amount is frozen exactly as entered."""
        created = await service.create_plan(
            plan_payload(daily_yield_type="fixed", daily_yield_value="12.345678")
        )
        user_id = await make_user(wallet="5000")

        result = await service.activate(user_id, created.data.id, "2000")

        assert result.success is True
        assert result.data.instance.daily_profit == Decimal("12.345678")
        plan = await fetch(Plan, created.data.id)
        assert plan.daily_yield_value == Decimal("12.345678")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"daily_yield_type": "fixed", "daily_yield_value": "1.000000001"},
            {"daily_yield_type": "fixed", "daily_yield_value": "10000000000"},
            {"max_amount": "100000000000"},
        ],
    )
    async def test_create_rejects_unstorable_amounts(
        self, service, overrides
    ):
        """Amounts the money columns cannot hold are refused before saving."""
        result = await service.create_plan(plan_payload(**overrides))

        assert result.success is False
        assert result.error_code == "invalid_plan_data"
        assert list((await service.list_plans_for_admin()).data) == []


class TestUpdatePlan:
    """Catalog updates."""

    @pytest.mark.asyncio
    async def test_partial_update(self, service, make_plan, fetch):
        """Only the given fields change."""
        plan_id = await make_plan()

        result = await service.update_plan(
            plan_id, {"name": "Starter Plus", "image_url": "https://img/1.png"}
        )

        assert result.success is True
        plan = await fetch(Plan, plan_id)
        assert plan.name == "Starter Plus"
        assert plan.image_url == "https://img/1.png"
        assert plan.min_amount == Decimal("500")

    @pytest.mark.asyncio
    async def test_update_rejects_unknown_field(self, service, make_plan, fetch):
        """Fields outside the allow-list are refused."""
        plan_id = await make_plan()

        result = await service.update_plan(plan_id, {"id": 99})

        assert result.error_code == "invalid_plan_data"
        assert (await fetch(Plan, plan_id)) is not None

    @pytest.mark.asyncio
    async def test_update_checks_merged_terms(self, service, make_plan, fetch):
        """Raising min above the current max is refused."""
        plan_id = await make_plan(min_amount="500", max_amount="5000")

        result = await service.update_plan(plan_id, {"min_amount": "6000"})

        assert result.error_code == "invalid_plan_data"
        plan = await fetch(Plan, plan_id)
        assert plan.min_amount == Decimal("500")

    @pytest.mark.asyncio
    async def test_update_does_not_touch_running_instances(
        self, service, make_user, make_plan, clock
    ):
        """daily_profit is frozen at activation."""
        user_id = await make_user(wallet="1000")
        plan_id = await make_plan(yield_value="2")
        await service.activate(user_id, plan_id, "1000")

        await service.update_plan(plan_id, {"daily_yield_value": "5"})
        clock.advance(hours=24)
        result = await service.collect(user_id)

        assert result.data.profit == Decimal("20")

    @pytest.mark.asyncio
    async def test_update_unknown_plan(self, service):
        """Unknown plan is not found."""
        result = await service.update_plan(404, {"name": "x"})

        assert result.error_code == "not_found"


class TestDeletePlan:
    """Guarded deletion."""

    @pytest.mark.asyncio
    async def test_delete_unused_plan(self, service, make_plan, fetch):
        """A plan without holders is removed."""
        plan_id = await make_plan()

        result = await service.delete_plan(plan_id)

        assert result.success is True
        assert await fetch(Plan, plan_id) is None

    @pytest.mark.asyncio
    async def test_delete_plan_in_use(
        self, service, make_user, make_plan, fetch
    ):
        """Plans with active holders cannot be deleted."""
        plan_id = await make_plan()
        for _ in range(2):
            user_id = await make_user(wallet="1000")
            await service.activate(user_id, plan_id, "500")

        result = await service.delete_plan(plan_id)

        assert result.success is False
        assert result.error_code == "plan_in_use"
        assert result.data == {"active_instances": 2}
        assert "2 user(s)" in result.error
        assert await fetch(Plan, plan_id) is not None

    @pytest.mark.asyncio
    async def test_delete_unknown_plan(self, service):
        """Unknown plan is not found."""
        result = await service.delete_plan(404)

        assert result.error_code == "not_found"
