"""
Timeledger Backend — Budget Consumption Engine Unit Tests
==========================================================

What:  Tests for BudgetService pricing, scope resolution and failure handling.
How:   BudgetService runs against FakeBudgetStore, an in-memory BudgetStore.
       No database is involved.

What we test:
    ✅ Position, project, client and overview scenarios with exact figures
    ✅ Rate-less positions consume nothing
    ✅ Budget-less entities report rate 0 and no remaining budget
    ✅ Project and client consumption equal the sum of their positions
    ✅ Scope precedence position > project > client
    ✅ Unknown ids yield an empty list; store failures propagate unchanged
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional

import pytest
from sqlalchemy.exc import OperationalError

from app.schemas.report import BudgetConsumptionInput, BudgetEntityType
from app.services.budget_scope import (
    AllScope,
    ClientScope,
    PositionScope,
    ProjectScope,
    resolve_scope,
)
from app.services.budget_service import BudgetService, consumption_rate, price_hours
from app.services.budget_store import (
    BudgetStore,
    EntityBudgetRow,
    PositionBudgetRow,
    PositionHoursRow,
)


def D(value) -> Decimal:
    return Decimal(str(value))


class FakeBudgetStore(BudgetStore):
    """In-memory store: clients → projects → positions, hours summed per position."""

    def __init__(self):
        self.clients: Dict[int, str] = {}
        self.projects: Dict[int, dict] = {}
        self.positions: Dict[int, dict] = {}

    # ── Builders ──────────────────────────────────────────────────────────

    def add_client(self, client_id: int, name: str = "Acme") -> None:
        self.clients[client_id] = name

    def add_project(self, project_id: int, client_id: int, budget=None, name: str = "Project") -> None:
        self.projects[project_id] = {
            "name": name,
            "client_id": client_id,
            "budget": D(budget) if budget is not None else None,
        }

    def add_position(
        self, position_id: int, project_id: int, budget=None, rate=None, hours=0, name: str = "Position"
    ) -> None:
        self.positions[position_id] = {
            "name": name,
            "project_id": project_id,
            "budget": D(budget) if budget is not None else None,
            "rate": D(rate) if rate is not None else None,
            "hours": D(hours),
        }

    # ── BudgetStore ───────────────────────────────────────────────────────

    async def fetch_position(self, position_id: int) -> Optional[PositionBudgetRow]:
        p = self.positions.get(position_id)
        if p is None:
            return None
        return PositionBudgetRow(position_id, p["name"], p["budget"], p["rate"], p["hours"])

    async def fetch_project(self, project_id: int) -> Optional[EntityBudgetRow]:
        p = self.projects.get(project_id)
        if p is None:
            return None
        return EntityBudgetRow(project_id, p["name"], p["budget"])

    async def fetch_client(self, client_id: int) -> Optional[EntityBudgetRow]:
        if client_id not in self.clients:
            return None
        budgets = [
            p["budget"] for p in self.projects.values()
            if p["client_id"] == client_id and p["budget"] is not None
        ]
        total = sum(budgets, Decimal("0")) if budgets else None
        return EntityBudgetRow(client_id, self.clients[client_id], total)

    async def position_hours_for_project(self, project_id: int) -> List[PositionHoursRow]:
        return [
            PositionHoursRow(pid, p["rate"], p["hours"])
            for pid, p in sorted(self.positions.items())
            if p["project_id"] == project_id
        ]

    async def position_hours_for_client(self, client_id: int) -> List[PositionHoursRow]:
        project_ids = {
            pid for pid, p in self.projects.items() if p["client_id"] == client_id
        }
        return [
            PositionHoursRow(pid, p["rate"], p["hours"])
            for pid, p in sorted(self.positions.items())
            if p["project_id"] in project_ids
        ]

    async def budgeted_client_ids(self) -> List[int]:
        return sorted({
            p["client_id"] for p in self.projects.values() if p["budget"] is not None
        })

    async def budgeted_project_ids(self) -> List[int]:
        return sorted(pid for pid, p in self.projects.items() if p["budget"] is not None)

    async def budgeted_position_ids(self) -> List[int]:
        return sorted(pid for pid, p in self.positions.items() if p["budget"] is not None)


class FailingBudgetStore(FakeBudgetStore):
    async def fetch_position(self, position_id: int):
        raise OperationalError("SELECT ...", {}, Exception("connection reset"))


@pytest.fixture
def store():
    return FakeBudgetStore()


@pytest.fixture
def service(store):
    return BudgetService(store)


# ══════════════════════════════════════════════════════════════════════════
# Scope resolution
# ══════════════════════════════════════════════════════════════════════════

class TestResolveScope:

    def test_position_wins_over_everything(self):
        scope = resolve_scope(BudgetConsumptionInput(position_id=7, project_id=3, client_id=1))
        assert scope == PositionScope(7)

    def test_project_wins_over_client(self):
        scope = resolve_scope(BudgetConsumptionInput(project_id=3, client_id=1))
        assert scope == ProjectScope(3)

    def test_client_only(self):
        assert resolve_scope(BudgetConsumptionInput(client_id=1)) == ClientScope(1)

    def test_no_ids_means_all(self):
        assert resolve_scope(BudgetConsumptionInput()) == AllScope()


# ══════════════════════════════════════════════════════════════════════════
# Pricing helpers
# ══════════════════════════════════════════════════════════════════════════

class TestPricing:

    def test_price_without_rate_is_zero(self):
        assert price_hours(D("40"), None) == Decimal("0")

    def test_price_rounds_to_cents(self):
        assert price_hours(D("1.25"), D("33.33")) == D("41.66")

    def test_rate_is_zero_without_budget(self):
        assert consumption_rate(D("500"), None) == Decimal("0")

    def test_rate_is_zero_for_zero_budget(self):
        assert consumption_rate(D("500"), Decimal("0")) == Decimal("0")

    def test_rate_rounds_half_up(self):
        # 1 / 3 * 100 = 33.333...
        assert consumption_rate(D("1"), D("3")) == D("33.33")
        # 1 / 800 * 100 = 0.125
        assert consumption_rate(D("1"), D("800")) == D("0.13")


# ══════════════════════════════════════════════════════════════════════════
# Position scope
# ══════════════════════════════════════════════════════════════════════════

class TestPositionScope:

    @pytest.mark.asyncio
    async def test_position_under_budget(self, store, service):
        store.add_client(1)
        store.add_project(1, client_id=1)
        store.add_position(1, project_id=1, budget=5000, rate=100, hours=20, name="Developer")

        result = await service.get_budget_consumption(BudgetConsumptionInput(position_id=1))

        assert len(result) == 1
        report = result[0]
        assert report.entity_type == BudgetEntityType.POSITION
        assert report.entity_id == 1
        assert report.entity_name == "Developer"
        assert report.total_budget == D("5000")
        assert report.consumed_amount == D("2000")
        assert report.consumption_rate == D("40")
        assert report.remaining_budget == D("3000")

    @pytest.mark.asyncio
    async def test_position_over_budget_is_not_clamped(self, store, service):
        store.add_client(1)
        store.add_project(1, client_id=1)
        store.add_position(1, project_id=1, budget=1000, rate=100, hours=20)

        [report] = await service.get_budget_consumption(BudgetConsumptionInput(position_id=1))

        assert report.consumed_amount == D("2000")
        assert report.consumption_rate == D("200")
        assert report.remaining_budget == D("-1000")

    @pytest.mark.asyncio
    async def test_position_without_hours(self, store, service):
        store.add_client(1)
        store.add_project(1, client_id=1)
        store.add_position(1, project_id=1, budget=5000, rate=100, hours=0)

        [report] = await service.get_budget_consumption(BudgetConsumptionInput(position_id=1))

        assert report.consumed_amount == Decimal("0")
        assert report.consumption_rate == Decimal("0")
        assert report.remaining_budget == D("5000")

    @pytest.mark.asyncio
    async def test_rate_less_position_consumes_nothing(self, store, service):
        store.add_client(1)
        store.add_project(1, client_id=1)
        store.add_position(1, project_id=1, budget=5000, rate=None, hours=120)

        [report] = await service.get_budget_consumption(BudgetConsumptionInput(position_id=1))

        assert report.consumed_amount == Decimal("0")
        assert report.consumption_rate == Decimal("0")
        assert report.remaining_budget == D("5000")

    @pytest.mark.asyncio
    async def test_budget_less_position(self, store, service):
        store.add_client(1)
        store.add_project(1, client_id=1)
        store.add_position(1, project_id=1, budget=None, rate=100, hours=10)

        [report] = await service.get_budget_consumption(BudgetConsumptionInput(position_id=1))

        assert report.total_budget is None
        assert report.consumed_amount == D("1000")
        assert report.consumption_rate == Decimal("0")
        assert report.remaining_budget is None

    @pytest.mark.asyncio
    async def test_unknown_position_returns_empty_list(self, service):
        assert await service.get_budget_consumption(BudgetConsumptionInput(position_id=999)) == []

    @pytest.mark.asyncio
    async def test_position_id_takes_precedence(self, store, service):
        store.add_client(1)
        store.add_project(1, client_id=1, budget=10000)
        store.add_position(1, project_id=1, budget=5000, rate=100, hours=1)

        result = await service.get_budget_consumption(
            BudgetConsumptionInput(position_id=1, project_id=1, client_id=1)
        )

        assert [r.entity_type for r in result] == [BudgetEntityType.POSITION]


# ══════════════════════════════════════════════════════════════════════════
# Project and client scopes
# ══════════════════════════════════════════════════════════════════════════

class TestProjectScope:

    @pytest.mark.asyncio
    async def test_project_sums_positions_at_their_own_rates(self, store, service):
        store.add_client(1)
        store.add_project(1, client_id=1, budget=10000, name="Relaunch")
        store.add_position(1, project_id=1, rate=100, hours=10)
        store.add_position(2, project_id=1, rate=150, hours=8)

        [report] = await service.get_budget_consumption(BudgetConsumptionInput(project_id=1))

        assert report.entity_type == BudgetEntityType.PROJECT
        assert report.entity_name == "Relaunch"
        assert report.total_budget == D("10000")
        assert report.consumed_amount == D("2200")
        assert report.consumption_rate == D("22")
        assert report.remaining_budget == D("7800")

    @pytest.mark.asyncio
    async def test_project_consumed_equals_sum_of_positions(self, store, service):
        store.add_client(1)
        store.add_project(1, client_id=1, budget=9999)
        store.add_position(1, project_id=1, budget=1, rate="87.50", hours="3.25")
        store.add_position(2, project_id=1, budget=1, rate="112.35", hours="7.75")
        store.add_position(3, project_id=1, budget=1, rate=None, hours=40)

        [project] = await service.get_budget_consumption(BudgetConsumptionInput(project_id=1))
        positions = [
            (await service.get_budget_consumption(BudgetConsumptionInput(position_id=pid)))[0]
            for pid in (1, 2, 3)
        ]

        assert project.consumed_amount == sum(p.consumed_amount for p in positions)

    @pytest.mark.asyncio
    async def test_unknown_project_returns_empty_list(self, service):
        assert await service.get_budget_consumption(BudgetConsumptionInput(project_id=42)) == []


class TestClientScope:

    @pytest.mark.asyncio
    async def test_client_budget_is_sum_of_project_budgets(self, store, service):
        store.add_client(1, name="Acme")
        store.add_project(1, client_id=1, budget=5000)
        store.add_project(2, client_id=1, budget=7000)
        store.add_position(1, project_id=1, rate=100, hours=15)
        store.add_position(2, project_id=2, rate=120, hours=10)

        [report] = await service.get_budget_consumption(BudgetConsumptionInput(client_id=1))

        assert report.entity_type == BudgetEntityType.CLIENT
        assert report.entity_name == "Acme"
        assert report.total_budget == D("12000")
        assert report.consumed_amount == D("2700")
        assert report.consumption_rate == D("22.5")
        assert report.remaining_budget == D("9300")

    @pytest.mark.asyncio
    async def test_client_without_any_project_budget(self, store, service):
        store.add_client(1)
        store.add_project(1, client_id=1, budget=None)
        store.add_position(1, project_id=1, rate=100, hours=5)

        [report] = await service.get_budget_consumption(BudgetConsumptionInput(client_id=1))

        assert report.total_budget is None
        assert report.consumed_amount == D("500")
        assert report.consumption_rate == Decimal("0")
        assert report.remaining_budget is None

    @pytest.mark.asyncio
    async def test_unknown_client_returns_empty_list(self, service):
        assert await service.get_budget_consumption(BudgetConsumptionInput(client_id=42)) == []


# ══════════════════════════════════════════════════════════════════════════
# Overview (no filter)
# ══════════════════════════════════════════════════════════════════════════

class TestAllScope:

    @pytest.mark.asyncio
    async def test_overview_orders_clients_projects_positions(self, store, service):
        store.add_client(1, name="Acme")
        store.add_client(2, name="Globex")      # no budgeted project
        store.add_project(10, client_id=1, budget=8000)
        store.add_project(11, client_id=2, budget=None)
        store.add_position(100, project_id=10, budget=3000, rate=100, hours=5)
        store.add_position(101, project_id=10, budget=None, rate=90, hours=2)
        store.add_position(102, project_id=11, budget=1000, rate=50, hours=4)

        result = await service.get_budget_consumption(BudgetConsumptionInput())

        assert [(r.entity_type, r.entity_id) for r in result] == [
            (BudgetEntityType.CLIENT, 1),
            (BudgetEntityType.PROJECT, 10),
            (BudgetEntityType.POSITION, 100),
            (BudgetEntityType.POSITION, 102),
        ]
        # Drill-down rows repeat the same hours at every level
        assert result[0].consumed_amount == D("680")
        assert result[1].consumed_amount == D("680")
        assert result[2].consumed_amount == D("500")

    @pytest.mark.asyncio
    async def test_overview_of_empty_store(self, service):
        assert await service.get_budget_consumption(BudgetConsumptionInput()) == []


# ══════════════════════════════════════════════════════════════════════════
# Determinism and failures
# ══════════════════════════════════════════════════════════════════════════

class TestBehaviour:

    @pytest.mark.asyncio
    async def test_identical_requests_give_identical_reports(self, store, service):
        store.add_client(1)
        store.add_project(1, client_id=1, budget=4000)
        store.add_position(1, project_id=1, budget=2000, rate="95.5", hours="12.25")

        first = await service.get_budget_consumption(BudgetConsumptionInput())
        second = await service.get_budget_consumption(BudgetConsumptionInput())

        assert first == second

    @pytest.mark.asyncio
    async def test_store_failure_propagates_unchanged(self, caplog):
        service = BudgetService(FailingBudgetStore())

        with caplog.at_level(logging.ERROR, logger="app.services.budget_service"):
            with pytest.raises(OperationalError):
                await service.get_budget_consumption(BudgetConsumptionInput(position_id=1))

        assert "Budget consumption query failed" in caplog.text

    @pytest.mark.asyncio
    async def test_json_output_renders_numbers(self, store, service):
        store.add_client(1)
        store.add_project(1, client_id=1)
        store.add_position(1, project_id=1, budget=5000, rate=100, hours=20)

        [report] = await service.get_budget_consumption(BudgetConsumptionInput(position_id=1))
        payload = report.model_dump(mode="json")

        assert payload["entity_type"] == "position"
        assert payload["consumed_amount"] == 2000.0
        assert payload["consumption_rate"] == 40.0
        assert payload["remaining_budget"] == 3000.0
