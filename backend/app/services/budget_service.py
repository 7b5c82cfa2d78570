"""
Timeledger Backend — Budget Consumption Engine
===============================================

What:  Compares declared budgets with the money consumed by booked hours.
Why:   Project managers need to see, per client, project or position, how much
       of a budget is gone before it is gone.
How:   Resolve the filter into a scope, ask the injected BudgetStore for the
       rows that scope needs, price the hours and build report lines.
Who:   Called by GET /api/reports/budget-consumption.
When:  On every report request; nothing is cached.

Pricing:
    consumed  = Σ (hours booked on a position × that position's hourly rate)
    rate      = consumed / budget × 100        (0 when budget is absent or 0)
    remaining = budget − consumed               (None when budget is absent)

    A position without an hourly rate consumes nothing, however many hours
    are booked on it. Nothing is clamped: 2000 consumed on a 1000 budget is
    reported as 200% with -1000 remaining.

Scopes:
    position  →  one "position" line
    project   →  one "project" line, priced over the project's positions
    client    →  one "client" line; budget = sum of its project budgets
    all       →  every budgeted client, then every budgeted project, then
                 every budgeted position. The lines are drill-down views, so
                 summing across entity types counts the same hours twice.

Failure handling:
    Unknown ids produce an empty list. Store errors are logged and re-raised
    unchanged; no retry and no partial report.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from app.schemas.report import (
    BudgetConsumptionInput,
    BudgetConsumptionReport,
    BudgetEntityType,
)
from app.services.budget_scope import (
    AllScope,
    ClientScope,
    PositionScope,
    ProjectScope,
    Scope,
    resolve_scope,
)
from app.services.budget_store import BudgetStore, PositionHoursRow

logger = logging.getLogger(__name__)

Q2 = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def price_hours(hours: Decimal, hourly_rate: Optional[Decimal]) -> Decimal:
    """Money consumed by `hours` at `hourly_rate`, rounded to cents. No rate, no cost."""
    if hourly_rate is None:
        return ZERO
    return (hours * hourly_rate).quantize(Q2, rounding=ROUND_HALF_UP)


def consumption_rate(consumed: Decimal, budget: Optional[Decimal]) -> Decimal:
    if budget is None or budget <= ZERO:
        return ZERO
    return (consumed / budget * HUNDRED).quantize(Q2, rounding=ROUND_HALF_UP)


def build_report(
    entity_type: BudgetEntityType,
    entity_id: int,
    entity_name: str,
    budget: Optional[Decimal],
    consumed: Decimal,
) -> BudgetConsumptionReport:
    return BudgetConsumptionReport(
        entity_type=entity_type,
        entity_id=entity_id,
        entity_name=entity_name,
        total_budget=budget,
        consumed_amount=consumed,
        consumption_rate=consumption_rate(consumed, budget),
        remaining_budget=None if budget is None else budget - consumed,
    )


def _sum_priced(rows: Iterable[PositionHoursRow]) -> Decimal:
    return sum((price_hours(row.total_hours, row.hourly_rate) for row in rows), ZERO)


class BudgetService:
    """
    Budget consumption report over an injected BudgetStore.

    Stateless apart from the store reference; build one per request.
    """

    def __init__(self, store: BudgetStore):
        self.store = store

    async def get_budget_consumption(
        self, criteria: BudgetConsumptionInput
    ) -> List[BudgetConsumptionReport]:
        scope = resolve_scope(criteria)
        logger.debug("Budget consumption requested for %s", scope)

        try:
            return await self._reports_for(scope)
        except Exception as e:
            logger.error(
                "Budget consumption query failed for %s: %s", scope, str(e), exc_info=True
            )
            raise

    async def _reports_for(self, scope: Scope) -> List[BudgetConsumptionReport]:
        if isinstance(scope, PositionScope):
            report = await self._position_report(scope.position_id)
            return [report] if report is not None else []

        if isinstance(scope, ProjectScope):
            report = await self._project_report(scope.project_id)
            return [report] if report is not None else []

        if isinstance(scope, ClientScope):
            report = await self._client_report(scope.client_id)
            return [report] if report is not None else []

        if isinstance(scope, AllScope):
            return await self._all_reports()

        raise TypeError(f"Unsupported budget scope: {scope!r}")

    # ── Per-entity reports ────────────────────────────────────────────────

    async def _position_report(self, position_id: int) -> Optional[BudgetConsumptionReport]:
        position = await self.store.fetch_position(position_id)
        if position is None:
            return None

        consumed = price_hours(position.total_hours, position.hourly_rate)
        return build_report(
            BudgetEntityType.POSITION, position.id, position.name, position.budget, consumed
        )

    async def _project_report(self, project_id: int) -> Optional[BudgetConsumptionReport]:
        project = await self.store.fetch_project(project_id)
        if project is None:
            return None

        rows = await self.store.position_hours_for_project(project_id)
        return build_report(
            BudgetEntityType.PROJECT, project.id, project.name, project.budget, _sum_priced(rows)
        )

    async def _client_report(self, client_id: int) -> Optional[BudgetConsumptionReport]:
        client = await self.store.fetch_client(client_id)
        if client is None:
            return None

        rows = await self.store.position_hours_for_client(client_id)
        return build_report(
            BudgetEntityType.CLIENT, client.id, client.name, client.budget, _sum_priced(rows)
        )

    # ── Overview ──────────────────────────────────────────────────────────

    async def _all_reports(self) -> List[BudgetConsumptionReport]:
        reports: List[BudgetConsumptionReport] = []

        for client_id in await self.store.budgeted_client_ids():
            report = await self._client_report(client_id)
            if report is not None:
                reports.append(report)

        for project_id in await self.store.budgeted_project_ids():
            report = await self._project_report(project_id)
            if report is not None:
                reports.append(report)

        for position_id in await self.store.budgeted_position_ids():
            report = await self._position_report(position_id)
            if report is not None:
                reports.append(report)

        logger.debug("Budget overview built with %d lines", len(reports))
        return reports
