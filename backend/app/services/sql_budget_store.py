"""
Timeledger Backend — SQLAlchemy Budget Store
=============================================

What:  BudgetStore implementation backed by the request's AsyncSession.
How:   Aggregates run in the database (SUM/GROUP BY); each method issues one
       query, except fetch_client which needs the client row and the sum of
       its project budgets.
Who:   Built per request by routes/reports.get_budget_service().

Query shapes:
    Position with hours:
        SELECT p.id, p.name, p.budget, p.hourly_rate, COALESCE(SUM(t.hours), 0)
        FROM positions p LEFT JOIN time_entries t ON t.position_id = p.id
        WHERE p.id = :id GROUP BY p.id, ...

    Per-position hours for a client:
        ... FROM positions p JOIN projects pr ON pr.id = p.project_id
        LEFT JOIN time_entries t ... WHERE pr.client_id = :id GROUP BY p.id, p.hourly_rate

Errors are not caught here. BudgetService logs them and the global
SQLAlchemyError handler answers with a 500.
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.client import Client
from app.models.project import Position, Project
from app.models.time_entry import TimeEntry
from app.services.budget_store import (
    BudgetStore,
    EntityBudgetRow,
    PositionBudgetRow,
    PositionHoursRow,
)


def as_decimal(value) -> Decimal:
    """Normalize driver output (Decimal, int, float or None) to Decimal."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _optional_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    return as_decimal(value)


class SqlBudgetStore(BudgetStore):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _hours_sum():
        return func.coalesce(func.sum(TimeEntry.hours), 0).label("total_hours")

    async def fetch_position(self, position_id: int) -> Optional[PositionBudgetRow]:
        result = await self.session.execute(
            select(
                Position.id,
                Position.name,
                Position.budget,
                Position.hourly_rate,
                self._hours_sum(),
            )
            .outerjoin(TimeEntry, TimeEntry.position_id == Position.id)
            .where(Position.id == position_id)
            .group_by(Position.id, Position.name, Position.budget, Position.hourly_rate)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return PositionBudgetRow(
            id=row.id,
            name=row.name,
            budget=_optional_decimal(row.budget),
            hourly_rate=_optional_decimal(row.hourly_rate),
            total_hours=as_decimal(row.total_hours),
        )

    async def fetch_project(self, project_id: int) -> Optional[EntityBudgetRow]:
        result = await self.session.execute(
            select(Project.id, Project.name, Project.budget).where(Project.id == project_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return EntityBudgetRow(id=row.id, name=row.name, budget=_optional_decimal(row.budget))

    async def fetch_client(self, client_id: int) -> Optional[EntityBudgetRow]:
        result = await self.session.execute(
            select(Client.id, Client.name).where(Client.id == client_id)
        )
        row = result.one_or_none()
        if row is None:
            return None

        # SUM skips NULL budgets and yields NULL only when every one is NULL
        total_budget = await self.session.scalar(
            select(func.sum(Project.budget)).where(Project.client_id == client_id)
        )
        return EntityBudgetRow(id=row.id, name=row.name, budget=_optional_decimal(total_budget))

    async def position_hours_for_project(self, project_id: int) -> List[PositionHoursRow]:
        result = await self.session.execute(
            select(Position.id, Position.hourly_rate, self._hours_sum())
            .outerjoin(TimeEntry, TimeEntry.position_id == Position.id)
            .where(Position.project_id == project_id)
            .group_by(Position.id, Position.hourly_rate)
            .order_by(Position.id)
        )
        return [self._hours_row(row) for row in result.all()]

    async def position_hours_for_client(self, client_id: int) -> List[PositionHoursRow]:
        result = await self.session.execute(
            select(Position.id, Position.hourly_rate, self._hours_sum())
            .join(Project, Project.id == Position.project_id)
            .outerjoin(TimeEntry, TimeEntry.position_id == Position.id)
            .where(Project.client_id == client_id)
            .group_by(Position.id, Position.hourly_rate)
            .order_by(Position.id)
        )
        return [self._hours_row(row) for row in result.all()]

    async def budgeted_client_ids(self) -> List[int]:
        result = await self.session.execute(
            select(Project.client_id)
            .where(Project.budget.is_not(None))
            .distinct()
            .order_by(Project.client_id)
        )
        return list(result.scalars().all())

    async def budgeted_project_ids(self) -> List[int]:
        result = await self.session.execute(
            select(Project.id).where(Project.budget.is_not(None)).order_by(Project.id)
        )
        return list(result.scalars().all())

    async def budgeted_position_ids(self) -> List[int]:
        result = await self.session.execute(
            select(Position.id).where(Position.budget.is_not(None)).order_by(Position.id)
        )
        return list(result.scalars().all())

    @staticmethod
    def _hours_row(row) -> PositionHoursRow:
        return PositionHoursRow(
            position_id=row.id,
            hourly_rate=_optional_decimal(row.hourly_rate),
            total_hours=as_decimal(row.total_hours),
        )
