"""
Timeledger Backend — Budget Data Store Interface
=================================================

What:  Abstract read-only capability the budget engine queries for budgets,
       hourly rates and booked hours.
Why:   BudgetService holds no database knowledge. It receives a store in its
       constructor, so unit tests can hand it an in-memory fake and the
       request path hands it an SqlBudgetStore bound to the request session.
How:   Concrete stores implement every abstract method below and return the
       plain row types defined here. Hours are already summed per position.
Who:   Implemented by SqlBudgetStore; consumed by BudgetService.

Contract:
    - Unknown ids return None (fetch_*) or an empty list (the rest)
    - Monetary values and hours are Decimal, never float
    - total_hours is Decimal("0") for a position without bookings
    - Store failures are raised as-is; callers do not retry
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional


@dataclass(frozen=True)
class PositionBudgetRow:
    """A position with its budget, rate and the hours booked against it."""
    id: int
    name: str
    budget: Optional[Decimal]
    hourly_rate: Optional[Decimal]
    total_hours: Decimal


@dataclass(frozen=True)
class EntityBudgetRow:
    """
    A project or client with its budget.

    For a client the budget is the sum of its projects' budgets, and None
    only when none of them carries one.
    """
    id: int
    name: str
    budget: Optional[Decimal]


@dataclass(frozen=True)
class PositionHoursRow:
    """Hours booked against one position, paired with that position's rate."""
    position_id: int
    hourly_rate: Optional[Decimal]
    total_hours: Decimal


class BudgetStore(ABC):
    """Read-only queries backing the budget consumption report."""

    @abstractmethod
    async def fetch_position(self, position_id: int) -> Optional[PositionBudgetRow]:
        ...

    @abstractmethod
    async def fetch_project(self, project_id: int) -> Optional[EntityBudgetRow]:
        ...

    @abstractmethod
    async def fetch_client(self, client_id: int) -> Optional[EntityBudgetRow]:
        ...

    @abstractmethod
    async def position_hours_for_project(self, project_id: int) -> List[PositionHoursRow]:
        """One row per position of the project, including positions without bookings."""

    @abstractmethod
    async def position_hours_for_client(self, client_id: int) -> List[PositionHoursRow]:
        """One row per position across every project of the client."""

    @abstractmethod
    async def budgeted_client_ids(self) -> List[int]:
        """Clients with at least one project carrying a budget, ordered by id."""

    @abstractmethod
    async def budgeted_project_ids(self) -> List[int]:
        """Projects with a budget, ordered by id."""

    @abstractmethod
    async def budgeted_position_ids(self) -> List[int]:
        """Positions with a budget, ordered by id."""
