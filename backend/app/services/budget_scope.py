"""
Timeledger Backend — Budget Report Scope
=========================================

What:  Resolves a BudgetConsumptionInput filter into exactly one scope variant.
Why:   The report branches on "which entity is being asked about" in one place;
       everything downstream dispatches on the variant type instead of
       re-inspecting three optional ids.
How:   Precedence is position > project > client. No id set means AllScope.

    BudgetConsumptionInput(position_id=7, client_id=1)  →  PositionScope(7)
    BudgetConsumptionInput(project_id=3)                →  ProjectScope(3)
    BudgetConsumptionInput()                            →  AllScope()
"""

from dataclasses import dataclass
from typing import Union

from app.schemas.report import BudgetConsumptionInput


@dataclass(frozen=True)
class PositionScope:
    position_id: int


@dataclass(frozen=True)
class ProjectScope:
    project_id: int


@dataclass(frozen=True)
class ClientScope:
    client_id: int


@dataclass(frozen=True)
class AllScope:
    pass


Scope = Union[PositionScope, ProjectScope, ClientScope, AllScope]


def resolve_scope(criteria: BudgetConsumptionInput) -> Scope:
    # `is not None` so an explicit id is never mistaken for "unset"
    if criteria.position_id is not None:
        return PositionScope(criteria.position_id)
    if criteria.project_id is not None:
        return ProjectScope(criteria.project_id)
    if criteria.client_id is not None:
        return ClientScope(criteria.client_id)
    return AllScope()
