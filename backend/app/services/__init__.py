# Services package init
"""
Timeledger Backend — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
Why:   Routes handle HTTP, services handle business rules.
How:   Services accept an AsyncSession plus pydantic inputs and return
       pydantic response models. Routes get the session via FastAPI's
       dependency injection.

Service Inventory:
    - BudgetService: budget consumption engine over an injected BudgetStore
    - BudgetStore (abstract) / SqlBudgetStore: budget, rate and hours queries
    - ReportService: utilization and booking-details reports
    - UserService, ClientService, ProjectService, TimeEntryService,
      CrmService: create/list operations for each aggregate
"""
