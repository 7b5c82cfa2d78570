# Models package init
"""
Timeledger Backend — ORM Models Package
========================================

Importing this package registers every table with `Base.metadata`, which is
what Alembic autogenerate and the test suite's `create_all` rely on.

Hierarchy:
    Client ─┬─ Contact
            ├─ ClientNote ── User
            ├─ ActivityLog ─ User
            └─ Project ── Position ── TimeEntry ── User
"""

from app.models.client import Client, Contact
from app.models.crm import ActivityLog, ClientNote
from app.models.enums import ActivityType, ProjectStatus, UserRole
from app.models.project import Position, Project
from app.models.time_entry import TimeEntry
from app.models.user import User

__all__ = [
    "ActivityLog",
    "ActivityType",
    "Client",
    "ClientNote",
    "Contact",
    "Position",
    "Project",
    "ProjectStatus",
    "TimeEntry",
    "User",
    "UserRole",
]
