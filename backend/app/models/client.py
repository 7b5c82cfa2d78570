"""
Timeledger Backend — Client & Contact SQLAlchemy Models
========================================================

What:  ORM models for the `clients` and `contacts` tables.
Why:   A client is the root of the billing hierarchy
       (client → project → position → time entry) and the anchor for all
       CRM records (contacts, notes, activity logs).
"""

from typing import Optional

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import TimestampMixin


class Client(TimestampMixin, Base):
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    industry: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name='{self.name}')>"


class Contact(TimestampMixin, Base):
    """A person at a client organisation."""

    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        ForeignKey("clients.id"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Contacts are always listed per client
    __table_args__ = (
        Index("idx_contacts_client_id", "client_id"),
    )

    def __repr__(self) -> str:
        return f"<Contact(id={self.id}, client_id={self.client_id}, name='{self.name}')>"
