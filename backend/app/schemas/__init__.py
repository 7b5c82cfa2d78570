# Schemas package init
"""
Timeledger Backend — API Schemas
=================================

Pydantic models defining the API contract. They are kept separate from the
SQLAlchemy models so the wire format (e.g. decimals rendered as numbers)
can evolve independently of the database schema.
"""
