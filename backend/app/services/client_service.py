"""
Timeledger Backend — Client Service
====================================

What:  Creates and lists clients and their contact persons.
Who:   Called by routes/clients.py.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, TimeledgerError
from app.models.client import Client, Contact
from app.schemas.client import (
    ClientCreate,
    ClientResponse,
    ContactCreate,
    ContactResponse,
)
from app.services.references import ensure_exists

logger = logging.getLogger(__name__)


class ClientService:
    """
    Business logic for clients and contacts.

    Error Handling Strategy:
        Application errors (ValidationError) propagate as-is.
        Anything else is logged and wrapped in DatabaseError.
    """

    async def create_client(self, db: AsyncSession, payload: ClientCreate) -> ClientResponse:
        try:
            client = Client(**payload.model_dump())
            db.add(client)
            await db.flush()
            logger.info("Client created: %s (%s)", client.id, client.name)
            return ClientResponse.model_validate(client)
        except Exception as e:
            logger.error("Database error creating client: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the client. Please try again.",
                context={"original_error": type(e).__name__},
            )

    async def list_clients(self, db: AsyncSession) -> List[ClientResponse]:
        try:
            result = await db.execute(select(Client).order_by(Client.name, Client.id))
            return [ClientResponse.model_validate(c) for c in result.scalars().all()]
        except Exception as e:
            logger.error("Database error listing clients: %s", str(e))
            raise DatabaseError(message="Could not retrieve clients. Please try again.")

    async def create_contact(self, db: AsyncSession, payload: ContactCreate) -> ContactResponse:
        try:
            await ensure_exists(db, Client, payload.client_id, "Client", "client_id")

            contact = Contact(**payload.model_dump())
            db.add(contact)
            await db.flush()
            logger.info("Contact created: %s for client %s", contact.id, contact.client_id)
            return ContactResponse.model_validate(contact)

        except TimeledgerError:
            raise
        except Exception as e:
            logger.error("Database error creating contact: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the contact. Please try again.",
                context={"client_id": payload.client_id},
            )

    async def list_contacts(self, db: AsyncSession, client_id: int) -> List[ContactResponse]:
        try:
            result = await db.execute(
                select(Contact)
                .where(Contact.client_id == client_id)
                .order_by(Contact.name, Contact.id)
            )
            return [ContactResponse.model_validate(c) for c in result.scalars().all()]

        except Exception as e:
            logger.error("Database error listing contacts for client %s: %s", client_id, str(e))
            raise DatabaseError(
                message="Could not retrieve contacts. Please try again.",
                context={"client_id": client_id},
            )


client_service = ClientService()
