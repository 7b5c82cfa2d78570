"""
Timeledger Backend — Client Route Handlers
===========================================

What:  Clients and their contact persons.

    POST /api/clients                         create a client
    GET  /api/clients                         list clients
    POST /api/contacts                        add a contact to a client
    GET  /api/clients/{client_id}/contacts    a client's contacts
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.client import (
    ClientCreate,
    ClientResponse,
    ContactCreate,
    ContactResponse,
)
from app.schemas.common import ErrorResponse
from app.services.client_service import client_service

router = APIRouter(prefix="/api", tags=["Clients"])


@router.post(
    "/clients",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Create a client",
)
async def create_client(
    payload: ClientCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ClientResponse:
    return await client_service.create_client(db, payload)


@router.get(
    "/clients",
    response_model=List[ClientResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List clients",
)
async def list_clients(db: AsyncSession = Depends(get_db_session)) -> List[ClientResponse]:
    return await client_service.list_clients(db)


@router.post(
    "/contacts",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Client does not exist", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Add a contact person to a client",
)
async def create_contact(
    payload: ContactCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ContactResponse:
    return await client_service.create_contact(db, payload)


@router.get(
    "/clients/{client_id}/contacts",
    response_model=List[ContactResponse],
    responses={
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List a client's contacts",
)
async def list_contacts(
    client_id: int = Path(ge=1, description="Client ID"),
    db: AsyncSession = Depends(get_db_session),
) -> List[ContactResponse]:
    return await client_service.list_contacts(db, client_id)
