from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query, Response, status
from pydantic import BaseModel, ConfigDict, field_serializer
from ari.api.dependencies import get_client_service, get_current_user
from ari.api.validation import CLIENT_RULES, MAX_ID, validate
from ari.services.client_service import ClientService

router = APIRouter(
    prefix="/clients",
    tags=["clients"],
    dependencies=[Depends(get_current_user)],
)


class ClientCreate(BaseModel):
    person_id: int
    seller_id: Optional[int] = None
    credit_limit: Decimal
    active: bool
    notes: Optional[str] = None
    score: Optional[int] = None
    last_purchase_at: Optional[datetime] = None
    last_purchase_amount: Optional[Decimal] = None
    delinquent: bool
    blocked: bool
    base_id: Optional[int] = None


class ClientUpdate(BaseModel):
    person_id: Optional[int] = None
    seller_id: Optional[int] = None
    credit_limit: Optional[Decimal] = None
    active: Optional[bool] = None
    notes: Optional[str] = None
    score: Optional[int] = None
    last_purchase_at: Optional[datetime] = None
    last_purchase_amount: Optional[Decimal] = None
    delinquent: Optional[bool] = None
    blocked: Optional[bool] = None
    base_id: Optional[int] = None


class ClientResponse(BaseModel):
    id: int
    person_id: int
    seller_id: Optional[int]
    credit_limit: Decimal
    active: bool
    notes: Optional[str]
    score: Optional[int]
    last_purchase_at: Optional[datetime]
    last_purchase_amount: Optional[Decimal]
    delinquent: bool
    blocked: bool
    base_id: Optional[int]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)

    @field_serializer('credit_limit', 'last_purchase_amount')
    def serialize_amount(self, value: Optional[Decimal], _info):
        return float(value) if value is not None else None


@router.get("/", response_model=List[ClientResponse])
async def list_clients(
    base_id: Optional[int] = Query(None, ge=0, le=MAX_ID),
    clients: ClientService = Depends(get_client_service),
):
    """List clients, optionally only those of one base"""
    return clients.list(base_id)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: int = Path(..., ge=0, le=MAX_ID),
    clients: ClientService = Depends(get_client_service),
):
    return clients.get(client_id)


@router.post("/", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(body: ClientCreate, clients: ClientService = Depends(get_client_service)):
    data = body.model_dump()
    validate(data, CLIENT_RULES)
    return clients.create(data)


@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client(
    body: ClientUpdate,
    client_id: int = Path(..., ge=0, le=MAX_ID),
    clients: ClientService = Depends(get_client_service),
):
    changes = body.model_dump(exclude_unset=True)
    validate(changes, CLIENT_RULES)
    return clients.update(client_id, changes)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: int = Path(..., ge=0, le=MAX_ID),
    clients: ClientService = Depends(get_client_service),
):
    clients.delete(client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
