"""
Vidly Backend — Customer Route Handlers
========================================

Routes (all public):
    GET    /api/customers        list, name ascending
    GET    /api/customers/{id}   single customer
    POST   /api/customers        create
    PUT    /api/customers/{id}   full replace
    DELETE /api/customers/{id}   delete
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends

from vidly.context import AppContext, get_context
from vidly.middleware.object_id import validate_object_id
from vidly.schemas.common import ErrorResponse
from vidly.schemas.customer import CustomerOut
from vidly.services.customer_service import customer_service

router = APIRouter(prefix="/api/customers", tags=["Customers"])

_NOT_FOUND = {404: {"description": "Invalid ID or customer not found", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Invalid payload", "model": ErrorResponse}}


@router.get("", response_model=List[CustomerOut], summary="List all customers")
async def list_customers(ctx: AppContext = Depends(get_context)) -> List[CustomerOut]:
    return await customer_service.list_customers(ctx.db)


@router.get("/{id}", response_model=CustomerOut, responses=_NOT_FOUND, summary="Get a customer by ID")
async def get_customer(
    id: str = Depends(validate_object_id),
    ctx: AppContext = Depends(get_context),
) -> CustomerOut:
    return await customer_service.get_customer(ctx.db, id)


@router.post("", response_model=CustomerOut, responses=_BAD_REQUEST, summary="Create a customer")
async def create_customer(
    payload: Any = Body(default=None),
    ctx: AppContext = Depends(get_context),
) -> CustomerOut:
    return await customer_service.create_customer(ctx.db, payload)


@router.put(
    "/{id}",
    response_model=CustomerOut,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    summary="Replace a customer",
)
async def replace_customer(
    id: str = Depends(validate_object_id),
    payload: Any = Body(default=None),
    ctx: AppContext = Depends(get_context),
) -> CustomerOut:
    return await customer_service.replace_customer(ctx.db, id, payload)


@router.delete("/{id}", response_model=CustomerOut, responses=_NOT_FOUND, summary="Delete a customer")
async def delete_customer(
    id: str = Depends(validate_object_id),
    ctx: AppContext = Depends(get_context),
) -> CustomerOut:
    return await customer_service.delete_customer(ctx.db, id)
