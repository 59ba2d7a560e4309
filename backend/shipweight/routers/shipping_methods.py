"""Shipping method API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from shipweight.core.auth import get_current_organization
from shipweight.core.database import get_db
from shipweight.models.shipping_method import ShippingMethod
from shipweight.repositories.shipping_method_repository import ShippingMethodRepository
from shipweight.schemas.shipping_method import (
    ShippingMethodCreate,
    ShippingMethodResponse,
    ShippingMethodUpdate,
)

router = APIRouter()


@router.post(
    "/",
    response_model=ShippingMethodResponse,
    status_code=201,
    summary="Create shipping method",
    responses={409: {"description": "Shipping method with this code already exists"}},
)
async def create_shipping_method(
    data: ShippingMethodCreate,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> ShippingMethod:
    repo = ShippingMethodRepository(db)
    if repo.get_by_code(data.code, organization_id):
        raise HTTPException(
            status_code=409, detail="Shipping method with this code already exists"
        )
    return repo.create(data, organization_id)


@router.get("/", response_model=list[ShippingMethodResponse], summary="List shipping methods")
async def list_shipping_methods(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> list[ShippingMethod]:
    repo = ShippingMethodRepository(db)
    response.headers["X-Total-Count"] = str(repo.count(organization_id))
    return repo.get_all(organization_id, skip=skip, limit=limit, order_by=order_by)


@router.get(
    "/{method_id}",
    response_model=ShippingMethodResponse,
    summary="Get shipping method",
    responses={404: {"description": "Shipping method not found"}},
)
async def get_shipping_method(
    method_id: UUID,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> ShippingMethod:
    method = ShippingMethodRepository(db).get_by_id(method_id, organization_id)
    if not method:
        raise HTTPException(status_code=404, detail="Shipping method not found")
    return method


@router.put(
    "/{method_id}",
    response_model=ShippingMethodResponse,
    summary="Update shipping method",
    responses={404: {"description": "Shipping method not found"}},
)
async def update_shipping_method(
    method_id: UUID,
    data: ShippingMethodUpdate,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> ShippingMethod:
    """Update a shipping method.

    Orders already using it keep their stored fee until they change again.
    """
    method = ShippingMethodRepository(db).update(method_id, data, organization_id)
    if not method:
        raise HTTPException(status_code=404, detail="Shipping method not found")
    return method


@router.delete(
    "/{method_id}",
    status_code=204,
    summary="Delete shipping method",
    responses={404: {"description": "Shipping method not found"}},
)
async def delete_shipping_method(
    method_id: UUID,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> None:
    if not ShippingMethodRepository(db).delete(method_id, organization_id):
        raise HTTPException(status_code=404, detail="Shipping method not found")
