"""Shipping rule set API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shipweight.core.auth import get_current_organization
from shipweight.core.database import get_db
from shipweight.models.shipping_rule_set import ShippingRuleSet
from shipweight.repositories.shipping_rule_set_repository import ShippingRuleSetRepository
from shipweight.schemas.shipping_rule_set import (
    ShippingQuoteRequest,
    ShippingQuoteResponse,
    ShippingRuleSetResponse,
    ShippingRuleSetUpsert,
)
from shipweight.services.diagnostics import RecordingDiagnosticSink
from shipweight.services.shipping_cost_service import ShippingCostService
from shipweight.services.shipping_rates.rule_set import ShippingConfigurationError
from shipweight.services.shipping_rates.weight import WeightedLine

router = APIRouter()


@router.get(
    "/",
    response_model=ShippingRuleSetResponse,
    summary="Get shipping rules",
    responses={404: {"description": "No shipping rules configured"}},
)
async def get_shipping_rules(
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> ShippingRuleSet:
    """Get the organization's shipping by weight rules."""
    rule_set = ShippingRuleSetRepository(db).get_for_organization(organization_id)
    if not rule_set:
        raise HTTPException(status_code=404, detail="No shipping rules configured")
    return rule_set


@router.put(
    "/",
    response_model=ShippingRuleSetResponse,
    summary="Replace shipping rules",
    responses={422: {"description": "Validation error"}},
)
async def put_shipping_rules(
    data: ShippingRuleSetUpsert,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> ShippingRuleSet:
    """Create or replace the organization's shipping rules.

    Tiers are evaluated in the order given here; they are not sorted.
    """
    return ShippingRuleSetRepository(db).upsert(data, organization_id)


@router.delete(
    "/",
    status_code=204,
    summary="Delete shipping rules",
    responses={404: {"description": "No shipping rules configured"}},
)
async def delete_shipping_rules(
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> None:
    if not ShippingRuleSetRepository(db).delete(organization_id):
        raise HTTPException(status_code=404, detail="No shipping rules configured")


@router.post(
    "/quote",
    response_model=ShippingQuoteResponse,
    summary="Preview a shipping rate",
    responses={
        400: {"description": "Not exactly one of lines and total_weight given"},
        422: {"description": "Stored shipping rules are invalid"},
    },
)
async def quote_shipping(
    data: ShippingQuoteRequest,
    db: Session = Depends(get_db),
    organization_id: UUID = Depends(get_current_organization),
) -> ShippingQuoteResponse:
    """Price a weight or a set of lines against the stored rules."""
    if (data.lines is None) == (data.total_weight is None):
        raise HTTPException(status_code=400, detail="Provide either lines or total_weight")

    sink = RecordingDiagnosticSink()
    service = ShippingCostService(db, sink=sink)
    lines = [WeightedLine(quantity=line.quantity, weight=line.weight) for line in data.lines or []]
    try:
        result = service.quote(
            organization_id,
            data.country,
            lines=lines,
            weight=data.total_weight,
        )
    except ShippingConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None

    return ShippingQuoteResponse(
        country=data.country,
        total_weight=result.total_weight,
        cost=result.cost,
        matched=result.matched,
        used_overweight=result.used_overweight,
        found_country=result.found_country,
        had_tiers=result.had_tiers,
        diagnostics=sink.messages(),
    )
