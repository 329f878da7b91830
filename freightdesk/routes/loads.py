from typing import Optional

from fastapi import APIRouter, Depends, Query, Security

from freightdesk.models.auth import AuthContext
from freightdesk.models.load import Load
from freightdesk.models.payable import Payable, UnassignedPayables
from freightdesk.routes._auth import auth_context, verify_api_key
from freightdesk.services.payable_service import (
    get_load,
    list_load_payables,
    list_unassigned_payables,
)

router = APIRouter(tags=["Loads"])


@router.get(
    "/api/payables/unassigned",
    response_model=UnassignedPayables,
    dependencies=[Security(verify_api_key)],
)
async def unassigned_payables_route(
    driver_id: str = Query(..., description="Driver whose payables to list"),
    period_start: Optional[str] = Query(
        None, description="Only eligible payables created at or after (ISO 8601 date or timestamp)"
    ),
    period_end: Optional[str] = Query(
        None, description="Only eligible payables created on or before (ISO 8601 date or timestamp)"
    ),
    ctx: AuthContext = Depends(auth_context),
):
    """
    Payables not yet on a settlement, split into those the next run may
    pick up and those frozen by a load hold.
    """
    return list_unassigned_payables(ctx, driver_id, period_start, period_end)


@router.get(
    "/api/loads/{load_id}",
    response_model=Load,
    dependencies=[Security(verify_api_key)],
)
async def get_load_route(load_id: str, ctx: AuthContext = Depends(auth_context)):
    """Get single load by ID."""
    return get_load(ctx, load_id)


@router.get(
    "/api/loads/{load_id}/payables",
    response_model=list[Payable],
    dependencies=[Security(verify_api_key)],
)
async def load_payables_route(load_id: str, ctx: AuthContext = Depends(auth_context)):
    return list_load_payables(ctx, load_id)
