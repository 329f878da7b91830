from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Security

from freightdesk.models.auth import AuthContext
from freightdesk.models.hold import (
    BulkHoldRequest,
    BulkReleaseRequest,
    BulkResult,
    HoldEligibility,
    HoldRequest,
    HoldResult,
    PodUploadRequest,
    PodUploadResult,
    ReleaseResult,
)
from freightdesk.models.load import HeldLoad
from freightdesk.routes._auth import auth_context, verify_api_key
from freightdesk.services.hold_service import (
    bulk_hold_loads,
    bulk_release_loads,
    can_hold_load,
    hold_load,
    list_held_loads,
    release_load,
    upload_pod,
)

router = APIRouter(prefix="/api/loads", tags=["Holds"])


def _raise_on_failure(result):
    if not result.success:
        status = 404 if result.message == "Load not found" else 409
        raise HTTPException(status, result.message)
    return result


@router.get(
    "/held",
    response_model=list[HeldLoad],
    dependencies=[Security(verify_api_key)],
)
async def list_held_loads_route(
    driver_id: Optional[str] = Query(None, description="Only loads of this driver"),
    ctx: AuthContext = Depends(auth_context),
):
    """Held loads of the organization, most recent hold first."""
    return list_held_loads(ctx, driver_id)


@router.post(
    "/bulk-hold",
    response_model=BulkResult,
    dependencies=[Security(verify_api_key)],
)
async def bulk_hold_route(
    body: BulkHoldRequest, ctx: AuthContext = Depends(auth_context)
):
    """
    Hold each load independently. Partial success is normal; the
    `errors` list says why each failed load was refused.
    """
    return bulk_hold_loads(ctx, body.load_ids, body.reason_code, body.note)


@router.post(
    "/bulk-release",
    response_model=BulkResult,
    dependencies=[Security(verify_api_key)],
)
async def bulk_release_route(
    body: BulkReleaseRequest, ctx: AuthContext = Depends(auth_context)
):
    """Release each load independently, reporting failures per load."""
    return bulk_release_loads(ctx, body.load_ids)


@router.get(
    "/{load_id}/hold-eligibility",
    response_model=HoldEligibility,
    dependencies=[Security(verify_api_key)],
)
async def hold_eligibility_route(
    load_id: str, ctx: AuthContext = Depends(auth_context)
):
    """Whether the load could be held right now, and if not, why."""
    return can_hold_load(ctx, load_id)


@router.post(
    "/{load_id}/hold",
    response_model=HoldResult,
    dependencies=[Security(verify_api_key)],
)
async def hold_load_route(
    load_id: str, body: HoldRequest, ctx: AuthContext = Depends(auth_context)
):
    """
    Exclude the load's payables from settlement. Payables sitting on a
    DRAFT settlement are detached; anything past DRAFT blocks the hold.
    """
    return _raise_on_failure(hold_load(ctx, load_id, body.reason_code, body.note))


@router.post(
    "/{load_id}/release",
    response_model=ReleaseResult,
    dependencies=[Security(verify_api_key)],
)
async def release_load_route(
    load_id: str, ctx: AuthContext = Depends(auth_context)
):
    """Lift the hold. Payables rejoin the next settlement run."""
    return _raise_on_failure(release_load(ctx, load_id))


@router.post(
    "/{load_id}/pod",
    response_model=PodUploadResult,
    dependencies=[Security(verify_api_key)],
)
async def upload_pod_route(
    load_id: str, body: PodUploadRequest, ctx: AuthContext = Depends(auth_context)
):
    """Record a signed POD, optionally releasing a MISSING_POD hold."""
    return _raise_on_failure(
        upload_pod(ctx, load_id, body.storage_id, body.auto_release)
    )
