from fastapi import APIRouter, Depends, Query, Security

from freightdesk.models.auth import AuthContext
from freightdesk.models.lane import (
    ConfirmSpotResult,
    ContractLane,
    ConversionResult,
    ConvertToContractRequest,
    CountResponse,
    PromotionCheckResult,
)
from freightdesk.models.load import ReviewLoad
from freightdesk.routes._auth import auth_context, verify_api_key
from freightdesk.services.lane_promotion_service import (
    check_and_promote_load,
    confirm_spot_load,
    convert_to_contract,
    count_matching_spot_loads,
    count_review_needed,
    get_contract_lane,
    list_review_queue,
)

router = APIRouter(tags=["Lane Review"])


@router.post(
    "/api/loads/{load_id}/confirm-spot",
    response_model=ConfirmSpotResult,
    dependencies=[Security(verify_api_key)],
)
async def confirm_spot_route(load_id: str, ctx: AuthContext = Depends(auth_context)):
    """Keep the load as SPOT and clear its review flag."""
    return confirm_spot_load(ctx, load_id)


@router.post(
    "/api/loads/{load_id}/convert-to-contract",
    response_model=ConversionResult,
    dependencies=[Security(verify_api_key)],
)
async def convert_to_contract_route(
    load_id: str,
    body: ConvertToContractRequest,
    ctx: AuthContext = Depends(auth_context),
):
    """
    Create or reuse the contract lane for the load's HCR/trip and promote
    EVERY SPOT load on that route to CONTRACT. Check
    /api/lane-review/matching-spot-count first to see how many.
    """
    return convert_to_contract(
        ctx, load_id, body.contract_name, body.rate_type, body.rate
    )


@router.post(
    "/api/loads/{load_id}/check-promotion",
    response_model=PromotionCheckResult,
    dependencies=[Security(verify_api_key)],
)
async def check_promotion_route(load_id: str, ctx: AuthContext = Depends(auth_context)):
    """Promote a flagged SPOT load if its lane has been created since."""
    return check_and_promote_load(ctx, load_id)


@router.get(
    "/api/lane-review/matching-spot-count",
    response_model=CountResponse,
    dependencies=[Security(verify_api_key)],
)
async def matching_spot_count_route(
    hcr: str = Query(..., min_length=1),
    trip_number: str = Query(..., min_length=1),
    ctx: AuthContext = Depends(auth_context),
):
    """Exact number of loads a conversion of this route would touch."""
    return CountResponse(count=count_matching_spot_loads(ctx, hcr, trip_number))


@router.get(
    "/api/lane-review/count",
    response_model=CountResponse,
    dependencies=[Security(verify_api_key)],
)
async def review_count_route(ctx: AuthContext = Depends(auth_context)):
    return CountResponse(count=count_review_needed(ctx))


@router.get(
    "/api/lane-review/queue",
    response_model=list[ReviewLoad],
    dependencies=[Security(verify_api_key)],
)
async def review_queue_route(ctx: AuthContext = Depends(auth_context)):
    """Loads awaiting review, newest first, with per-route blast radius."""
    return list_review_queue(ctx)


@router.get(
    "/api/contract-lanes/{lane_id}",
    response_model=ContractLane,
    dependencies=[Security(verify_api_key)],
)
async def get_contract_lane_route(lane_id: str, ctx: AuthContext = Depends(auth_context)):
    return get_contract_lane(ctx, lane_id)
