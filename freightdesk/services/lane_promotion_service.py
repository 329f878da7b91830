"""
Spot review and lane promotion.

Loads matched to a lane only by wildcard arrive as SPOT with
requires_manual_review set. A reviewer either confirms the load as a
one-off spot, or converts it to contract, which creates (or reuses) the
contract lane for its HCR/trip and promotes every SPOT load on that route
in the organization, not just the one reviewed.
"""

import logging
from typing import Optional

from freightdesk.config import get_settings
from freightdesk.db.connection import get_db
from freightdesk.db.repositories.contract_lane_repo import (
    find_active_lane,
    get_contract_lane_by_id,
    insert_contract_lane,
)
from freightdesk.db.repositories.load_repo import (
    count_review_needed as _count_review_needed,
    count_spot_loads_on_route,
    find_spot_loads_on_route,
    get_review_loads,
    patch_load,
)
from freightdesk.db.repositories.organization_repo import get_customer_by_id
from freightdesk.errors import MissingRouteKeyError, NotFoundError
from freightdesk.models.auth import AuthContext
from freightdesk.models.enums import LoadType, RateType
from freightdesk.models.lane import (
    ConfirmSpotResult,
    ContractLane,
    ConversionResult,
    PromotionCheckResult,
)
from freightdesk.models.load import ReviewLoad
from freightdesk.services.auth_service import authorize, get_scoped_load
from freightdesk.utils.period import contract_period, utc_now_iso

log = logging.getLogger(__name__)

_PROMOTED = {
    "load_type": LoadType.CONTRACT.value,
    "requires_manual_review": 0,
}


def confirm_spot_load(ctx: AuthContext, load_id: str) -> ConfirmSpotResult:
    """Reviewer says this really is a one-time spot load."""
    with get_db() as conn:
        authorize(conn, ctx)
        load = get_scoped_load(conn, ctx, load_id)
        if not load:
            raise NotFoundError("Load not found")
        patch_load(conn, load_id, {
            "requires_manual_review": 0,
            "updated_at": utc_now_iso(),
        })
    log.info("Spot load confirmed: load_id=%s by=%s", load_id, ctx.user_id)
    return ConfirmSpotResult()


def convert_to_contract(
    ctx: AuthContext,
    load_id: str,
    contract_name: Optional[str] = None,
    rate_type: Optional[RateType] = None,
    rate: Optional[float] = None,
) -> ConversionResult:
    settings = get_settings()
    with get_db() as conn:
        authorize(conn, ctx)
        load = get_scoped_load(conn, ctx, load_id)
        if not load:
            raise NotFoundError("Load not found")

        hcr = load["parsed_hcr"]
        trip = load["parsed_trip_number"]
        if not hcr or not trip:
            raise MissingRouteKeyError(
                "Cannot convert: Load missing HCR or Trip information"
            )

        lane = find_active_lane(conn, ctx.org_id, hcr, trip)
        lane_created = lane is None
        if lane_created:
            customer = get_customer_by_id(conn, load["customer_id"])
            if not customer or customer["org_id"] != ctx.org_id:
                raise NotFoundError("Customer not found")

            start, end = contract_period(settings.contract_term_years)
            lane = insert_contract_lane(conn, {
                "org_id": ctx.org_id,
                "customer_id": load["customer_id"],
                "hcr": hcr,
                "trip_number": trip,
                "contract_name": contract_name or f"Lane: {customer['name']} - {trip}",
                "contract_period_start": start,
                "contract_period_end": end,
                "rate_type": (rate_type or settings.default_rate_type).value,
                "rate": rate if rate is not None else 0,
                "currency": settings.default_currency.value,
                "miles": load["contract_miles"],
                "stops": [],
                "created_by": ctx.user_id,
            })
            log.info("Contract lane created: lane_id=%s org_id=%s route=%s/%s",
                     lane["id"], ctx.org_id, hcr, trip)

        now = utc_now_iso()
        matching = find_spot_loads_on_route(conn, ctx.org_id, hcr, trip)
        for match in matching:
            patch_load(conn, match["id"], {**_PROMOTED, "updated_at": now})

    converted = len(matching)
    if converted > 1:
        log.warning("Fleet-wide promotion: %d SPOT loads on %s/%s converted to CONTRACT by %s",
                    converted, hcr, trip, ctx.user_id)
    else:
        log.info("Promotion: %d SPOT load on %s/%s converted to CONTRACT by %s",
                 converted, hcr, trip, ctx.user_id)

    lane_action = "Created" if lane_created else "Using existing"
    if converted == 1:
        message = (
            f"{lane_action} contract lane for {hcr}/{trip}. "
            f"Load converted to CONTRACT."
        )
    else:
        message = (
            f"{lane_action} contract lane for {hcr}/{trip}. "
            f"{converted} loads converted to CONTRACT."
        )
    return ConversionResult(
        message=message,
        loads_converted=converted,
        contract_lane_id=lane["id"],
        lane_created=lane_created,
    )


def count_matching_spot_loads(ctx: AuthContext, hcr: str, trip_number: str) -> int:
    """How many loads convert_to_contract would reclassify for this route."""
    with get_db() as conn:
        authorize(conn, ctx)
        return count_spot_loads_on_route(conn, ctx.org_id, hcr, trip_number)


def count_review_needed(ctx: AuthContext) -> int:
    with get_db() as conn:
        authorize(conn, ctx)
        return _count_review_needed(conn, ctx.org_id)


def check_and_promote_load(ctx: AuthContext, load_id: str) -> PromotionCheckResult:
    """Promote a flagged SPOT load if a lane for its route exists already.

    Called when a load is opened, so lanes created after the load was
    classified still catch it without a bulk rescan.
    """
    with get_db() as conn:
        authorize(conn, ctx)
        load = get_scoped_load(conn, ctx, load_id)
        if not load:
            return PromotionCheckResult(promoted=False)
        if load["load_type"] != LoadType.SPOT.value or not load["requires_manual_review"]:
            return PromotionCheckResult(promoted=False)
        if not load["parsed_hcr"] or not load["parsed_trip_number"]:
            return PromotionCheckResult(promoted=False)

        lane = find_active_lane(
            conn, ctx.org_id, load["parsed_hcr"], load["parsed_trip_number"]
        )
        if not lane:
            return PromotionCheckResult(promoted=False)

        patch_load(conn, load_id, {**_PROMOTED, "updated_at": utc_now_iso()})

    log.info("Load promoted on access: load_id=%s lane_id=%s", load_id, lane["id"])
    return PromotionCheckResult(promoted=True, lane=lane["contract_name"])


def list_review_queue(ctx: AuthContext) -> list[ReviewLoad]:
    with get_db() as conn:
        authorize(conn, ctx)
        rows = get_review_loads(conn, ctx.org_id)
        counts: dict[tuple[str, str], int] = {}
        queue: list[ReviewLoad] = []
        for row in rows:
            route = (row["parsed_hcr"], row["parsed_trip_number"])
            matching = 0
            if all(route):
                if route not in counts:
                    counts[route] = count_spot_loads_on_route(conn, ctx.org_id, *route)
                matching = counts[route]
            queue.append(ReviewLoad(**row, matching_spot_loads=matching))
    return queue


def get_contract_lane(ctx: AuthContext, lane_id: str) -> ContractLane:
    with get_db() as conn:
        authorize(conn, ctx)
        lane = get_contract_lane_by_id(conn, lane_id)
    if not lane or lane["org_id"] != ctx.org_id:
        raise NotFoundError(f"Contract lane {lane_id} not found")
    return ContractLane(**lane)
