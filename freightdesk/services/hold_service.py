"""
Load hold workflow.

Accountants hold a load to keep its payables out of settlement runs
while paperwork (POD, receipts) is missing. Holding detaches the payables
from any DRAFT settlement; releasing only clears the flag, and the next
settlement run picks the unassigned payables up again.
"""

import logging
import sqlite3
from typing import Optional

from freightdesk.db.connection import get_db
from freightdesk.db.repositories.load_repo import get_held_loads, patch_load
from freightdesk.db.repositories.payable_repo import (
    get_payables_by_load,
    unassign_payable,
)
from freightdesk.db.repositories.settlement_repo import get_settlement_by_id
from freightdesk.errors import FreightDeskError
from freightdesk.models.auth import AuthContext
from freightdesk.models.enums import HoldReason, SettlementStatus
from freightdesk.models.hold import (
    BulkError,
    BulkResult,
    HoldEligibility,
    HoldResult,
    PodUploadResult,
    ReleaseResult,
)
from freightdesk.models.load import HeldLoad
from freightdesk.services.auth_service import authorize, get_scoped_load
from freightdesk.utils.period import utc_now_iso

log = logging.getLogger(__name__)

_CLEARED_HOLD = {
    "is_held": False,
    "held_reason": None,
    "held_reason_code": None,
    "held_at": None,
    "held_by": None,
}


def _blocking_settlement(
    conn: sqlite3.Connection, payables: list[dict]
) -> dict | None:
    """First settlement past DRAFT that one of the payables sits on."""
    for payable in payables:
        if not payable["settlement_id"]:
            continue
        settlement = get_settlement_by_id(conn, payable["settlement_id"])
        if settlement and settlement["status"] != SettlementStatus.DRAFT.value:
            return settlement
    return None


def can_hold_load(ctx: AuthContext, load_id: str) -> HoldEligibility:
    """Dry run of hold_load's checks."""
    with get_db() as conn:
        authorize(conn, ctx)
        load = get_scoped_load(conn, ctx, load_id)
        if not load:
            return HoldEligibility(can_hold=False, reason="Load not found")
        if load["is_held"]:
            return HoldEligibility(can_hold=False, reason="Load is already held")

        payables = get_payables_by_load(conn, load_id)
        if not payables:
            return HoldEligibility(
                can_hold=False, reason="Load has no payables to hold"
            )

        assigned = [p for p in payables if p["settlement_id"]]
        blocking = _blocking_settlement(conn, payables)
        if blocking:
            return HoldEligibility(
                can_hold=False,
                reason=f"Cannot hold - payables are in {blocking['status']} settlement",
                has_payables=True,
                payables_in_settlement=True,
                settlement_status=blocking["status"],
            )

        status = None
        if assigned:
            settlement = get_settlement_by_id(conn, assigned[0]["settlement_id"])
            status = settlement["status"] if settlement else None
        return HoldEligibility(
            can_hold=True,
            has_payables=True,
            payables_in_settlement=bool(assigned),
            settlement_status=status,
        )


def hold_load(
    ctx: AuthContext,
    load_id: str,
    reason_code: HoldReason = HoldReason.OTHER,
    note: Optional[str] = None,
) -> HoldResult:
    with get_db() as conn:
        authorize(conn, ctx)
        load = get_scoped_load(conn, ctx, load_id)
        if not load:
            return HoldResult(success=False, message="Load not found")
        if load["is_held"]:
            return HoldResult(success=False, message="Load is already held")

        payables = get_payables_by_load(conn, load_id)
        if not payables:
            return HoldResult(success=False, message="Load has no payables to hold")

        blocking = _blocking_settlement(conn, payables)
        if blocking:
            log.warning("Hold refused: load_id=%s settlement=%s status=%s",
                        load_id, blocking["statement_number"], blocking["status"])
            return HoldResult(
                success=False,
                message=(
                    f"Cannot hold - payables are in {blocking['status']} "
                    f"settlement {blocking['statement_number']}"
                ),
            )

        now = utc_now_iso()
        unassigned = 0
        for payable in payables:
            if payable["settlement_id"]:
                unassign_payable(conn, payable["id"], now)
                unassigned += 1

        patch_load(conn, load_id, {
            "is_held": True,
            "held_reason": note or reason_code.value,
            "held_reason_code": reason_code.value,
            "held_at": now,
            "held_by": ctx.user_id,
            "updated_at": now,
        })

    log.info("Load held: load_id=%s reason=%s by=%s payables_unassigned=%d",
             load_id, reason_code.value, ctx.user_id, unassigned)
    return HoldResult(
        success=True,
        message=f"Load {load['internal_id']} held successfully",
        payables_unassigned=unassigned,
    )


def release_load(ctx: AuthContext, load_id: str) -> ReleaseResult:
    with get_db() as conn:
        authorize(conn, ctx)
        load = get_scoped_load(conn, ctx, load_id)
        if not load:
            return ReleaseResult(success=False, message="Load not found")
        if not load["is_held"]:
            return ReleaseResult(success=False, message="Load is not currently held")

        patch_load(conn, load_id, {**_CLEARED_HOLD, "updated_at": utc_now_iso()})

    log.info("Load released: load_id=%s by=%s", load_id, ctx.user_id)
    return ReleaseResult(
        success=True,
        message=f"Load {load['internal_id']} released successfully",
    )


def _run_bulk(ctx: AuthContext, load_ids: list[str], operation) -> BulkResult:
    # Membership is checked once up front; each id then commits on its own.
    with get_db() as conn:
        authorize(conn, ctx)

    result = BulkResult()
    for load_id in load_ids:
        try:
            outcome = operation(load_id)
            error = None if outcome.success else outcome.message
        except FreightDeskError as e:
            error = e.message
        except sqlite3.Error as e:
            log.exception("Bulk %s failed: load_id=%s", operation.__name__, load_id)
            error = str(e)
        if error is None:
            result.successful += 1
        else:
            result.failed += 1
            result.errors.append(BulkError(load_id=load_id, error=error))
    log.info("Bulk %s: successful=%d failed=%d",
             operation.__name__, result.successful, result.failed)
    return result


def bulk_hold_loads(
    ctx: AuthContext,
    load_ids: list[str],
    reason_code: HoldReason = HoldReason.OTHER,
    note: Optional[str] = None,
) -> BulkResult:
    def hold(load_id: str) -> HoldResult:
        return hold_load(ctx, load_id, reason_code, note)

    return _run_bulk(ctx, load_ids, hold)


def bulk_release_loads(ctx: AuthContext, load_ids: list[str]) -> BulkResult:
    def release(load_id: str) -> ReleaseResult:
        return release_load(ctx, load_id)

    return _run_bulk(ctx, load_ids, release)


def upload_pod(
    ctx: AuthContext,
    load_id: str,
    storage_id: str,
    auto_release: bool = False,
) -> PodUploadResult:
    """Attach a signed POD; optionally lift a hold placed for a missing POD.

    Payables are not touched either way.
    """
    with get_db() as conn:
        authorize(conn, ctx)
        load = get_scoped_load(conn, ctx, load_id)
        if not load:
            return PodUploadResult(
                success=False, message="Load not found", was_released=False
            )

        now = utc_now_iso()
        fields = {
            "pod_storage_id": storage_id,
            "pod_uploaded_at": now,
            "has_signed_pod": True,
            "updated_at": now,
        }
        was_released = bool(
            auto_release
            and load["is_held"]
            and load["held_reason_code"] == HoldReason.MISSING_POD.value
        )
        if was_released:
            fields.update(_CLEARED_HOLD)
        patch_load(conn, load_id, fields)

    log.info("POD uploaded: load_id=%s storage_id=%s released=%s",
             load_id, storage_id, was_released)
    return PodUploadResult(
        success=True,
        message=(
            "POD uploaded and load released"
            if was_released
            else "POD uploaded successfully"
        ),
        was_released=was_released,
    )


def list_held_loads(
    ctx: AuthContext, driver_id: Optional[str] = None
) -> list[HeldLoad]:
    with get_db() as conn:
        authorize(conn, ctx)
        rows = get_held_loads(conn, ctx.org_id, driver_id)
    return [HeldLoad(**r) for r in rows]
