from typing import Optional

from freightdesk.db.connection import get_db
from freightdesk.db.repositories.payable_repo import (
    get_payables_by_load,
    get_unassigned_by_driver,
)
from freightdesk.errors import InvalidPeriodError, NotFoundError
from freightdesk.models.auth import AuthContext
from freightdesk.models.load import Load
from freightdesk.models.payable import Payable, UnassignedPayable, UnassignedPayables
from freightdesk.services.auth_service import authorize, get_scoped_load
from freightdesk.utils.period import parse_timestamp


def get_load(ctx: AuthContext, load_id: str) -> Load:
    with get_db() as conn:
        authorize(conn, ctx)
        load = get_scoped_load(conn, ctx, load_id)
    if not load:
        raise NotFoundError(f"Load {load_id} not found")
    return Load(**load)


def list_load_payables(ctx: AuthContext, load_id: str) -> list[Payable]:
    with get_db() as conn:
        authorize(conn, ctx)
        if not get_scoped_load(conn, ctx, load_id):
            raise NotFoundError(f"Load {load_id} not found")
        rows = get_payables_by_load(conn, load_id)
    return [Payable(**r) for r in rows]


def list_unassigned_payables(
    ctx: AuthContext,
    driver_id: str,
    period_start: Optional[str] = None,
    period_end: Optional[str] = None,
) -> UnassignedPayables:
    """What the next settlement run for a driver would see.

    Payables on held loads are listed apart and never count as eligible.
    The period bounds (ISO dates or timestamps, inclusive) only narrow the
    eligible side; a date-only end bound covers that whole day.
    """
    try:
        start = parse_timestamp(period_start) if period_start else None
        end = parse_timestamp(period_end, end_of_day=True) if period_end else None
    except ValueError:
        raise InvalidPeriodError(
            f"Invalid settlement period: {period_start!r} to {period_end!r}"
        )

    with get_db() as conn:
        authorize(conn, ctx)
        rows = get_unassigned_by_driver(conn, ctx.org_id, driver_id)

    eligible: list[UnassignedPayable] = []
    held: list[UnassignedPayable] = []
    for r in rows:
        if r["load_is_held"]:
            held.append(UnassignedPayable(**r))
            continue
        created = parse_timestamp(r["created_at"])
        if start and created < start:
            continue
        if end and created > end:
            continue
        eligible.append(UnassignedPayable(**{**r, "held_reason": None}))

    return UnassignedPayables(
        eligible=eligible,
        held=held,
        total_eligible=round(sum(p.total_amount for p in eligible), 2),
        total_held=round(sum(p.total_amount for p in held), 2),
    )
