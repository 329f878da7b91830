"""Demo tenant for local runs (FREIGHTDESK_SEED_DEMO_DATA=true)."""

from freightdesk.db.connection import get_db
from freightdesk.db.repositories.load_repo import insert_load
from freightdesk.db.repositories.organization_repo import (
    add_member,
    insert_customer,
    insert_driver,
)
from freightdesk.db.repositories.payable_repo import insert_payable
from freightdesk.db.repositories.settlement_repo import insert_settlement
from freightdesk.models.enums import LoadType, SettlementStatus

DEMO_ORG_ID = "org_demo"
DEMO_USER_ID = "user_demo"

_DEMO_LOADS = [
    # internal_id, hcr, trip, load_type, needs_review, settlement
    ("L-1001", "917DK", "T7", LoadType.SPOT, True, None),
    ("L-1002", "917DK", "T7", LoadType.SPOT, True, None),
    ("L-1003", "917DK", "T7", LoadType.SPOT, False, SettlementStatus.DRAFT),
    ("L-1004", "452AB", "T2", LoadType.CONTRACT, False, SettlementStatus.APPROVED),
    ("L-1005", None, None, LoadType.UNMAPPED, False, None),
]


def seed_demo_data() -> None:
    """Insert the demo tenant once; no-op if it already has loads."""
    with get_db() as conn:
        existing = conn.execute(
            "SELECT COUNT(*) FROM loads WHERE org_id=?", (DEMO_ORG_ID,)
        ).fetchone()[0]
        if existing:
            return

        add_member(conn, DEMO_ORG_ID, DEMO_USER_ID, role="admin")
        customer = insert_customer(conn, DEMO_ORG_ID, "Acme Postal Freight")
        driver = insert_driver(conn, DEMO_ORG_ID, "Dana", "Whitfield")

        for n, (internal_id, hcr, trip, load_type, review, status) in enumerate(_DEMO_LOADS):
            load = insert_load(conn, {
                "org_id": DEMO_ORG_ID,
                "internal_id": internal_id,
                "order_number": f"ORD-{5000 + n}",
                "customer_id": customer["id"],
                "primary_driver_id": driver["id"],
                "contract_miles": 212.0 if hcr else None,
                "load_type": load_type.value,
                "parsed_hcr": hcr,
                "parsed_trip_number": trip,
                "requires_manual_review": int(review),
            })
            settlement_id = None
            if status is not None:
                settlement_id = insert_settlement(conn, {
                    "org_id": DEMO_ORG_ID,
                    "driver_id": driver["id"],
                    "status": status.value,
                    "statement_number": f"SET-2026-{n + 1:03d}",
                })["id"]
            insert_payable(conn, {
                "org_id": DEMO_ORG_ID,
                "load_id": load["id"],
                "driver_id": driver["id"],
                "description": "Base Line Haul",
                "total_amount": 450.0 + 25 * n,
                "settlement_id": settlement_id,
            })
