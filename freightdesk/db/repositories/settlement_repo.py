import sqlite3
import uuid

from freightdesk.models.enums import SettlementStatus
from freightdesk.utils.period import utc_now_iso

# Settlements are generated and advanced elsewhere; this side only needs
# to read their status. insert_settlement exists for seeding.


def insert_settlement(conn: sqlite3.Connection, settlement: dict) -> dict:
    now = utc_now_iso()
    record = {
        "id": settlement.get("id") or f"ST-{uuid.uuid4().hex[:8]}",
        "org_id": settlement["org_id"],
        "driver_id": settlement.get("driver_id"),
        "status": settlement.get("status", SettlementStatus.DRAFT.value),
        "statement_number": settlement["statement_number"],
        "created_at": now,
        "updated_at": now,
    }
    conn.execute(
        """INSERT INTO settlements
           (id, org_id, driver_id, status, statement_number, created_at, updated_at)
           VALUES (?,?,?,?,?,?,?)""",
        tuple(record.values()),
    )
    return record


def get_settlement_by_id(conn: sqlite3.Connection, settlement_id: str) -> dict | None:
    row = conn.execute(
        "SELECT * FROM settlements WHERE id=?", (settlement_id,)
    ).fetchone()
    return dict(row) if row else None
