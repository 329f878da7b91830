import sqlite3
import uuid

from freightdesk.utils.period import utc_now_iso


def insert_payable(conn: sqlite3.Connection, payable: dict) -> dict:
    now = utc_now_iso()
    record = {
        "id": payable.get("id") or f"PY-{uuid.uuid4().hex[:8]}",
        "org_id": payable["org_id"],
        "load_id": payable["load_id"],
        "driver_id": payable.get("driver_id"),
        "description": payable.get("description", "Base Line Haul"),
        "total_amount": payable.get("total_amount", 0.0),
        "settlement_id": payable.get("settlement_id"),
        "created_at": payable.get("created_at", now),
        "updated_at": now,
    }
    conn.execute(
        """INSERT INTO load_payables
           (id, org_id, load_id, driver_id, description,
            total_amount, settlement_id, created_at, updated_at)
           VALUES (?,?,?,?,?,?,?,?,?)""",
        (
            record["id"],
            record["org_id"],
            record["load_id"],
            record["driver_id"],
            record["description"],
            record["total_amount"],
            record["settlement_id"],
            record["created_at"],
            record["updated_at"],
        ),
    )
    return record


def get_payables_by_load(conn: sqlite3.Connection, load_id: str) -> list[dict]:
    rows = conn.execute(
        "SELECT * FROM load_payables WHERE load_id=? ORDER BY created_at",
        (load_id,),
    ).fetchall()
    return [dict(r) for r in rows]


def unassign_payable(conn: sqlite3.Connection, payable_id: str, updated_at: str) -> None:
    conn.execute(
        "UPDATE load_payables SET settlement_id=NULL, updated_at=? WHERE id=?",
        (updated_at, payable_id),
    )


def get_unassigned_by_driver(
    conn: sqlite3.Connection, org_id: str, driver_id: str
) -> list[dict]:
    """Payables with no settlement, joined with their load's hold state."""
    rows = conn.execute(
        """SELECT p.*,
                  l.internal_id      AS load_internal_id,
                  l.is_held          AS load_is_held,
                  l.held_reason      AS held_reason
           FROM load_payables p
           LEFT JOIN loads l ON p.load_id = l.id
           WHERE p.org_id = ? AND p.driver_id = ? AND p.settlement_id IS NULL
           ORDER BY p.created_at""",
        (org_id, driver_id),
    ).fetchall()
    return [dict(r) for r in rows]
