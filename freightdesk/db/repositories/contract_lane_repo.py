import json
import sqlite3
import uuid

from freightdesk.utils.period import utc_now_iso


def _row_to_lane(row: sqlite3.Row) -> dict:
    lane = dict(row)
    lane["stops"] = json.loads(lane["stops"] or "[]")
    return lane


def insert_contract_lane(conn: sqlite3.Connection, lane: dict) -> dict:
    now = utc_now_iso()
    record = {
        "id": lane.get("id") or f"CL-{uuid.uuid4().hex[:8]}",
        "org_id": lane["org_id"],
        "customer_id": lane["customer_id"],
        "hcr": lane.get("hcr"),
        "trip_number": lane.get("trip_number"),
        "contract_name": lane["contract_name"],
        "contract_period_start": lane["contract_period_start"],
        "contract_period_end": lane["contract_period_end"],
        "rate_type": lane["rate_type"],
        "rate": lane.get("rate", 0),
        "currency": lane.get("currency", "USD"),
        "miles": lane.get("miles"),
        "stops": lane.get("stops", []),
        "is_active": lane.get("is_active", True),
        "is_deleted": lane.get("is_deleted", False),
        "created_by": lane["created_by"],
        "created_at": now,
        "updated_at": now,
    }
    conn.execute(
        """INSERT INTO contract_lanes
           (id, org_id, customer_id, hcr, trip_number, contract_name,
            contract_period_start, contract_period_end, rate_type, rate,
            currency, miles, stops, is_active, is_deleted, created_by,
            created_at, updated_at)
           VALUES (?,?,?,?,?,?,?,?,?,?,?,?,?,?,?,?,?,?)""",
        (
            record["id"],
            record["org_id"],
            record["customer_id"],
            record["hcr"],
            record["trip_number"],
            record["contract_name"],
            record["contract_period_start"],
            record["contract_period_end"],
            record["rate_type"],
            record["rate"],
            record["currency"],
            record["miles"],
            json.dumps(record["stops"]),
            int(record["is_active"]),
            int(record["is_deleted"]),
            record["created_by"],
            record["created_at"],
            record["updated_at"],
        ),
    )
    return record


def get_contract_lane_by_id(conn: sqlite3.Connection, lane_id: str) -> dict | None:
    row = conn.execute(
        "SELECT * FROM contract_lanes WHERE id=?", (lane_id,)
    ).fetchone()
    return _row_to_lane(row) if row else None


def find_active_lane(
    conn: sqlite3.Connection, org_id: str, hcr: str, trip_number: str
) -> dict | None:
    """Exact (org, hcr, trip) match among lanes that are not soft-deleted."""
    row = conn.execute(
        """SELECT * FROM contract_lanes
           WHERE org_id=? AND hcr=? AND trip_number=? AND is_deleted=0
           ORDER BY created_at
           LIMIT 1""",
        (org_id, hcr, trip_number),
    ).fetchone()
    return _row_to_lane(row) if row else None

