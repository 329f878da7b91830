import sqlite3
import uuid

from freightdesk.models.enums import LoadType
from freightdesk.utils.period import utc_now_iso

_INSERT_COLUMNS = (
    "id",
    "org_id",
    "internal_id",
    "order_number",
    "customer_id",
    "primary_driver_id",
    "contract_miles",
    "load_type",
    "parsed_hcr",
    "parsed_trip_number",
    "requires_manual_review",
    "is_held",
    "held_reason",
    "held_reason_code",
    "held_at",
    "held_by",
    "has_signed_pod",
    "pod_storage_id",
    "pod_uploaded_at",
    "created_at",
    "updated_at",
)

_PATCHABLE_FIELDS = set(_INSERT_COLUMNS) - {"id", "org_id", "created_at"}

# Shared by the conversion scan and its preview count so both see the
# same set of loads.
_SPOT_ON_ROUTE = (
    "loads.org_id = ? AND loads.parsed_hcr = ? "
    "AND loads.parsed_trip_number = ? AND loads.load_type = ?"
)


def insert_load(conn: sqlite3.Connection, load: dict) -> dict:
    now = utc_now_iso()
    record = {col: None for col in _INSERT_COLUMNS}
    record.update(
        load_type=LoadType.UNMAPPED.value,
        requires_manual_review=0,
        is_held=0,
        has_signed_pod=0,
        created_at=now,
        updated_at=now,
    )
    record.update(load)
    record["id"] = record["id"] or f"LD-{uuid.uuid4().hex[:8]}"
    conn.execute(
        f"INSERT INTO loads ({', '.join(_INSERT_COLUMNS)}) "
        f"VALUES ({', '.join('?' for _ in _INSERT_COLUMNS)})",
        [record[col] for col in _INSERT_COLUMNS],
    )
    return record


def get_load_by_id(conn: sqlite3.Connection, load_id: str) -> dict | None:
    row = conn.execute(
        "SELECT * FROM loads WHERE id=?", (load_id,)
    ).fetchone()
    return dict(row) if row else None


def patch_load(conn: sqlite3.Connection, load_id: str, fields: dict) -> None:
    """Field-level update. Unknown column names are rejected."""
    unknown = set(fields) - _PATCHABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot patch load fields: {sorted(unknown)}")
    if not fields:
        return
    assignments = ", ".join(f"{col}=?" for col in fields)
    conn.execute(
        f"UPDATE loads SET {assignments} WHERE id=?",
        list(fields.values()) + [load_id],
    )


def find_spot_loads_on_route(
    conn: sqlite3.Connection, org_id: str, hcr: str, trip_number: str
) -> list[dict]:
    rows = conn.execute(
        f"SELECT * FROM loads WHERE {_SPOT_ON_ROUTE} ORDER BY loads.created_at",
        (org_id, hcr, trip_number, LoadType.SPOT.value),
    ).fetchall()
    return [dict(r) for r in rows]


def count_spot_loads_on_route(
    conn: sqlite3.Connection, org_id: str, hcr: str, trip_number: str
) -> int:
    return conn.execute(
        f"SELECT COUNT(*) FROM loads WHERE {_SPOT_ON_ROUTE}",
        (org_id, hcr, trip_number, LoadType.SPOT.value),
    ).fetchone()[0]


def count_review_needed(conn: sqlite3.Connection, org_id: str) -> int:
    return conn.execute(
        "SELECT COUNT(*) FROM loads "
        "WHERE org_id=? AND requires_manual_review=1",
        (org_id,),
    ).fetchone()[0]


def get_review_loads(conn: sqlite3.Connection, org_id: str) -> list[dict]:
    rows = conn.execute(
        """SELECT * FROM loads
           WHERE org_id=? AND requires_manual_review=1
           ORDER BY created_at DESC""",
        (org_id,),
    ).fetchall()
    return [dict(r) for r in rows]


def get_held_loads(
    conn: sqlite3.Connection, org_id: str, driver_id: str | None = None
) -> list[dict]:
    clauses = ["l.org_id = ?", "l.is_held = 1"]
    params: list = [org_id]
    if driver_id:
        clauses.append("l.primary_driver_id = ?")
        params.append(driver_id)

    rows = conn.execute(
        f"""SELECT l.*,
                   CASE WHEN d.id IS NOT NULL
                        THEN d.first_name || ' ' || d.last_name
                   END AS driver_name
            FROM loads l
            LEFT JOIN drivers d ON l.primary_driver_id = d.id
            WHERE {' AND '.join(clauses)}
            ORDER BY COALESCE(l.held_at, '') DESC""",
        params,
    ).fetchall()
    return [dict(r) for r in rows]
