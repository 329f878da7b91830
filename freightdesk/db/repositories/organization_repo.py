import sqlite3
import uuid

from freightdesk.utils.period import utc_now_iso


def add_member(
    conn: sqlite3.Connection, org_id: str, user_id: str, role: str = "member"
) -> None:
    conn.execute(
        """INSERT INTO organization_members (org_id, user_id, role, created_at)
           VALUES (?, ?, ?, ?)
           ON CONFLICT(org_id, user_id) DO UPDATE SET role=excluded.role""",
        (org_id, user_id, role, utc_now_iso()),
    )


def is_member(conn: sqlite3.Connection, org_id: str, user_id: str) -> bool:
    row = conn.execute(
        "SELECT 1 FROM organization_members WHERE org_id=? AND user_id=?",
        (org_id, user_id),
    ).fetchone()
    return row is not None


def insert_customer(conn: sqlite3.Connection, org_id: str, name: str, customer_id: str | None = None) -> dict:
    record = {
        "id": customer_id or f"CU-{uuid.uuid4().hex[:8]}",
        "org_id": org_id,
        "name": name,
        "created_at": utc_now_iso(),
    }
    conn.execute(
        "INSERT INTO customers (id, org_id, name, created_at) VALUES (?,?,?,?)",
        (record["id"], record["org_id"], record["name"], record["created_at"]),
    )
    return record


def get_customer_by_id(conn: sqlite3.Connection, customer_id: str) -> dict | None:
    row = conn.execute(
        "SELECT * FROM customers WHERE id=?", (customer_id,)
    ).fetchone()
    return dict(row) if row else None


def insert_driver(
    conn: sqlite3.Connection,
    org_id: str,
    first_name: str,
    last_name: str,
    driver_id: str | None = None,
) -> dict:
    record = {
        "id": driver_id or f"DR-{uuid.uuid4().hex[:8]}",
        "org_id": org_id,
        "first_name": first_name,
        "last_name": last_name,
        "created_at": utc_now_iso(),
    }
    conn.execute(
        """INSERT INTO drivers (id, org_id, first_name, last_name, created_at)
           VALUES (?,?,?,?,?)""",
        tuple(record.values()),
    )
    return record
