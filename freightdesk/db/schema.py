from contextlib import closing

from freightdesk.db.connection import connect


def init_db() -> None:
    with closing(connect()) as conn:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS organization_members (
                org_id      TEXT NOT NULL,
                user_id     TEXT NOT NULL,
                role        TEXT NOT NULL DEFAULT 'member',
                created_at  TEXT NOT NULL,
                PRIMARY KEY (org_id, user_id)
            );

            CREATE TABLE IF NOT EXISTS customers (
                id          TEXT PRIMARY KEY,
                org_id      TEXT NOT NULL,
                name        TEXT NOT NULL,
                created_at  TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS drivers (
                id          TEXT PRIMARY KEY,
                org_id      TEXT NOT NULL,
                first_name  TEXT NOT NULL,
                last_name   TEXT NOT NULL,
                created_at  TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS loads (
                id TEXT PRIMARY KEY,
                org_id TEXT NOT NULL,
                internal_id TEXT NOT NULL,
                order_number TEXT NOT NULL,
                customer_id TEXT NOT NULL,
                primary_driver_id TEXT,
                contract_miles REAL,
                load_type TEXT NOT NULL DEFAULT 'UNMAPPED',
                parsed_hcr TEXT,
                parsed_trip_number TEXT,
                requires_manual_review INTEGER NOT NULL DEFAULT 0,
                is_held INTEGER NOT NULL DEFAULT 0,
                held_reason TEXT,
                held_reason_code TEXT,
                held_at TEXT,
                held_by TEXT,
                has_signed_pod INTEGER NOT NULL DEFAULT 0,
                pod_storage_id TEXT,
                pod_uploaded_at TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_loads_route
                ON loads (org_id, parsed_hcr, parsed_trip_number, load_type);
            CREATE INDEX IF NOT EXISTS idx_loads_review
                ON loads (org_id, requires_manual_review);
            CREATE INDEX IF NOT EXISTS idx_loads_held
                ON loads (org_id, is_held);

            CREATE TABLE IF NOT EXISTS settlements (
                id TEXT PRIMARY KEY,
                org_id TEXT NOT NULL,
                driver_id TEXT,
                status TEXT NOT NULL DEFAULT 'DRAFT',
                statement_number TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS load_payables (
                id TEXT PRIMARY KEY,
                org_id TEXT NOT NULL,
                load_id TEXT NOT NULL REFERENCES loads(id) ON DELETE CASCADE,
                driver_id TEXT,
                description TEXT NOT NULL,
                total_amount REAL NOT NULL DEFAULT 0,
                settlement_id TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_payables_load
                ON load_payables (load_id);
            CREATE INDEX IF NOT EXISTS idx_payables_driver_unassigned
                ON load_payables (driver_id, settlement_id);

            CREATE TABLE IF NOT EXISTS contract_lanes (
                id TEXT PRIMARY KEY,
                org_id TEXT NOT NULL,
                customer_id TEXT NOT NULL,
                hcr TEXT,
                trip_number TEXT,
                contract_name TEXT NOT NULL,
                contract_period_start TEXT NOT NULL,
                contract_period_end TEXT NOT NULL,
                rate_type TEXT NOT NULL,
                rate REAL NOT NULL DEFAULT 0,
                currency TEXT NOT NULL DEFAULT 'USD',
                miles REAL,
                stops TEXT NOT NULL DEFAULT '[]',
                is_active INTEGER NOT NULL DEFAULT 1,
                is_deleted INTEGER NOT NULL DEFAULT 0,
                created_by TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_contract_lanes_route
                ON contract_lanes (org_id, hcr, trip_number, is_deleted);
        """)
