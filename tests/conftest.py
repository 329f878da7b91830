import itertools

import pytest

from freightdesk.db import connection
from freightdesk.db.connection import get_db
from freightdesk.db.repositories.load_repo import get_load_by_id, insert_load
from freightdesk.db.repositories.organization_repo import (
    add_member,
    insert_customer,
    insert_driver,
)
from freightdesk.db.repositories.payable_repo import (
    get_payables_by_load,
    insert_payable,
)
from freightdesk.db.repositories.settlement_repo import insert_settlement
from freightdesk.db.schema import init_db
from freightdesk.models.auth import AuthContext

ORG_ID = "org_a"
USER_ID = "u1"
OTHER_ORG_ID = "org_b"
OTHER_USER_ID = "u2"

_seq = itertools.count(1)


@pytest.fixture(autouse=True)
def db(tmp_path, monkeypatch):
    monkeypatch.setattr(connection, "DB_PATH", tmp_path / "freightdesk.db")
    init_db()
    with get_db() as conn:
        add_member(conn, ORG_ID, USER_ID)
        add_member(conn, OTHER_ORG_ID, OTHER_USER_ID)
    return tmp_path / "freightdesk.db"


@pytest.fixture
def ctx():
    return AuthContext(org_id=ORG_ID, user_id=USER_ID)


@pytest.fixture
def other_ctx():
    return AuthContext(org_id=OTHER_ORG_ID, user_id=OTHER_USER_ID)


@pytest.fixture
def customer():
    with get_db() as conn:
        return insert_customer(conn, ORG_ID, "Acme Postal")


@pytest.fixture
def driver():
    with get_db() as conn:
        return insert_driver(conn, ORG_ID, "Dana", "Whitfield")


@pytest.fixture
def make_load(customer):
    def _make(**fields):
        n = next(_seq)
        record = {
            "org_id": ORG_ID,
            "internal_id": f"L-{n:04d}",
            "order_number": f"ORD-{n:04d}",
            "customer_id": customer["id"],
        }
        record.update(fields)
        with get_db() as conn:
            return insert_load(conn, record)

    return _make


@pytest.fixture
def make_payable():
    """Payable on a load, optionally sitting on a settlement in `status`."""

    def _make(load, status=None, amount=500.0, driver_id=None, created_at=None):
        with get_db() as conn:
            settlement = None
            if status is not None:
                settlement = insert_settlement(conn, {
                    "org_id": load["org_id"],
                    "driver_id": driver_id,
                    "status": status,
                    "statement_number": f"SET-2026-{next(_seq):03d}",
                })
            payable = {
                "org_id": load["org_id"],
                "load_id": load["id"],
                "driver_id": driver_id,
                "total_amount": amount,
                "settlement_id": settlement["id"] if settlement else None,
            }
            if created_at:
                payable["created_at"] = created_at
            return insert_payable(conn, payable), settlement

    return _make


@pytest.fixture
def fetch_load():
    def _fetch(load_id):
        with get_db() as conn:
            return get_load_by_id(conn, load_id)

    return _fetch


@pytest.fixture
def fetch_payables():
    def _fetch(load_id):
        with get_db() as conn:
            return get_payables_by_load(conn, load_id)

    return _fetch
