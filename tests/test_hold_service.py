import sqlite3

import pytest

from freightdesk.errors import AuthorizationError
from freightdesk.models.auth import AuthContext
from freightdesk.models.enums import HoldReason, SettlementStatus
from freightdesk.services import hold_service
from freightdesk.services.hold_service import (
    bulk_hold_loads,
    bulk_release_loads,
    can_hold_load,
    hold_load,
    list_held_loads,
    release_load,
    upload_pod,
)
from tests.conftest import OTHER_ORG_ID, USER_ID

_HOLD_FIELDS = ("is_held", "held_reason", "held_reason_code", "held_at", "held_by")


def test_hold_detaches_draft_payables(ctx, make_load, make_payable, fetch_load, fetch_payables):
    load = make_load()
    make_payable(load, status="DRAFT")
    make_payable(load, status="DRAFT")
    make_payable(load)

    res = hold_load(ctx, load["id"], HoldReason.OTHER, "Lumper receipt missing")

    assert res.success is True
    assert res.payables_unassigned == 2
    assert res.message == f"Load {load['internal_id']} held successfully"
    assert all(p["settlement_id"] is None for p in fetch_payables(load["id"]))

    held = fetch_load(load["id"])
    assert held["is_held"] == 1
    assert held["held_reason"] == "Lumper receipt missing"
    assert held["held_reason_code"] == "OTHER"
    assert held["held_by"] == USER_ID
    assert held["held_at"] is not None


def test_hold_without_note_records_reason_code(ctx, make_load, make_payable, fetch_load):
    load = make_load()
    make_payable(load)

    res = hold_load(ctx, load["id"], HoldReason.MISSING_POD)

    assert res.success is True
    assert res.payables_unassigned == 0
    assert fetch_load(load["id"])["held_reason"] == "MISSING_POD"


@pytest.mark.parametrize(
    "status",
    [
        SettlementStatus.PENDING,
        SettlementStatus.APPROVED,
        SettlementStatus.PAID,
        SettlementStatus.VOID,
    ],
)
def test_hold_blocked_by_settlement_past_draft(
    status, ctx, make_load, make_payable, fetch_load, fetch_payables
):
    load = make_load()
    draft_payable, _ = make_payable(load, status="DRAFT")
    _, settlement = make_payable(load, status=status.value)
    before = fetch_load(load["id"])

    res = hold_load(ctx, load["id"], HoldReason.OTHER, "disputed")

    assert res.success is False
    assert res.message == (
        f"Cannot hold - payables are in {status.value} "
        f"settlement {settlement['statement_number']}"
    )
    assert fetch_load(load["id"]) == before
    by_id = {p["id"]: p for p in fetch_payables(load["id"])}
    assert by_id[draft_payable["id"]]["settlement_id"] is not None


def test_hold_rejects_already_held(ctx, make_load, make_payable):
    load = make_load()
    make_payable(load)
    assert hold_load(ctx, load["id"]).success

    res = hold_load(ctx, load["id"])
    assert res.success is False
    assert res.message == "Load is already held"


def test_hold_requires_payables(ctx, make_load, fetch_load):
    load = make_load()

    res = hold_load(ctx, load["id"])

    assert res.success is False
    assert res.message == "Load has no payables to hold"
    assert fetch_load(load["id"])["is_held"] == 0


def test_hold_unknown_load(ctx):
    res = hold_load(ctx, "LD-missing")
    assert res.success is False
    assert res.message == "Load not found"


def test_release_does_not_reattach_payables(ctx, make_load, make_payable, fetch_load, fetch_payables):
    load = make_load()
    make_payable(load, status="DRAFT")
    hold_load(ctx, load["id"], HoldReason.OTHER, "missing receipts")

    res = release_load(ctx, load["id"])

    assert res.success is True
    assert res.message == f"Load {load['internal_id']} released successfully"
    released = fetch_load(load["id"])
    for field in _HOLD_FIELDS[1:]:
        assert released[field] is None
    assert released["is_held"] == 0
    assert fetch_payables(load["id"])[0]["settlement_id"] is None


def test_release_requires_hold(ctx, make_load):
    load = make_load()
    res = release_load(ctx, load["id"])
    assert res.success is False
    assert res.message == "Load is not currently held"
    assert release_load(ctx, "LD-missing").message == "Load not found"


def test_bulk_hold_reports_partial_failure(ctx, make_load, make_payable, fetch_load):
    ok = make_load()
    make_payable(ok, status="DRAFT")
    blocked = make_load()
    make_payable(blocked, status="APPROVED")
    empty = make_load()

    res = bulk_hold_loads(
        ctx, [ok["id"], blocked["id"], empty["id"], "LD-missing"], HoldReason.MISSING_POD
    )

    assert res.successful == 1
    assert res.failed == 3
    errors = {e.load_id: e.error for e in res.errors}
    assert errors[blocked["id"]].startswith("Cannot hold - payables are in APPROVED")
    assert errors[empty["id"]] == "Load has no payables to hold"
    assert errors["LD-missing"] == "Load not found"
    assert fetch_load(ok["id"])["is_held"] == 1


def test_bulk_hold_records_cross_tenant_load_as_error(ctx, make_load, make_payable, fetch_load):
    mine = make_load()
    make_payable(mine)
    theirs = make_load(org_id=OTHER_ORG_ID)
    make_payable(theirs)

    res = bulk_hold_loads(ctx, [mine["id"], theirs["id"]])

    assert res.successful == 1
    assert res.failed == 1
    assert "does not belong" in res.errors[0].error
    assert fetch_load(theirs["id"])["is_held"] == 0


def test_bulk_release(ctx, make_load, make_payable):
    held = make_load()
    make_payable(held)
    hold_load(ctx, held["id"])
    not_held = make_load()

    res = bulk_release_loads(ctx, [held["id"], not_held["id"]])

    assert res.successful == 1
    assert res.failed == 1
    assert res.errors[0].load_id == not_held["id"]
    assert res.errors[0].error == "Load is not currently held"


def test_upload_pod_records_metadata_without_hold(ctx, make_load, fetch_load):
    load = make_load()

    res = upload_pod(ctx, load["id"], "storage/pod-1.pdf", auto_release=True)

    assert res.success is True
    assert res.was_released is False
    assert res.message == "POD uploaded successfully"
    stored = fetch_load(load["id"])
    assert stored["has_signed_pod"] == 1
    assert stored["pod_storage_id"] == "storage/pod-1.pdf"
    assert stored["pod_uploaded_at"] is not None


def test_upload_pod_auto_releases_missing_pod_hold(ctx, make_load, make_payable, fetch_load, fetch_payables):
    load = make_load()
    make_payable(load, status="DRAFT")
    hold_load(ctx, load["id"], HoldReason.MISSING_POD, "missing POD")

    res = upload_pod(ctx, load["id"], "storage/pod-2.pdf", auto_release=True)

    assert res.was_released is True
    assert res.message == "POD uploaded and load released"
    stored = fetch_load(load["id"])
    assert stored["is_held"] == 0
    assert stored["held_reason"] is None
    assert stored["has_signed_pod"] == 1
    assert fetch_payables(load["id"])[0]["settlement_id"] is None


def test_upload_pod_keeps_other_holds(ctx, make_load, make_payable, fetch_load):
    load = make_load()
    make_payable(load)
    # The note mentions a POD but the hold is not tagged MISSING_POD.
    hold_load(ctx, load["id"], HoldReason.OTHER, "POD signature disputed")

    res = upload_pod(ctx, load["id"], "storage/pod-3.pdf", auto_release=True)

    assert res.was_released is False
    assert fetch_load(load["id"])["is_held"] == 1


def test_upload_pod_without_auto_release_keeps_hold(ctx, make_load, make_payable, fetch_load):
    load = make_load()
    make_payable(load)
    hold_load(ctx, load["id"], HoldReason.MISSING_POD)

    res = upload_pod(ctx, load["id"], "storage/pod-4.pdf")

    assert res.was_released is False
    stored = fetch_load(load["id"])
    assert stored["is_held"] == 1
    assert stored["has_signed_pod"] == 1


def test_upload_pod_unknown_load(ctx):
    res = upload_pod(ctx, "LD-missing", "storage/x.pdf")
    assert res.success is False
    assert res.was_released is False


def test_can_hold_load_mirrors_hold_checks(ctx, make_load, make_payable):
    empty = make_load()
    assert can_hold_load(ctx, empty["id"]).reason == "Load has no payables to hold"

    draft = make_load()
    make_payable(draft, status="DRAFT")
    res = can_hold_load(ctx, draft["id"])
    assert res.can_hold is True
    assert res.payables_in_settlement is True
    assert res.settlement_status == SettlementStatus.DRAFT

    paid = make_load()
    make_payable(paid, status="PAID")
    res = can_hold_load(ctx, paid["id"])
    assert res.can_hold is False
    assert res.settlement_status == SettlementStatus.PAID
    assert res.reason == "Cannot hold - payables are in PAID settlement"

    assert can_hold_load(ctx, "LD-missing").reason == "Load not found"


def test_list_held_loads_newest_first_with_driver_name(ctx, make_load, driver):
    make_load(is_held=1, held_reason="older", held_at="2026-01-01T00:00:00+00:00",
              primary_driver_id=driver["id"])
    make_load(is_held=1, held_reason="newer", held_at="2026-02-01T00:00:00+00:00")
    make_load()

    held = list_held_loads(ctx)

    assert [h.held_reason for h in held] == ["newer", "older"]
    assert held[1].driver_name == "Dana Whitfield"
    assert held[0].driver_name is None

    only_driver = list_held_loads(ctx, driver_id=driver["id"])
    assert [h.held_reason for h in only_driver] == ["older"]


def test_non_member_is_rejected(make_load, make_payable, fetch_load):
    load = make_load()
    make_payable(load)
    stranger = AuthContext(org_id="org_a", user_id="intruder")

    with pytest.raises(AuthorizationError):
        hold_load(stranger, load["id"])
    assert fetch_load(load["id"])["is_held"] == 0


def test_cross_tenant_hold_is_rejected(other_ctx, make_load, make_payable, fetch_load):
    load = make_load()
    make_payable(load)

    with pytest.raises(AuthorizationError):
        hold_load(other_ctx, load["id"])
    assert fetch_load(load["id"])["is_held"] == 0


def test_hold_rolls_back_when_load_update_fails(
    ctx, make_load, make_payable, fetch_load, fetch_payables, monkeypatch
):
    load = make_load()
    _, settlement = make_payable(load, status="DRAFT")

    def failing_patch(conn, load_id, fields):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(hold_service, "patch_load", failing_patch)

    with pytest.raises(sqlite3.OperationalError):
        hold_load(ctx, load["id"], HoldReason.MISSING_POD)

    assert fetch_payables(load["id"])[0]["settlement_id"] == settlement["id"]
    stored = fetch_load(load["id"])
    assert stored["is_held"] == 0
    assert stored["held_reason"] is None


def test_bulk_hold_keeps_going_after_store_error(
    ctx, make_load, make_payable, fetch_load, monkeypatch
):
    first = make_load()
    make_payable(first)
    locked = make_load()
    make_payable(locked)
    real_lookup = hold_service.get_payables_by_load

    def lookup(conn, load_id):
        if load_id == locked["id"]:
            raise sqlite3.OperationalError("database is locked")
        return real_lookup(conn, load_id)

    monkeypatch.setattr(hold_service, "get_payables_by_load", lookup)

    res = bulk_hold_loads(ctx, [first["id"], locked["id"]])

    assert res.successful == 1
    assert res.failed == 1
    assert res.errors[0].load_id == locked["id"]
    assert res.errors[0].error == "database is locked"
    assert fetch_load(first["id"])["is_held"] == 1
    assert fetch_load(locked["id"])["is_held"] == 0
