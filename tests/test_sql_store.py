import pytest

from conftest import actor, make_item
from configs import db
from dao.store import SqlStore
from db.models.inventory import InventoryItem
from dao import movement_request as request_dao
from dao.movement_request import TerminalStatusError
from db.models.movement_request import (
    MovementRequest,
    RequestItem,
    RequestStatus,
    RequestType,
)
from lifecycle.errors import StaleStateError, SyncError
from lifecycle.manager import RequestLifecycleManager


@pytest.fixture
def sql_manager(app, clock):
    with app.app_context():
        m = RequestLifecycleManager(SqlStore(), clock=clock)
        m.load()
        yield m


def test_load_reads_seeded_inventory(sql_manager):
    assert set(sql_manager.inventory) == {"EQ-1", "EQ-2", "EQ-3"}
    item = sql_manager.get_item("EQ-1")
    assert item.maker == ""
    assert item.person_in_charge is None
    assert item.quantity == 1


def test_request_round_trip(sql_manager, clock):
    req = sql_manager.submit(
        ["EQ-2", "EQ-1"], RequestType.BORROW, "Site B", "2024-01-10", actor("staff1")
    ).request

    rows = SqlStore().list_requests()
    assert len(rows) == 1
    stored = rows[0]
    assert stored.id == req.id
    assert stored.type is RequestType.BORROW
    assert stored.status is RequestStatus.PENDING
    # thứ tự item giữ như lúc gửi
    assert stored.item_ids == ["EQ-2", "EQ-1"]
    assert stored.items[0].serial_no == "SN-EQ-2"
    assert stored.target_date == "2024-01-10"


def test_full_borrow_then_return_is_persisted(sql_manager):
    req = sql_manager.submit(
        ["EQ-1"], RequestType.BORROW, "Site B", "2024-01-10", actor("staff1")
    ).request
    assert sql_manager.decide(req.id, actor("sk1"), True).durable
    assert sql_manager.decide(req.id, actor("mgr1"), True).durable

    row = db.session.get(InventoryItem, "EQ-1")
    assert row.current_location == "Site B"
    assert row.person_in_charge == "Bob Staff"
    assert row.equipment_status == "Borrowed by Bob Staff"
    saved = db.session.get(MovementRequest, req.id)
    assert saved.status is RequestStatus.APPROVED
    assert saved.storekeeper_id == "sk1"
    assert saved.manager_id == "mgr1"

    ret = sql_manager.submit(["EQ-1"], "RETURN", None, None, actor("staff1")).request
    sql_manager.decide(ret.id, actor("sk1"), True)

    row = db.session.get(InventoryItem, "EQ-1")
    assert row.current_location == "Rack A-1"
    assert row.person_in_charge is None
    assert row.equipment_status == "In Store"


def test_rejection_reason_is_stored(sql_manager):
    req = sql_manager.submit(["EQ-1"], "BORROW", None, None, actor("staff1")).request
    sql_manager.decide(req.id, actor("sk1"), False, reason="Calibration due")

    saved = db.session.get(MovementRequest, req.id)
    assert saved.status is RequestStatus.REJECTED
    assert saved.rejection_reason == "Calibration due"


def test_missing_rows_raise_sync_error(app):
    with app.app_context():
        store = SqlStore()
        with pytest.raises(SyncError):
            store.update_inventory_item("EQ-404", {"current_location": "x"})
        with pytest.raises(SyncError):
            store.update_request_status("REQ-404", {"status": RequestStatus.APPROVED})


def test_duplicate_batch_is_sync_error_and_rolled_back(app):
    with app.app_context():
        store = SqlStore()
        with pytest.raises(SyncError):
            store.insert_inventory_batch([make_item("EQ-9"), make_item("EQ-1")])
        assert db.session.get(InventoryItem, "EQ-9") is None
        # session còn dùng được sau rollback
        store.insert_inventory_batch([make_item("EQ-9")])
        assert db.session.get(InventoryItem, "EQ-9").description == "Multimeter EQ-9"


def test_filters_are_passed_through(app):
    with app.app_context():
        items = SqlStore().list_inventory_items({"base": "Base 2"})
        assert [i.id for i in items] == ["EQ-3"]


def test_decided_row_is_not_overwritten(sql_manager):
    req = sql_manager.submit(["EQ-1"], "RETURN", None, None, actor("staff1")).request
    sql_manager.decide(req.id, actor("sk1"), True)

    with pytest.raises(StaleStateError):
        SqlStore().update_request_status(
            req.id, {"status": RequestStatus.REJECTED, "admin_id": "admin1"}
        )
    with pytest.raises(TerminalStatusError):
        request_dao.update_request_status(req.id, status=RequestStatus.REJECTED)

    saved = db.session.get(MovementRequest, req.id)
    assert saved.status is RequestStatus.APPROVED
    assert saved.admin_id is None


def test_failed_request_insert_rolls_back_session(sql_manager):
    req = sql_manager.submit(["EQ-1"], "BORROW", None, None, actor("staff1")).request

    with pytest.raises(SyncError):
        SqlStore().insert_request(req)

    # session vẫn dùng được, không còn dòng item treo
    assert db.session.query(RequestItem).filter_by(request_id=req.id).count() == 1
    other = sql_manager.submit(["EQ-2"], "BORROW", None, None, actor("staff1"))
    assert other.durable
