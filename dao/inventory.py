# dao/inventory.py
from typing import Dict, Iterable, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from configs import db
from db.models.inventory import InventoryItem
from lifecycle.records import Item

ITEM_FIELDS = [
    "no",
    "description",
    "maker",
    "range",
    "type_model",
    "serial_no",
    "unit_price",
    "date",
    "po_no",
    "quantity",
    "asset_no",
    "location",
    "equipment_status",
    "status",
    "sems_category",
    "physical_status",
    "remarks",
    "current_location",
    "person_in_charge",
    "last_movement_date",
    "base",
]


def to_record(row: InventoryItem) -> Item:
    values = {f: getattr(row, f) for f in ITEM_FIELDS}
    # cột NULL -> giá trị mặc định của record (trừ các cột tracking được phép None)
    for f in ("no", "maker", "range", "type_model", "serial_no", "unit_price",
              "date", "po_no", "asset_no", "sems_category", "physical_status",
              "remarks"):
        values[f] = values[f] or ""
    values["quantity"] = int(values["quantity"] or 1)
    return Item(id=row.id, **values)


def list_items(filters: Optional[Dict] = None) -> List[InventoryItem]:
    q = InventoryItem.query
    if filters:
        q = q.filter_by(**filters)
    return q.order_by(InventoryItem.base.asc(), InventoryItem.id.asc()).all()


def get_item(item_id: str) -> Optional[InventoryItem]:
    return db.session.get(InventoryItem, item_id)


def insert_items(records: Iterable[Item]) -> int:
    n = 0
    for rec in records:
        db.session.add(
            InventoryItem(id=rec.id, **{f: getattr(rec, f) for f in ITEM_FIELDS})
        )
        n += 1
    _commit()
    return n


def update_item(item_id: str, **fields) -> Optional[InventoryItem]:
    row = get_item(item_id)
    if row is None:
        return None
    for k, v in fields.items():
        if k in ITEM_FIELDS:
            setattr(row, k, v)
    _commit()
    return row


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise
