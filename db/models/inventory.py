from uuid import uuid4
from configs import db


IN_STORE = "In Store"


def new_item_id() -> str:
    return f"EQ-{uuid4().hex[:8].upper()}"


class InventoryItem(db.Model):
    __tablename__ = "inventory_item"
    id = db.Column(db.String(64), primary_key=True, default=new_item_id)
    no = db.Column(db.String(40))
    description = db.Column(db.String(255), nullable=False)
    maker = db.Column(db.String(120))
    range = db.Column(db.String(120))
    type_model = db.Column(db.String(120))
    serial_no = db.Column(db.String(120), index=True)
    unit_price = db.Column(db.String(40))
    date = db.Column(db.String(40))  # ngày mua
    po_no = db.Column(db.String(60))
    quantity = db.Column(db.Integer, default=1, nullable=False)
    asset_no = db.Column(db.String(120))
    location = db.Column(db.String(120), nullable=False, default=IN_STORE)  # vị trí kho cố định
    equipment_status = db.Column(db.String(160), nullable=False, default=IN_STORE)
    status = db.Column(db.String(40), default="Working")  # Working/Faulty/Scrap
    sems_category = db.Column(db.String(120))
    physical_status = db.Column(db.String(120))
    remarks = db.Column(db.Text)

    # tracking - chỉ lifecycle được ghi
    current_location = db.Column(db.String(160))
    person_in_charge = db.Column(db.String(120))
    last_movement_date = db.Column(db.String(40))

    base = db.Column(db.String(80), nullable=False, index=True)

    def __str__(self):
        return f"{self.description} ({self.serial_no})"
