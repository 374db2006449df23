# seed.py - thiết bị mẫu cho từng base
from configs import db
from db.models.inventory import InventoryItem, IN_STORE
from app import create_app

app = create_app()


ITEMS = [
    # id, description, maker, model, serial, asset, location, base
    ("EQ-001", "Digital Multimeter", "Fluke", "87V", "FL87V-1001", "AST-001", "Rack A-1", "Lemal"),
    ("EQ-002", "Insulation Tester", "Megger", "MIT525", "MG525-2002", "AST-002", "Rack A-2", "Lemal"),
    ("EQ-003", "Torque Wrench", "Norbar", "TTi 100", "NB100-3003", "AST-003", "Cabinet B-1", "Lemal"),
    ("EQ-004", "Clamp Meter", "Hioki", "CM4375", "HK4375-4004", "AST-004", "Rack C-1", "Base 2"),
    ("EQ-005", "Thermal Camera", "FLIR", "E8-XT", "FLE8-5005", "AST-005", "Cabinet D-3", "Base 2"),
]


def seed_inventory():
    for item_id, desc, maker, model, serial, asset, location, base in ITEMS:
        row = db.session.get(InventoryItem, item_id)
        if row:
            # cập nhật nhẹ nếu đã tồn tại
            row.description = desc
            row.location = location
            continue
        db.session.add(
            InventoryItem(
                id=item_id,
                description=desc,
                maker=maker,
                type_model=model,
                serial_no=serial,
                asset_no=asset,
                location=location,
                equipment_status=IN_STORE,
                status="Working",
                current_location=location,
                base=base,
            )
        )
    db.session.commit()
    print("✓ Inventory seeded/updated")


if __name__ == "__main__":
    with app.app_context():
        seed_inventory()
