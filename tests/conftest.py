"""
Pytest fixtures: Flask app on in-memory SQLite, test client, and a
lifecycle manager over MemoryStore for unit tests.
"""
from datetime import datetime, timedelta

import pytest

from app import create_app
from configs import db
from dao.store import MemoryStore
from db.models.inventory import InventoryItem, IN_STORE
from db.models.user import User, UserRole
from lifecycle.manager import RequestLifecycleManager
from lifecycle.records import Actor, Item

TEST_CONFIG = {
    "TESTING": True,
    "SECRET_KEY": "test",
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "CREATE_TABLES": True,
    "STORE_BACKEND": "sql",
    "RESERVE_ITEMS_ON_SUBMIT": False,
}

USERS = [
    ("admin1", "System Admin", UserRole.ADMIN, "HQ"),
    ("staff1", "Bob Staff", UserRole.STAFF, "Lemal"),
    ("staff2", "Alice Staff", UserRole.STAFF, "Base 2"),
    ("sk1", "Sally Storekeeper", UserRole.STOREKEEPER, "Lemal"),
    ("sk2", "Sam Storekeeper", UserRole.STOREKEEPER, "Base 2"),
    ("mgr1", "Mark Manager", UserRole.BASE_MANAGER, "Lemal"),
]


def make_item(item_id="EQ-1", location="Rack A-1", base="Lemal", **kw):
    values = dict(
        id=item_id,
        description=f"Multimeter {item_id}",
        serial_no=f"SN-{item_id}",
        asset_no=f"AST-{item_id}",
        location=location,
        current_location=location,
        base=base,
    )
    values.update(kw)
    return Item(**values)


def actor(user_id):
    for uid, name, role, base in USERS:
        if uid == user_id:
            return Actor(id=uid, name=name, role=role, base=base)
    raise KeyError(user_id)


class StepClock:
    """Mỗi lần gọi tăng 1 giây để thứ tự timestamp ổn định."""

    def __init__(self, start=datetime(2024, 1, 5, 8, 0, 0)):
        self.now = start

    def __call__(self):
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def store():
    return MemoryStore(
        items=[
            make_item("EQ-1", "Rack A-1"),
            make_item("EQ-2", "Rack A-2"),
            make_item("EQ-3", "Rack C-1", base="Base 2"),
            make_item("EQ-4", "Rack A-3", status="Scrap"),
        ]
    )


@pytest.fixture
def manager(store, clock):
    m = RequestLifecycleManager(store, clock=clock)
    m.load()
    return m


def seed_db():
    """Users + EQ-1..3; gọi trong app context."""
    for uid, name, role, base in USERS:
        db.session.add(
            User(id=uid, name=name, email=f"{uid}@example.com", role=role, base=base)
        )
    for item_id, location, base in [
        ("EQ-1", "Rack A-1", "Lemal"),
        ("EQ-2", "Rack A-2", "Lemal"),
        ("EQ-3", "Rack C-1", "Base 2"),
    ]:
        db.session.add(
            InventoryItem(
                id=item_id,
                description=f"Multimeter {item_id}",
                serial_no=f"SN-{item_id}",
                asset_no=f"AST-{item_id}",
                location=location,
                current_location=location,
                equipment_status=IN_STORE,
                status="Working",
                base=base,
            )
        )
    db.session.commit()


@pytest.fixture
def app():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        seed_db()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def login_as(client, user_id):
    return client.post("/auth/login", data={"user_id": user_id}, follow_redirects=True)
