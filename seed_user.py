from configs import db
from db.models.user import User, UserRole
from app import create_app  # lấy app để chạy context

app = create_app()

with app.app_context():
    users = [
        User(id="u1", name="System Admin", email="admin@example.com", role=UserRole.ADMIN, base="HQ"),
        User(id="u2", name="Bob Staff", email="bob@example.com", role=UserRole.STAFF, base="Lemal"),
        User(id="u3", name="Sally Storekeeper", email="sally@example.com", role=UserRole.STOREKEEPER, base="Lemal"),
        User(id="u4", name="Mark Manager", email="mark@example.com", role=UserRole.BASE_MANAGER, base="Lemal"),
        User(id="u5", name="Alice Staff", email="alice@example.com", role=UserRole.STAFF, base="Base 2"),
        User(id="u6", name="Sam Storekeeper", email="sam@example.com", role=UserRole.STOREKEEPER, base="Base 2"),
        User(id="u7", name="Mia Manager", email="mia@example.com", role=UserRole.BASE_MANAGER, base="Base 2"),
    ]

    for u in users:
        if not db.session.get(User, u.id):
            db.session.add(u)
    db.session.commit()

    print("✅ Seeded users with all defined roles")
