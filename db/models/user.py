# db/models/user.py
import enum
from configs import db
from flask_login import UserMixin


class UserRole(enum.Enum):
    ADMIN = "ADMIN"
    STAFF = "STAFF"  # Người mượn / trả thiết bị
    STOREKEEPER = "STOREKEEPER"  # Thủ kho - duyệt bước 1
    BASE_MANAGER = "BASE_MANAGER"  # Quản lý base - duyệt bước 2 (BORROW)


class User(db.Model, UserMixin):
    __tablename__ = "user_account"

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255))
    base = db.Column(db.String(80), nullable=False, index=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    role = db.Column(db.Enum(UserRole), default=UserRole.STAFF, nullable=False)

    def get_id(self):
        return str(self.id)

    def has_role(self, *roles: UserRole):
        """Kiểm tra xem user có 1 trong các role truyền vào"""
        return self.role in roles

    def __str__(self):
        return f"{self.name} ({self.role.value} - {self.base})"
